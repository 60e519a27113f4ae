"""Reproduction harness for evaluating text-to-speech infill quality."""

__version__ = "0.1.0"
