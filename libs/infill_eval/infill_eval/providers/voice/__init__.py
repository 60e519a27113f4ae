"""Voice provider implementations."""

from infill_eval.providers.voice.base import OutputFormat, VoiceProvider
from infill_eval.providers.voice.cartesia import CartesiaVoiceProvider

__all__ = ["OutputFormat", "VoiceProvider", "CartesiaVoiceProvider"]
