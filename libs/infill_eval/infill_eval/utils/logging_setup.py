"""Logging initialization for the CLI."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infill_eval.config import LoggingSettings, Settings

# httpx logs every request at INFO; keep it to problems only.
_NOISY_LOGGERS = ("httpx", "httpcore")


def _file_handler(cfg: LoggingSettings, log_dir: str) -> RotatingFileHandler:
    path = Path(str(cfg.file))
    if not path.is_absolute():
        path = Path(log_dir) / path
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(cfg.max_bytes),
        backupCount=int(cfg.backup_count),
        encoding="utf-8",
    )


def setup_logging(settings: Settings) -> None:
    """Attach console/file handlers to the `infill_eval` logger tree once."""
    root = logging.getLogger("infill_eval")
    if getattr(root, "_infill_eval_configured", False):
        return

    cfg = settings.logging
    level = logging.getLevelName(str(cfg.level or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO
    formatter = logging.Formatter(fmt=str(cfg.format), datefmt=str(cfg.datefmt))

    handlers: list[logging.Handler] = []
    if cfg.console:
        handlers.append(logging.StreamHandler())
    if cfg.file:
        handlers.append(_file_handler(cfg, settings.log_dir))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    root.setLevel(level)
    root.handlers = handlers
    root.propagate = False
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    setattr(root, "_infill_eval_configured", True)
