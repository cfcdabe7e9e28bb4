"""Logging setup for paywallbot.

Handlers are built from the `logging` section of config.json: console output,
an optional rotating log file, and masking of secret values taken from the
environment (bot tokens and API hashes end up in Telethon error messages).
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from typing import Iterable, Mapping, Optional

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_PATH = "logs/paywallbot.log"
MASK = "***"


class RedactingFormatter(logging.Formatter):
    """Formatter that replaces every known secret with a mask."""

    def __init__(self, secrets: Iterable[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        # Longest first so a secret containing another is masked whole.
        ordered = sorted({secret for secret in secrets if secret}, key=len, reverse=True)
        self._pattern = re.compile("|".join(re.escape(secret) for secret in ordered)) if ordered else None

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if self._pattern is None:
            return message
        return self._pattern.sub(MASK, message)


def redaction_values(config: dict, environ: Mapping[str, str] = os.environ) -> list[str]:
    """Return the values of the env vars named in `redact.patterns`."""

    redact_cfg = config.get("redact", {})
    if not redact_cfg.get("enabled", False):
        return []
    return [environ[name] for name in redact_cfg.get("patterns", []) if environ.get(name)]


def _file_handler(file_cfg: dict, project_root: str) -> RotatingFileHandler:
    path = file_cfg.get("path", DEFAULT_LOG_PATH)
    if not os.path.isabs(path):
        path = os.path.join(project_root, path)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def build_handlers(
    config: dict,
    project_root: str,
    environ: Mapping[str, str] = os.environ,
) -> list[logging.Handler]:
    """Create the configured handlers, all sharing one redacting formatter."""

    level = logging_level(config)
    formatter = RedactingFormatter(
        redaction_values(config, environ),
        fmt=config.get("format", DEFAULT_FORMAT),
        datefmt=DEFAULT_DATEFMT,
    )

    handlers: list[logging.Handler] = []
    if config.get("console", True):
        handlers.append(logging.StreamHandler())
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_file_handler(file_cfg, project_root))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def logging_level(config: dict) -> int:
    level_name = str(config.get("level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(config: Optional[dict], project_root: str) -> bool:
    """Install the configured handlers on the root logger.

    Returns False when logging is disabled or no handler is enabled.
    """

    config = config or {}
    if not config.get("enabled", False):
        return False

    handlers = build_handlers(config, project_root)
    if not handlers:
        return False
    logging.basicConfig(level=logging_level(config), handlers=handlers)
    return True
