"""
Structured logging for hlperps.

Every module logs through ``logging.getLogger(__name__)`` with ``extra``
fields. ``configure_logging`` installs one stderr handler whose formatter
drops signing material from those fields and masks 32-byte hex secrets
(delegatee keys) in messages and tracebacks. ``HyperliquidPerpsAbility``
calls it from ``from_config``; hosts embedding the ability with their own
logging can skip ``from_config`` and keep their handlers.
"""

from __future__ import annotations

import logging
import re
import sys
from datetime import UTC, datetime
from typing import IO, TYPE_CHECKING, Any

import orjson

if TYPE_CHECKING:
    from hlperps.config import HlPerpsConfig

_HEX_SECRET = re.compile(r"\b(0x)?[0-9a-fA-F]{64}\b")

# Extra-field names containing any of these are never emitted
REDACTED_KEYS: tuple[str, ...] = (
    "private_key",
    "privatekey",
    "delegatee",
    "signature",
    "session_sigs",
    "sessionsigs",
    "auth",
)

_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def mask_secrets(text: str) -> str:
    return _HEX_SECRET.sub("[HEX_SECRET]", text) if text else text


def redact(fields: dict[str, Any]) -> dict[str, Any]:
    """Drop credential-bearing keys; render values as JSON-safe scalars."""
    safe: dict[str, Any] = {}
    for key, value in fields.items():
        if any(word in key.lower() for word in REDACTED_KEYS):
            continue
        if isinstance(value, (bool, int, float, type(None))):
            safe[key] = value
        elif isinstance(value, dict):
            safe[key] = redact(value)
        else:
            safe[key] = mask_secrets(str(value))
    return safe


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, or ``LEVEL logger: msg | k=v`` in text mode."""

    def __init__(self, *, json_output: bool = True) -> None:
        super().__init__()
        self.json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        fields = redact({k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS})
        message = mask_secrets(record.getMessage())

        if not self.json_output:
            line = f"{record.levelname:8s} {record.name}: {message}"
            if fields:
                line += " | " + " ".join(f"{k}={v}" for k, v in fields.items())
            if record.exc_info:
                line += "\n" + mask_secrets(self.formatException(record.exc_info))
            return line

        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": message,
            **fields,
        }
        if record.exc_info:
            entry["exc"] = mask_secrets(self.formatException(record.exc_info))
        return orjson.dumps(entry).decode()


def configure_logging(config: HlPerpsConfig, stream: IO[str] | None = None) -> None:
    """Route the ``hlperps`` logger tree to one structured stderr handler."""
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter(json_output=config.json_logs))

    package_logger = logging.getLogger("hlperps")
    package_logger.setLevel(config.log_level.upper())
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.propagate = False

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
