"""GELF 1.1 log record and its JSON serialization."""

import json
import logging
import time
from dataclasses import dataclass, field

GELF_VERSION = "1.1"

# Syslog severities used by the GELF "level" field.
LOG_EMERG = 0
LOG_ALERT = 1
LOG_CRIT = 2
LOG_ERR = 3
LOG_WARNING = 4
LOG_NOTICE = 5
LOG_INFO = 6
LOG_DEBUG = 7

_STANDARD_FIELDS = (
    "version", "host", "short_message", "full_message", "timestamp", "level", "facility",
)


def syslog_level(levelno: int) -> int:
    """Map a ``logging`` level number onto a syslog severity."""
    if levelno >= logging.CRITICAL:
        return LOG_CRIT
    if levelno >= logging.ERROR:
        return LOG_ERR
    if levelno >= logging.WARNING:
        return LOG_WARNING
    if levelno >= logging.INFO:
        return LOG_INFO
    return LOG_DEBUG


@dataclass
class Message:
    host: str
    short_message: str
    full_message: str = ""
    timestamp: float = field(default_factory=time.time)
    level: int = LOG_INFO
    facility: str = ""
    extra: dict = field(default_factory=dict)
    version: str = GELF_VERSION

    def to_dict(self) -> dict:
        """Flatten into the GELF JSON object; additional fields get a leading underscore."""
        payload = {
            "version": self.version,
            "host": self.host,
            "short_message": self.short_message,
        }
        if self.full_message:
            payload["full_message"] = self.full_message
        payload["timestamp"] = self.timestamp
        payload["level"] = self.level
        if self.facility:
            payload["facility"] = self.facility

        for key, value in self.extra.items():
            name = key if key.startswith("_") else f"_{key}"
            if name == "_id":
                raise ValueError("Additional field '_id' is reserved by GELF")
            payload[name] = value
        return payload

    def to_json(self) -> bytes:
        return json.dumps(
            self.to_dict(), separators=(",", ":"), default=str, allow_nan=False
        ).encode("utf-8")

    def marshal_json(self, buf):
        """Write the JSON form into a binary file-like ``buf``."""
        buf.write(self.to_json())


def construct_message(data, hostname: str, facility: str, file: str, line: int) -> Message:
    """Build an informational message from raw text written to the stream sink.

    Multi-line input keeps its first line as the short message and the whole
    text as the full message.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        text = bytes(data).decode("utf-8", errors="replace")
    else:
        text = str(data)
    text = text.strip()

    short, full = text, ""
    newline = text.find("\n")
    if newline > 0:
        short, full = text[:newline], text

    return Message(
        host=hostname,
        short_message=short,
        full_message=full,
        level=LOG_INFO,
        facility=facility,
        extra={"_file": file, "_line": line},
    )
