"""logging.Handler that ships records to a GELF collector through a UDPWriter."""

import logging

from gelf_udp.config import WriterConfig
from gelf_udp.message import Message, syslog_level
from gelf_udp.writer import UDPWriter

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class GELFHandler(logging.Handler):
    def __init__(self, writer: UDPWriter, level=logging.NOTSET):
        super().__init__(level)
        self.writer = writer

    def make_message(self, record: logging.LogRecord) -> Message:
        """Translate a LogRecord into a GELF message."""
        text = record.getMessage()
        short = text.split("\n", 1)[0]
        full = ""
        if "\n" in text or record.exc_info or record.stack_info:
            full = self.format(record)

        extra = {
            "_file": record.pathname,
            "_line": record.lineno,
            "_logger": record.name,
            "_function": record.funcName,
            "_thread_name": record.threadName,
            "_process": record.process,
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and key not in ("id", "_id"):
                extra[key] = value

        return Message(
            host=self.writer.hostname,
            short_message=short,
            full_message=full,
            timestamp=record.created,
            level=syslog_level(record.levelno),
            facility=self.writer.facility,
            extra=extra,
        )

    def emit(self, record: logging.LogRecord):
        try:
            self.writer.write_message(self.make_message(record))
        except Exception:
            self.handleError(record)

    def close(self):
        self.acquire()
        try:
            self.writer.close()
        finally:
            self.release()
        super().close()


def build_gelf_handler(config: WriterConfig | None = None, level=logging.NOTSET) -> GELFHandler:
    """Create a writer from ``config`` (defaults when None) and wrap it in a handler."""
    cfg = config or WriterConfig()
    return GELFHandler(UDPWriter.from_config(cfg), level=level)
