"""Call-site lookup for records written through the stream-sink adapter."""

import logging
import os
import sys

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_LOGGING_DIR = os.path.dirname(os.path.abspath(logging.__file__))
_SKIPPED_DIRS = (_PACKAGE_DIR, _LOGGING_DIR)


def _is_skipped(filename: str) -> bool:
    directory = os.path.dirname(os.path.abspath(filename))
    return directory in _SKIPPED_DIRS


def find_caller() -> tuple[str, int]:
    """Return (file, line) of the nearest frame outside this package and ``logging``.

    Returns ("???", 0) when every frame on the stack is skipped.
    """
    frame = sys._getframe(1)
    while frame is not None:
        filename = frame.f_code.co_filename
        if not _is_skipped(filename):
            return filename, frame.f_lineno
        frame = frame.f_back
    return "???", 0
