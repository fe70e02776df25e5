# jatools/errors.py
from __future__ import annotations

from enum import IntEnum


class ToolError(Exception):
    """A failure tagged with the exit code that identifies the failing step."""

    def __init__(self, code: IntEnum | int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"[{int(self.code)}] {self.message}"


class ConfigMissing(FileNotFoundError):
    """Raised by the config loader when the config file does not exist."""
