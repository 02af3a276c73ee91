"""Exceptions raised inside the bridge.

Each exception carries the stage that produced it. The stage is only used
for logging; callers of a script function see the error text alone.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base exception for a failed script call."""

    stage = "internal"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ArgumentError(BridgeError):
    """Raised when a positional argument is missing or has the wrong shape."""

    stage = "arguments"


class ConfigurationError(BridgeError):
    """Raised when region/profile cannot be resolved into a usable session."""

    stage = "configuration"


class RemoteCallError(BridgeError):
    """Raised when the API rejects or fails to complete a request."""

    stage = "remote"


class LocalIOError(BridgeError):
    """Raised when a local file cannot be opened, created, read or written."""

    stage = "local-io"


class MarshalError(BridgeError):
    """Raised when a response lacks a field that must always be present."""

    stage = "marshal"


class CallCancelledError(BridgeError):
    stage = "deadline"

    def __init__(self, message: str = "call cancelled") -> None:
        super().__init__(message)


class DeadlineExceededError(BridgeError):
    stage = "deadline"

    def __init__(self, message: str = "call deadline exceeded") -> None:
        super().__init__(message)


def error_text(exc: BaseException) -> str:
    """Return the verbatim message of ``exc``, never an empty string."""
    text = str(exc)
    if text:
        return text
    return type(exc).__name__
