"""
jsonscrub_core.errors
~~~~~~~~~~~~~~~~~~~~~
Custom exception hierarchy for jsonscrub.

All jsonscrub exceptions inherit from JsonScrubError so callers can catch
the full family with a single ``except JsonScrubError`` clause while still
being able to discriminate at finer granularity.
"""

from __future__ import annotations

from typing import Any


class JsonScrubError(Exception):
    """Base class for all jsonscrub exceptions."""


class ConfigurationError(JsonScrubError):
    """Raised when no usable field policy (or output style) was supplied.

    Always raised before any input is read or output is written.
    """


class TokenizeError(JsonScrubError, ValueError):
    """Raised by the tokenizer when the input is not valid JSON.

    Attributes:
        offset: Character offset in the input where scanning failed.
    """

    def __init__(self, message: str, *, offset: int = 0) -> None:
        super().__init__(f"{message} at offset {offset}")
        self.reason = message
        self.offset = offset


class MalformedInputError(JsonScrubError):
    """Raised by the transcoder when the tokenizer rejects its input.

    The originating :exc:`TokenizeError` is chained as ``__cause__``.
    Bytes already flushed to a stream sink are not retracted.

    Attributes:
        offset: Character offset reported by the tokenizer.
    """

    def __init__(self, message: str, *, offset: int = 0) -> None:
        super().__init__(message)
        self.offset = offset


class UnknownTokenError(JsonScrubError):
    """Raised when a token outside the known set reaches the emitter.

    Signals a tokenizer/transcoder contract mismatch, not bad input.

    Attributes:
        token: The offending object.
    """

    def __init__(self, token: Any) -> None:
        super().__init__(f"unknown json token: {token!r}")
        self.token = token
