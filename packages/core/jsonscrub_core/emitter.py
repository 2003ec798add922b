"""
jsonscrub_core.emitter
~~~~~~~~~~~~~~~~~~~~~~
Re-emits classified tokens as JSON text.

Strings are always re-quoted through :func:`json.dumps`, so escape forms in
the input (``\\u0007``, ``\\/``...) may come out differently while staying
valid and value-equivalent.  Number tokens are written verbatim from their
source text.  The separator style is fixed for the lifetime of an emitter.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from enum import Enum, StrEnum
from typing import Any

from jsonscrub_core.errors import ConfigurationError, UnknownTokenError
from jsonscrub_core.tokens import (
    BoolToken,
    ContainerClose,
    ContainerOpen,
    NullToken,
    NumberToken,
    StringToken,
)

#: Written between consecutive top-level values of one stream.
DOCUMENT_SEPARATOR = b"\n"


class SeparatorStyle(StrEnum):
    """``compact`` writes ``,`` and ``:``; ``spaced`` adds one trailing space."""

    COMPACT = "compact"
    SPACED = "spaced"


class Separator(Enum):
    KEY_VALUE = "key_value"
    ELEMENT = "element"


_SEPARATORS: dict[SeparatorStyle, dict[Separator, bytes]] = {
    SeparatorStyle.COMPACT: {Separator.KEY_VALUE: b":", Separator.ELEMENT: b","},
    SeparatorStyle.SPACED: {Separator.KEY_VALUE: b": ", Separator.ELEMENT: b", "},
}


def resolve_style(style: SeparatorStyle | str) -> SeparatorStyle:
    """Coerce *style* to a :class:`SeparatorStyle`.

    Raises:
        ConfigurationError: For an unknown style name.
    """
    try:
        return SeparatorStyle(style)
    except ValueError as exc:
        raise ConfigurationError(f"jsonscrub: unknown separator style {style!r}") from exc


def quote(text: str) -> bytes:
    """Return *text* as a UTF-8 encoded JSON string literal."""
    try:
        return json.dumps(text, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates cannot be encoded as UTF-8; escape everything.
        return json.dumps(text).encode("ascii")


class Emitter:
    """Writes token text and separators through *write*."""

    def __init__(
        self,
        write: Callable[[bytes], Any],
        style: SeparatorStyle | str = SeparatorStyle.COMPACT,
    ) -> None:
        self._write = write
        self._separators = _SEPARATORS[resolve_style(style)]

    def token(self, token: object) -> None:
        match token:
            case StringToken(text=text):
                self._write(quote(text))
            case BoolToken(value=value):
                self._write(b"true" if value else b"false")
            case NumberToken(raw=raw):
                self._write(raw.encode("ascii"))
            case NullToken():
                self._write(b"null")
            case ContainerOpen() | ContainerClose():
                self._write(token.char.encode("ascii"))
            case _:
                raise UnknownTokenError(token)

    def string(self, text: str) -> None:
        self._write(quote(text))

    def separator(self, separator: Separator) -> None:
        self._write(self._separators[separator])

    def document_break(self) -> None:
        self._write(DOCUMENT_SEPARATOR)
