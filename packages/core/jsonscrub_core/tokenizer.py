"""
jsonscrub_core.tokenizer
~~~~~~~~~~~~~~~~~~~~~~~~
Strict, incremental JSON tokenizer.

:class:`Tokenizer` turns a byte buffer or a readable stream into a lazy
sequence of :mod:`~jsonscrub_core.tokens`.  Input is read in chunks of
``chunk_size`` and only as far as needed to complete the current token, so
arbitrarily large documents are handled with a bounded buffer (plus the
longest single string or number literal).

Grammar
-------
The full JSON grammar is enforced as tokens are produced: colons and commas
are consumed silently, brackets must balance, and there are no comments,
trailing commas, leading zeros or bare words.  Several top-level values may
follow one another; empty input yields no tokens.  Any violation raises
:exc:`~jsonscrub_core.errors.TokenizeError` with the character offset.
"""

from __future__ import annotations

import codecs
import json
import re
from collections.abc import Iterator
from enum import Enum, auto
from json.decoder import scanstring
from typing import IO, Any

from jsonscrub_core.errors import TokenizeError
from jsonscrub_core.tokens import (
    CLOSE_ARRAY,
    CLOSE_OBJECT,
    FALSE,
    NULL,
    OPEN_ARRAY,
    OPEN_OBJECT,
    TRUE,
    ContainerKind,
    NumberToken,
    StringToken,
    Token,
)

DEFAULT_CHUNK_SIZE = 64 * 1024

_WHITESPACE = " \t\n\r"
_VALUE_END = _WHITESPACE + ",]}"
_NUMBER_START = "-0123456789"
_NUMBER_CHARS = frozenset("0123456789+-.eE")

_NUMBER_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][-+]?\d+)?")
_QUOTE_OR_BACKSLASH = re.compile(r'["\\]')

_LITERALS: dict[str, tuple[str, Token]] = {
    "t": ("true", TRUE),
    "f": ("false", FALSE),
    "n": ("null", NULL),
}


class _Expect(Enum):
    VALUE = auto()
    VALUE_OR_CLOSE = auto()
    KEY = auto()
    KEY_OR_CLOSE = auto()
    COLON = auto()
    COMMA_OR_CLOSE = auto()


_CLOSE_ALLOWED = frozenset({_Expect.VALUE_OR_CLOSE, _Expect.KEY_OR_CLOSE, _Expect.COMMA_OR_CLOSE})


def _closing_quote(text: str, pos: int, escaped: bool) -> tuple[bool, bool]:
    """Search *text* from *pos* for an unescaped ``"``.

    *escaped* says the previous piece ended on a backslash.  Returns
    ``(found, escaped)``, the second item carrying over to the next piece.
    """
    if escaped:
        if pos >= len(text):
            return False, True
        pos += 1
    while True:
        match = _QUOTE_OR_BACKSLASH.search(text, pos)
        if match is None:
            return False, False
        if match.group() == '"':
            return True, False
        pos = match.end() + 1
        if pos > len(text):
            return False, True


class Tokenizer:
    """Lazy token source over *source*.

    Args:
        source: ``bytes``-like input (decoded as UTF-8 in one go), or any
            object with a ``read(size)`` method returning ``bytes`` or
            ``str``.
        chunk_size: Number of bytes (or characters) requested per read.

    Iterating a tokenizer yields tokens until end of input.  It is a
    forward-only source: iterate it once.
    """

    def __init__(
        self,
        source: bytes | bytearray | memoryview | IO[Any],
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._chunk_size = chunk_size
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._buf = ""
        self._pos = 0
        # Characters discarded from the front of the buffer so far.
        self._offset = 0
        self._eof = False
        # Characters read while gathering a long string, not yet in _buf.
        self._held = 0
        self._data = b""
        self._reader: IO[Any] | None = None
        if isinstance(source, (bytes, bytearray, memoryview)):
            # Decoded on first use so that bad UTF-8 surfaces while iterating.
            self._data = bytes(source)
        else:
            self._reader = source

    def __iter__(self) -> Iterator[Token]:
        return self._scan()

    # ------------------------------------------------------------------
    # Buffer management
    # ------------------------------------------------------------------

    def _decode(self, data: bytes, *, final: bool = False) -> str:
        try:
            return self._decoder.decode(data, final)
        except UnicodeDecodeError as exc:
            raise TokenizeError(
                "invalid UTF-8 in input", offset=self._offset + len(self._buf) + self._held
            ) from exc

    def _read_chunk(self) -> str | None:
        """Return the next piece of decoded text, or None at end of input.

        A piece may be empty when a read ends inside a multi-byte character.
        """
        if self._eof:
            return None
        if self._reader is None:
            self._eof = True
            text = self._decode(self._data, final=True)
            self._data = b""
            return text or None
        chunk = self._reader.read(self._chunk_size)
        if not chunk:
            self._eof = True
            return self._decode(b"", final=True) or None
        return chunk if isinstance(chunk, str) else self._decode(chunk)

    def _fill(self) -> bool:
        """Read one more chunk; return False once the source is exhausted."""
        if self._pos:
            self._offset += self._pos
            self._buf = self._buf[self._pos :]
            self._pos = 0
        text = self._read_chunk()
        if text is None:
            return False
        self._buf += text
        return True

    def _ensure(self, size: int) -> bool:
        while len(self._buf) - self._pos < size:
            if not self._fill():
                return False
        return True

    def _error(self, message: str) -> TokenizeError:
        return TokenizeError(message, offset=self._offset + self._pos)

    def _skip_whitespace(self) -> str:
        """Advance past whitespace and return the next character, or ``""``."""
        while True:
            buf, pos = self._buf, self._pos
            while pos < len(buf) and buf[pos] in _WHITESPACE:
                pos += 1
            self._pos = pos
            if pos < len(buf):
                return buf[pos]
            if not self._fill():
                return ""

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _scan_string(self) -> str:
        found, escaped = _closing_quote(self._buf, self._pos + 1, False)
        if not found:
            self._gather_string(escaped)
        try:
            text, end = scanstring(self._buf, self._pos + 1, True)
        except json.JSONDecodeError as exc:
            raise TokenizeError(exc.msg, offset=self._offset + exc.pos) from exc
        self._pos = end
        return text

    def _gather_string(self, escaped: bool) -> None:
        """Read until the string opened at ``_pos`` is closed.

        Each new piece is searched once and the pieces are joined once, so
        a long string costs time linear in its length.
        """
        pieces = [self._buf[self._pos :]]
        self._offset += self._pos
        self._pos = 0
        self._buf = ""
        self._held = len(pieces[0])
        try:
            while True:
                piece = self._read_chunk()
                if piece is None:
                    self._buf = "".join(pieces)
                    raise self._error("unterminated string")
                pieces.append(piece)
                self._held += len(piece)
                found, escaped = _closing_quote(piece, 0, escaped)
                if found:
                    break
        finally:
            self._held = 0
        self._buf = "".join(pieces)

    def _scan_number(self) -> NumberToken:
        end = self._pos
        while True:
            while end < len(self._buf) and self._buf[end] in _NUMBER_CHARS:
                end += 1
            if end < len(self._buf):
                break
            start = self._pos
            more = self._fill()
            end -= start - self._pos
            if not more:
                break
        match = _NUMBER_RE.match(self._buf, self._pos, end)
        if match is None or match.end() != end:
            raise self._error("invalid number literal")
        self._pos = end
        self._check_value_end()
        return NumberToken(match.group())

    def _scan_literal(self, first: str) -> Token:
        word, token = _LITERALS[first]
        if not self._ensure(len(word)) or not self._buf.startswith(word, self._pos):
            raise self._error(f"invalid literal, expected {word!r}")
        self._pos += len(word)
        self._check_value_end()
        return token

    def _check_value_end(self) -> None:
        if not self._ensure(1):
            return
        char = self._buf[self._pos]
        if char not in _VALUE_END:
            raise self._error(f"invalid character {char!r} after value")

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def _scan(self) -> Iterator[Token]:
        stack: list[ContainerKind] = []
        expect = _Expect.VALUE
        while True:
            char = self._skip_whitespace()
            if not char:
                if stack or expect is not _Expect.VALUE:
                    raise self._error("unexpected end of input")
                return

            if expect is _Expect.COLON:
                if char != ":":
                    raise self._error(f"invalid character {char!r} after object key")
                self._pos += 1
                expect = _Expect.VALUE
                continue

            if expect is _Expect.COMMA_OR_CLOSE and char == ",":
                self._pos += 1
                expect = _Expect.KEY if stack[-1] is ContainerKind.OBJECT else _Expect.VALUE
                continue

            if char in "]}":
                kind = ContainerKind.OBJECT if char == "}" else ContainerKind.ARRAY
                if expect not in _CLOSE_ALLOWED or stack[-1] is not kind:
                    raise self._error(f"unexpected {char!r}")
                self._pos += 1
                stack.pop()
                yield CLOSE_OBJECT if kind is ContainerKind.OBJECT else CLOSE_ARRAY
                expect = _Expect.COMMA_OR_CLOSE if stack else _Expect.VALUE
                continue

            if expect is _Expect.COMMA_OR_CLOSE:
                raise self._error(f"invalid character {char!r} after {stack[-1]} value")

            if expect in (_Expect.KEY, _Expect.KEY_OR_CLOSE):
                if char != '"':
                    raise self._error(f"invalid character {char!r} looking for object key")
                yield StringToken(self._scan_string())
                expect = _Expect.COLON
                continue

            if char == "{":
                self._pos += 1
                stack.append(ContainerKind.OBJECT)
                yield OPEN_OBJECT
                expect = _Expect.KEY_OR_CLOSE
                continue
            if char == "[":
                self._pos += 1
                stack.append(ContainerKind.ARRAY)
                yield OPEN_ARRAY
                expect = _Expect.VALUE_OR_CLOSE
                continue

            if char == '"':
                token: Token = StringToken(self._scan_string())
            elif char in _NUMBER_START:
                token = self._scan_number()
            elif char in _LITERALS:
                token = self._scan_literal(char)
            else:
                raise self._error(f"invalid character {char!r} looking for beginning of value")
            yield token
            expect = _Expect.COMMA_OR_CLOSE if stack else _Expect.VALUE
