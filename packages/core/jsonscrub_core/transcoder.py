"""
jsonscrub_core.transcoder
~~~~~~~~~~~~~~~~~~~~~~~~~
Single-pass redaction of arbitrary JSON.

The transcoder pulls one token at a time, asks the
:class:`~jsonscrub_core.tracker.StructuralTracker` what role it plays, lets
the field policy rewrite string values that sit directly behind an object
key, and re-emits everything else unchanged.  No parse tree is built:
memory is bounded by nesting depth, and key order, array order and number
literals survive exactly.

Entry points
------------
* :func:`transcode_stream` - readable source to writable sink, buffered
  and flushed on every exit path.
* :func:`transcode_bytes` - complete buffer in, complete ``bytearray``
  out, optionally reusing a scratch buffer.
* :func:`transcode_tokens` - the bare loop over any token iterable.
* :func:`scrub_stream`, :func:`scrub_message`, :func:`scrub_message_func`
  - shortcuts that build the policy from field names, a pattern or a
  function.

All of them validate the policy and style before touching any input.
Every error is raised to the caller; none is logged here.

Example::

    >>> bytes(scrub_message(b'{"ID":42,"Secret":"Trillian"}', ["Secret"]))
    b'{"ID":42,"Secret":"********"}'
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import IO, Any

from jsonscrub_core.buffering import DEFAULT_BUFFER_SIZE, ByteSink, buffered_writer, reuse_scratch
from jsonscrub_core.emitter import Emitter, Separator, SeparatorStyle, resolve_style
from jsonscrub_core.errors import MalformedInputError, TokenizeError
from jsonscrub_core.policy import (
    CallbackPolicy,
    FieldFunc,
    FieldPolicy,
    as_policy,
    field_set_policy,
)
from jsonscrub_core.tokenizer import DEFAULT_CHUNK_SIZE, Tokenizer
from jsonscrub_core.tokens import ContainerClose, ContainerOpen, StringToken, Token
from jsonscrub_core.tracker import Role, StructuralTracker

logger = logging.getLogger(__name__)


@dataclass
class _CallState:
    """Per-call bookkeeping; never shared between calls."""

    pending_key: str = ""
    replacement_pending: bool = False
    # Separator written right before the current token, None after a delimiter.
    last_separator: Separator | None = None


class _Transcoder:
    def __init__(self, policy: FieldPolicy, emitter: Emitter) -> None:
        self._policy = policy
        self._emitter = emitter
        self._tracker = StructuralTracker()
        self._state = _CallState()

    def run(self, tokens: Iterable[Token]) -> int:
        iterator = iter(tokens)
        count = 0
        token = _pull(iterator)
        while token is not None:
            role = self._tracker.classify(token)
            self._emit(token, role)
            count += 1
            following = _pull(iterator)
            if following is not None:
                self._separate(token, role, following)
            token = following
        return count

    def _emit(self, token: Token, role: Role) -> None:
        state = self._state
        if role is Role.DELIMITER:
            state.last_separator = None
        elif role is Role.KEY and isinstance(token, StringToken):
            state.pending_key = token.text
            state.replacement_pending = True
        elif (
            isinstance(token, StringToken)
            and state.replacement_pending
            and state.last_separator is Separator.KEY_VALUE
        ):
            state.replacement_pending = False
            replacement, matched = self._policy.evaluate(state.pending_key, token.text)
            if not matched:
                replacement = token.text
            elif not isinstance(replacement, str):
                raise TypeError(
                    f"field policy returned a {type(replacement).__name__} replacement "
                    f"for key {state.pending_key!r}, expected str"
                )
            self._emitter.string(replacement)
            return
        self._emitter.token(token)

    def _separate(self, token: Token, role: Role, following: Token) -> None:
        if self._tracker.depth == 0:
            self._emitter.document_break()
            self._state.last_separator = None
            return
        if isinstance(token, ContainerOpen) or isinstance(following, ContainerClose):
            return
        separator = Separator.KEY_VALUE if role is Role.KEY else Separator.ELEMENT
        self._emitter.separator(separator)
        self._state.last_separator = separator


def _pull(iterator: Iterator[Token]) -> Token | None:
    try:
        return next(iterator, None)
    except TokenizeError as exc:
        raise MalformedInputError(f"jsonscrub: malformed json: {exc}", offset=exc.offset) from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def transcode_tokens(
    tokens: Iterable[Token],
    write: Callable[[bytes], Any],
    policy: FieldPolicy | FieldFunc,
    style: SeparatorStyle | str = SeparatorStyle.COMPACT,
) -> int:
    """Re-emit *tokens* through *write*, applying *policy*.

    Returns:
        The number of tokens handled.

    Raises:
        ConfigurationError: If *policy* or *style* is unusable.
        MalformedInputError: If the token source raises a tokenize error.
        UnknownTokenError: If an object that is not a token shows up.
        TypeError: If the policy returns a non-``str`` replacement.
    """
    emitter = Emitter(write, resolve_style(style))
    return _Transcoder(as_policy(policy), emitter).run(tokens)


def transcode_stream(
    sink: ByteSink,
    source: IO[Any],
    policy: FieldPolicy | FieldFunc,
    style: SeparatorStyle | str = SeparatorStyle.COMPACT,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> None:
    """Read JSON from *source* until end of input and write it to *sink*.

    Output is buffered in blocks of *buffer_size* bytes and flushed when
    the call returns or raises, so a failure midway leaves whatever was
    produced so far in *sink*.

    Raises:
        ConfigurationError: Before any I/O, if *policy* or *style* is unusable.
        MalformedInputError: If *source* is not valid JSON.
        UnknownTokenError: Defensive; the tokenizer produced a foreign object.
    """
    resolved = as_policy(policy)
    emitter_style = resolve_style(style)
    with buffered_writer(sink, buffer_size) as out:
        count = _Transcoder(resolved, Emitter(out.write, emitter_style)).run(
            Tokenizer(source, chunk_size=chunk_size)
        )
    logger.debug(
        "Stream transcoded",
        extra={"tokens": count, "bytes_written": out.bytes_written, "style": str(emitter_style)},
    )


def transcode_bytes(
    src: bytes | bytearray | memoryview,
    policy: FieldPolicy | FieldFunc,
    style: SeparatorStyle | str = SeparatorStyle.COMPACT,
    *,
    scratch: bytearray | None = None,
) -> bytearray:
    """Transcode the complete JSON text *src* in memory.

    Args:
        src: UTF-8 encoded JSON.
        policy: Field policy (or bare field function).
        style: Separator style.
        scratch: Optional buffer to clear and fill instead of allocating a
            new one.  It is the object returned and may be *src* itself.
            After an error its content is unspecified.

    Raises:
        ConfigurationError: If *policy* or *style* is unusable.
        MalformedInputError: If *src* is not valid JSON.
    """
    resolved = as_policy(policy)
    emitter_style = resolve_style(style)
    # The tokenizer copies src, so scratch may be the very buffer being read.
    tokens = Tokenizer(src)
    dst = reuse_scratch(scratch)
    _Transcoder(resolved, Emitter(dst.extend, emitter_style)).run(tokens)
    return dst


def scrub_stream(
    sink: ByteSink,
    source: IO[Any],
    fields: Iterable[str] | None = None,
    pattern: str | re.Pattern[str] | None = None,
    *,
    style: SeparatorStyle | str = SeparatorStyle.COMPACT,
) -> None:
    """Stream form with exact *fields* and/or a key *pattern*, masked with ``MASK``."""
    transcode_stream(sink, source, field_set_policy(fields, pattern), style)


def scrub_message(
    src: bytes | bytearray | memoryview,
    fields: Iterable[str] | None = None,
    pattern: str | re.Pattern[str] | None = None,
    *,
    scratch: bytearray | None = None,
    style: SeparatorStyle | str = SeparatorStyle.COMPACT,
) -> bytearray:
    """In-memory form with exact *fields* and/or a key *pattern*, masked with ``MASK``."""
    return transcode_bytes(src, field_set_policy(fields, pattern), style, scratch=scratch)


def scrub_message_func(
    src: bytes | bytearray | memoryview,
    fn: FieldFunc,
    *,
    scratch: bytearray | None = None,
    style: SeparatorStyle | str = SeparatorStyle.COMPACT,
) -> bytearray:
    """In-memory form where *fn* decides for every string key/value pair."""
    return transcode_bytes(src, CallbackPolicy(fn), style, scratch=scratch)
