"""
jsonscrub_core
~~~~~~~~~~~~~~
Single-pass masking of selected string fields in arbitrary JSON.

Public surface
--------------
This package exposes **all** public symbols through its top-level
namespace so consumers never need to import from internal sub-modules
directly::

    # Preferred
    from jsonscrub_core import scrub_message, transcode_stream

    # Also valid but discouraged
    from jsonscrub_core.transcoder import scrub_message

Sub-module summary
------------------
:mod:`jsonscrub_core.transcoder`
    Stream and in-memory transcoding entry points.

:mod:`jsonscrub_core.policy`
    :class:`FieldPolicy` protocol, callback and field-set policies.

:mod:`jsonscrub_core.tokenizer`
    Strict incremental JSON tokenizer.

:mod:`jsonscrub_core.tokens`
    Token variants produced by the tokenizer.

:mod:`jsonscrub_core.tracker`
    Key/value/delimiter classification of tokens.

:mod:`jsonscrub_core.emitter`
    Token re-emission and separator styles.

:mod:`jsonscrub_core.buffering`
    Output buffering with guaranteed flush.

:mod:`jsonscrub_core.errors`
    Exception hierarchy rooted at :exc:`JsonScrubError`.

:mod:`jsonscrub_core.models`
    Pydantic model for rules files.

:mod:`jsonscrub_core.logging`
    Structured JSON logging.
"""

from __future__ import annotations

# --- Buffering --------------------------------------------------------------
from jsonscrub_core.buffering import DEFAULT_BUFFER_SIZE, OutputBuffer, buffered_writer

# --- Emitter ----------------------------------------------------------------
from jsonscrub_core.emitter import SeparatorStyle

# --- Exceptions -------------------------------------------------------------
from jsonscrub_core.errors import (
    ConfigurationError,
    JsonScrubError,
    MalformedInputError,
    TokenizeError,
    UnknownTokenError,
)

# --- Logging ----------------------------------------------------------------
from jsonscrub_core.logging import SENSITIVE_KEYS, JsonFormatter, configure_logging

# --- Models -----------------------------------------------------------------
from jsonscrub_core.models import MaskRules

# --- Policies ---------------------------------------------------------------
from jsonscrub_core.policy import (
    MASK,
    CallbackPolicy,
    FieldFunc,
    FieldPolicy,
    FieldSetPolicy,
    as_policy,
    field_set_policy,
)

# --- Tokenizer & tokens -----------------------------------------------------
from jsonscrub_core.tokenizer import Tokenizer
from jsonscrub_core.tokens import (
    BoolToken,
    ContainerClose,
    ContainerKind,
    ContainerOpen,
    NullToken,
    NumberToken,
    StringToken,
    Token,
)

# --- Tracking & transcoding --------------------------------------------------
from jsonscrub_core.tracker import Role, StructuralTracker
from jsonscrub_core.transcoder import (
    scrub_message,
    scrub_message_func,
    scrub_stream,
    transcode_bytes,
    transcode_stream,
    transcode_tokens,
)

__all__: list[str] = [
    # Transcoding
    "scrub_message",
    "scrub_message_func",
    "scrub_stream",
    "transcode_bytes",
    "transcode_stream",
    "transcode_tokens",
    "SeparatorStyle",
    "Role",
    "StructuralTracker",
    # Policies
    "MASK",
    "CallbackPolicy",
    "FieldFunc",
    "FieldPolicy",
    "FieldSetPolicy",
    "as_policy",
    "field_set_policy",
    # Tokens
    "Tokenizer",
    "BoolToken",
    "ContainerClose",
    "ContainerKind",
    "ContainerOpen",
    "NullToken",
    "NumberToken",
    "StringToken",
    "Token",
    # Buffering
    "DEFAULT_BUFFER_SIZE",
    "OutputBuffer",
    "buffered_writer",
    # Errors
    "ConfigurationError",
    "JsonScrubError",
    "MalformedInputError",
    "TokenizeError",
    "UnknownTokenError",
    # Models
    "MaskRules",
    # Logging
    "configure_logging",
    "JsonFormatter",
    "SENSITIVE_KEYS",
]

__version__: str = "0.1.0"
