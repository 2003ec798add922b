"""
jsonscrub_core.tokens
~~~~~~~~~~~~~~~~~~~~~
Lexical tokens exchanged between the tokenizer and the transcoder.

Every variant is a frozen, slotted dataclass so tokens are cheap to create
and can be matched structurally (``match token: case StringToken(text=t)``).
Number tokens keep the literal source text, never a parsed value, so that
exponent form, trailing zeros and precision survive a round trip.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ContainerKind(StrEnum):
    """The two JSON container types."""

    OBJECT = "object"
    ARRAY = "array"


@dataclass(frozen=True, slots=True)
class StringToken:
    text: str


@dataclass(frozen=True, slots=True)
class BoolToken:
    value: bool


@dataclass(frozen=True, slots=True)
class NumberToken:
    raw: str


@dataclass(frozen=True, slots=True)
class NullToken:
    pass


@dataclass(frozen=True, slots=True)
class ContainerOpen:
    kind: ContainerKind

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ContainerKind(self.kind))

    @property
    def char(self) -> str:
        return "{" if self.kind is ContainerKind.OBJECT else "["


@dataclass(frozen=True, slots=True)
class ContainerClose:
    kind: ContainerKind

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ContainerKind(self.kind))

    @property
    def char(self) -> str:
        return "}" if self.kind is ContainerKind.OBJECT else "]"


Token = StringToken | BoolToken | NumberToken | NullToken | ContainerOpen | ContainerClose

NULL = NullToken()
TRUE = BoolToken(True)
FALSE = BoolToken(False)
OPEN_OBJECT = ContainerOpen(ContainerKind.OBJECT)
CLOSE_OBJECT = ContainerClose(ContainerKind.OBJECT)
OPEN_ARRAY = ContainerOpen(ContainerKind.ARRAY)
CLOSE_ARRAY = ContainerClose(ContainerKind.ARRAY)
