"""
jsonscrub_core.policy
~~~~~~~~~~~~~~~~~~~~~
Field matching policies: which object keys get their string value
replaced, and with what.

Design
------
* ``FieldPolicy`` is a ``Protocol`` (structural subtyping) rather than an
  ABC, so any object with a matching ``evaluate`` method can be passed to
  the transcoder without explicit inheritance.
* ``evaluate`` is only consulted for *string* values sitting directly
  behind an object key.  Numbers, booleans, nulls and containers are never
  offered to a policy.
* ``CallbackPolicy`` delegates to a plain function and sees the original
  value; ``FieldSetPolicy`` matches exact names or a regular expression
  and always substitutes :data:`MASK`.
* Both are immutable and therefore safe to share between threads.  A
  callback closing over mutable state is the caller's responsibility.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from jsonscrub_core.errors import ConfigurationError

#: Replacement written by :class:`FieldSetPolicy` for every matched value.
MASK = "********"

#: ``fn(key, value) -> (new_value, do_replace)``
FieldFunc = Callable[[str, str], tuple[str, bool]]


@runtime_checkable
class FieldPolicy(Protocol):
    """Decides whether the string value bound to *key* is replaced."""

    def evaluate(self, key: str, value: str) -> tuple[str, bool]:
        """Return ``(replacement, matched)``.

        When ``matched`` is false the replacement is ignored and *value*
        is written unchanged.  A matched replacement must be a ``str``;
        anything else makes the transcoder raise ``TypeError``.
        """
        ...


@dataclass(frozen=True)
class CallbackPolicy:
    """Policy backed by a :data:`FieldFunc`."""

    fn: FieldFunc

    def __post_init__(self) -> None:
        if self.fn is None or not callable(self.fn):
            raise ConfigurationError("jsonscrub: field function must be callable")

    def evaluate(self, key: str, value: str) -> tuple[str, bool]:
        return self.fn(key, value)


@dataclass(frozen=True)
class FieldSetPolicy:
    """Exact key names and/or a key-name pattern, masked with :data:`MASK`.

    A key matches when it is in *fields* or when *pattern* finds a match
    anywhere in it.  Matching is case-sensitive unless the pattern says
    otherwise (e.g. ``(?i)secret``).
    """

    fields: frozenset[str] = frozenset()
    pattern: re.Pattern[str] | None = None

    def __post_init__(self) -> None:
        if not self.fields and self.pattern is None:
            raise ConfigurationError("jsonscrub: either field set or regexp must be provided")

    def matches(self, key: str) -> bool:
        if key in self.fields:
            return True
        return self.pattern is not None and self.pattern.search(key) is not None

    def evaluate(self, key: str, value: str) -> tuple[str, bool]:
        if self.matches(key):
            return MASK, True
        return value, False


def field_set_policy(
    fields: Iterable[str] | None = None,
    pattern: str | re.Pattern[str] | None = None,
) -> FieldSetPolicy:
    """Build a :class:`FieldSetPolicy` from loose inputs.

    Args:
        fields: Exact key names; any iterable of strings.
        pattern: A regular expression, as source text or compiled.

    Raises:
        ConfigurationError: If both are empty or *pattern* does not compile.
    """
    if isinstance(pattern, str):
        try:
            pattern = re.compile(pattern)
        except re.error as exc:
            raise ConfigurationError(f"jsonscrub: invalid field pattern: {exc}") from exc
    if isinstance(fields, str):
        fields = [fields]
    return FieldSetPolicy(frozenset(fields or ()), pattern)


def as_policy(policy: Any) -> FieldPolicy:
    """Coerce *policy* to a :class:`FieldPolicy`.

    A ready-made policy is returned as is; a bare callable is wrapped in a
    :class:`CallbackPolicy`.

    Raises:
        ConfigurationError: For ``None`` or anything else.
    """
    if isinstance(policy, FieldPolicy):
        return policy
    if callable(policy):
        return CallbackPolicy(policy)
    raise ConfigurationError(f"jsonscrub: no usable field policy (got {policy!r})")
