"""
jsonscrub_core.models
~~~~~~~~~~~~~~~~~~~~~
Pydantic v2 model for masking rules kept in a file.

A rules file is a small JSON object::

    {"keys": ["Name", "email"], "pattern": "(?i)secret", "style": "spaced"}

At least one of ``keys`` / ``pattern`` must be present.  The model is
immutable and validates the regular expression up front, so a bad rules
file fails before any document is read.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from jsonscrub_core.emitter import SeparatorStyle
from jsonscrub_core.policy import FieldSetPolicy, field_set_policy


class MaskRules(BaseModel):
    """Exact key names and/or a key-name pattern to mask."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    keys: frozenset[str] = Field(default_factory=frozenset)
    pattern: str | None = None
    style: SeparatorStyle = SeparatorStyle.COMPACT

    @field_validator("pattern")
    @classmethod
    def _pattern_compiles(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as exc:
                raise ValueError(f"invalid pattern: {exc}") from exc
        return value

    @model_validator(mode="after")
    def _has_selection(self) -> MaskRules:
        if not self.keys and self.pattern is None:
            raise ValueError("either keys or pattern must be provided")
        return self

    def to_policy(self) -> FieldSetPolicy:
        """Return the equivalent :class:`~jsonscrub_core.policy.FieldSetPolicy`."""
        return field_set_policy(self.keys, self.pattern)

    @classmethod
    def from_file(cls, path: str | Path) -> MaskRules:
        """Load and validate a JSON rules file."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
