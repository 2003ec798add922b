"""
Pytest fixtures for jsonscrub CLI tests.

Every invocation reconfigures the root logger; the autouse fixture puts it
back so later tests do not write to a closed CliRunner stream.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from typer.testing import CliRunner


@pytest.fixture(autouse=True)
def _restore_root_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("JSONSCRUB_MASK", "JSONSCRUB_STYLE", "JSONSCRUB_BUFFER_SIZE", "JSONSCRUB_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()
