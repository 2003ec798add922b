"""
Tests for jsonscrub_core.errors.

Covers: exception hierarchy, attribute presence, message formatting,
and isinstance checks.
"""

from __future__ import annotations

import pytest

from jsonscrub_core import (
    ConfigurationError,
    JsonScrubError,
    MalformedInputError,
    NullToken,
    TokenizeError,
    UnknownTokenError,
)


class TestJsonScrubError:
    def test_is_base_exception(self) -> None:
        e = JsonScrubError("base error")
        assert isinstance(e, Exception)

    def test_message_preserved(self) -> None:
        e = JsonScrubError("something failed")
        assert str(e) == "something failed"

    def test_can_be_raised_and_caught(self) -> None:
        with pytest.raises(JsonScrubError):
            raise JsonScrubError("test")


class TestConfigurationError:
    def test_is_jsonscrub_error(self) -> None:
        assert isinstance(ConfigurationError("no policy"), JsonScrubError)


class TestTokenizeError:
    def test_is_jsonscrub_error_and_value_error(self) -> None:
        e = TokenizeError("unexpected ']'", offset=3)
        assert isinstance(e, JsonScrubError)
        assert isinstance(e, ValueError)

    def test_attributes(self) -> None:
        e = TokenizeError("unterminated string", offset=17)
        assert e.reason == "unterminated string"
        assert e.offset == 17
        assert str(e) == "unterminated string at offset 17"

    def test_default_offset(self) -> None:
        assert TokenizeError("bad").offset == 0


class TestMalformedInputError:
    def test_is_jsonscrub_error(self) -> None:
        e = MalformedInputError("malformed json", offset=4)
        assert isinstance(e, JsonScrubError)
        assert e.offset == 4
        assert str(e) == "malformed json"

    def test_is_not_a_tokenize_error(self) -> None:
        assert not isinstance(MalformedInputError("x"), TokenizeError)


class TestUnknownTokenError:
    def test_carries_token(self) -> None:
        token = object()
        e = UnknownTokenError(token)
        assert e.token is token
        assert isinstance(e, JsonScrubError)

    def test_message(self) -> None:
        assert str(UnknownTokenError(3.5)) == "unknown json token: 3.5"

    def test_known_token_in_message(self) -> None:
        assert "NullToken" in str(UnknownTokenError(NullToken()))
