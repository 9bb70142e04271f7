"""Tests for the naming module."""

import pytest

from actiongen.naming import is_client_identifier, wire_name


class TestWireName:
    """Test field name -> wire name conventions."""

    def test_lower(self):
        assert wire_name("UserID", "lower") == "userid"

    def test_lower_is_default(self):
        assert wire_name("Email") == "email"

    def test_preserve(self):
        assert wire_name("UserID", "preserve") == "UserID"

    def test_camel(self):
        assert wire_name("user_id", "camel") == "userId"

    def test_camel_multiple_parts(self):
        assert wire_name("created_at_utc", "camel") == "createdAtUtc"

    def test_camel_keeps_leading_underscore(self):
        assert wire_name("_private_name", "camel") == "_privateName"

    def test_camel_single_word(self):
        assert wire_name("email", "camel") == "email"

    def test_unknown_case(self):
        with pytest.raises(ValueError, match="unknown field case"):
            wire_name("email", "kebab")


class TestIsClientIdentifier:
    """Action names become exported TypeScript consts."""

    def test_plain_name(self):
        assert is_client_identifier("get_user")

    def test_reserved_word(self):
        assert not is_client_identifier("delete")

    def test_reserved_word_new(self):
        assert not is_client_identifier("new")

    def test_non_ascii(self):
        assert not is_client_identifier("grüße")
