"""Tests for common utilities."""

from datetime import date, datetime

import pytest

from entity_base.infrastructure.utilities.common import (
    create_unique_token,
    humanize_string,
    is_blank,
    is_present,
)


class TestPresence:
    """Test blank/presence predicates."""

    @pytest.mark.parametrize(
        "value",
        [None, False, "", "   ", "\n\t", float("nan"), [], (), ["", None], {}, set(), frozenset()],
    )
    def test_blank_values(self, value):
        """Test values considered blank."""
        assert is_blank(value) is True
        assert is_present(value) is False

    @pytest.mark.parametrize(
        "value",
        [True, 0, 1, 0.0, "a", " a ", [0], ["x", ""], {"k": None}, {1}, date(2020, 1, 1), datetime(2020, 1, 1), object()],
    )
    def test_present_values(self, value):
        """Test values considered present."""
        assert is_blank(value) is False
        assert is_present(value) is True


class TestHumanizeString:
    """Test identifier humanization."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("first_name", "First name"),
            ("totalAmount", "Total Amount"),
            ("due-date", "Due date"),
            ("  spaced   out  ", "Spaced out"),
            ("name is required", "Name is required"),
            ("", ""),
        ],
    )
    def test_humanize(self, text, expected):
        """Test humanized output."""
        assert humanize_string(text) == expected


class TestTokens:
    """Test identity token generation."""

    def test_tokens_are_unique_strings(self):
        """Test that tokens never repeat."""
        tokens = {create_unique_token() for _ in range(1000)}

        assert len(tokens) == 1000
        assert all(isinstance(token, str) for token in tokens)
