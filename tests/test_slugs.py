"""Tests for memory_kb.slugs."""

import pytest

from memory_kb.slugs import slug


class TestSlug:
    """Tests for slug()."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Apple Pie", "apple-pie"),
            ("  New_York City ", "new-york-city"),
            ("Ada   Lovelace", "ada-lovelace"),
            ("C'est la vie!", "cest-la-vie"),
            ("--dashes--", "dashes"),
            ("a - b", "a-b"),
            ("Café", "café"),
        ],
    )
    def test_normalizes(self, name, expected):
        assert slug(name) == expected

    def test_case_and_spacing_collapse_to_same_slug(self):
        """Names differing only in case or spacing share a slug."""
        assert slug("Apple Pie") == slug("apple   pie") == slug("APPLE_PIE")

    def test_idempotent(self):
        assert slug(slug("Some Name_here")) == slug("Some Name_here")

    @pytest.mark.parametrize("name", ["", "   ", "!!!", "-"])
    def test_unsluggable_names_are_empty(self, name):
        assert slug(name) == ""
