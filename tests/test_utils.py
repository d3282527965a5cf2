"""
Tests for slug generation and message translation.
"""

import pytest

from app.core.i18n import parse_accept_language, translate
from app.utils.slug import SlugExhaustedError, generate_slug, unique_slug


class TestSlug:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Electronics & Gadgets", "electronics-gadgets"),
            ("  Men's   Shoes  ", "mens-shoes"),
            ("already-a-slug", "already-a-slug"),
            ("--Trim--Me--", "trim-me"),
        ],
    )
    def test_generate(self, text, expected):
        assert generate_slug(text) == expected

    def test_unique_adds_counter(self):
        taken = {"shoes", "shoes-1"}

        assert unique_slug("Shoes", taken.__contains__) == "shoes-2"

    def test_unique_gives_up(self):
        with pytest.raises(SlugExhaustedError):
            unique_slug("Shoes", lambda slug: True, max_attempts=3)

    def test_empty_text_gets_placeholder(self):
        assert unique_slug("!!!", lambda slug: False) == "item"


class TestTranslate:

    def test_english(self):
        assert translate("category.categoryNotFound") == "Category not found"

    def test_arabic(self):
        assert translate("category.categoryNotFound", "ar") != "Category not found"

    def test_parameters_are_interpolated(self):
        assert translate("order.productOutOfStock", "en", {"name": "Mouse"}) == (
            "Mouse is out of stock"
        )

    def test_unknown_key_returns_key(self):
        assert translate("nothing.here") == "nothing.here"

    def test_unknown_language_falls_back(self):
        assert translate("common.notFound", "fr") == "Resource not found"

    @pytest.mark.parametrize(
        "header, expected",
        [
            (None, "en"),
            ("ar", "ar"),
            ("fr-FR,ar;q=0.8,en;q=0.5", "ar"),
            ("en-US,en;q=0.9", "en"),
            ("de", "en"),
        ],
    )
    def test_accept_language(self, header, expected):
        assert parse_accept_language(header) == expected
