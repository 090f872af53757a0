"""
Unit tests for wiki models.
"""

import dataclasses

import pytest

from bauhauswiki.wiki.models import Article, derive_title


class TestDeriveTitle:
    @pytest.mark.parametrize("key,title", [
        ("bauhaus", "Bauhaus"),
        ("form_follows_function", "Form Follows Function"),
        ("de_stijl__movement", "De Stijl Movement"),
        ("_leading_and_trailing_", "Leading And Trailing"),
        ("iPhone", "IPhone"),
        ("already Spaced", "Already Spaced"),
        ("1919", "1919"),
        ("", ""),
    ])
    def test_derive_title(self, key, title):
        assert derive_title(key) == title

    def test_idempotent_on_key(self):
        assert derive_title("de_stijl") == derive_title("de_stijl")


class TestArticle:
    def test_immutable(self):
        article = Article(title="Bauhaus", content="text", timestamp=0)

        with pytest.raises(dataclasses.FrozenInstanceError):
            article.content = "changed"

    def test_value_equality(self):
        assert Article("A", "b", 1) == Article("A", "b", 1)
