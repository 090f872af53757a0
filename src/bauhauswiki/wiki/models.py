"""
Data models for the wiki.

    Article          one immutable version of one article
    ArticleHistory   all versions of one key, oldest first
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Article:
    """
    One saved version of an article.

    Attributes:
        title: Display title, derived from the key when the version was saved.
        content: Raw markup text.
        timestamp: Creation time, whole seconds since the Unix epoch.
    """

    title: str
    content: str
    timestamp: int


# Append-only: a new tuple replaces the old one on every save, so a reader
# holding a history never sees it change underneath it.
ArticleHistory = Tuple[Article, ...]


def derive_title(key: str) -> str:
    """
    Turn an article key into a display title.

        "bauhaus"               → "Bauhaus"
        "form_follows_function" → "Form Follows Function"
        "de_stijl__movement"    → "De Stijl Movement"

    Underscores become spaces, runs of whitespace collapse, and each word
    gets its first character upper-cased. The rest of each word is kept
    as typed ("iPhone" stays "IPhone", not "Iphone").
    """
    words = key.replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)
