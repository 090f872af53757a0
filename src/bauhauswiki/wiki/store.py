"""
=============================================================================
ARTICLE STORE
=============================================================================

Thread-safe, in-memory mapping from article key to its full revision
history. The store is the sole owner of all article data; it is created
once at startup and shared by every connection thread.

=============================================================================
STRUCTURE
=============================================================================

    WikiStore
    ┌───────────────────────────────────────────────────────────────────┐
    │  _lock: threading.Lock   (one lock, whole mapping)                │
    │                                                                    │
    │  _histories:                                                       │
    │    "main"    → (Article v1,)                                       │
    │    "bauhaus" → (Article v1, Article v2, Article v3)                │
    │                  ─────────                 ─────────               │
    │                  oldest                    current (displayed)     │
    └───────────────────────────────────────────────────────────────────┘

=============================================================================
LOCKING RULES
=============================================================================

1. Every operation, read or write, holds the lock for its full duration.
   Readers and writers are serialized the same way.

2. A save builds the new tuple and rebinds the key in ONE assignment:

       self._histories[key] = history + (article,)

   A reader sees either the old tuple or the new one, never a partial
   append.

3. Nothing that leaves the store is mutable. Callers get Article values
   and tuples, and render / write sockets AFTER the lock is released.

Known limitation: the single lock serializes every request that touches
the store, which becomes a bottleneck under heavy write contention.

=============================================================================
"""

import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from .models import Article, ArticleHistory, derive_title


logger = logging.getLogger(__name__)


# =============================================================================
# SEED DATA
# =============================================================================
#
# (key, stored title, content). Seed titles are written as-is, not derived
# from the key: "main" is shown as "Main Page".
#
SEED_ARTICLES: Tuple[Tuple[str, str, str], ...] = (
    (
        "main",
        "Main Page",
        "Welcome to BauhausWiki\n"
        "\n"
        "A minimalist encyclopedia inspired by Bauhaus design principles.\n"
        "\n"
        "Featured Articles:\n"
        "- [[Bauhaus]]\n"
        "- [[Design]]\n"
        "- [[Architecture]]\n"
        "\n"
        "Start exploring or create a new article.",
    ),
    (
        "bauhaus",
        "Bauhaus",
        "The Bauhaus\n"
        "\n"
        "The Bauhaus was a German art school operational from 1919 to 1933 "
        "that combined crafts and the fine arts.\n"
        "\n"
        "Key Principles:\n"
        "- Form follows function\n"
        "- Unity of art and technology\n"
        "- Geometric abstraction\n"
        "- Primary colors and shapes\n"
        "\n"
        "The Bauhaus style is characterized by geometric forms, clean lines, "
        "and a focus on functionality. It influenced [[Architecture]] and "
        "[[Design]] worldwide.",
    ),
)


class WikiStore:
    """
    Concurrent article store with append-only version history.

    Usage:
        store = WikiStore.with_seed_data()

        store.save("de_stijl", "# De Stijl\\n\\nDutch movement, 1917.")
        store.get_latest("de_stijl").title     # "De Stijl"
        len(store.get_history("de_stijl"))     # 1

        store.get_latest("missing")            # None (no implicit creation)

    Args:
        clock: Returns the current time in seconds. Injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._histories: Dict[str, ArticleHistory] = {}

    @classmethod
    def with_seed_data(cls, clock: Callable[[], float] = time.time) -> "WikiStore":
        """Create a store holding the "main" and "bauhaus" articles."""
        store = cls(clock=clock)
        for key, title, content in SEED_ARTICLES:
            store._append(key, Article(title=title, content=content, timestamp=store._now()))
        return store

    def _now(self) -> int:
        return int(self._clock())

    def _append(self, key: str, article: Article) -> int:
        """Append one version; returns the new history length."""
        with self._lock:
            history = self._histories.get(key, ())
            self._histories[key] = history + (article,)
            return len(history) + 1

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def get_latest(self, key: str) -> Optional[Article]:
        """Return the current version of ``key``, or None if it was never saved."""
        with self._lock:
            history = self._histories.get(key)
            return history[-1] if history else None

    def get_history(self, key: str) -> Optional[ArticleHistory]:
        """
        Return every version of ``key``, oldest first, or None.

        The tuple is a snapshot: later saves do not change it.
        """
        with self._lock:
            return self._histories.get(key)

    def search(self, query: str) -> List[Tuple[str, str]]:
        """
        Find articles whose current title or content contains ``query``.

        Matching is a case-insensitive substring test. An empty query
        matches every article.

        Returns:
            (key, title) pairs, sorted by key.
        """
        needle = query.lower()
        with self._lock:
            results = [
                (key, history[-1].title)
                for key, history in self._histories.items()
                if needle in history[-1].title.lower()
                or needle in history[-1].content.lower()
            ]
        results.sort()
        return results

    def keys(self) -> List[str]:
        """All article keys, sorted."""
        with self._lock:
            return sorted(self._histories)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._histories

    def __len__(self) -> int:
        with self._lock:
            return len(self._histories)

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    def save(self, key: str, content: str) -> Article:
        """
        Append a new version of ``key``.

        The title is derived from the key here, once, and stored with the
        version. A new key gets a new one-element history.

        Returns:
            The Article that was appended.
        """
        article = Article(
            title=derive_title(key),
            content=content,
            timestamp=self._now(),
        )
        version = self._append(key, article)
        logger.debug(f"Saved version {version} of {key!r} ({len(content)} chars)")
        return article
