"""
Unit tests for the article store.
"""

import threading

import pytest

from bauhauswiki.wiki.models import Article
from bauhauswiki.wiki.store import SEED_ARTICLES, WikiStore


# Matches the clock fixture in conftest.py
FIXED_TIMESTAMP = 1709164800


class TestAbsentKeys:
    """Keys that were never saved."""

    @pytest.mark.parametrize("key", ["missing", "", "Main", "main/"])
    def test_absent(self, seeded_store: WikiStore, key: str):
        assert seeded_store.get_latest(key) is None
        assert seeded_store.get_history(key) is None
        assert key not in seeded_store

    def test_reads_do_not_create(self, store: WikiStore):
        store.get_latest("x")
        store.get_history("x")

        assert len(store) == 0
        assert store.keys() == []


class TestSave:
    """Tests for WikiStore.save."""

    def test_first_save_creates_history(self, store: WikiStore):
        article = store.save("de_stijl", "Dutch movement")

        assert article == Article(title="De Stijl", content="Dutch movement", timestamp=FIXED_TIMESTAMP)
        assert store.get_history("de_stijl") == (article,)
        assert store.get_latest("de_stijl") is article

    def test_versions_append_in_order(self, store: WikiStore):
        store.save("k", "c1")
        store.save("k", "c2")

        history = store.get_history("k")
        assert [v.content for v in history] == ["c1", "c2"]
        assert store.get_latest("k").content == "c2"

    def test_history_snapshot_does_not_change(self, store: WikiStore):
        store.save("k", "c1")
        snapshot = store.get_history("k")

        store.save("k", "c2")

        assert len(snapshot) == 1
        assert len(store.get_history("k")) == 2

    def test_title_depends_on_key_only(self, store: WikiStore):
        store.save("form_follows_function", "first")
        store.save("form_follows_function", "# Something else entirely")

        titles = {v.title for v in store.get_history("form_follows_function")}
        assert titles == {"Form Follows Function"}

    def test_saving_seed_key_derives_title(self, seeded_store: WikiStore):
        """The seed title is only used for the seed version."""
        seeded_store.save("main", "new text")

        history = seeded_store.get_history("main")
        assert history[0].title == "Main Page"
        assert history[1].title == "Main"

    def test_empty_content(self, store: WikiStore):
        store.save("blank", "")

        assert store.get_latest("blank").content == ""

    def test_timestamp_from_clock(self):
        ticks = iter([100.9, 200.1])
        store = WikiStore(clock=lambda: next(ticks))

        store.save("k", "a")
        store.save("k", "b")

        assert [v.timestamp for v in store.get_history("k")] == [100, 200]

    def test_concurrent_saves_lose_nothing(self, store: WikiStore):
        count = 50
        barrier = threading.Barrier(count)

        def worker(n: int):
            barrier.wait()
            store.save("shared", f"content {n}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        history = store.get_history("shared")
        assert len(history) == count
        assert sorted(v.content for v in history) == sorted(f"content {n}" for n in range(count))


class TestSearch:
    """Tests for WikiStore.search."""

    def test_seed_search(self, seeded_store: WikiStore):
        """The "main" article links to [[Bauhaus]] in its content."""
        assert seeded_store.search("bauhaus") == [("bauhaus", "Bauhaus"), ("main", "Main Page")]

    def test_search_is_deterministic(self, seeded_store: WikiStore):
        assert seeded_store.search("design") == seeded_store.search("design")

    def test_case_insensitive(self, seeded_store: WikiStore):
        assert seeded_store.search("BAUHAUS") == seeded_store.search("bauhaus")

    def test_matches_title(self, store: WikiStore):
        store.save("de_stijl", "nothing relevant")

        assert store.search("stijl") == [("de_stijl", "De Stijl")]

    def test_only_current_version_is_searched(self, store: WikiStore):
        store.save("k", "old word")
        store.save("k", "new text")

        assert store.search("old") == []
        assert store.search("new") == [("k", "K")]

    def test_results_sorted_by_key(self, store: WikiStore):
        for key in ("zeta", "alpha", "mid"):
            store.save(key, "common")

        assert [key for key, _ in store.search("common")] == ["alpha", "mid", "zeta"]

    def test_empty_query_matches_everything(self, seeded_store: WikiStore):
        assert [key for key, _ in seeded_store.search("")] == ["bauhaus", "main"]

    def test_no_results(self, seeded_store: WikiStore):
        assert seeded_store.search("xyzzy") == []


class TestSeedData:
    def test_seed_articles(self, seeded_store: WikiStore):
        assert seeded_store.keys() == ["bauhaus", "main"]
        assert seeded_store.get_latest("main").title == "Main Page"
        assert seeded_store.get_latest("bauhaus").title == "Bauhaus"
        assert len(seeded_store.get_history("main")) == 1

    def test_seed_content(self, seeded_store: WikiStore):
        for key, title, content in SEED_ARTICLES:
            assert seeded_store.get_latest(key).content == content

    def test_main_page_links(self, seeded_store: WikiStore):
        content = seeded_store.get_latest("main").content

        assert "- [[Bauhaus]]" in content
        assert "- [[Design]]" in content
