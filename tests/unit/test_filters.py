"""Unit tests for the single-select category filter."""

from app.features.feed.cursor import FeedCursor
from app.features.feed.filters import CategoryFilter
from tests.conftest import make_video


def ids(videos):
    return [v.id for v in videos]


class TestCategoryFilter:
    def test_starts_unfiltered(self, sample_catalog):
        f = CategoryFilter(sample_catalog, FeedCursor())
        assert f.active is None
        assert ids(f.filtered) == [1, 2, 3]

    def test_select_keeps_catalog_order_and_resets_cursor(self, sample_catalog):
        cursor = FeedCursor()
        f = CategoryFilter(sample_catalog, cursor)
        cursor.index = 2

        f.select("b")

        assert f.active == "b"
        assert ids(f.filtered) == [1, 2]
        assert ids(cursor.videos) == [1, 2]
        assert cursor.index == 0

    def test_selecting_active_category_again_restores_full_catalog(self, sample_catalog):
        cursor = FeedCursor()
        f = CategoryFilter(sample_catalog, cursor)

        f.select("b")
        cursor.advance()
        f.select("b")

        assert f.active is None
        assert ids(f.filtered) == [1, 2, 3]
        assert cursor.index == 0

    def test_switching_category_replaces_filter(self, sample_catalog):
        f = CategoryFilter(sample_catalog, FeedCursor())
        f.select("b")
        f.select("c")
        assert f.active == "c"
        assert ids(f.filtered) == [3]

    def test_match_is_case_sensitive_and_exact(self):
        catalog = [make_video(1, ["Food"]), make_video(2, ["food"]), make_video(3, ["Food "])]
        f = CategoryFilter(catalog, FeedCursor())
        f.select("Food")
        assert ids(f.filtered) == [1]

    def test_duplicate_category_in_video_counts_once(self):
        f = CategoryFilter([make_video(1, ["a", "a"])], FeedCursor())
        f.select("a")
        assert ids(f.filtered) == [1]

    def test_no_match_yields_empty_list(self, sample_catalog):
        cursor = FeedCursor()
        f = CategoryFilter(sample_catalog, cursor)

        f.select("zzz")

        assert f.filtered == []
        assert cursor.current() is None

    def test_reset_clears_filter(self, sample_catalog):
        cursor = FeedCursor()
        f = CategoryFilter(sample_catalog, cursor)
        f.select("c")

        f.reset()

        assert f.active is None
        assert ids(f.filtered) == [1, 2, 3]
        assert cursor.index == 0
