"""Unit tests for the catalog loader: decoding, derived URL, category set."""

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import FetchFailure, ParseFailure
from app.features.feed.catalog import (
    CatalogLoader,
    collect_categories,
    decode_video_row,
    parse_categories,
)
from app.utils.s3 import public_object_url
from tests.conftest import BASE_URL, FakeVideoStore, make_row, make_video


class TestPublicObjectUrl:
    def test_joins_base_and_file_name(self):
        assert public_object_url("https://cdn.test/videos", "a.mp4") == "https://cdn.test/videos/a.mp4"

    def test_trailing_slash_on_base_is_not_doubled(self):
        assert public_object_url("https://cdn.test/videos/", "a.mp4") == "https://cdn.test/videos/a.mp4"


class TestParseCategories:
    def test_keeps_order_and_duplicates(self):
        assert parse_categories('["b", "a", "b"]') == ["b", "a", "b"]

    def test_empty_array(self):
        assert parse_categories("[]") == []

    @pytest.mark.parametrize("raw", ["not json", '{"a": 1}', "[1, 2]", '"a"', None])
    def test_malformed_encoding_raises_parse_failure(self, raw):
        with pytest.raises(ParseFailure):
            parse_categories(raw, video_id=9)


class TestDecodeVideoRow:
    def test_maps_fields_and_derives_url(self):
        row = make_row(7, ["Food"], likes=4, file_name="abc.mp4")

        video = decode_video_row(row, BASE_URL)

        assert video.id == 7
        assert video.file_name == "abc.mp4"
        assert video.video_url == f"{BASE_URL}/abc.mp4"
        assert video.categories == ["Food"]
        assert video.external_link == "https://example.com/7"
        assert video.likes == 4

    def test_missing_likes_defaults_to_zero(self):
        video = decode_video_row(make_row(1, [], likes=None), BASE_URL)
        assert video.likes == 0


class TestCatalogLoader:
    def test_every_loaded_video_url_is_base_plus_file_name(self):
        store = FakeVideoStore([make_row(i, ["x"], file_name=f"f{i}.mp4") for i in range(1, 6)])

        videos = CatalogLoader(store, public_base_url=BASE_URL).load()

        assert len(videos) == 5
        for v in videos:
            assert v.video_url == public_object_url(BASE_URL, v.file_name)

    def test_one_malformed_row_fails_the_whole_load(self):
        store = FakeVideoStore([make_row(1, ["a"]), make_row(2, "[broken"), make_row(3, ["c"])])

        with pytest.raises(ParseFailure) as exc:
            CatalogLoader(store, public_base_url=BASE_URL).load()

        assert exc.value.video_id == 2

    def test_store_error_becomes_fetch_failure(self):
        store = FakeVideoStore()
        store.list_error = OperationalError("SELECT", {}, Exception("unreachable"))

        with pytest.raises(FetchFailure):
            CatalogLoader(store, public_base_url=BASE_URL).load()

    def test_load_does_not_write(self):
        store = FakeVideoStore([make_row(1, ["a"])])
        CatalogLoader(store, public_base_url=BASE_URL).load()
        assert store.writes == []


class TestCollectCategories:
    def test_unique_in_first_seen_order(self):
        videos = [make_video(1, ["b", "a"]), make_video(2, ["a", "c", "b"]), make_video(3, [])]
        assert collect_categories(videos) == ["b", "a", "c"]

    def test_empty_catalog(self):
        assert collect_categories([]) == []
