"""Tests for the comment search service (app/services/comment_search.py)."""

import asyncio
import gc
import time
from collections.abc import Callable
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.orm import Session

from app.core.errors import InvalidInputError
from app.models.cache_entry import CacheEntry
from app.models.video_comment import VideoComment
from app.services.cache import get_from_cache, save_to_cache
from app.services.comment_search import (
    count_cache_key,
    get_total_count,
    get_video_ids,
    get_videos_by_ids,
    paginate_ids,
    search_comments,
    video_ids_cache_key,
)


class TestCacheKeys:
    def test_namespaces(self):
        assert count_cache_key("foo", None) == "count:foo_None"
        assert video_ids_cache_key("foo", 3) == "vids:foo_3"


class TestPaginateIds:
    def test_example_page(self):
        assert paginate_ids([5, 3, 9], limit=2, offset=1) == [3, 9]

    @pytest.mark.parametrize(
        ("limit", "offset", "expected"),
        [
            (2, 0, [5, 3]),
            (10, 0, [5, 3, 9]),
            (1, 2, [9]),
            (5, 3, []),
            (5, 10, []),
            (0, 0, []),
            (2, -1, []),
        ],
    )
    def test_page_bounds(self, limit, offset, expected):
        assert paginate_ids([5, 3, 9], limit=limit, offset=offset) == expected

    def test_page_length_matches_formula(self):
        ids = list(range(7))
        for limit in range(1, 9):
            for offset in range(0, 10):
                page = paginate_ids(ids, limit, offset)
                assert len(page) == max(0, min(limit, len(ids) - offset))
                assert page == ids[offset : offset + len(page)]


class TestAggregates:
    def test_total_count_all_channels(self, db: Session, videos):
        assert get_total_count(db, "foo") == 4

    def test_total_count_is_case_insensitive(self, db: Session, videos):
        assert get_total_count(db, "FOO") == get_total_count(db, "foo")

    def test_total_count_by_channel(self, db: Session, videos):
        assert get_total_count(db, "foo", channel_id=1) == 3
        assert get_total_count(db, "foo", channel_id=2) == 1

    def test_total_count_counts_videos_not_comments(self, db: Session, videos):
        db.add(VideoComment(video_id=5, message="foo again"))
        db.commit()
        assert get_total_count(db, "foo", channel_id=1) == 3

    def test_video_ids_ordered_newest_first(self, db: Session, videos):
        assert get_video_ids(db, "foo") == [5, 7, 3, 9]
        assert get_video_ids(db, "foo", channel_id=1) == [5, 3, 9]

    def test_no_matches(self, db: Session, videos):
        assert get_total_count(db, "zzz") == 0
        assert get_video_ids(db, "zzz") == []

    def test_percent_is_matched_literally(self, db: Session, videos):
        assert get_video_ids(db, "100%") == [2]

    def test_results_are_cached(self, db: Session, videos):
        get_total_count(db, "foo")
        get_video_ids(db, "foo")

        assert get_from_cache(db, "count:foo_None").data == 4
        assert get_from_cache(db, "vids:foo_None").data == [5, 7, 3, 9]

    def test_cached_values_are_served(self, db: Session, videos):
        save_to_cache(db, "count:foo_None", 42, 60)
        save_to_cache(db, "vids:foo_None", [9], 60)

        assert get_total_count(db, "foo") == 42
        assert get_video_ids(db, "foo") == [9]


class TestGetVideosByIds:
    def test_follows_given_order(self, db: Session, videos):
        result = get_videos_by_ids(db, [9, 5])
        assert [video.id for video in result] == [9, 5]

    def test_includes_every_comment(self, db: Session, videos):
        (video,) = get_videos_by_ids(db, [5])
        assert [comment.message for comment in video.comments] == [
            "00:12 Foo bar",
            "nothing to see",
        ]
        assert video.channel.name == "Sora Ch."

    def test_empty_page_skips_query(self, db: Session):
        assert get_videos_by_ids(db, []) == []

    def test_cached_ids_kept_even_without_a_matching_comment(self, db: Session, videos):
        result = get_videos_by_ids(db, [5, 2])
        assert [video.id for video in result] == [5, 2]

    def test_missing_rows_are_skipped(self, db: Session, videos):
        result = get_videos_by_ids(db, [5, 404])
        assert [video.id for video in result] == [5]


class TestSearchComments:
    def test_example_page(self, session_factory: Callable[[], Session], videos):
        result = asyncio.run(search_comments(session_factory, "foo", 1, limit=2, offset=1))

        assert result.total == 3
        assert result.query == "foo"
        assert [video.id for video in result.comments] == [3, 9]

    def test_query_is_sanitized(self, session_factory: Callable[[], Session], videos):
        result = asyncio.run(search_comments(session_factory, "  ｆｏｏ ", None))

        assert result.query == "foo"
        assert result.total == 4

    def test_offset_past_end(self, session_factory: Callable[[], Session], videos):
        result = asyncio.run(search_comments(session_factory, "foo", None, limit=10, offset=50))

        assert result.total == 4
        assert result.comments == []

    def test_blank_query_rejected_before_any_query(self, session_factory, db: Session):
        with pytest.raises(InvalidInputError):
            asyncio.run(search_comments(session_factory, "   ", None))
        assert db.query(CacheEntry).count() == 0

    def test_second_search_reads_from_cache(
        self, session_factory: Callable[[], Session], db: Session, videos
    ):
        first = asyncio.run(search_comments(session_factory, "foo", None))
        db.add(VideoComment(video_id=2, message="foo late arrival"))
        db.commit()
        second = asyncio.run(search_comments(session_factory, "foo", None))

        assert first.total == second.total == 4
        assert [video.id for video in second.comments] == [5, 7, 3, 9]

    def test_page_size_follows_cached_id_list(
        self, session_factory: Callable[[], Session], db: Session, videos
    ):
        save_to_cache(db, "count:foo_None", 2, 60)
        save_to_cache(db, "vids:foo_None", [5, 2], 60)

        result = asyncio.run(search_comments(session_factory, "foo", None, limit=2))

        assert [video.id for video in result.comments] == [5, 2]
        assert [comment.message for comment in result.comments[1].comments] == ["100% agree"]

    def test_failed_count_is_retrieved_when_id_lookup_fails(self):
        """A count error must not surface as an unhandled task exception."""
        unhandled = []

        def slow_failure(db, query, channel_id):
            time.sleep(0.2)
            raise RuntimeError("id lookup failed")

        async def run():
            asyncio.get_running_loop().set_exception_handler(
                lambda loop, context: unhandled.append(context)
            )
            with (
                patch(
                    "app.services.comment_search.get_total_count",
                    side_effect=RuntimeError("count failed"),
                ),
                patch("app.services.comment_search.get_video_ids", side_effect=slow_failure),
            ):
                with pytest.raises(RuntimeError, match="id lookup failed") as excinfo:
                    await search_comments(MagicMock(), "foo", None)
            del excinfo
            gc.collect()
            await asyncio.sleep(0)

        asyncio.run(run())
        assert unhandled == []
