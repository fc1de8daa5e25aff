"""Comment search: cached aggregates over video comments plus page assembly.

The total count and the ordered list of matching video ids are cached
independently (``count:`` and ``vids:`` keys) with the same TTL, so a page
request only touches the comments table on a cache miss. Concurrent
identical misses each recompute and overwrite the entry.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy import distinct, func
from sqlalchemy.orm import Session, joinedload, selectinload
from starlette.concurrency import run_in_threadpool

from app.core.config import get_settings
from app.core.validation import sanitize_query
from app.models.video import Video
from app.models.video_comment import VideoComment
from app.schemas.search import CommentSearchResponse
from app.schemas.video import VideoWithComments
from app.services.cache import get_from_cache, save_to_cache

settings = get_settings()
logger = logging.getLogger(__name__)

T = TypeVar("T")


def count_cache_key(query: str, channel_id: int | None) -> str:
    return f"count:{query}_{channel_id}"


def video_ids_cache_key(query: str, channel_id: int | None) -> str:
    return f"vids:{query}_{channel_id}"


def _message_matches(query: str):
    return VideoComment.message.icontains(query, autoescape=True)


def get_total_count(db: Session, query: str, channel_id: int | None = None) -> int:
    """Number of distinct videos with a comment containing ``query``."""
    key = count_cache_key(query, channel_id)
    cache = get_from_cache(db, key)
    if cache.cached:
        return cache.data

    stmt = (
        db.query(func.count(distinct(VideoComment.video_id)))
        .select_from(VideoComment)
        .filter(_message_matches(query))
    )
    if channel_id is not None:
        stmt = stmt.join(Video, VideoComment.video_id == Video.id).filter(
            Video.channel_id == channel_id
        )
    count = stmt.scalar() or 0

    logger.info("Computed comment count for %r (channel=%s): %d", query, channel_id, count)
    save_to_cache(db, key, count, settings.comment_search_cache_seconds)
    return count


def get_video_ids(db: Session, query: str, channel_id: int | None = None) -> list[int]:
    """Ids of videos with a comment containing ``query``, newest first."""
    key = video_ids_cache_key(query, channel_id)
    cache = get_from_cache(db, key)
    if cache.cached:
        return cache.data

    stmt = (
        db.query(Video.id)
        .join(VideoComment, VideoComment.video_id == Video.id)
        .filter(_message_matches(query))
    )
    if channel_id is not None:
        stmt = stmt.filter(Video.channel_id == channel_id)
    rows = (
        stmt.group_by(Video.id, Video.published_at)
        .order_by(Video.published_at.desc().nulls_last(), Video.id.desc())
        .all()
    )
    video_ids = [row.id for row in rows]

    logger.info(
        "Computed %d matching video ids for %r (channel=%s)", len(video_ids), query, channel_id
    )
    save_to_cache(db, key, video_ids, settings.comment_search_cache_seconds)
    return video_ids


def paginate_ids(video_ids: list[int], limit: int, offset: int) -> list[int]:
    """Slice one page out of ``video_ids``; out-of-range offsets give an empty page."""
    if limit <= 0 or offset < 0:
        return []
    return video_ids[offset : offset + limit]


def get_videos_by_ids(db: Session, video_ids: list[int]) -> list[VideoWithComments]:
    """
    Load the given videos with their channel and all of their comments.

    Results follow the order of ``video_ids``; ids with no video row are skipped.
    """
    if not video_ids:
        return []

    videos = (
        db.query(Video)
        .filter(Video.id.in_(video_ids))
        .options(selectinload(Video.comments), joinedload(Video.channel, innerjoin=True))
        .all()
    )
    by_id = {video.id: video for video in videos}
    return [VideoWithComments.model_validate(by_id[vid]) for vid in video_ids if vid in by_id]


def _run_with_session(
    session_factory: Callable[[], Session], query_fn: Callable[..., T], *args
) -> T:
    db = session_factory()
    try:
        return query_fn(db, *args)
    finally:
        db.close()


async def search_comments(
    session_factory: Callable[[], Session],
    raw_query: str | None,
    channel_id: int | None = None,
    limit: int = 25,
    offset: int = 0,
) -> CommentSearchResponse:
    """
    Search video comments and return one page of matching videos.

    The count lookup runs alongside the id-list lookup and the page fetch;
    each lookup gets its own session since sessions are not thread-safe.
    """
    query = sanitize_query(raw_query)

    total_task = asyncio.ensure_future(
        run_in_threadpool(_run_with_session, session_factory, get_total_count, query, channel_id)
    )
    try:
        video_ids = await run_in_threadpool(
            _run_with_session, session_factory, get_video_ids, query, channel_id
        )
        page_ids = paginate_ids(video_ids, limit, offset)
        videos = await run_in_threadpool(
            _run_with_session, session_factory, get_videos_by_ids, page_ids
        )
        total = await total_task
    finally:
        if not total_task.done():
            total_task.cancel()
        elif not total_task.cancelled():
            # Retrieve a failed count so it is not reported as unhandled
            total_task.exception()

    return CommentSearchResponse(total=total, query=query, comments=videos)
