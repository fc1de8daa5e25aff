"""Video catalogue queries: filtered listing and single-record lookups."""

from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Query, Session, joinedload

from app.core.errors import InvalidInputError, NotFoundError
from app.core.time import end_of_day, start_of_day
from app.models.video import Video

# Columns a client may sort the video list by
SORTABLE_COLUMNS = {
    "id": Video.id,
    "title": Video.title,
    "published_at": Video.published_at,
    "duration_secs": Video.duration_secs,
    "status": Video.status,
    "created_at": Video.created_at,
    "updated_at": Video.updated_at,
}

SORT_ORDERS = ("asc", "desc")


@dataclass
class VideoFilters:
    limit: int = 25
    offset: int = 0
    sort: str = "published_at"
    order: str = "desc"
    title: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str | None = None
    is_uploaded: bool | None = None
    is_captioned: bool | None = None


def _with_channel(db: Session) -> Query:
    return db.query(Video).options(joinedload(Video.channel))


def _apply_filters(query: Query, filters: VideoFilters) -> Query:
    if filters.title:
        query = query.filter(Video.title.icontains(filters.title, autoescape=True))
    if filters.start_date:
        query = query.filter(Video.published_at >= start_of_day(filters.start_date))
    if filters.end_date:
        query = query.filter(Video.published_at <= end_of_day(filters.end_date))
    if filters.status:
        query = query.filter(Video.status == filters.status)
    if filters.is_uploaded is not None:
        query = query.filter(Video.is_uploaded == filters.is_uploaded)
    if filters.is_captioned is not None:
        query = query.filter(Video.is_captioned == filters.is_captioned)
    return query


def list_videos(db: Session, filters: VideoFilters) -> tuple[list[Video], int]:
    """
    Return one page of videos matching ``filters`` and the total match count.

    Raises InvalidInputError for an unknown sort column or order.
    """
    column = SORTABLE_COLUMNS.get(filters.sort)
    if column is None:
        raise InvalidInputError(
            f"Cannot sort by {filters.sort!r}; expected one of {', '.join(SORTABLE_COLUMNS)}"
        )
    order = filters.order.lower()
    if order not in SORT_ORDERS:
        raise InvalidInputError("order must be 'asc' or 'desc'")

    total = _apply_filters(db.query(Video), filters).count()

    direction = column.asc() if order == "asc" else column.desc()
    rows = (
        _apply_filters(_with_channel(db), filters)
        .order_by(direction, Video.id.desc() if order == "desc" else Video.id.asc())
        .offset(filters.offset)
        .limit(filters.limit)
        .all()
    )
    return rows, total


def get_video(db: Session, video_id: int) -> Video:
    video = _with_channel(db).filter(Video.id == video_id).first()
    if video is None:
        raise NotFoundError("Video not found")
    return video


def get_video_by_youtube_key(db: Session, yt_video_key: str) -> Video:
    video = _with_channel(db).filter(Video.yt_video_key == yt_video_key).first()
    if video is None:
        raise NotFoundError("Video not found")
    return video


def get_video_by_bilibili_id(db: Session, bb_video_id: str) -> Video:
    video = _with_channel(db).filter(Video.bb_video_id == bb_video_id).first()
    if video is None:
        raise NotFoundError("Video not found")
    return video
