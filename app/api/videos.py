from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.config import get_settings
from app.core.rate_limit import limiter
from app.core.validation import parse_flag
from app.schemas.video import VideoListResponse, VideoOut
from app.services.video import (
    VideoFilters,
    get_video,
    get_video_by_bilibili_id,
    get_video_by_youtube_key,
    list_videos,
)

router = APIRouter()
settings = get_settings()


@router.get("", response_model=VideoListResponse)
@limiter.limit(lambda: f"{settings.list_rate_limit_per_minute}/minute")
def get_videos(
    request: Request,
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
    sort: str = Query("published_at"),
    order: str = Query("desc"),
    title: str | None = Query(None, max_length=200),
    start_date: date | None = None,
    end_date: date | None = None,
    status: str | None = Query(None, max_length=20),
    is_uploaded: str | None = None,
    is_captioned: str | None = None,
    db: Session = Depends(get_db),
) -> VideoListResponse:
    filters = VideoFilters(
        limit=limit,
        offset=offset,
        sort=sort,
        order=order,
        title=title,
        start_date=start_date,
        end_date=end_date,
        status=status,
        is_uploaded=parse_flag(is_uploaded),
        is_captioned=parse_flag(is_captioned),
    )
    rows, total = list_videos(db, filters)
    return VideoListResponse(
        count=len(rows),
        total=total,
        videos=[VideoOut.model_validate(row) for row in rows],
    )


@router.get("/youtube/{yt_video_key}", response_model=VideoOut)
def get_video_by_youtube(yt_video_key: str, db: Session = Depends(get_db)) -> VideoOut:
    return get_video_by_youtube_key(db, yt_video_key)


@router.get("/bilibili/{bb_video_id}", response_model=VideoOut)
def get_video_by_bilibili(bb_video_id: str, db: Session = Depends(get_db)) -> VideoOut:
    return get_video_by_bilibili_id(db, bb_video_id)


@router.get("/{video_id}", response_model=VideoOut)
def get_video_by_id(video_id: int, db: Session = Depends(get_db)) -> VideoOut:
    return get_video(db, video_id)
