from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.schemas.channel import ChannelOut


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    message: str


class VideoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    channel_id: int
    yt_video_key: str | None = None
    bb_video_id: str | None = None
    title: str
    thumbnail: str | None = None
    published_at: datetime | None = None
    duration_secs: int | None = None
    status: str
    is_uploaded: bool
    is_captioned: bool
    channel: ChannelOut


class VideoWithComments(VideoOut):
    """A video along with the comments that matched a search."""

    comments: list[CommentOut] = []


class VideoListResponse(BaseModel):
    count: int
    total: int
    videos: list[VideoOut]
