from app.models.base import Base
from app.models.cache_entry import CacheEntry
from app.models.channel import Channel, ContentStatus
from app.models.video import Video
from app.models.video_comment import VideoComment

__all__ = [
    "Base",
    "CacheEntry",
    "Channel",
    "ContentStatus",
    "Video",
    "VideoComment",
]
