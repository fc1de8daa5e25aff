from app.schemas.channel import ChannelOut
from app.schemas.common import CacheClearResponse
from app.schemas.search import CommentSearchResponse
from app.schemas.video import CommentOut, VideoListResponse, VideoOut, VideoWithComments

__all__ = [
    "CacheClearResponse",
    "ChannelOut",
    "CommentOut",
    "CommentSearchResponse",
    "VideoListResponse",
    "VideoOut",
    "VideoWithComments",
]
