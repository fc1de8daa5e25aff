from pydantic import BaseModel

from app.schemas.video import VideoWithComments


class CommentSearchResponse(BaseModel):
    total: int
    query: str
    comments: list[VideoWithComments]
