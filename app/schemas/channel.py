from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ChannelOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    thumbnail: str | None = None
    published_at: datetime | None = None
    status: str
    yt_channel_link: str | None = None
    bb_space_link: int | None = None
    twitter_link: str | None = None
    twitch_link: str | None = None
