from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.time import utcnow
from app.models.base import Base


class ContentStatus(str, Enum):
    NEW = "new"
    UPCOMING = "upcoming"
    LIVE = "live"
    PAST = "past"
    MISSING = "missing"


class Channel(Base):
    __tablename__ = "channels"

    id: Mapped[int] = mapped_column(primary_key=True)
    yt_channel_link: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    yt_videos_link: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    bb_space_link: Mapped[int | None] = mapped_column(Integer, unique=True, nullable=True)
    bb_room_link: Mapped[int | None] = mapped_column(Integer, unique=True, nullable=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(String(500), nullable=True)
    published_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=ContentStatus.NEW.value)

    # Social links
    twitter_link: Mapped[str | None] = mapped_column(String(255), nullable=True)
    facebook_link: Mapped[str | None] = mapped_column(String(255), nullable=True)
    twitch_link: Mapped[str | None] = mapped_column(String(255), nullable=True)
    instagram_link: Mapped[str | None] = mapped_column(String(255), nullable=True)

    crawled_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    videos: Mapped[list["Video"]] = relationship("Video", back_populates="channel")
