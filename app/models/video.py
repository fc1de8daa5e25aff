from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.time import utcnow
from app.models.base import Base
from app.models.channel import ContentStatus


class Video(Base):
    __tablename__ = "videos"

    id: Mapped[int] = mapped_column(primary_key=True)
    channel_id: Mapped[int] = mapped_column(ForeignKey("channels.id"), index=True)
    yt_video_key: Mapped[str | None] = mapped_column(
        String(32), unique=True, index=True, nullable=True
    )
    bb_video_id: Mapped[str | None] = mapped_column(
        String(32), unique=True, index=True, nullable=True
    )
    title: Mapped[str] = mapped_column(String(255))
    thumbnail: Mapped[str | None] = mapped_column(String(500), nullable=True)
    published_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    duration_secs: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=ContentStatus.NEW.value, index=True)
    is_uploaded: Mapped[bool] = mapped_column(Boolean, default=False)
    is_captioned: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    channel: Mapped["Channel"] = relationship("Channel", back_populates="videos")
    comments: Mapped[list["VideoComment"]] = relationship(
        "VideoComment", back_populates="video", order_by="VideoComment.id"
    )
