"""Pytest configuration and fixtures for the video search API tests."""

from collections.abc import Callable, Generator
from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.api.deps import get_db, get_session_factory
from app.main import app
from app.models.base import Base
from app.models.channel import Channel, ContentStatus
from app.models.video import Video
from app.models.video_comment import VideoComment


@pytest.fixture(scope="function")
def engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """A throwaway SQLite file per test.

    A file (rather than ``:memory:``) lets the search endpoint's concurrent
    lookups each open their own connection.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine: Engine) -> Callable[[], Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db(session_factory: Callable[[], Session]) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(
    db: Session, session_factory: Callable[[], Session]
) -> Generator[TestClient, None, None]:
    """Create a test client with database overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close the session here, let the db fixture handle it

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def channels(db: Session) -> dict[str, Channel]:
    """Two channels: one YouTube-first, one Bilibili-first."""
    sora = Channel(
        id=1,
        name="Sora Ch.",
        yt_channel_link="UCp6993wxpyDPHUpavwDFqgg",
        status=ContentStatus.PAST.value,
    )
    miko = Channel(id=2, name="Miko Ch.", bb_space_link=389858754)
    db.add_all([sora, miko])
    db.commit()
    return {"sora": sora, "miko": miko}


def _video(video_id: int, channel_id: int, title: str, published: str, **kwargs) -> Video:
    return Video(
        id=video_id,
        channel_id=channel_id,
        title=title,
        published_at=datetime.fromisoformat(published),
        **kwargs,
    )


@pytest.fixture
def videos(db: Session, channels: dict[str, Channel]) -> dict[int, Video]:
    """
    Videos with comments. For the query "foo":

    - channel 1 matches videos 5, 3, 9 (newest first)
    - channel 2 matches video 7
    - video 2 has no matching comment
    """
    rows = [
        _video(
            5,
            1,
            "Morning Stream",
            "2024-03-05T10:00:00",
            yt_video_key="yt-five",
            status=ContentStatus.PAST.value,
            is_uploaded=True,
            is_captioned=True,
        ),
        _video(
            3,
            1,
            "Karaoke Night",
            "2024-03-03T20:00:00",
            yt_video_key="yt-three",
            status=ContentStatus.PAST.value,
            is_uploaded=True,
        ),
        _video(9, 1, "Minecraft Build", "2024-03-01T18:00:00", status=ContentStatus.PAST.value),
        _video(
            7,
            2,
            "Bilibili Chat",
            "2024-03-04T12:00:00",
            bb_video_id="BV1xx411c7mD",
            status=ContentStatus.LIVE.value,
        ),
        _video(2, 1, "Short Clip", "2024-03-02T09:00:00", status=ContentStatus.UPCOMING.value),
    ]
    db.add_all(rows)
    db.add_all(
        [
            VideoComment(id=1, video_id=5, message="00:12 Foo bar"),
            VideoComment(id=2, video_id=5, message="nothing to see"),
            VideoComment(id=3, video_id=3, message="FOO!"),
            VideoComment(id=4, video_id=9, message="xfoox"),
            VideoComment(id=5, video_id=9, message="1000 views"),
            VideoComment(id=6, video_id=7, message="food time"),
            VideoComment(id=7, video_id=2, message="100% agree"),
        ]
    )
    db.commit()
    return {video.id: video for video in rows}
