"""Initial schema: channels, videos, comments and the search cache

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "channels",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("yt_channel_link", sa.String(255), nullable=True),
        sa.Column("yt_videos_link", sa.String(255), nullable=True),
        sa.Column("bb_space_link", sa.Integer(), nullable=True),
        sa.Column("bb_room_link", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("thumbnail", sa.String(500), nullable=True),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="new"),
        sa.Column("twitter_link", sa.String(255), nullable=True),
        sa.Column("facebook_link", sa.String(255), nullable=True),
        sa.Column("twitch_link", sa.String(255), nullable=True),
        sa.Column("instagram_link", sa.String(255), nullable=True),
        sa.Column("crawled_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("yt_channel_link"),
        sa.UniqueConstraint("yt_videos_link"),
        sa.UniqueConstraint("bb_space_link"),
        sa.UniqueConstraint("bb_room_link"),
    )

    op.create_table(
        "videos",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("channel_id", sa.Integer(), nullable=False),
        sa.Column("yt_video_key", sa.String(32), nullable=True),
        sa.Column("bb_video_id", sa.String(32), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("thumbnail", sa.String(500), nullable=True),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        sa.Column("duration_secs", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="new"),
        sa.Column("is_uploaded", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_captioned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["channel_id"], ["channels.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_videos_channel_id"), "videos", ["channel_id"])
    op.create_index(op.f("ix_videos_yt_video_key"), "videos", ["yt_video_key"], unique=True)
    op.create_index(op.f("ix_videos_bb_video_id"), "videos", ["bb_video_id"], unique=True)
    op.create_index(op.f("ix_videos_published_at"), "videos", ["published_at"])
    op.create_index(op.f("ix_videos_status"), "videos", ["status"])

    op.create_table(
        "video_comments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("video_id", sa.Integer(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["video_id"], ["videos.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_video_comments_video_id"), "video_comments", ["video_id"])

    op.create_table(
        "cache_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("key", sa.String(255), nullable=False),
        sa.Column("value_json", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_cache_entries_key"), "cache_entries", ["key"], unique=True)
    op.create_index(op.f("ix_cache_entries_expires_at"), "cache_entries", ["expires_at"])


def downgrade() -> None:
    op.drop_index(op.f("ix_cache_entries_expires_at"), table_name="cache_entries")
    op.drop_index(op.f("ix_cache_entries_key"), table_name="cache_entries")
    op.drop_table("cache_entries")
    op.drop_index(op.f("ix_video_comments_video_id"), table_name="video_comments")
    op.drop_table("video_comments")
    op.drop_index(op.f("ix_videos_status"), table_name="videos")
    op.drop_index(op.f("ix_videos_published_at"), table_name="videos")
    op.drop_index(op.f("ix_videos_bb_video_id"), table_name="videos")
    op.drop_index(op.f("ix_videos_yt_video_key"), table_name="videos")
    op.drop_index(op.f("ix_videos_channel_id"), table_name="videos")
    op.drop_table("videos")
    op.drop_table("channels")
