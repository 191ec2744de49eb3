"""Initial schema

Revision ID: a1c3e5f70001
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "a1c3e5f70001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    ]


def _channel_fk(table: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ["channel_id"],
        ["channels.id"],
        name=f"fk_{table}_channel_id_channels",
        ondelete="CASCADE",
    )


def _index_ids(table: str, channel_scoped: bool = True) -> None:
    op.create_index(f"ix_{table}_id", table, ["id"])
    if channel_scoped:
        op.create_index(f"ix_{table}_channel_id", table, ["channel_id"])


def upgrade() -> None:
    # Identity
    op.create_table(
        "principals",
        *_base_columns(),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=20), nullable=False),
        sa.Column("password_hash", sa.String(length=128), nullable=False),
        sa.Column("image", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("otp", sa.String(length=10), nullable=True),
        sa.Column("otp_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("otp_verified", sa.Boolean(), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_principals"),
        sa.UniqueConstraint("email", name="uq_principals_email"),
        sa.UniqueConstraint("phone_number", name="uq_principals_phone_number"),
    )
    _index_ids("principals", channel_scoped=False)
    op.create_index("idx_principal_role", "principals", ["role"])

    # Station
    op.create_table(
        "channels",
        *_base_columns(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_channels"),
    )
    _index_ids("channels", channel_scoped=False)

    op.create_table(
        "broadcasters",
        *_base_columns(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("image", sa.JSON(), nullable=False),
        sa.Column("social_links", sa.JSON(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        _channel_fk("broadcasters"),
        sa.PrimaryKeyConstraint("id", name="pk_broadcasters"),
    )
    _index_ids("broadcasters")

    op.create_table(
        "programs",
        *_base_columns(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("image", sa.JSON(), nullable=False),
        sa.Column("description", sa.String(length=100), nullable=False),
        sa.Column("day", sa.String(length=10), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("status", sa.String(length=10), nullable=False),
        _channel_fk("programs"),
        sa.PrimaryKeyConstraint("id", name="pk_programs"),
    )
    _index_ids("programs")
    op.create_index("idx_program_channel_day", "programs", ["channel_id", "day"])

    op.create_table(
        "static_infos",
        *_base_columns(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("about_us", sa.Text(), nullable=False),
        sa.Column("frequency", sa.String(length=50), nullable=False),
        sa.Column("frequency_image", sa.JSON(), nullable=False),
        sa.Column("social_media_links", sa.JSON(), nullable=False),
        sa.Column("download_app", sa.JSON(), nullable=False),
        sa.Column("meta_tags", sa.Text(), nullable=False),
        sa.Column("meta_description", sa.Text(), nullable=False),
        sa.Column("fav_icon", sa.JSON(), nullable=False),
        sa.Column("phone_number", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=300), nullable=False),
        _channel_fk("static_infos"),
        sa.PrimaryKeyConstraint("id", name="pk_static_infos"),
        sa.UniqueConstraint("channel_id", name="uq_static_infos_channel_id"),
    )
    _index_ids("static_infos", channel_scoped=False)

    # Content
    op.create_table(
        "news",
        *_base_columns(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=150), nullable=False),
        sa.Column("image", sa.JSON(), nullable=False),
        sa.Column("description", sa.String(length=300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "published_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        _channel_fk("news"),
        sa.PrimaryKeyConstraint("id", name="pk_news"),
    )
    _index_ids("news")

    op.create_table(
        "events",
        *_base_columns(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("address", sa.String(length=300), nullable=False),
        sa.Column("image", sa.JSON(), nullable=False),
        _channel_fk("events"),
        sa.PrimaryKeyConstraint("id", name="pk_events"),
    )
    _index_ids("events")
    op.create_index("idx_event_start", "events", ["start_date"])

    op.create_table(
        "interviews",
        *_base_columns(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("program_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("content", sa.JSON(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        _channel_fk("interviews"),
        sa.ForeignKeyConstraint(
            ["program_id"],
            ["programs.id"],
            name="fk_interviews_program_id_programs",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_interviews"),
    )
    _index_ids("interviews")
    op.create_index("ix_interviews_program_id", "interviews", ["program_id"])

    op.create_table(
        "competitions",
        *_base_columns(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        _channel_fk("competitions"),
        sa.PrimaryKeyConstraint("id", name="pk_competitions"),
    )
    _index_ids("competitions")

    op.create_table(
        "competition_submissions",
        *_base_columns(),
        sa.Column("competition_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(
            ["competition_id"],
            ["competitions.id"],
            name="fk_competition_submissions_competition_id_competitions",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["principals.id"],
            name="fk_competition_submissions_user_id_principals",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_competition_submissions"),
    )
    _index_ids("competition_submissions", channel_scoped=False)
    op.create_index(
        "ix_competition_submissions_competition_id", "competition_submissions", ["competition_id"]
    )
    op.create_index("ix_competition_submissions_user_id", "competition_submissions", ["user_id"])

    # Inbound
    op.create_table(
        "advertisements",
        *_base_columns(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("phone_number", sa.String(length=20), nullable=False),
        sa.Column("message", sa.String(length=500), nullable=False),
        _channel_fk("advertisements"),
        sa.PrimaryKeyConstraint("id", name="pk_advertisements"),
    )
    _index_ids("advertisements")

    op.create_table(
        "interview_applicants",
        *_base_columns(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=20), nullable=False),
        sa.Column("topic", sa.String(length=100), nullable=False),
        sa.Column("job", sa.String(length=100), nullable=False),
        sa.Column("social_links", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=10), nullable=False),
        _channel_fk("interview_applicants"),
        sa.PrimaryKeyConstraint("id", name="pk_interview_applicants"),
    )
    _index_ids("interview_applicants")

    op.create_table(
        "upload_tracks",
        *_base_columns(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("song_name", sa.String(length=200), nullable=False),
        sa.Column("song_file", sa.JSON(), nullable=False),
        sa.Column("genre", postgresql.ARRAY(sa.String(length=30)), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("admin_id", sa.UUID(), nullable=True),
        sa.Column("week_start", sa.DateTime(timezone=True), nullable=False),
        _channel_fk("upload_tracks"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["principals.id"],
            name="fk_upload_tracks_user_id_principals",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["admin_id"],
            ["principals.id"],
            name="fk_upload_tracks_admin_id_principals",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_upload_tracks"),
        sa.UniqueConstraint("user_id", "week_start", name="uq_upload_tracks_user_week"),
    )
    _index_ids("upload_tracks")
    op.create_index("ix_upload_tracks_user_id", "upload_tracks", ["user_id"])
    op.create_index("idx_upload_track_status", "upload_tracks", ["status"])
    op.create_index("idx_upload_track_user_created", "upload_tracks", ["user_id", "created_at"])

    op.create_table(
        "approved_tracks",
        *_base_columns(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("track_id", sa.UUID(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=5), nullable=False),
        _channel_fk("approved_tracks"),
        sa.ForeignKeyConstraint(
            ["track_id"],
            ["upload_tracks.id"],
            name="fk_approved_tracks_track_id_upload_tracks",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_approved_tracks"),
        sa.UniqueConstraint("track_id", name="uq_approved_tracks_track_id"),
    )
    _index_ids("approved_tracks")
    op.create_index("idx_approved_track_slot", "approved_tracks", ["date", "time"])


def downgrade() -> None:
    op.drop_table("approved_tracks")
    op.drop_table("upload_tracks")
    op.drop_table("interview_applicants")
    op.drop_table("advertisements")
    op.drop_table("competition_submissions")
    op.drop_table("competitions")
    op.drop_table("interviews")
    op.drop_table("events")
    op.drop_table("news")
    op.drop_table("static_infos")
    op.drop_table("programs")
    op.drop_table("broadcasters")
    op.drop_table("channels")
    op.drop_table("principals")
