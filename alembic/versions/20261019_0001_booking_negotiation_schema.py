"""Booking negotiation schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 10:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


role_enum = sa.Enum("TOURIST", "TUTOR", name="role_enum", native_enum=False)
booking_status_enum = sa.Enum(
    "PENDING",
    "CONFIRMED",
    "DECLINED",
    "RESCHEDULED",
    name="booking_status_enum",
    native_enum=False,
)
tutor_response_status_enum = sa.Enum(
    "CONFIRMED",
    "DECLINED",
    "RESCHEDULED",
    name="tutor_response_status_enum",
    native_enum=False,
)
notification_type_enum = sa.Enum(
    "BOOKING_PENDING",
    "BOOKING_CONFIRMED",
    "BOOKING_DECLINED",
    "BOOKING_RESCHEDULED",
    name="notification_type_enum",
    native_enum=False,
)


def _id_col() -> sa.Column:
    return sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False)


def _created_col() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def _updated_col() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False)


def _created_index(table_name: str) -> None:
    op.create_index(f"ix_{table_name}_created_at", table_name, ["created_at"], unique=False)


def upgrade() -> None:
    op.create_table(
        "users",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("country", sa.String(length=64), nullable=True),
        sa.Column("role", role_enum, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"], unique=False)
    _created_index("users")

    op.create_table(
        "courses",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("tutor_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["tutor_id"], ["users.id"], name="fk_courses_tutor_id_users", ondelete="CASCADE"),
    )
    op.create_index("ix_courses_tutor_id", "courses", ["tutor_id"], unique=False)
    _created_index("courses")

    op.create_table(
        "bookings",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("course_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("tourist_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("status", booking_status_enum, nullable=False),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], name="fk_bookings_course_id_courses", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tourist_id"], ["users.id"], name="fk_bookings_tourist_id_users", ondelete="CASCADE"),
    )
    op.create_index("ix_bookings_course_id", "bookings", ["course_id"], unique=False)
    op.create_index("ix_bookings_tourist_id", "bookings", ["tourist_id"], unique=False)
    op.create_index("ix_bookings_status", "bookings", ["status"], unique=False)
    _created_index("bookings")
    op.create_index(
        "uq_bookings_pending_tourist_course",
        "bookings",
        ["tourist_id", "course_id"],
        unique=True,
        postgresql_where=sa.text("status = 'PENDING'"),
        sqlite_where=sa.text("status = 'PENDING'"),
    )

    op.create_table(
        "booking_options",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("booking_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=80), nullable=False),
        sa.ForeignKeyConstraint(
            ["booking_id"],
            ["bookings.id"],
            name="fk_booking_options_booking_id_bookings",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_booking_options_booking_id", "booking_options", ["booking_id"], unique=False)
    _created_index("booking_options")

    op.create_table(
        "tutor_responses",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("booking_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("status", tutor_response_status_enum, nullable=False),
        sa.Column("selected_option_id", sa.Uuid(as_uuid=True), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["booking_id"],
            ["bookings.id"],
            name="fk_tutor_responses_booking_id_bookings",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["selected_option_id"],
            ["booking_options.id"],
            name="fk_tutor_responses_selected_option_id_booking_options",
            ondelete="SET NULL",
        ),
        sa.UniqueConstraint("booking_id", name="uq_tutor_responses_booking_id"),
    )
    _created_index("tutor_responses")

    op.create_table(
        "notifications",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("user_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("booking_id", sa.Uuid(as_uuid=True), nullable=True),
        sa.Column("type", notification_type_enum, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_notifications_user_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["booking_id"],
            ["bookings.id"],
            name="fk_notifications_booking_id_bookings",
            ondelete="SET NULL",
        ),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"], unique=False)
    op.create_index("ix_notifications_booking_id", "notifications", ["booking_id"], unique=False)
    op.create_index("ix_notifications_is_read", "notifications", ["is_read"], unique=False)
    _created_index("notifications")


def downgrade() -> None:
    op.drop_index("ix_notifications_created_at", table_name="notifications")
    op.drop_index("ix_notifications_is_read", table_name="notifications")
    op.drop_index("ix_notifications_booking_id", table_name="notifications")
    op.drop_index("ix_notifications_user_id", table_name="notifications")
    op.drop_table("notifications")

    op.drop_index("ix_tutor_responses_created_at", table_name="tutor_responses")
    op.drop_table("tutor_responses")

    op.drop_index("ix_booking_options_created_at", table_name="booking_options")
    op.drop_index("ix_booking_options_booking_id", table_name="booking_options")
    op.drop_table("booking_options")

    op.drop_index("uq_bookings_pending_tourist_course", table_name="bookings")
    op.drop_index("ix_bookings_created_at", table_name="bookings")
    op.drop_index("ix_bookings_status", table_name="bookings")
    op.drop_index("ix_bookings_tourist_id", table_name="bookings")
    op.drop_index("ix_bookings_course_id", table_name="bookings")
    op.drop_table("bookings")

    op.drop_index("ix_courses_created_at", table_name="courses")
    op.drop_index("ix_courses_tutor_id", table_name="courses")
    op.drop_table("courses")

    op.drop_index("ix_users_created_at", table_name="users")
    op.drop_index("ix_users_role", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
