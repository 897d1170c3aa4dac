"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17

Business hierarchy (business, exam, course, subject, batch, batch_user,
content), users and teacher profiles, permissions, refresh tokens,
system_config and api_audit_log.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_RECORD_STATUS = "'ACTIVE', 'INACTIVE'"


def _id() -> sa.Column:
    return sa.Column("id", sa.Integer(), autoincrement=True, nullable=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _user_audit() -> list[sa.Column]:
    return [
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("updated_by", sa.Integer(), nullable=True),
    ]


def _user_audit_fks() -> list[sa.ForeignKeyConstraint]:
    return [
        sa.ForeignKeyConstraint(["created_by"], ["app_user.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["updated_by"], ["app_user.id"], ondelete="SET NULL"),
    ]


def upgrade() -> None:
    op.create_table(
        "business",
        _id(),
        sa.Column("institute_name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("logo_url", sa.String(), nullable=True),
        sa.Column("contact_number", sa.String(length=32), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("tagline", sa.String(length=255), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("website_url", sa.String(), nullable=True),
        sa.Column("facebook_url", sa.String(), nullable=True),
        sa.Column("instagram_url", sa.String(), nullable=True),
        sa.Column("youtube_url", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_business_slug", "business", ["slug"], unique=True)

    op.create_table(
        "app_user",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("mobile", sa.String(length=32), nullable=True),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("business_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["business_id"], ["business.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("mobile", name="uq_app_user_mobile"),
        sa.CheckConstraint(
            "role IN ('SUPERADMIN', 'ADMIN', 'TEACHER', 'STUDENT', 'USER')",
            name="app_user_role_check",
        ),
        sa.CheckConstraint("status IN ('ACTIVE', 'INACTIVE')", name="app_user_status_check"),
    )
    op.create_index("ix_app_user_email", "app_user", ["email"], unique=True)
    op.create_index("ix_app_user_role", "app_user", ["role"], unique=False)
    op.create_index("ix_app_user_business_id", "app_user", ["business_id"], unique=False)

    op.create_table(
        "exam",
        _id(),
        sa.Column("business_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("code", sa.String(length=64), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        *_user_audit(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["business_id"], ["business.id"], ondelete="CASCADE"),
        *_user_audit_fks(),
        sa.CheckConstraint(f"status IN ({_RECORD_STATUS})", name="exam_status_check"),
    )
    op.create_index("ix_exam_business_id", "exam", ["business_id"], unique=False)
    op.create_index("ix_exam_status", "exam", ["status"], unique=False)

    op.create_table(
        "course",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("duration", sa.String(length=64), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("exam_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["exam_id"], ["exam.id"], ondelete="SET NULL"),
        sa.CheckConstraint(f"status IN ({_RECORD_STATUS})", name="course_status_check"),
    )
    op.create_index("ix_course_exam_id", "course", ["exam_id"], unique=False)

    op.create_table(
        "subject",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["course_id"], ["course.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("course_id", "name", name="uq_subject_course_name"),
        sa.CheckConstraint(f"status IN ({_RECORD_STATUS})", name="subject_status_check"),
    )
    op.create_index("ix_subject_course_id", "subject", ["course_id"], unique=False)

    op.create_table(
        "batch",
        _id(),
        sa.Column("code_name", sa.String(length=64), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["course_id"], ["course.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("code_name", name="uq_batch_code_name"),
    )
    op.create_index("ix_batch_course_id", "batch", ["course_id"], unique=False)

    op.create_table(
        "batch_user",
        _id(),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("batch_id", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["batch_id"], ["batch.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "batch_id", name="uq_batch_user"),
    )
    op.create_index("ix_batch_user_user_id", "batch_user", ["user_id"], unique=False)
    op.create_index("ix_batch_user_batch_id", "batch_user", ["batch_id"], unique=False)

    op.create_table(
        "content",
        _id(),
        sa.Column("batch_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("file_path", sa.String(), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("uploaded_by", sa.Integer(), nullable=True),
        sa.Column("updated_by", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["batch_id"], ["batch.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["uploaded_by"], ["app_user.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["updated_by"], ["app_user.id"], ondelete="SET NULL"),
        sa.CheckConstraint("type IN ('PDF', 'IMAGE')", name="content_type_check"),
        sa.CheckConstraint(f"status IN ({_RECORD_STATUS})", name="content_status_check"),
    )
    op.create_index("ix_content_batch_id", "content", ["batch_id"], unique=False)

    op.create_table(
        "teacher",
        _id(),
        sa.Column("business_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("qualification", sa.String(length=255), nullable=False),
        sa.Column("experience_years", sa.Integer(), nullable=False),
        sa.Column("designation", sa.String(length=255), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("languages", sa.JSON(), nullable=False),
        sa.Column("gender", sa.String(length=16), nullable=True),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        *_user_audit(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["business_id"], ["business.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        *_user_audit_fks(),
        sa.UniqueConstraint("user_id", name="uq_teacher_user_id"),
        sa.CheckConstraint(f"status IN ({_RECORD_STATUS})", name="teacher_status_check"),
        sa.CheckConstraint(
            "gender IN ('MALE', 'FEMALE', 'OTHER')", name="teacher_gender_check"
        ),
    )
    op.create_index("ix_teacher_business_id", "teacher", ["business_id"], unique=False)

    op.create_table(
        "permission",
        _id(),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code", name="uq_permission_code"),
    )

    op.create_table(
        "user_permission",
        _id(),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("permission_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["permission_id"], ["permission.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "permission_id", name="uq_user_permission"),
    )
    op.create_index(
        "ix_user_permission_user_id", "user_permission", ["user_id"], unique=False
    )

    op.create_table(
        "refresh_token",
        _id(),
        sa.Column("token", sa.String(length=128), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_revoked", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_refresh_token_token", "refresh_token", ["token"], unique=True)
    op.create_index("ix_refresh_token_user_id", "refresh_token", ["user_id"], unique=False)

    op.create_table(
        "system_config",
        _id(),
        sa.Column("key", sa.String(length=128), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("key", name="uq_system_config_key"),
    )

    op.create_table(
        "api_audit_log",
        _id(),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("role", sa.String(length=32), nullable=True),
        sa.Column("http_method", sa.String(length=10), nullable=False),
        sa.Column("request_url", sa.Text(), nullable=False),
        sa.Column("request_path", sa.String(), nullable=False),
        sa.Column("query_params", sa.JSON(), nullable=True),
        sa.Column("request_body", sa.JSON(), nullable=True),
        sa.Column("response_status", sa.Integer(), nullable=False),
        sa.Column("response_time_ms", sa.Integer(), nullable=False),
        sa.Column("response_body", sa.JSON(), nullable=True),
        sa.Column("error_code", sa.String(length=64), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("request_id", sa.String(length=64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_api_audit_log_user_id", "api_audit_log", ["user_id"], unique=False)
    op.create_index(
        "ix_api_audit_log_created_at", "api_audit_log", ["created_at"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_api_audit_log_created_at", table_name="api_audit_log")
    op.drop_index("ix_api_audit_log_user_id", table_name="api_audit_log")
    op.drop_table("api_audit_log")
    op.drop_table("system_config")
    op.drop_index("ix_refresh_token_user_id", table_name="refresh_token")
    op.drop_index("ix_refresh_token_token", table_name="refresh_token")
    op.drop_table("refresh_token")
    op.drop_index("ix_user_permission_user_id", table_name="user_permission")
    op.drop_table("user_permission")
    op.drop_table("permission")
    op.drop_index("ix_teacher_business_id", table_name="teacher")
    op.drop_table("teacher")
    op.drop_index("ix_content_batch_id", table_name="content")
    op.drop_table("content")
    op.drop_index("ix_batch_user_batch_id", table_name="batch_user")
    op.drop_index("ix_batch_user_user_id", table_name="batch_user")
    op.drop_table("batch_user")
    op.drop_index("ix_batch_course_id", table_name="batch")
    op.drop_table("batch")
    op.drop_index("ix_subject_course_id", table_name="subject")
    op.drop_table("subject")
    op.drop_index("ix_course_exam_id", table_name="course")
    op.drop_table("course")
    op.drop_index("ix_exam_status", table_name="exam")
    op.drop_index("ix_exam_business_id", table_name="exam")
    op.drop_table("exam")
    op.drop_index("ix_app_user_business_id", table_name="app_user")
    op.drop_index("ix_app_user_role", table_name="app_user")
    op.drop_index("ix_app_user_email", table_name="app_user")
    op.drop_table("app_user")
    op.drop_index("ix_business_slug", table_name="business")
    op.drop_table("business")
