"""Initial schema for HACCP Journal

Revision ID: 20260101_000000
Revises: None
Create Date: 2026-01-01 00:00:00.000000

This is the initial migration that creates all tables of the HACCP Journal
service:
- Accounts and business profiles with their daily equipment temperature logs
- Establishments and personnel (health book validity)
- Temperature diary devices and readings
- Incoming controls, cleaning templates and cleaning logs
- Food items and the food diary

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260101_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("manager_name", sa.String(255), nullable=False),
        sa.Column("profile_image_url", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_email", "email", unique=True),
    )

    # Create businesses table
    op.create_table(
        "businesses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(100), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("refrigerator_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("freezer_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("hot_display_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("cold_display_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("other_equipment", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_businesses_user_id", "user_id"),
    )

    # Create temperature_logs table
    op.create_table(
        "temperature_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("business_id", sa.Integer(), sa.ForeignKey("businesses.id"), nullable=False),
        sa.Column("equipment_type", sa.String(20), nullable=False),
        sa.Column("equipment_number", sa.Integer(), nullable=False),
        sa.Column("temperature", sa.Float(), nullable=False),
        sa.Column("log_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "business_id", "equipment_type", "equipment_number", "log_date", name="uq_temperature_logs_item_day"
        ),
        sa.Index("ix_temperature_logs_business_id", "business_id"),
        sa.Index("ix_temperature_logs_log_date", "log_date"),
    )

    # Create establishments table
    op.create_table(
        "establishments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("establishment_type", sa.String(100), nullable=False),
        sa.Column("employee_count", sa.Integer(), nullable=False),
        sa.Column("manager_name", sa.String(255), nullable=False),
        sa.Column("manager_phone", sa.String(50), nullable=False),
        sa.Column("manager_email", sa.String(255), nullable=False),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("eik", sa.String(13), nullable=False),
        sa.Column("eik_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("eik_verification_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("registration_address", sa.String(500), nullable=False),
        sa.Column("contact_email", sa.String(255), nullable=False),
        sa.Column("vat_registered", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("vat_number", sa.String(20), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_establishments_user_id", "user_id"),
    )

    # Create personnel table
    op.create_table(
        "personnel",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("establishment_id", sa.Integer(), sa.ForeignKey("establishments.id"), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("egn", sa.String(20), nullable=False),
        sa.Column("position", sa.String(255), nullable=False),
        sa.Column("health_book_image_url", sa.String(), nullable=True),
        sa.Column("photo_url", sa.String(), nullable=True),
        sa.Column("health_book_number", sa.String(100), nullable=False),
        sa.Column("health_book_validity", sa.Date(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_personnel_establishment_id", "establishment_id"),
        sa.Index("ix_personnel_health_book_validity", "health_book_validity"),
    )

    # Create diary_devices table
    op.create_table(
        "diary_devices",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("establishment_id", sa.Integer(), sa.ForeignKey("establishments.id"), nullable=True),
        sa.Column("device_type", sa.String(50), nullable=False),
        sa.Column("device_name", sa.String(255), nullable=False),
        sa.Column("min_temp", sa.Float(), nullable=False),
        sa.Column("max_temp", sa.Float(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_diary_devices_user_id", "user_id"),
        sa.Index("ix_diary_devices_establishment_id", "establishment_id"),
    )

    # Create temperature_readings table
    op.create_table(
        "temperature_readings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("device_id", sa.Integer(), sa.ForeignKey("diary_devices.id"), nullable=False),
        sa.Column("reading_date", sa.Date(), nullable=False),
        sa.Column("hour", sa.Integer(), nullable=False),
        sa.Column("temperature", sa.Float(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("device_id", "reading_date", "hour", name="uq_temperature_readings_slot"),
        sa.Index("ix_temperature_readings_device_id", "device_id"),
        sa.Index("ix_temperature_readings_reading_date", "reading_date"),
    )

    # Create incoming_controls table
    op.create_table(
        "incoming_controls",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("establishment_id", sa.Integer(), sa.ForeignKey("establishments.id"), nullable=True),
        sa.Column("control_date", sa.Date(), nullable=False),
        sa.Column("image_url", sa.String(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_incoming_controls_user_id", "user_id"),
        sa.Index("ix_incoming_controls_establishment_id", "establishment_id"),
        sa.Index("ix_incoming_controls_control_date", "control_date"),
    )

    # Create cleaning_templates table
    op.create_table(
        "cleaning_templates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("establishment_id", sa.Integer(), sa.ForeignKey("establishments.id"), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("days_of_week", sa.JSON(), nullable=False),
        sa.Column("cleaning_hours", sa.JSON(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("products", sa.JSON(), nullable=False),
        sa.Column("cleaning_areas", sa.JSON(), nullable=False),
        sa.Column("employee_id", sa.Integer(), sa.ForeignKey("personnel.id"), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_cleaning_templates_user_id", "user_id"),
        sa.Index("ix_cleaning_templates_establishment_id", "establishment_id"),
    )

    # Create cleaning_logs table
    op.create_table(
        "cleaning_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("establishment_id", sa.Integer(), sa.ForeignKey("establishments.id"), nullable=True),
        sa.Column("log_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
        sa.Column("cleaning_areas", sa.JSON(), nullable=False),
        sa.Column("products", sa.JSON(), nullable=False),
        sa.Column("employee_id", sa.Integer(), sa.ForeignKey("personnel.id"), nullable=True),
        sa.Column("employee_name", sa.String(255), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_cleaning_logs_user_id", "user_id"),
        sa.Index("ix_cleaning_logs_establishment_id", "establishment_id"),
        sa.Index("ix_cleaning_logs_log_date", "log_date"),
    )

    # Create food_items table
    op.create_table(
        "food_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("establishment_id", sa.Integer(), sa.ForeignKey("establishments.id"), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("cooking_temperature", sa.Integer(), nullable=True),
        sa.Column("shelf_life_hours", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_food_items_user_id", "user_id"),
        sa.Index("ix_food_items_establishment_id", "establishment_id"),
    )

    # Create food_diary table
    op.create_table(
        "food_diary",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("food_item_id", sa.Integer(), sa.ForeignKey("food_items.id"), nullable=False),
        sa.Column("establishment_id", sa.Integer(), sa.ForeignKey("establishments.id"), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(5), nullable=False),
        sa.Column("quantity", sa.String(100), nullable=True),
        sa.Column("temperature", sa.Integer(), nullable=True),
        sa.Column("shelf_life_hours", sa.Integer(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("food_item_id", "date", "time", name="uq_food_diary_slot"),
        sa.Index("ix_food_diary_user_id", "user_id"),
        sa.Index("ix_food_diary_food_item_id", "food_item_id"),
        sa.Index("ix_food_diary_establishment_id", "establishment_id"),
        sa.Index("ix_food_diary_date", "date"),
    )


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    for table in (
        "food_diary",
        "food_items",
        "cleaning_logs",
        "cleaning_templates",
        "incoming_controls",
        "temperature_readings",
        "diary_devices",
        "personnel",
        "establishments",
        "temperature_logs",
        "businesses",
        "users",
    ):
        op.drop_table(table)
