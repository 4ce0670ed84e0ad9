"""initial_booking_schema

Revision ID: 5b2f0c7d91a4
Revises:
Create Date: 2026-10-19 09:12:40.118302

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5b2f0c7d91a4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Business profile and key/value settings
    op.create_table('business_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('business_name', sa.String(length=200), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('address_street', sa.String(length=255), nullable=True),
        sa.Column('address_city', sa.String(length=100), nullable=True),
        sa.Column('address_state', sa.String(length=50), nullable=True),
        sa.Column('address_zip', sa.String(length=20), nullable=True),
        sa.Column('timezone', sa.String(length=50), nullable=False),
        sa.Column('tax_rate', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('updated_by', sa.String(length=100), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table('settings',
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('key')
    )
    op.create_index(op.f('ix_settings_category'), 'settings', ['category'], unique=False)

    # Availability configuration
    op.create_table('blocked_dates',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('reason', sa.String(length=255), nullable=True),
        sa.Column('created_by', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('date')
    )
    op.create_table('business_hours',
        sa.Column('day_of_week', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('day_name', sa.String(length=10), nullable=False),
        sa.Column('is_open', sa.Boolean(), nullable=False),
        sa.Column('open_time', sa.Time(), nullable=True),
        sa.Column('close_time', sa.Time(), nullable=True),
        sa.Column('break_start_time', sa.Time(), nullable=True),
        sa.Column('break_end_time', sa.Time(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('day_of_week')
    )
    op.create_table('booking_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('slot_interval_minutes', sa.Integer(), nullable=False),
        sa.Column('buffer_minutes', sa.Integer(), nullable=False),
        sa.Column('minimum_notice_hours', sa.Integer(), nullable=False),
        sa.Column('advance_booking_days', sa.Integer(), nullable=False),
        sa.Column('allow_same_day_booking', sa.Boolean(), nullable=False),
        sa.Column('max_appointments_per_day', sa.Integer(), nullable=False),
        sa.Column('updated_by', sa.String(length=100), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    # Catalog
    op.create_table('packages',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('base_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('discount_percentage', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('current_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('discount_label', sa.String(length=100), nullable=True),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('has_addons', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_packages_is_active'), 'packages', ['is_active'], unique=False)
    op.create_table('addons',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # Appointments and the per-date write lock
    op.create_table('appointments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('customer_id', sa.String(length=100), nullable=True),
        sa.Column('customer_name', sa.String(length=255), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('customer_phone', sa.String(length=50), nullable=False),
        sa.Column('service_id', sa.String(length=50), nullable=False),
        sa.Column('service_name', sa.String(length=255), nullable=False),
        sa.Column('service_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('addons', sa.JSON(), nullable=False),
        sa.Column('addons_total', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.Time(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('created_by', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_appointments_customer_id'), 'appointments', ['customer_id'], unique=False)
    op.create_index('idx_appointments_date_time', 'appointments', ['date', 'time'], unique=False)
    op.create_table('schedule_locks',
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('date')
    )

    # Revenue
    op.create_table('revenue_records',
        sa.Column('id', sa.String(length=60), nullable=False),
        sa.Column('appointment_id', sa.Uuid(), nullable=False),
        sa.Column('customer_id', sa.String(length=100), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('service_id', sa.String(length=50), nullable=False),
        sa.Column('service_name', sa.String(length=255), nullable=False),
        sa.Column('service_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('addons_total', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('discount_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('subtotal', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('tax_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('total_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('payment_method', sa.String(length=30), nullable=True),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('appointment_id')
    )
    op.create_index(op.f('ix_revenue_records_customer_id'), 'revenue_records', ['customer_id'], unique=False)
    op.create_index(op.f('ix_revenue_records_date'), 'revenue_records', ['date'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_revenue_records_date'), table_name='revenue_records')
    op.drop_index(op.f('ix_revenue_records_customer_id'), table_name='revenue_records')
    op.drop_table('revenue_records')
    op.drop_table('schedule_locks')
    op.drop_index('idx_appointments_date_time', table_name='appointments')
    op.drop_index(op.f('ix_appointments_customer_id'), table_name='appointments')
    op.drop_table('appointments')
    op.drop_table('addons')
    op.drop_index(op.f('ix_packages_is_active'), table_name='packages')
    op.drop_table('packages')
    op.drop_table('booking_settings')
    op.drop_table('business_hours')
    op.drop_table('blocked_dates')
    op.drop_index(op.f('ix_settings_category'), table_name='settings')
    op.drop_table('settings')
    op.drop_table('business_settings')
