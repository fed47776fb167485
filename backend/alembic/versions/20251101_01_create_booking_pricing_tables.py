"""create bookings, booking_financials and booking_modifications

Revision ID: 20251101_01
Revises:
Create Date: 2025-11-01 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = '20251101_01'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

booking_type = sa.Enum(
    'emergency', 'date_night', 'date_day', 'school_holiday', 'temporary_support', 'long_term',
    name='bookingtype',
)
duration_type = sa.Enum('long_term', 'short_term', name='durationtype')
# booking_financials reuses the type created with bookings
booking_mode = postgresql.ENUM('long_term', 'short_term', name='durationtype', create_type=False)
home_size = sa.Enum(
    'pocket_palace', 'family_hub', 'grand_estate', 'monumental_manor', 'epic_estates',
    name='homesize',
)
living_arrangement = sa.Enum('live_in', 'live_out', name='livingarrangement')
booking_status = sa.Enum('pending', 'confirmed', 'active', 'completed', 'cancelled', name='bookingstatus')
modification_type = sa.Enum('service_addition', 'service_removal', 'cancellation', name='modificationtype')
modification_status = sa.Enum('pending_admin_review', 'applied', 'rejected', name='modificationstatus')


def upgrade() -> None:
    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('booking_type', booking_type, nullable=False),
        sa.Column('duration_type', duration_type, nullable=False),
        sa.Column('home_size', home_size, nullable=True),
        sa.Column('living_arrangement', living_arrangement, nullable=True),
        sa.Column('services', sa.JSON(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('base_rate', sa.Numeric(10, 2), nullable=False),
        sa.Column('additional_services_cost', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('total_monthly_cost', sa.Numeric(10, 2), nullable=False),
        sa.Column('placement_fee', sa.Numeric(10, 2), nullable=True),
        sa.Column('estimated', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', booking_status, nullable=True, server_default='pending'),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_bookings_id', 'bookings', ['id'])
    op.create_index('ix_bookings_booking_type', 'bookings', ['booking_type'])
    op.create_index('ix_bookings_status', 'bookings', ['status'])

    op.create_table(
        'booking_financials',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('booking_id', sa.Integer(), sa.ForeignKey('bookings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('booking_mode', booking_mode, nullable=False),
        sa.Column('client_charge', sa.Numeric(10, 2), nullable=False),
        sa.Column('fixed_fee', sa.Numeric(10, 2), nullable=False),
        sa.Column('commission_percent', sa.Numeric(5, 2), nullable=False),
        sa.Column('commission_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('admin_total_revenue', sa.Numeric(10, 2), nullable=False),
        sa.Column('nanny_earnings', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False, server_default='ZAR'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('booking_id', name='uq_booking_financials_booking_id'),
    )
    op.create_index('ix_booking_financials_id', 'booking_financials', ['id'])

    op.create_table(
        'booking_modifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('booking_id', sa.Integer(), sa.ForeignKey('bookings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('modification_type', modification_type, nullable=False),
        sa.Column('old_values', sa.JSON(), nullable=False),
        sa.Column('new_values', sa.JSON(), nullable=False),
        sa.Column('price_adjustment', sa.Numeric(10, 2), nullable=False),
        sa.Column('full_adjustment', sa.Numeric(10, 2), nullable=False),
        sa.Column('effective_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('status', modification_status, nullable=False, server_default='pending_admin_review'),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_booking_modifications_id', 'booking_modifications', ['id'])
    op.create_index('ix_booking_modifications_booking_id', 'booking_modifications', ['booking_id'])
    op.create_index('ix_booking_modifications_status', 'booking_modifications', ['status'])


def downgrade() -> None:
    op.drop_table('booking_modifications')
    op.drop_table('booking_financials')
    op.drop_table('bookings')
    if op.get_bind().dialect.name != 'postgresql':
        return
    for name in (
        'modificationstatus',
        'modificationtype',
        'bookingstatus',
        'livingarrangement',
        'homesize',
        'durationtype',
        'bookingtype',
    ):
        op.execute(f"DROP TYPE IF EXISTS {name}")
