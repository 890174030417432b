"""Initial catalog schema

Revision ID: 0001
Revises:
Create Date: 2025-08-02 12:30:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    # Create holiday_types table
    op.create_table('holiday_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('short_description', sa.Text(), nullable=False),
        sa.Column('image', sa.String(length=1024), nullable=False),
        sa.Column('duration', sa.String(length=100), nullable=False),
        sa.Column('travelers', sa.String(length=100), nullable=False),
        sa.Column('badge', sa.String(length=100), nullable=False),
        sa.Column('price', sa.String(length=100), nullable=False),
        sa.Column('highlights', sa.JSON(), nullable=False),
        sa.Column('country', sa.String(length=128), nullable=True),
        sa.Column('state', sa.String(length=128), nullable=True),
        sa.Column('tour_type', sa.String(length=20), nullable=True),
        sa.Column('category', sa.String(length=64), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_holiday_types_title'), 'holiday_types', ['title'], unique=False)
    op.create_index(op.f('ix_holiday_types_slug'), 'holiday_types', ['slug'], unique=True)
    op.create_index(op.f('ix_holiday_types_is_active'), 'holiday_types', ['is_active'], unique=False)

    # Create packages table
    op.create_table('packages',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('short_description', sa.Text(), nullable=False),
        sa.Column('duration', sa.String(length=100), nullable=False),
        sa.Column('destination', sa.String(length=255), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('original_price', sa.Float(), nullable=True),
        sa.Column('discount', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('country', sa.String(length=128), nullable=False),
        sa.Column('state', sa.String(length=128), nullable=True),
        sa.Column('tour_type', sa.String(length=20), nullable=False),
        sa.Column('holiday_type_id', sa.Uuid(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('highlights', sa.JSON(), nullable=False),
        sa.Column('inclusions', sa.JSON(), nullable=False),
        sa.Column('exclusions', sa.JSON(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('price >= 0', name='ck_package_price_non_negative'),
        sa.CheckConstraint('discount >= 0 AND discount <= 100', name='ck_package_discount_range'),
        sa.CheckConstraint('rating >= 0 AND rating <= 5', name='ck_package_rating_range'),
        sa.ForeignKeyConstraint(['holiday_type_id'], ['holiday_types.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_packages_title'), 'packages', ['title'], unique=False)
    op.create_index(op.f('ix_packages_slug'), 'packages', ['slug'], unique=True)
    op.create_index(op.f('ix_packages_destination'), 'packages', ['destination'], unique=False)
    op.create_index(op.f('ix_packages_category'), 'packages', ['category'], unique=False)
    op.create_index(op.f('ix_packages_country'), 'packages', ['country'], unique=False)
    op.create_index(op.f('ix_packages_state'), 'packages', ['state'], unique=False)
    op.create_index(op.f('ix_packages_tour_type'), 'packages', ['tour_type'], unique=False)
    op.create_index(op.f('ix_packages_holiday_type_id'), 'packages', ['holiday_type_id'], unique=False)
    op.create_index(op.f('ix_packages_is_active'), 'packages', ['is_active'], unique=False)
    op.create_index('ix_packages_tour_type_country', 'packages', ['tour_type', 'country'], unique=False)
    op.create_index('ix_packages_country_state', 'packages', ['country', 'state'], unique=False)

    # Create destinations table
    op.create_table('destinations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('short_description', sa.Text(), nullable=False),
        sa.Column('image', sa.String(length=1024), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('duration', sa.String(length=100), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('highlights', sa.JSON(), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('country', sa.String(length=128), nullable=False),
        sa.Column('state', sa.String(length=128), nullable=True),
        sa.Column('tour_type', sa.String(length=20), nullable=False),
        sa.Column('holiday_type_id', sa.Uuid(), nullable=True),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_trending', sa.Boolean(), nullable=False),
        sa.Column('visit_count', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('visit_count >= 0', name='ck_destination_visit_count_non_negative'),
        sa.CheckConstraint('rating >= 0 AND rating <= 5', name='ck_destination_rating_range'),
        sa.ForeignKeyConstraint(['holiday_type_id'], ['holiday_types.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_destinations_name'), 'destinations', ['name'], unique=False)
    op.create_index(op.f('ix_destinations_slug'), 'destinations', ['slug'], unique=True)
    op.create_index(op.f('ix_destinations_location'), 'destinations', ['location'], unique=False)
    op.create_index(op.f('ix_destinations_category'), 'destinations', ['category'], unique=False)
    op.create_index(op.f('ix_destinations_country'), 'destinations', ['country'], unique=False)
    op.create_index(op.f('ix_destinations_state'), 'destinations', ['state'], unique=False)
    op.create_index(op.f('ix_destinations_tour_type'), 'destinations', ['tour_type'], unique=False)
    op.create_index(op.f('ix_destinations_holiday_type_id'), 'destinations', ['holiday_type_id'], unique=False)
    op.create_index(op.f('ix_destinations_is_active'), 'destinations', ['is_active'], unique=False)
    op.create_index('ix_destinations_tour_type_country', 'destinations', ['tour_type', 'country'], unique=False)
    op.create_index('ix_destinations_country_state', 'destinations', ['country', 'state'], unique=False)

    # Create fixed_departures table
    op.create_table('fixed_departures',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('short_description', sa.Text(), nullable=False),
        sa.Column('duration', sa.String(length=100), nullable=False),
        sa.Column('destination', sa.String(length=255), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('original_price', sa.Float(), nullable=True),
        sa.Column('discount', sa.Integer(), nullable=False),
        sa.Column('departure_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('return_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('available_seats', sa.Integer(), nullable=False),
        sa.Column('total_seats', sa.Integer(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('highlights', sa.JSON(), nullable=False),
        sa.Column('inclusions', sa.JSON(), nullable=False),
        sa.Column('exclusions', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('price >= 0', name='ck_fixed_departure_price_non_negative'),
        sa.CheckConstraint('discount >= 0 AND discount <= 100', name='ck_fixed_departure_discount_range'),
        sa.CheckConstraint('total_seats >= 1', name='ck_fixed_departure_total_seats_positive'),
        sa.CheckConstraint('available_seats >= 0', name='ck_fixed_departure_available_seats_non_negative'),
        sa.CheckConstraint('available_seats <= total_seats', name='ck_fixed_departure_available_lte_total'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_fixed_departures_title'), 'fixed_departures', ['title'], unique=False)
    op.create_index(op.f('ix_fixed_departures_slug'), 'fixed_departures', ['slug'], unique=True)
    op.create_index(op.f('ix_fixed_departures_destination'), 'fixed_departures', ['destination'], unique=False)
    op.create_index(op.f('ix_fixed_departures_departure_date'), 'fixed_departures', ['departure_date'], unique=False)
    op.create_index(op.f('ix_fixed_departures_is_active'), 'fixed_departures', ['is_active'], unique=False)
    op.create_index(op.f('ix_fixed_departures_status'), 'fixed_departures', ['status'], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table('fixed_departures')
    op.drop_table('destinations')
    op.drop_table('packages')
    op.drop_table('holiday_types')
