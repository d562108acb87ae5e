"""initial appointments schema

Revision ID: 3f1c2a7b9d10
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c2a7b9d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column(
            'id',
            sa.UUID(),
            server_default=sa.text('gen_random_uuid()'),
            nullable=False,
        ),
        sa.Column(
            'is_active',
            sa.Boolean(),
            server_default=sa.text('true'),
            nullable=False,
        ),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'user',
        *_base_columns(),
        sa.Column('username', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.CheckConstraint(
            'phone IS NOT NULL OR email IS NOT NULL',
            name='ck_user_contact',
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('phone'),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    op.create_table(
        'shop',
        *_base_columns(),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('address', sa.String(length=300), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_shop_name', 'shop', ['name'], unique=True)

    op.create_table(
        'timeslot',
        *_base_columns(),
        sa.Column('shop_id', sa.UUID(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('hour', sa.SmallInteger(), nullable=False),
        sa.Column('minute', sa.SmallInteger(), nullable=False),
        sa.CheckConstraint('hour BETWEEN 0 AND 23', name='ck_timeslot_hour'),
        sa.CheckConstraint(
            'minute BETWEEN 0 AND 59',
            name='ck_timeslot_minute',
        ),
        sa.ForeignKeyConstraint(['shop_id'], ['shop.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'shop_id',
            'date',
            'hour',
            'minute',
            name='uq_timeslot_shop_instant',
        ),
    )
    op.create_index('ix_timeslot_shop_id', 'timeslot', ['shop_id'])

    op.create_table(
        'shopavailability',
        *_base_columns(),
        sa.Column('shop_id', sa.UUID(), nullable=False),
        sa.Column('time_slot_id', sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(['shop_id'], ['shop.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(
            ['time_slot_id'],
            ['timeslot.id'],
            ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'shop_id',
            'time_slot_id',
            name='uq_availability_shop_slot',
        ),
    )
    op.create_index(
        'ix_shopavailability_shop_id',
        'shopavailability',
        ['shop_id'],
    )

    op.create_table(
        'booking',
        *_base_columns(),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('shop_id', sa.UUID(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('hour', sa.SmallInteger(), nullable=False),
        sa.Column('availability_id', sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['shop_id'], ['shop.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(
            ['availability_id'],
            ['shopavailability.id'],
            ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'shop_id',
            'date',
            'hour',
            name='uq_booking_shop_date_hour',
        ),
    )
    op.create_index('ix_booking_user_id', 'booking', ['user_id'])
    op.create_index('ix_booking_shop_id', 'booking', ['shop_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_booking_shop_id', table_name='booking')
    op.drop_index('ix_booking_user_id', table_name='booking')
    op.drop_table('booking')
    op.drop_index(
        'ix_shopavailability_shop_id',
        table_name='shopavailability',
    )
    op.drop_table('shopavailability')
    op.drop_index('ix_timeslot_shop_id', table_name='timeslot')
    op.drop_table('timeslot')
    op.drop_index('ix_shop_name', table_name='shop')
    op.drop_table('shop')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
