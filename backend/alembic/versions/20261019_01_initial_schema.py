"""initial_schema

Revision ID: 20261019_01
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = '20261019_01'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=True),
        sa.Column('role', sa.Enum('user', 'helper', 'admin', name='accountrole'), nullable=False, server_default='user'),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_accounts_id', 'accounts', ['id'])
    op.create_index('ix_accounts_email', 'accounts', ['email'], unique=True)

    op.create_table(
        'helper_listings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('display_id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('service_category', sa.String(), nullable=True),
        sa.Column('price', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('experience', sa.String(), nullable=True),
        sa.Column('rating', sa.Float(), nullable=False, server_default='5.0'),
        sa.Column('reviews', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.Enum('Pending', 'Approved', name='listingstatus'), nullable=False, server_default='Pending'),
        *_timestamps(),
    )
    op.create_index('ix_helper_listings_id', 'helper_listings', ['id'])
    op.create_index('ix_helper_listings_display_id', 'helper_listings', ['display_id'], unique=True)
    op.create_index('ix_helper_listings_email', 'helper_listings', ['email'], unique=True)
    op.create_index('ix_helper_listings_status', 'helper_listings', ['status'])

    op.create_table(
        'bookings',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column('user_email', sa.String(), nullable=False),
        sa.Column('user_name', sa.String(), nullable=True),
        sa.Column('helper_id', sa.Integer(), nullable=True),
        sa.Column('helper_name', sa.String(), nullable=True),
        sa.Column('helper_email', sa.String(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(), nullable=True),
        sa.Column('end_time', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('Pending', 'Confirmed', 'Rejected', 'Cancelled', name='bookingstatus'),
            nullable=False,
            server_default='Pending',
        ),
        sa.Column('is_reviewed', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_bookings_user_email', 'bookings', ['user_email'])
    op.create_index('ix_bookings_helper_id', 'bookings', ['helper_id'])
    op.create_index('ix_bookings_helper_email', 'bookings', ['helper_email'])
    op.create_index('ix_bookings_status', 'bookings', ['status'])

    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('helper_id', sa.Integer(), nullable=False),
        sa.Column('booking_id', sa.BigInteger(), nullable=False, unique=True),
        sa.Column('reviewer_name', sa.String(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('review_text', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_reviews_id', 'reviews', ['id'])
    op.create_index('ix_reviews_helper_id', 'reviews', ['helper_id'])

    op.create_table(
        'contact_messages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('subject', sa.String(), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_contact_messages_id', 'contact_messages', ['id'])

    op.create_table(
        'sequences',
        sa.Column('name', sa.String(), primary_key=True),
        sa.Column('current_value', sa.Integer(), nullable=False, server_default='0'),
    )


def downgrade() -> None:
    op.drop_table('sequences')
    op.drop_table('contact_messages')
    op.drop_table('reviews')
    op.drop_table('bookings')
    op.drop_table('helper_listings')
    op.drop_table('accounts')
    # Named enum types only exist on PostgreSQL
    if op.get_bind().dialect.name == 'postgresql':
        op.execute("DROP TYPE IF EXISTS bookingstatus")
        op.execute("DROP TYPE IF EXISTS listingstatus")
        op.execute("DROP TYPE IF EXISTS accountrole")
