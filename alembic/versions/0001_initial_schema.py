"""initial schema: tenants, serial counters, accounts

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('code', sa.String(16), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_tenants_code', 'tenants', ['code'], unique=True)

    op.create_table(
        'serial_counters',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('current_serial', sa.Integer(), nullable=False),
        sa.UniqueConstraint('tenant_id', 'year', name='uq_serial_counter_tenant_year'),
    )
    op.create_index('ix_serial_counters_tenant_id', 'serial_counters', ['tenant_id'])

    op.create_table(
        'accounts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('login_id', sa.String(32), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('year_of_joining', sa.Integer(), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('must_reset_password', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_accounts_tenant_id', 'accounts', ['tenant_id'])
    op.create_index('ix_accounts_login_id', 'accounts', ['login_id'], unique=True)
    op.create_index('ix_accounts_email', 'accounts', ['email'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('accounts')
    op.drop_table('serial_counters')
    op.drop_table('tenants')
