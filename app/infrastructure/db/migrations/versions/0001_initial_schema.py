"""
Initial schema: users, API tokens, clients and charges.
"""

from alembic import op
import sqlalchemy as sa

# Migration identifiers
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create all tables."""

    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='USER'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        'api_tokens',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('token_hash', sa.String(64), nullable=False, unique=True),
        sa.Column('expires_at', sa.DateTime()),
        sa.Column('last_used_at', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('idx_api_tokens_user', 'api_tokens', ['user_id'])

    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('billing_day', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', 'phone', name='uq_clients_user_phone'),
        sa.CheckConstraint('billing_day BETWEEN 1 AND 31', name='ck_clients_billing_day'),
        sa.CheckConstraint('amount >= 0', name='ck_clients_amount'),
    )
    op.create_index('idx_clients_user_active', 'clients', ['user_id', 'active'])

    op.create_table(
        'charges',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('clients.id', ondelete='CASCADE'), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('debt_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('paid_amount', sa.Numeric(12, 2)),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('payment_date', sa.DateTime()),
        sa.Column('status', sa.String(20), nullable=False, server_default='PENDENTE'),
        sa.Column('message_attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        # One charge per client per calendar day
        sa.UniqueConstraint('client_id', 'due_date', name='uq_charges_client_due_date'),
        sa.CheckConstraint('message_attempts BETWEEN 0 AND 3', name='ck_charges_message_attempts'),
    )
    op.create_index('idx_charges_status_due', 'charges', ['status', 'due_date'])
    op.create_index('idx_charges_client_status', 'charges', ['client_id', 'status'])


def downgrade():
    """Drop all tables."""
    op.drop_index('idx_charges_client_status', table_name='charges')
    op.drop_index('idx_charges_status_due', table_name='charges')
    op.drop_table('charges')
    op.drop_index('idx_clients_user_active', table_name='clients')
    op.drop_table('clients')
    op.drop_index('idx_api_tokens_user', table_name='api_tokens')
    op.drop_table('api_tokens')
    op.drop_table('users')
