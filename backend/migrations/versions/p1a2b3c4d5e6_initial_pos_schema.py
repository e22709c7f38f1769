"""initial_pos_schema

Revision ID: p1a2b3c4d5e6
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'p1a2b3c4d5e6'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, products, cash_registers and sales tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('ADMIN', 'USER', name='roleenum'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(precision=20, scale=4), nullable=False),
        sa.Column('image_uri', sa.String(length=1024), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('price > 0', name='ck_product_price_positive'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'cash_registers',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('status', sa.Enum('OPEN', 'CLOSED', name='cashregisterstatus'), nullable=False),
        sa.Column('initial_amount', sa.Numeric(precision=20, scale=4), nullable=False, server_default='0'),
        sa.Column('current_amount', sa.Numeric(precision=20, scale=4), nullable=False, server_default='0'),
        sa.Column('final_amount', sa.Numeric(precision=20, scale=4), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('initial_amount >= 0', name='ck_cash_register_initial_non_negative'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_cash_registers_user', 'cash_registers', ['user_id'])
    op.create_index('ix_cash_registers_status', 'cash_registers', ['status'])
    op.create_index('ix_cash_registers_created_at', 'cash_registers', ['created_at'])

    op.create_table(
        'sales',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('cash_register_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column('total', sa.Numeric(precision=20, scale=4), nullable=False),
        sa.Column('payment_method', sa.Enum('CASH', 'CARD', 'PIX', name='paymentmethod'), nullable=False),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'COMPLETED', 'CANCELLED', name='salestatus'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('total > 0', name='ck_sale_total_positive'),
        sa.ForeignKeyConstraint(['cash_register_id'], ['cash_registers.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_sales_cash_register', 'sales', ['cash_register_id'])
    op.create_index('ix_sales_user', 'sales', ['user_id'])
    op.create_index('ix_sales_status', 'sales', ['status'])
    op.create_index('ix_sales_created_at', 'sales', ['created_at'])


def downgrade() -> None:
    """Drop all point-of-sale tables."""
    op.drop_index('ix_sales_created_at', table_name='sales')
    op.drop_index('ix_sales_status', table_name='sales')
    op.drop_index('ix_sales_user', table_name='sales')
    op.drop_index('ix_sales_cash_register', table_name='sales')
    op.drop_table('sales')
    op.drop_index('ix_cash_registers_created_at', table_name='cash_registers')
    op.drop_index('ix_cash_registers_status', table_name='cash_registers')
    op.drop_index('ix_cash_registers_user', table_name='cash_registers')
    op.drop_table('cash_registers')
    op.drop_table('products')
    op.drop_table('users')
    if op.get_bind().dialect.name == 'postgresql':
        for enum_name in ('salestatus', 'paymentmethod', 'cashregisterstatus', 'roleenum'):
            op.execute(f"DROP TYPE IF EXISTS {enum_name}")
