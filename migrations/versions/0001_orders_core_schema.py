"""Orders core schema

Revision ID: 0001_orders_core_schema
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_orders_core_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create orders, items, products, campaigns and status history tables"""

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('type', sa.String(50), nullable=False, server_default='normal'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "type IN ('normal', 'crowdfunding', 'seckill')", name='chk_products_type'
        ),
    )

    op.create_table(
        'crowdfunding_products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('target_amount', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(50), nullable=False, server_default='funding'),
        sa.Column('end_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id'),
        sa.CheckConstraint(
            "status IN ('funding', 'success', 'fail')", name='chk_crowdfunding_products_status'
        ),
    )
    op.create_index(
        'idx_crowdfunding_products_status', 'crowdfunding_products', ['status'], unique=False
    )

    # Создание таблицы orders
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('no', sa.String(64), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('type', sa.String(50), nullable=False, server_default='normal'),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column('ship_status', sa.String(50), nullable=False, server_default='pending'),
        sa.Column('ship_data', sa.JSON(), nullable=True),
        sa.Column('refund_status', sa.String(50), nullable=False, server_default='none'),
        sa.Column('refund_no', sa.String(64), nullable=True),
        sa.Column('extra', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('no'),
        sa.UniqueConstraint('refund_no'),
        sa.CheckConstraint(
            "ship_status IN ('pending', 'delivered', 'received')", name='chk_orders_ship_status'
        ),
        sa.CheckConstraint(
            "refund_status IN ('none', 'applied', 'processing', 'no_active_request', "
            "'failed', 'success')",
            name='chk_orders_refund_status',
        ),
        sa.CheckConstraint('total_amount >= 0', name='chk_orders_total_amount'),
        sa.CheckConstraint('version > 0', name='chk_orders_version'),
    )

    # Индексы для orders
    op.create_index('idx_orders_paid_at', 'orders', ['paid_at'], unique=False)
    op.create_index('idx_orders_ship_status', 'orders', ['ship_status'], unique=False)
    op.create_index('idx_orders_refund_status', 'orders', ['refund_status'], unique=False)

    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount > 0', name='chk_order_items_amount'),
    )
    op.create_index('idx_order_items_order_id', 'order_items', ['order_id'], unique=False)

    # История изменений статусов (аудит)
    op.create_table(
        'order_status_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('field', sa.String(50), nullable=False),
        sa.Column('old_status', sa.String(50), nullable=True),
        sa.Column('new_status', sa.String(50), nullable=False),
        sa.Column('changed_by', sa.Integer(), nullable=True),
        sa.Column('changed_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'idx_order_status_history_order_id', 'order_status_history', ['order_id'], unique=False
    )
    op.create_index(
        'idx_order_status_history_changed_at', 'order_status_history', ['changed_at'], unique=False
    )


def downgrade() -> None:
    """Drop all core tables"""
    op.drop_index('idx_order_status_history_changed_at', table_name='order_status_history')
    op.drop_index('idx_order_status_history_order_id', table_name='order_status_history')
    op.drop_table('order_status_history')
    op.drop_index('idx_order_items_order_id', table_name='order_items')
    op.drop_table('order_items')
    op.drop_index('idx_orders_refund_status', table_name='orders')
    op.drop_index('idx_orders_ship_status', table_name='orders')
    op.drop_index('idx_orders_paid_at', table_name='orders')
    op.drop_table('orders')
    op.drop_index('idx_crowdfunding_products_status', table_name='crowdfunding_products')
    op.drop_table('crowdfunding_products')
    op.drop_table('products')
