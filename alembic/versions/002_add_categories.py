"""Add categories and products.category_id

Revision ID: 002_add_categories
Revises: 001_initial_schema
Create Date: 2026-10-20 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '002_add_categories'
down_revision: Union[str, None] = '001_initial_schema'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=False), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=False), server_default=sa.func.now(), nullable=False),
        sa.Column('created_by', sa.String(), nullable=True),
        sa.Column('last_updated_by', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('deleted_at', sa.TIMESTAMP(timezone=False), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.add_column('products', sa.Column('category_id', sa.Integer(), nullable=True))
    op.create_index('ix_products_category_id', 'products', ['category_id'])
    op.create_foreign_key(
        'fk_products_category_id', 'products', 'categories', ['category_id'], ['id'], ondelete='RESTRICT'
    )


def downgrade() -> None:
    op.drop_constraint('fk_products_category_id', 'products', type_='foreignkey')
    op.drop_index('ix_products_category_id', table_name='products')
    op.drop_column('products', 'category_id')
    op.drop_table('categories')
