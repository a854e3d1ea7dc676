"""add_product_categories_table

Revision ID: 293cf683805c
Revises: a1f3c2d4e5b6
Create Date: 2026-10-12 10:32:31.580093

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '293cf683805c'
down_revision: Union[str, None] = 'a1f3c2d4e5b6'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # M2M связь products <-> categories: пара уникальна (составной PK),
    # строка удаляется вместе с товаром или категорией
    op.create_table(
        'product_categories',
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('category_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('product_id', 'category_id')
    )
    # Выбор товаров по категории (фильтр в каталоге)
    op.create_index('ix_product_categories_category_id', 'product_categories', ['category_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_product_categories_category_id', table_name='product_categories')
    op.drop_table('product_categories')
