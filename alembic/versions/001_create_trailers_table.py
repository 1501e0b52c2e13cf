"""Create trailers table.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create trailers table and its indexes."""
    op.create_table(
        'trailers',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('short_description', sa.String(500), nullable=False),
        sa.Column('brand', sa.String(100), nullable=False),
        sa.Column('model', sa.String(100), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False, server_default='UAH'),
        sa.Column('in_stock', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('images', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('specifications', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('meta_title', sa.String(160), nullable=True),
        sa.Column('meta_description', sa.String(320), nullable=True),
        sa.Column('keywords', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    # Slug must be globally unique
    op.create_unique_constraint('uq_trailers_slug', 'trailers', ['slug'])

    op.create_index('ix_trailers_category', 'trailers', ['category'])
    op.create_index('ix_trailers_brand', 'trailers', ['brand'])
    op.create_index('ix_trailers_price', 'trailers', ['price'])
    op.create_index('ix_trailers_in_stock', 'trailers', ['in_stock'])
    op.create_index('ix_trailers_is_featured', 'trailers', ['is_featured'])
    op.create_index('ix_trailers_featured_stock', 'trailers', ['is_featured', 'in_stock'])


def downgrade() -> None:
    """Drop trailers table."""
    op.drop_table('trailers')
