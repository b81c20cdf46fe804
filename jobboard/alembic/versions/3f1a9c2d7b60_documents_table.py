"""documents_table

Revision ID: 3f1a9c2d7b60
Revises:
Create Date: 2026-10-18 10:12:41.220931

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7b60'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the document table shared by every resource."""
    op.create_table(
        'documents',
        sa.Column('table_name', sa.String(64), primary_key=True),
        sa.Column('partition_key', sa.String(255), primary_key=True),
        sa.Column('sort_key', sa.String(255), primary_key=True, server_default=''),
        sa.Column('data', sa.JSON, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_documents_table_sort', 'documents', ['table_name', 'sort_key'])


def downgrade() -> None:
    """Drop the document table."""
    op.drop_index('ix_documents_table_sort', table_name='documents')
    op.drop_table('documents')
