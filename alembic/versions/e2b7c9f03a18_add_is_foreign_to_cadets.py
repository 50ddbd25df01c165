"""add is_foreign to cadets

Revision ID: e2b7c9f03a18
Revises: a4f8d2c61e57
Create Date: 2026-01-12 18:27:55.064193

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision: str = 'e2b7c9f03a18'
down_revision: Union[str, None] = 'a4f8d2c61e57'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def column_exists(table_name: str, column_name: str) -> bool:
    conn = op.get_bind()
    inspector = inspect(conn)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def upgrade() -> None:
    # The column may already exist if it was added from the admin database browser
    if not column_exists('cadets', 'is_foreign'):
        op.add_column(
            'cadets',
            sa.Column('is_foreign', sa.Boolean(), nullable=False, server_default=sa.false())
        )


def downgrade() -> None:
    if column_exists('cadets', 'is_foreign'):
        op.drop_column('cadets', 'is_foreign')
