"""add attendance table

Revision ID: a4f8d2c61e57
Revises: 7c1e2a9d4b30
Create Date: 2025-12-05 21:40:03.918254

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a4f8d2c61e57'
down_revision: Union[str, None] = '7c1e2a9d4b30'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'attendance',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('cadet_id', sa.Integer(), sa.ForeignKey('cadets.id'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('morning', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('evening', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        # ON CONFLICT (cadet_id, date) in the attendance upsert needs this
        sa.UniqueConstraint('cadet_id', 'date', name='attendance_cadet_id_date_key'),
    )
    op.create_index('ix_attendance_id', 'attendance', ['id'])
    op.create_index('ix_attendance_cadet_id', 'attendance', ['cadet_id'])


def downgrade() -> None:
    op.drop_table('attendance')
