"""add moved_at to feedback

Revision ID: c3d8e1f4a7b2
Revises: 9e4f2a6c3b10
Create Date: 2026-10-19 11:20:47.530182

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c3d8e1f4a7b2'
down_revision: Union[str, Sequence[str], None] = '9e4f2a6c3b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.add_column(
        "feedback",
        sa.Column("moved_at", sa.DateTime(timezone=True), nullable=True),
    )

def downgrade():
    op.drop_column("feedback", "moved_at")
