"""add discord role id to project configs

Revision ID: 9e4f2a6c3b10
Revises: 5b1c0e7d9a21
Create Date: 2026-09-18 16:03:55.402917

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9e4f2a6c3b10'
down_revision: Union[str, Sequence[str], None] = '5b1c0e7d9a21'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.add_column(
        "project_configs",
        sa.Column("integration_discord_role_id", sa.String(), nullable=True),
    )

def downgrade():
    op.drop_column("project_configs", "integration_discord_role_id")
