"""initial schema

Revision ID: 5b1c0e7d9a21
Revises:
Create Date: 2026-09-02 10:41:12.118406

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1c0e7d9a21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        "projects",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("icon", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_projects_slug", "projects", ["slug"], unique=True)

    op.create_table(
        "project_configs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("project_id", sa.String(36), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("changelog_preview_style", sa.String(), nullable=False, server_default="summary"),
        sa.Column("changelog_twitter_handle", sa.String(), nullable=True),
        sa.Column("integration_discord_status", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("integration_discord_webhook", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "feedback",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("project_id", sa.String(36), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False, server_default=""),
        sa.Column("status", sa.String(), nullable=False, server_default="open"),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_feedback_project_id", "feedback", ["project_id"])

    op.create_table(
        "feedback_tags",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("project_id", sa.String(36), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("color", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("project_id", "name", name="uq_project_tag_name"),
    )

    op.create_table(
        "feedback_tag_links",
        sa.Column("feedback_id", sa.String(36), sa.ForeignKey("feedback.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("tag_id", sa.String(36), sa.ForeignKey("feedback_tags.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "feedback_upvoters",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("feedback_id", sa.String(36), sa.ForeignKey("feedback.id", ondelete="CASCADE"), nullable=False),
        sa.Column("profile_id", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("feedback_id", "profile_id", name="uq_feedback_upvoter"),
    )

    op.create_table(
        "changelogs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("project_id", sa.String(36), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("author_id", sa.String(), nullable=True),
        sa.Column("title", sa.String(), nullable=False, server_default=""),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("summary", sa.String(), nullable=True),
        sa.Column("content", sa.String(), nullable=True),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("publish_date", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("project_id", "slug", name="uq_project_changelog_slug"),
    )
    op.create_index("ix_changelogs_project_id", "changelogs", ["project_id"])


def downgrade():
    op.drop_index("ix_changelogs_project_id", table_name="changelogs")
    op.drop_table("changelogs")
    op.drop_table("feedback_upvoters")
    op.drop_table("feedback_tag_links")
    op.drop_table("feedback_tags")
    op.drop_index("ix_feedback_project_id", table_name="feedback")
    op.drop_table("feedback")
    op.drop_table("project_configs")
    op.drop_index("ix_projects_slug", table_name="projects")
    op.drop_table("projects")
