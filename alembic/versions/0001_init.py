"""init
Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "topics",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
    )
    op.create_index("ix_topics_slug", "topics", ["slug"])
    op.create_index("ix_topics_deleted_at", "topics", ["deleted_at"])

    op.create_table(
        "news",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("slug", sa.String(length=320), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
    )
    op.create_index("ix_news_slug", "news", ["slug"])
    op.create_index("ix_news_deleted_at", "news", ["deleted_at"])

    op.create_table(
        "news_topics",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("news_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("news.id"), nullable=False),
        sa.Column("topic_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("topics.id"), nullable=False),
        sa.UniqueConstraint("news_id", "topic_id", name="uq_news_topics_news_topic"),
    )
    op.create_index("ix_news_topics_news_id", "news_topics", ["news_id"])
    op.create_index("ix_news_topics_topic_id", "news_topics", ["topic_id"])

def downgrade():
    op.drop_index("ix_news_topics_topic_id", table_name="news_topics")
    op.drop_index("ix_news_topics_news_id", table_name="news_topics")
    op.drop_table("news_topics")
    op.drop_index("ix_news_deleted_at", table_name="news")
    op.drop_index("ix_news_slug", table_name="news")
    op.drop_table("news")
    op.drop_index("ix_topics_deleted_at", table_name="topics")
    op.drop_index("ix_topics_slug", table_name="topics")
    op.drop_table("topics")
