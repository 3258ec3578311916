import uuid

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from newsdesk.db.session import Base
from newsdesk.models.common import UUIDMixin, TimestampMixin


class NewsTopic(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "news_topics"
    __table_args__ = (UniqueConstraint("news_id", "topic_id", name="uq_news_topics_news_topic"),)

    news_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("news.id"), nullable=False, index=True)
    topic_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("topics.id"), nullable=False, index=True)
