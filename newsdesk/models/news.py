from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from newsdesk.db.session import Base
from newsdesk.models.common import UUIDMixin, TimestampMixin, SoftDeleteMixin

class News(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "news"
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    slug: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False)  # draft|published|...
    content: Mapped[str] = mapped_column(Text, nullable=False)
