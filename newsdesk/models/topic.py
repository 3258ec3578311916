from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from newsdesk.db.session import Base
from newsdesk.models.common import UUIDMixin, TimestampMixin, SoftDeleteMixin

class Topic(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "topics"
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
