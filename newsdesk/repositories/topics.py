from __future__ import annotations

import uuid

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from newsdesk.core.errors import NotFound, parse_uuid
from newsdesk.core.telemetry import Telemetry
from newsdesk.models.common import utcnow
from newsdesk.models.topic import Topic
from newsdesk.repositories.base import persistence_guard, search_pattern
from newsdesk.schemas.topic import TopicRead
from newsdesk.services.slug import slugify

COMPONENT = "repo.topic"


class TopicRepository:
    """SQL access for ``topics``. Soft-deleted rows are invisible to every method."""

    def __init__(self, db: Session, telemetry: Telemetry | None = None):
        self.db = db
        self.telemetry = telemetry or Telemetry(enabled=False)

    def _active_row(self, topic_id: uuid.UUID, *, for_update: bool = False) -> Topic:
        stmt = select(Topic).where(Topic.id == topic_id, Topic.deleted_at.is_(None))
        if for_update:
            stmt = stmt.with_for_update()
        row = self.db.execute(stmt).scalar_one_or_none()
        if row is None:
            raise NotFound("Topic not found")
        return row

    def create(self, name: str) -> TopicRead:
        with self.telemetry.track(COMPONENT, "create"), persistence_guard(self.db, "create topic"):
            row = Topic(name=name, slug=slugify(name))
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return TopicRead.model_validate(row)

    def list(self, search: str | None = None) -> list[TopicRead]:
        with self.telemetry.track(COMPONENT, "list"), persistence_guard(self.db, "list topics"):
            stmt = select(Topic).where(Topic.deleted_at.is_(None))
            pattern = search_pattern(search)
            if pattern:
                stmt = stmt.where(
                    or_(
                        Topic.name.ilike(pattern, escape="\\"),
                        Topic.slug.ilike(pattern, escape="\\"),
                    )
                )
            stmt = stmt.order_by(Topic.created_at.asc(), Topic.name.asc())
            return [TopicRead.model_validate(row) for row in self.db.execute(stmt).scalars().all()]

    def get(self, topic_id: uuid.UUID | str) -> TopicRead:
        topic_uuid = parse_uuid(topic_id, "topic id")
        with self.telemetry.track(COMPONENT, "get"), persistence_guard(self.db, "get topic"):
            return TopicRead.model_validate(self._active_row(topic_uuid))

    def update(self, topic_id: uuid.UUID | str, name: str, slug: str) -> TopicRead:
        """Write ``name``/``slug`` as given; deriving the slug is the caller's job."""
        topic_uuid = parse_uuid(topic_id, "topic id")
        with self.telemetry.track(COMPONENT, "update"), persistence_guard(self.db, "update topic"):
            row = self._active_row(topic_uuid, for_update=True)
            row.name = name
            row.slug = slug
            row.updated_at = utcnow()
            self.db.commit()
            self.db.refresh(row)
            return TopicRead.model_validate(row)

    def delete(self, topic_id: uuid.UUID | str) -> None:
        topic_uuid = parse_uuid(topic_id, "topic id")
        with self.telemetry.track(COMPONENT, "delete"), persistence_guard(self.db, "delete topic"):
            result = self.db.execute(
                update(Topic)
                .where(Topic.id == topic_uuid, Topic.deleted_at.is_(None))
                .values(deleted_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFound("Topic not found")
            self.db.commit()
