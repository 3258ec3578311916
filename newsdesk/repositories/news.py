from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.orm import Session

from newsdesk.core.errors import NotFound, ValidationError, parse_uuid
from newsdesk.core.telemetry import Telemetry
from newsdesk.models.common import utcnow
from newsdesk.models.news import News
from newsdesk.models.news_topic import NewsTopic
from newsdesk.models.topic import Topic
from newsdesk.repositories.base import persistence_guard, search_pattern
from newsdesk.schemas.news import NewsRead, NewsTopicSummary
from newsdesk.services.slug import slugify

COMPONENT = "repo.news"


def parse_topic_ids(raw_ids: Iterable[Any] | None) -> list[uuid.UUID]:
    """Parse every topic id up front; duplicates collapse, first occurrence wins."""
    out: list[uuid.UUID] = []
    seen: set[uuid.UUID] = set()
    for raw in raw_ids or []:
        try:
            topic_id = uuid.UUID(str(raw).strip()) if not isinstance(raw, uuid.UUID) else raw
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid topic ID: {raw}")
        if topic_id in seen:
            continue
        seen.add(topic_id)
        out.append(topic_id)
    return out


def _to_read(row: News, topics: list[Topic]) -> NewsRead:
    return NewsRead(
        id=row.id,
        title=row.title,
        slug=row.slug,
        status=row.status,
        content=row.content,
        created_at=row.created_at,
        updated_at=row.updated_at,
        topics=[NewsTopicSummary.model_validate(t) for t in topics],
    )


class NewsRepository:
    """SQL access for ``news`` and its ``news_topics`` association.

    Multi-statement writes (news row + association rows) run inside a single
    transaction: either everything commits or the news row is rolled back
    too. Every linked topic must be active when the write runs. Association
    rows are hard-deleted; soft-deleting a news row leaves
    them in place and reads filter on the news row instead.
    """

    def __init__(self, db: Session, telemetry: Telemetry | None = None):
        self.db = db
        self.telemetry = telemetry or Telemetry(enabled=False)

    def _select_with_topics(self):
        # One round trip: news LEFT JOIN links LEFT JOIN active topics, grouped in Python.
        return (
            select(News, Topic)
            .outerjoin(NewsTopic, NewsTopic.news_id == News.id)
            .outerjoin(Topic, and_(Topic.id == NewsTopic.topic_id, Topic.deleted_at.is_(None)))
            .where(News.deleted_at.is_(None))
        )

    def _fetch(self, stmt) -> list[NewsRead]:
        grouped: dict[uuid.UUID, tuple[News, list[Topic]]] = {}
        for news_row, topic_row in self.db.execute(stmt).all():
            entry = grouped.setdefault(news_row.id, (news_row, []))
            if topic_row is not None:
                entry[1].append(topic_row)
        return [_to_read(row, topics) for row, topics in grouped.values()]

    def _active_row(self, news_id: uuid.UUID, *, for_update: bool = False) -> News:
        stmt = select(News).where(News.id == news_id, News.deleted_at.is_(None))
        if for_update:
            stmt = stmt.with_for_update()
        row = self.db.execute(stmt).scalar_one_or_none()
        if row is None:
            raise NotFound("News not found")
        return row

    def _require_active_topics(self, topic_ids: list[uuid.UUID]) -> None:
        if not topic_ids:
            return
        active = set(
            self.db.execute(
                select(Topic.id).where(Topic.id.in_(topic_ids), Topic.deleted_at.is_(None))
            ).scalars()
        )
        for topic_id in topic_ids:
            if topic_id not in active:
                raise NotFound(f"Topic not found: {topic_id}")

    def _insert_links(self, news_id: uuid.UUID, topic_ids: list[uuid.UUID]) -> None:
        if not topic_ids:
            return
        self.db.add_all([NewsTopic(news_id=news_id, topic_id=topic_id) for topic_id in topic_ids])
        self.db.flush()

    def create(self, title: str, status: str, content: str, topic_ids: Iterable[Any] | None = None) -> NewsRead:
        parsed_ids = parse_topic_ids(topic_ids)
        with self.telemetry.track(COMPONENT, "create"), persistence_guard(self.db, "create news"):
            self._require_active_topics(parsed_ids)
            row = News(title=title, slug=slugify(title), status=status, content=content)
            self.db.add(row)
            self.db.flush()
            news_id = row.id
            self._insert_links(news_id, parsed_ids)
            self.db.commit()
        return self.get(news_id)

    def list(self, search: str | None = None) -> list[NewsRead]:
        with self.telemetry.track(COMPONENT, "list"), persistence_guard(self.db, "list news"):
            stmt = self._select_with_topics()
            pattern = search_pattern(search)
            if pattern:
                stmt = stmt.where(
                    or_(
                        News.title.ilike(pattern, escape="\\"),
                        News.content.ilike(pattern, escape="\\"),
                    )
                )
            stmt = stmt.order_by(News.created_at.desc(), News.id, Topic.name)
            return self._fetch(stmt)

    def get(self, news_id: uuid.UUID | str) -> NewsRead:
        news_uuid = parse_uuid(news_id, "news id")
        with self.telemetry.track(COMPONENT, "get"), persistence_guard(self.db, "get news"):
            rows = self._fetch(self._select_with_topics().where(News.id == news_uuid).order_by(Topic.name))
            if not rows:
                raise NotFound("News not found")
            return rows[0]

    def update(
        self,
        news_id: uuid.UUID | str,
        title: str,
        status: str,
        content: str,
        topic_ids: Iterable[Any] | None = None,
    ) -> NewsRead:
        """Overwrite the news row and, unless ``topic_ids`` is None, replace its topic set."""
        news_uuid = parse_uuid(news_id, "news id")
        parsed_ids = None if topic_ids is None else parse_topic_ids(topic_ids)
        with self.telemetry.track(COMPONENT, "update"), persistence_guard(self.db, "update news"):
            row = self._active_row(news_uuid, for_update=True)
            if parsed_ids is not None:
                self._require_active_topics(parsed_ids)
            row.title = title
            row.slug = slugify(title)
            row.status = status
            row.content = content
            row.updated_at = utcnow()
            self.db.flush()
            if parsed_ids is not None:
                self.db.execute(
                    delete(NewsTopic)
                    .where(NewsTopic.news_id == news_uuid)
                    .execution_options(synchronize_session=False)
                )
                self._insert_links(news_uuid, parsed_ids)
            self.db.commit()
        return self.get(news_uuid)

    def delete(self, news_id: uuid.UUID | str) -> None:
        news_uuid = parse_uuid(news_id, "news id")
        with self.telemetry.track(COMPONENT, "delete"), persistence_guard(self.db, "delete news"):
            result = self.db.execute(
                update(News)
                .where(News.id == news_uuid, News.deleted_at.is_(None))
                .values(deleted_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFound("News not found")
            self.db.commit()
