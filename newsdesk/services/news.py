from __future__ import annotations

import logging
import uuid
from typing import Protocol, Sequence

from newsdesk.schemas.news import NewsCreate, NewsPatch, NewsRead

logger = logging.getLogger(__name__)


class NewsStore(Protocol):
    def create(self, title: str, status: str, content: str, topic_ids: Sequence[str] | None = None) -> NewsRead:
        ...

    def list(self, search: str | None = None) -> list[NewsRead]:
        ...

    def get(self, news_id: uuid.UUID) -> NewsRead:
        ...

    def update(
        self,
        news_id: uuid.UUID,
        title: str,
        status: str,
        content: str,
        topic_ids: Sequence[str] | None = None,
    ) -> NewsRead:
        ...

    def delete(self, news_id: uuid.UUID) -> None:
        ...


class NewsService:
    def __init__(self, store: NewsStore):
        self.store = store

    def create_news(self, payload: NewsCreate) -> NewsRead:
        news = self.store.create(payload.title, payload.status, payload.content, payload.topic_ids)
        logger.info("news_created id=%s topics=%s", news.id, len(news.topics))
        return news

    def list_news(self, search: str | None = None) -> list[NewsRead]:
        return self.store.list(search)

    def get_news(self, news_id: uuid.UUID) -> NewsRead:
        return self.store.get(news_id)

    def update_news(self, news_id: uuid.UUID, patch: NewsPatch) -> NewsRead:
        """Load, merge and persist.

        Omitted text fields keep their stored values. ``patch.topics`` of
        None keeps the association untouched; any list (empty included)
        replaces it.
        """
        existing = self.store.get(news_id)
        return self.store.update(
            news_id,
            title=patch.title if patch.title is not None else existing.title,
            status=patch.status if patch.status is not None else existing.status,
            content=patch.content if patch.content is not None else existing.content,
            topic_ids=patch.topic_ids,
        )

    def delete_news(self, news_id: uuid.UUID) -> None:
        self.store.get(news_id)
        self.store.delete(news_id)
        logger.info("news_deleted id=%s", news_id)
