from __future__ import annotations

import logging
import uuid
from typing import Protocol

from newsdesk.schemas.topic import TopicCreate, TopicPatch, TopicRead
from newsdesk.services.slug import slugify

logger = logging.getLogger(__name__)


class TopicStore(Protocol):
    def create(self, name: str) -> TopicRead:
        ...

    def list(self, search: str | None = None) -> list[TopicRead]:
        ...

    def get(self, topic_id: uuid.UUID) -> TopicRead:
        ...

    def update(self, topic_id: uuid.UUID, name: str, slug: str) -> TopicRead:
        ...

    def delete(self, topic_id: uuid.UUID) -> None:
        ...


class TopicService:
    def __init__(self, store: TopicStore):
        self.store = store

    def create_topic(self, payload: TopicCreate) -> TopicRead:
        topic = self.store.create(payload.name)
        logger.info("topic_created id=%s slug=%s", topic.id, topic.slug)
        return topic

    def list_topics(self, search: str | None = None) -> list[TopicRead]:
        return self.store.list(search)

    def get_topic(self, topic_id: uuid.UUID) -> TopicRead:
        return self.store.get(topic_id)

    def update_topic(self, topic_id: uuid.UUID, patch: TopicPatch) -> TopicRead:
        """Merge the supplied fields onto the stored topic and persist it.

        The slug always follows the merged name; a slug sent by the caller
        is ignored.
        """
        existing = self.store.get(topic_id)
        name = patch.name if patch.name is not None else existing.name
        return self.store.update(topic_id, name=name, slug=slugify(name))

    def delete_topic(self, topic_id: uuid.UUID) -> None:
        self.store.get(topic_id)
        self.store.delete(topic_id)
        logger.info("topic_deleted id=%s", topic_id)
