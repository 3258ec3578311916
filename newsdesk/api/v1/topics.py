from fastapi import APIRouter, Depends, Query

from newsdesk.core.deps import get_topic_service
from newsdesk.core.errors import parse_uuid
from newsdesk.schemas.common import envelope
from newsdesk.schemas.topic import TopicCreate, TopicPatch, TopicUpdate
from newsdesk.services.topics import TopicService

router = APIRouter()


@router.get("")
def list_topics(search: str | None = Query(None), service: TopicService = Depends(get_topic_service)):
    topics = service.list_topics(search)
    return envelope(200, "Successfully retrieved topic list", [t.model_dump(mode="json") for t in topics])


@router.get("/{id}")
def get_topic(id: str, service: TopicService = Depends(get_topic_service)):
    topic = service.get_topic(parse_uuid(id, "topic ID"))
    return envelope(200, "Successfully retrieved topic", topic.model_dump(mode="json"))


@router.post("", status_code=201)
def create_topic(payload: TopicCreate, service: TopicService = Depends(get_topic_service)):
    topic = service.create_topic(payload)
    return envelope(201, "Topic successfully created", topic.model_dump(mode="json"))


@router.put("/{id}")
def replace_topic(id: str, payload: TopicUpdate, service: TopicService = Depends(get_topic_service)):
    topic = service.update_topic(parse_uuid(id, "topic ID"), TopicPatch(name=payload.name))
    return envelope(200, "Topic successfully updated", topic.model_dump(mode="json"))


@router.patch("/{id}")
def update_topic(id: str, payload: TopicPatch, service: TopicService = Depends(get_topic_service)):
    topic = service.update_topic(parse_uuid(id, "topic ID"), payload)
    return envelope(200, "Topic successfully updated", topic.model_dump(mode="json"))


@router.delete("/{id}")
def delete_topic(id: str, service: TopicService = Depends(get_topic_service)):
    service.delete_topic(parse_uuid(id, "topic ID"))
    return envelope(200, "Topic successfully deleted")
