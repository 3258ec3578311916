from fastapi import APIRouter, Depends, Query

from newsdesk.core.deps import get_news_service
from newsdesk.core.errors import parse_uuid
from newsdesk.schemas.common import envelope
from newsdesk.schemas.news import NewsCreate, NewsPatch, NewsUpdate
from newsdesk.services.news import NewsService

router = APIRouter()


@router.get("")
def list_news(search: str | None = Query(None), service: NewsService = Depends(get_news_service)):
    rows = service.list_news(search)
    return envelope(200, "Successfully retrieved news list", [n.model_dump(mode="json") for n in rows])


@router.get("/{id}")
def get_news(id: str, service: NewsService = Depends(get_news_service)):
    news = service.get_news(parse_uuid(id, "news ID"))
    return envelope(200, "Successfully retrieved news", news.model_dump(mode="json"))


@router.post("", status_code=201)
def create_news(payload: NewsCreate, service: NewsService = Depends(get_news_service)):
    news = service.create_news(payload)
    return envelope(201, "News successfully created", news.model_dump(mode="json"))


@router.put("/{id}")
def replace_news(id: str, payload: NewsUpdate, service: NewsService = Depends(get_news_service)):
    # PUT overwrites every mutable field; a missing "topics" list clears the association.
    patch = NewsPatch(title=payload.title, status=payload.status, content=payload.content, topics=payload.topics)
    news = service.update_news(parse_uuid(id, "news ID"), patch)
    return envelope(200, "News successfully updated", news.model_dump(mode="json"))


@router.patch("/{id}")
def update_news(id: str, payload: NewsPatch, service: NewsService = Depends(get_news_service)):
    news = service.update_news(parse_uuid(id, "news ID"), payload)
    return envelope(200, "News successfully updated", news.model_dump(mode="json"))


@router.delete("/{id}")
def delete_news(id: str, service: NewsService = Depends(get_news_service)):
    service.delete_news(parse_uuid(id, "news ID"))
    return envelope(200, "News successfully deleted")
