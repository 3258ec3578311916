from fastapi import Depends, Request
from sqlalchemy.orm import Session

from newsdesk.core.telemetry import Telemetry
from newsdesk.db.session import get_db
from newsdesk.repositories.news import NewsRepository
from newsdesk.repositories.topics import TopicRepository
from newsdesk.services.news import NewsService
from newsdesk.services.push_notifications import PushNotificationService
from newsdesk.services.topics import TopicService


def get_telemetry(request: Request) -> Telemetry:
    return request.app.state.telemetry


def get_topic_service(db: Session = Depends(get_db), telemetry: Telemetry = Depends(get_telemetry)) -> TopicService:
    return TopicService(TopicRepository(db, telemetry))


def get_news_service(db: Session = Depends(get_db), telemetry: Telemetry = Depends(get_telemetry)) -> NewsService:
    return NewsService(NewsRepository(db, telemetry))


def get_push_service(request: Request) -> PushNotificationService:
    return request.app.state.push_service
