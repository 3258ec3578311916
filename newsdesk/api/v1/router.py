from fastapi import APIRouter
from newsdesk.api.v1 import news, notifications, topics

router = APIRouter()
router.include_router(topics.router, prefix="/topics", tags=["Topics"])
router.include_router(news.router, prefix="/news", tags=["News"])
router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
