from fastapi import APIRouter, Depends

from newsdesk.core.deps import get_push_service
from newsdesk.schemas.common import envelope
from newsdesk.schemas.notification import (
    MulticastNotificationRequest,
    MulticastNotificationResponse,
    NotificationRequest,
    NotificationResponse,
    TopicNotificationRequest,
    TopicSubscriptionRequest,
)
from newsdesk.services.push_notifications import PushNotificationService

router = APIRouter()


@router.post("/send")
def send_notification(payload: NotificationRequest, push: PushNotificationService = Depends(get_push_service)):
    message_id = push.send(payload.token, payload.title, payload.body, payload.data)
    data = NotificationResponse(message_id=message_id, success=True)
    return envelope(200, "Notification sent successfully", data.model_dump())


@router.post("/send-multicast")
def send_multicast_notification(
    payload: MulticastNotificationRequest,
    push: PushNotificationService = Depends(get_push_service),
):
    result = push.send_multicast(payload.tokens, payload.title, payload.body, payload.data)
    data = MulticastNotificationResponse(
        success_count=result.success_count,
        failure_count=result.failure_count,
        errors=result.errors,
    )
    return envelope(200, "Multicast notification sent", data.model_dump())


@router.post("/send-topic")
def send_topic_notification(payload: TopicNotificationRequest, push: PushNotificationService = Depends(get_push_service)):
    message_id = push.send_to_topic(payload.topic, payload.title, payload.body, payload.data)
    data = NotificationResponse(message_id=message_id, success=True)
    return envelope(200, "Topic notification sent successfully", data.model_dump())


@router.post("/subscribe-topic")
def subscribe_to_topic(payload: TopicSubscriptionRequest, push: PushNotificationService = Depends(get_push_service)):
    push.subscribe_to_topic(payload.tokens, payload.topic)
    return envelope(200, "Successfully subscribed to topic")


@router.post("/unsubscribe-topic")
def unsubscribe_from_topic(payload: TopicSubscriptionRequest, push: PushNotificationService = Depends(get_push_service)):
    push.unsubscribe_from_topic(payload.tokens, payload.topic)
    return envelope(200, "Successfully unsubscribed from topic")
