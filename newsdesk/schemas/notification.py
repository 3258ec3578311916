from typing import Optional

from pydantic import BaseModel, Field, field_validator

from newsdesk.schemas.common import required_text


class NotificationRequest(BaseModel):
    token: str
    title: str
    body: str
    data: Optional[dict[str, str]] = None

    @field_validator("token", "title", "body")
    @classmethod
    def validate_required(cls, value: str) -> str:
        return required_text(value)


class MulticastNotificationRequest(BaseModel):
    tokens: list[str] = Field(min_length=1)
    title: str
    body: str
    data: Optional[dict[str, str]] = None

    @field_validator("title", "body")
    @classmethod
    def validate_required(cls, value: str) -> str:
        return required_text(value)

    @field_validator("tokens")
    @classmethod
    def validate_tokens(cls, value: list[str]) -> list[str]:
        tokens = [str(t).strip() for t in value if str(t or "").strip()]
        if not tokens:
            raise ValueError("at least one token is required")
        return tokens


class TopicNotificationRequest(BaseModel):
    topic: str
    title: str
    body: str
    data: Optional[dict[str, str]] = None

    @field_validator("topic", "title", "body")
    @classmethod
    def validate_required(cls, value: str) -> str:
        return required_text(value)


class TopicSubscriptionRequest(BaseModel):
    tokens: list[str] = Field(min_length=1)
    topic: str

    @field_validator("topic")
    @classmethod
    def validate_topic(cls, value: str) -> str:
        return required_text(value)

    @field_validator("tokens")
    @classmethod
    def validate_tokens(cls, value: list[str]) -> list[str]:
        tokens = [str(t).strip() for t in value if str(t or "").strip()]
        if not tokens:
            raise ValueError("at least one token is required")
        return tokens


class NotificationResponse(BaseModel):
    message_id: str
    success: bool


class MulticastNotificationResponse(BaseModel):
    success_count: int
    failure_count: int
    errors: list[str] = Field(default_factory=list)
