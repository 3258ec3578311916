import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from newsdesk.schemas.common import required_text


class NewsTopicRef(BaseModel):
    # Parsed by the store so that a malformed id fails the whole write.
    topic_id: str


class NewsTopicSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime


class NewsCreate(BaseModel):
    title: str
    slug: Optional[str] = None
    status: str
    content: str
    topics: list[NewsTopicRef] = Field(default_factory=list)

    @field_validator("title", "status", "content")
    @classmethod
    def validate_required(cls, value: str) -> str:
        return required_text(value)

    @property
    def topic_ids(self) -> list[str]:
        return [ref.topic_id for ref in self.topics]


class NewsUpdate(NewsCreate):
    """Full replacement: title/status/content overwrite, omitted topics clear the association."""


class NewsPatch(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    status: Optional[str] = None
    content: Optional[str] = None
    topics: Optional[list[NewsTopicRef]] = None

    @field_validator("title", "status", "content")
    @classmethod
    def validate_optional_required(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return required_text(value)

    @property
    def topic_ids(self) -> Optional[list[str]]:
        if self.topics is None:
            return None
        return [ref.topic_id for ref in self.topics]


class NewsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    slug: str
    status: str
    content: str
    created_at: datetime
    updated_at: datetime
    topics: list[NewsTopicSummary] = Field(default_factory=list)
