import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from newsdesk.schemas.common import required_text


class TopicCreate(BaseModel):
    name: str
    # Accepted for compatibility; the stored slug is always derived from name.
    slug: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return required_text(value)


class TopicUpdate(TopicCreate):
    pass


class TopicPatch(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return required_text(value)


class TopicRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime
