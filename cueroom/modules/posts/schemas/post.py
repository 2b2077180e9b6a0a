from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

class PostBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    content: str
    tags: List[str] = []
    image_url: Optional[str] = None

class PostCreate(PostBase):
    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: List[str]) -> List[str]:
        return [tag.strip().lstrip("#").lower() for tag in v if tag.strip().lstrip("#")]

class Post(PostBase):
    """Post model returned to client"""
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    user_id: str
    tags: Optional[List[str]] = None
    likes_count: int = 0
    comments_count: int = 0
    is_moderated: bool = False
    created_at: datetime
