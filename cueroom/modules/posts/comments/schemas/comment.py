from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CommentBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: Optional[str] = None
    mentions: List[str] = []
    parent_id: Optional[int] = None
    meme_image_url: Optional[str] = None
    meme_image_data: Optional[str] = None

class CommentCreate(CommentBase):
    # Content is checked for blank text in the endpoint so the client gets a 400, not a schema error
    pass

class CommentInDBBase(CommentBase):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    post_id: int
    user_id: str
    content: str
    mentions: Optional[List[str]] = None
    is_moderated: bool = False
    created_at: datetime

class Comment(CommentInDBBase):
    """Comment merged with its author's display fields"""
    stage_name: str
    username: Optional[str] = None
    is_verified: bool = False
    is_bot: bool = False
