from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ModerationRequest(_CamelModel):
    content: str
    type: Optional[str] = None  # "post" or "comment"
    post_id: Optional[int] = None

class ModerationResult(_CamelModel):
    is_violation: bool
    violation_type: Optional[str] = None
    bot_response: Optional[str] = None
    should_remove: bool = False

class BotReplyRequest(_CamelModel):
    mention_content: Optional[str] = None
    post_content: Optional[str] = None
    post_title: Optional[str] = None

class BotReply(BaseModel):
    response: str
