from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel

class UserBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: Optional[EmailStr] = None
    username: Optional[str] = None
    stage_name: Optional[str] = None
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None

class UserCreate(UserBase):
    email: EmailStr
    username: str
    password: str

class UserInDBBase(UserBase):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    is_verified: bool = False
    is_admin: bool = False
    is_suspended: bool = False
    created_at: datetime
    updated_at: datetime

class User(UserInDBBase):
    """User model returned to client"""
    pass

class AuthorDisplay(BaseModel):
    """Minimal author fields merged into comment responses"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    stage_name: str
    username: Optional[str] = None
    is_verified: bool = False
    is_bot: bool = False
