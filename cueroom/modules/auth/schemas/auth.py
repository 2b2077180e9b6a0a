from typing import Optional
from pydantic import BaseModel, field_validator

from cueroom.modules.user_management.schemas.user import UserCreate

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class TokenPayload(BaseModel):
    sub: Optional[str] = None

class RegisterRequest(UserCreate):
    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3 or not v.replace("_", "").isalnum():
            raise ValueError("Username must be at least 3 letters, digits or underscores")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v
