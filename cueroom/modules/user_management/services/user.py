from typing import Optional
import secrets
import uuid
from sqlalchemy import or_
from sqlalchemy.orm import Session

from cueroom.core.config import settings
from cueroom.core.security import get_password_hash
from cueroom.modules.user_management.models.user import User
from cueroom.modules.user_management.schemas.user import UserCreate, AuthorDisplay

ANONYMOUS_STAGE_NAME = "Anonymous Artist"
BOT_STAGE_NAME = "TheCueRoom Bot"

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Get user by username"""
    return db.query(User).filter(User.username == username).first()

def get_user_by_login(db: Session, login: str) -> Optional[User]:
    """Get user by username or email"""
    return (
        db.query(User)
        .filter(or_(User.username == login, User.email == login.lower()))
        .first()
    )

def user_exists(db: Session, email: str, username: str) -> bool:
    return (
        db.query(User.id)
        .filter(or_(User.email == email.lower(), User.username == username))
        .first()
        is not None
    )

def create_user(db: Session, user_in: UserCreate) -> User:
    """Create a new user with a hashed password"""
    user = User(
        id=str(uuid.uuid4()),
        email=user_in.email.lower(),
        username=user_in.username,
        stage_name=user_in.stage_name or user_in.username,
        hashed_password=get_password_hash(user_in.password),
        bio=user_in.bio,
        profile_image_url=user_in.profile_image_url,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

def get_display_fields(user: Optional[User]) -> AuthorDisplay:
    """Display name and verification flag for a user, with the anonymous fallback"""
    if not user:
        return AuthorDisplay(stage_name=ANONYMOUS_STAGE_NAME)
    return AuthorDisplay(
        stage_name=user.stage_name or user.username or ANONYMOUS_STAGE_NAME,
        username=user.username,
        is_verified=bool(user.is_verified),
        is_bot=user.id == settings.BOT_USER_ID,
    )

def get_or_create_bot_user(db: Session) -> User:
    """The community bot posts comments under its own account"""
    bot = get_user(db, settings.BOT_USER_ID)
    if bot:
        return bot
    bot = User(
        id=settings.BOT_USER_ID,
        email="bot@thecueroom.com",
        username="thecueroom",
        stage_name=BOT_STAGE_NAME,
        hashed_password=get_password_hash(secrets.token_urlsafe(32)),
        is_verified=True,
    )
    db.add(bot)
    db.commit()
    db.refresh(bot)
    return bot
