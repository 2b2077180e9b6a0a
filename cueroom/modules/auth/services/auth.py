import logging
from typing import Optional
from sqlalchemy.orm import Session

from cueroom.core.security import verify_password
from cueroom.modules.user_management.models.user import User
from cueroom.modules.user_management.services.user import get_user_by_login

logger = logging.getLogger("cueroom")

def authenticate_user(db: Session, login: str, password: str) -> Optional[User]:
    """Return the user for a username/email and password pair, None when they don't match"""
    user = get_user_by_login(db, login.strip())
    if not user:
        logger.info(f"Login attempt for unknown user {login}")
        return None
    if not verify_password(password, user.hashed_password):
        logger.info(f"Invalid password for user {user.id}")
        return None
    return user
