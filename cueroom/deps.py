from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from cueroom.core import security
from cueroom.core.config import settings
from cueroom.db.session import get_db
from cueroom.modules.user_management.models.user import User
from cueroom.modules.user_management.services.user import get_user

# OAuth2 token URL
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)

def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Bearer"},
    )

def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    """
    Dependency for getting current authenticated user
    """
    user_id = security.verify_access_token(token)
    if not user_id:
        raise _credentials_exception()

    user = get_user(db, user_id=user_id)
    if not user:
        raise _credentials_exception()

    return user

def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """
    Dependency for getting a current user that is not suspended
    """
    if current_user.is_suspended:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account suspended",
        )

    return current_user

def get_optional_user(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(optional_oauth2_scheme),
) -> Optional[User]:
    """
    Dependency for endpoints that are public but personalise the answer for a signed-in caller
    """
    if not token:
        return None
    user_id = security.verify_access_token(token)
    if not user_id:
        return None
    return get_user(db, user_id=user_id)
