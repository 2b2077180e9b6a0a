"""Authentication router for username/password sign-in"""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from cueroom.core.security import create_access_token
from cueroom.db.session import get_db
from cueroom.deps import get_current_user
from cueroom.modules.auth.schemas.auth import Token, RegisterRequest
from cueroom.modules.auth.services.auth import authenticate_user
from cueroom.modules.user_management.models.user import User
from cueroom.modules.user_management.schemas.user import User as UserSchema
from cueroom.modules.user_management.services.user import create_user, user_exists

router = APIRouter()

@router.post("/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def register(
    *,
    db: Session = Depends(get_db),
    user_in: RegisterRequest,
) -> Any:
    """Register a new artist account"""
    if user_exists(db, email=user_in.email, username=user_in.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email or username already registered",
        )
    return create_user(db, user_in)

@router.post("/login", response_model=Token)
def login(
    db: Session = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> Token:
    """Exchange username (or email) and password for a bearer token"""
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(access_token=create_access_token(user.id))

@router.get("/me", response_model=UserSchema)
def read_current_user(current_user: User = Depends(get_current_user)) -> Any:
    """Return the signed-in user"""
    return current_user
