from typing import Any, List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from cueroom.db.session import get_db
from cueroom.deps import get_current_active_user
from cueroom.modules.bot.services.moderation import BOT_NAME, detect_content_violations, generate_bot_response
from cueroom.modules.user_management.models.user import User
from cueroom.modules.posts.schemas.post import Post as PostSchema, PostCreate
from cueroom.modules.posts.services.post import (
    get_post, get_posts, get_posts_by_tag, create_post, delete_post
)

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_post_or_404(db: Session, post_id: int) -> Any:
    post = get_post(db, post_id=post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post

@router.get("", response_model=List[PostSchema])
def read_posts(
    db: Session = Depends(get_db),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    tag: Optional[str] = None,
) -> Any:
    """
    Retrieve posts newest first, optionally filtered by tag.
    """
    if tag:
        return get_posts_by_tag(db, tag, limit=limit, offset=offset)
    return get_posts(db, limit=limit, offset=offset)

@router.post("", response_model=PostSchema, status_code=status.HTTP_201_CREATED)
def create_new_post(
    *,
    db: Session = Depends(get_db),
    post_in: PostCreate,
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """
    Create new post. Content breaking community guidelines is bounced with a bot message.
    """
    violations = detect_content_violations(f"{post_in.title}\n{post_in.content}")
    if violations:
        logger.info(f"Post by {current_user.id} rejected for {violations[0]}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": generate_bot_response(violations[0]),
                "violationType": violations[0],
                "moderatedBy": BOT_NAME,
            },
        )

    try:
        return create_post(db, post_in, current_user.id)
    except Exception as e:
        logger.error(f"Error creating post: {e}")
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create post"
        )

@router.get("/{post_id}", response_model=PostSchema)
def read_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: int,
) -> Any:
    """
    Get post by ID.
    """
    return _get_post_or_404(db, post_id)

@router.delete("/{post_id}", response_model=PostSchema)
def delete_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: int,
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """
    Delete a post together with its reactions and comments.
    Only the author or an admin may do this.
    """
    post = _get_post_or_404(db, post_id)

    if post.user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions",
        )

    # Serialize before the row is gone from the session
    deleted = PostSchema.model_validate(post)
    delete_post(db, post)
    return deleted
