from typing import Any, List
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Path
from sqlalchemy.orm import Session

from cueroom.db.session import get_db
from cueroom.deps import get_current_active_user
from cueroom.modules.bot.services.moderation import BOT_NAME, is_meme_caption_allowed
from cueroom.modules.user_management.models.user import User
from cueroom.modules.user_management.services.user import get_user
from cueroom.modules.posts.services.post import get_post
from cueroom.modules.posts.comments.schemas.comment import Comment as CommentSchema, CommentCreate
from cueroom.modules.posts.comments.services.comment import (
    get_comment, get_comments_by_post, to_comment_schema, create_comment, delete_comment
)

router = APIRouter()
logger = logging.getLogger("cueroom")

def _validate_post(db: Session, post_id: int) -> None:
    """Validate post exists or raise HTTPException"""
    post = get_post(db, post_id=post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )

def _validate_comment(db: Session, comment_id: int, post_id: int) -> Any:
    """Validate comment exists and belongs to the post, and return it"""
    comment = get_comment(db, comment_id=comment_id)
    if not comment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found"
        )

    if comment.post_id != post_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Comment does not belong to the specified post"
        )

    return comment

@router.post("", response_model=CommentSchema)
def create_new_comment(
    *,
    db: Session = Depends(get_db),
    post_id: int = Path(..., description="The ID of the post to comment on"),
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """Create new comment on a post"""
    if not comment_in.content or not comment_in.content.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Comment content cannot be empty"
        )

    if comment_in.meme_image_url or comment_in.meme_image_data:
        if not is_meme_caption_allowed(comment_in.content):
            logger.info(f"Meme comment from {current_user.id} rejected by moderation")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "message": "Meme content violates community guidelines. Please keep memes fun and respectful!",
                    "moderatedBy": BOT_NAME,
                },
            )

    _validate_post(db, post_id)
    if comment_in.parent_id is not None:
        try:
            _validate_comment(db, comment_in.parent_id, post_id)
        except HTTPException as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid parent comment: {e.detail}")

    try:
        comment = create_comment(db, post_id, comment_in, current_user.id)
    except Exception as e:
        logger.error(f"Error creating comment: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add comment"
        )

    if comment.meme_image_url:
        logger.info(f"Meme attached to comment {comment.id}")

    return to_comment_schema(comment, current_user)

@router.get("", response_model=List[CommentSchema])
def read_comments_by_post_id(
    *,
    db: Session = Depends(get_db),
    post_id: int = Path(..., description="The ID of the post to get comments for"),
) -> Any:
    """Get comments for a post, newest first"""
    _validate_post(db, post_id)
    return [to_comment_schema(comment, author) for comment, author in get_comments_by_post(db, post_id)]

@router.delete("/{comment_id}", response_model=CommentSchema)
def delete_comment_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: int = Path(..., description="The ID of the post"),
    comment_id: int,
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """Delete a comment (author or admin)"""
    _validate_post(db, post_id)
    comment = _validate_comment(db, comment_id, post_id)
    if comment.user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )

    author = current_user if comment.user_id == current_user.id else get_user(db, comment.user_id)
    response = to_comment_schema(comment, author)
    delete_comment(db, comment)
    return response
