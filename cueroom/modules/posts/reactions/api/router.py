from typing import Any, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Path
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cueroom.db.session import get_db
from cueroom.deps import get_current_active_user, get_optional_user
from cueroom.modules.user_management.models.user import User
from cueroom.modules.posts.services.post import get_post
from cueroom.modules.posts.reactions.schemas.reaction import ReactionRequest, ReactionResult
from cueroom.modules.posts.reactions.services.reaction import (
    is_valid_reaction_type, get_reaction, get_reaction_counts, upsert_reaction, delete_reaction
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

@router.post("/react", response_model=ReactionResult)
def react_to_post(
    *,
    db: Session = Depends(get_db),
    post_id: int = Path(..., description="The ID of the post to react to"),
    reaction_in: Optional[ReactionRequest] = None,
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """Set the caller's reaction on a post (one per user per post)"""
    reaction_type = reaction_in.reaction_type if reaction_in else None
    if not is_valid_reaction_type(reaction_type):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid reaction type"
        )
    _validate_post(db, post_id)

    try:
        upsert_reaction(db, current_user.id, post_id, reaction_type)
        reaction = get_reaction(db, current_user.id, post_id)
        return ReactionResult(
            reactions=get_reaction_counts(db, post_id),
            user_reaction=reaction.reaction_type if reaction else None,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating post reaction: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update reaction"
        )

@router.delete("/react", response_model=ReactionResult)
def remove_post_reaction(
    *,
    db: Session = Depends(get_db),
    post_id: int = Path(..., description="The ID of the post to remove reaction from"),
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """Remove the caller's reaction; removing a missing reaction is a no-op"""
    _validate_post(db, post_id)

    try:
        if not delete_reaction(db, current_user.id, post_id):
            logger.debug(f"No reaction from {current_user.id} on post {post_id} to remove")
        return ReactionResult(reactions=get_reaction_counts(db, post_id), user_reaction=None)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting post reaction: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete reaction"
        )

@router.get("/reactions")
def read_post_reactions(
    *,
    db: Session = Depends(get_db),
    post_id: int = Path(..., description="The ID of the post to get reaction counts for"),
    current_user: Optional[User] = Depends(get_optional_user),
) -> Any:
    """Get reaction counts by type; signed-in callers also get their own reaction"""
    _validate_post(db, post_id)

    response = {"reactions": get_reaction_counts(db, post_id)}
    if current_user:
        reaction = get_reaction(db, current_user.id, post_id)
        response["userReaction"] = reaction.reaction_type if reaction else None
    return response
