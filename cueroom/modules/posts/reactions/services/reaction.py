from typing import Any, Dict, Optional
import logging
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cueroom.modules.posts.models.post import Post
from cueroom.modules.posts.reactions.models.reaction import Reaction
from cueroom.modules.posts.reactions.types import REACTION_TYPES, empty_counts

logger = logging.getLogger("cueroom")

def is_valid_reaction_type(reaction_type: Any) -> bool:
    return isinstance(reaction_type, str) and reaction_type in REACTION_TYPES

def get_reaction(db: Session, user_id: str, post_id: int) -> Optional[Reaction]:
    """Get reaction by user ID and post ID"""
    return (
        db.query(Reaction)
        .filter(Reaction.user_id == user_id, Reaction.post_id == post_id)
        .first()
    )

def get_reaction_counts(db: Session, post_id: int) -> Dict[str, int]:
    """Get reaction counts by type for a post, every known type present"""
    rows = (
        db.query(Reaction.reaction_type, func.count(Reaction.id).label("count"))
        .filter(Reaction.post_id == post_id)
        .group_by(Reaction.reaction_type)
        .all()
    )

    counts = empty_counts()
    for reaction_type, count in rows:
        if reaction_type in counts:
            counts[reaction_type] = count
    return counts

def _update_reaction_type(db: Session, user_id: str, post_id: int, reaction_type: str) -> int:
    return (
        db.query(Reaction)
        .filter(Reaction.user_id == user_id, Reaction.post_id == post_id)
        .update(
            {Reaction.reaction_type: reaction_type, Reaction.updated_at: func.now()},
            synchronize_session=False,
        )
    )

def upsert_reaction(db: Session, user_id: str, post_id: int, reaction_type: str) -> Reaction:
    """
    Set the user's reaction on a post, replacing any previous type.

    Tries an update first and inserts when the user hasn't reacted yet.
    A concurrent insert for the same pair trips the unique constraint; the
    insert is then rolled back and the update re-applied, so the latest call wins.
    """
    if _update_reaction_type(db, user_id, post_id, reaction_type):
        db.commit()
        return get_reaction(db, user_id, post_id)

    try:
        db.add(Reaction(user_id=user_id, post_id=post_id, reaction_type=reaction_type))
        db.query(Post).filter(Post.id == post_id).update(
            {Post.likes_count: Post.likes_count + 1}, synchronize_session=False
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Concurrent reaction insert for user {user_id} on post {post_id}, updating instead")
        _update_reaction_type(db, user_id, post_id, reaction_type)
        db.commit()

    return get_reaction(db, user_id, post_id)

def delete_reaction(db: Session, user_id: str, post_id: int) -> bool:
    """Remove the user's reaction from a post. Returns False when there was none."""
    deleted = (
        db.query(Reaction)
        .filter(Reaction.user_id == user_id, Reaction.post_id == post_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        return False

    db.query(Post).filter(Post.id == post_id, Post.likes_count > 0).update(
        {Post.likes_count: Post.likes_count - 1}, synchronize_session=False
    )
    db.commit()
    return True
