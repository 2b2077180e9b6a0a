from typing import List, Optional, Tuple
import logging
from sqlalchemy.orm import Session

from cueroom.modules.posts.models.post import Post
from cueroom.modules.posts.comments.models.comment import Comment
from cueroom.modules.posts.comments.mentions import extract_mentions
from cueroom.modules.posts.comments.schemas.comment import CommentCreate, Comment as CommentSchema
from cueroom.modules.user_management.models.user import User
from cueroom.modules.user_management.services.user import get_display_fields, get_or_create_bot_user

logger = logging.getLogger("cueroom")

def get_comment(db: Session, comment_id: int) -> Optional[Comment]:
    """Get comment by ID"""
    return db.query(Comment).filter(Comment.id == comment_id).first()

def get_comments_by_post(db: Session, post_id: int) -> List[Tuple[Comment, Optional[User]]]:
    """Get comments for a post with their authors, newest first"""
    return (
        db.query(Comment, User)
        .outerjoin(User, User.id == Comment.user_id)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )

def to_comment_schema(comment: Comment, author: Optional[User]) -> CommentSchema:
    """Merge a comment row with its author's display fields"""
    display = get_display_fields(author)
    return CommentSchema(
        id=comment.id,
        post_id=comment.post_id,
        user_id=comment.user_id,
        parent_id=comment.parent_id,
        content=comment.content,
        mentions=comment.mentions or [],
        meme_image_url=comment.meme_image_url,
        meme_image_data=comment.meme_image_data,
        is_moderated=bool(comment.is_moderated),
        created_at=comment.created_at,
        stage_name=display.stage_name,
        username=display.username,
        is_verified=display.is_verified,
        is_bot=display.is_bot,
    )

def create_comment(db: Session, post_id: int, comment_in: CommentCreate, user_id: str) -> Comment:
    """
    Create a comment and bump the post's comment counter in the same transaction.
    """
    comment = Comment(
        post_id=post_id,
        user_id=user_id,
        parent_id=comment_in.parent_id,
        content=comment_in.content,
        mentions=comment_in.mentions or extract_mentions(comment_in.content),
        meme_image_url=comment_in.meme_image_url,
        meme_image_data=comment_in.meme_image_data,
    )
    db.add(comment)
    db.query(Post).filter(Post.id == post_id).update(
        {Post.comments_count: Post.comments_count + 1}, synchronize_session=False
    )
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(comment)
    return comment

def create_bot_comment(db: Session, post_id: int, content: str) -> Comment:
    """Store a comment authored by the community bot"""
    bot = get_or_create_bot_user(db)
    return create_comment(db, post_id, CommentCreate(content=content), bot.id)

def delete_comment(db: Session, comment: Comment) -> Comment:
    """Delete comment, detaching its replies and decrementing the post's counter"""
    post_id = comment.post_id
    db.query(Comment).filter(Comment.parent_id == comment.id).update(
        {Comment.parent_id: None}, synchronize_session=False
    )
    db.delete(comment)
    db.query(Post).filter(Post.id == post_id, Post.comments_count > 0).update(
        {Post.comments_count: Post.comments_count - 1}, synchronize_session=False
    )
    db.commit()
    return comment
