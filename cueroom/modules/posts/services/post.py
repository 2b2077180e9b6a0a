import json
from typing import List, Optional
from sqlalchemy import String, cast
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Session
import logging

from cueroom.modules.posts.models.post import Post
from cueroom.modules.posts.schemas.post import PostCreate
from cueroom.modules.posts.comments.models.comment import Comment
from cueroom.modules.posts.reactions.models.reaction import Reaction

logger = logging.getLogger("cueroom")

def get_post(db: Session, post_id: int) -> Optional[Post]:
    """Get post by ID"""
    return db.query(Post).filter(Post.id == post_id).first()

def get_posts(db: Session, limit: int = 20, offset: int = 0) -> List[Post]:
    """Get list of posts, newest first"""
    logger.debug(f"Getting posts with limit={limit}, offset={offset}")
    return (
        db.query(Post)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )

def _tag_filter(db: Session, tag: str):
    if db.get_bind().dialect.name == "postgresql":
        return cast(Post.tags, JSONB).contains([tag])
    # Other backends store the list as JSON text; match the element as it was serialized
    element = json.dumps(tag).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{element}%"
    return cast(Post.tags, String).like(pattern, escape="\\")

def get_posts_by_tag(db: Session, tag: str, limit: int = 20, offset: int = 0) -> List[Post]:
    """Get posts carrying a tag, newest first"""
    tag = tag.strip().lstrip("#").lower()
    if not tag:
        return []
    return (
        db.query(Post)
        .filter(_tag_filter(db, tag))
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )

def create_post(db: Session, post_in: PostCreate, user_id: str) -> Post:
    """Create new post"""
    logger.info(f"Creating post for user ID: {user_id}")
    post = Post(
        user_id=user_id,
        title=post_in.title,
        content=post_in.content,
        tags=post_in.tags,
        image_url=post_in.image_url,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post

def delete_post(db: Session, post: Post) -> Post:
    """
    Delete post and all associated comments and reactions
    """
    logger.info(f"Deleting post with ID: {post.id}")
    db.query(Reaction).filter(Reaction.post_id == post.id).delete(synchronize_session=False)
    # Detach reply threads so the self-referencing foreign key doesn't block the bulk delete
    db.query(Comment).filter(Comment.post_id == post.id).update({Comment.parent_id: None}, synchronize_session=False)
    db.query(Comment).filter(Comment.post_id == post.id).delete(synchronize_session=False)

    db.delete(post)
    db.commit()
    return post
