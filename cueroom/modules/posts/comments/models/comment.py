from sqlalchemy import Boolean, Column, Integer, String, DateTime, Text, ForeignKey, JSON
from sqlalchemy.sql import func

from cueroom.db.session import Base

class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("comments.id"), nullable=True)
    content = Column(Text, nullable=False)
    mentions = Column(JSON, default=list)
    meme_image_url = Column(Text, nullable=True)
    meme_image_data = Column(Text, nullable=True)
    is_moderated = Column(Boolean, default=False)
    created_at = Column(DateTime, default=func.now())
