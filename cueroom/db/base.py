# Import all models here so Alembic and create_all can detect them
from cueroom.db.session import Base

from cueroom.modules.user_management.models.user import User
from cueroom.modules.posts.models.post import Post
from cueroom.modules.posts.comments.models.comment import Comment
from cueroom.modules.posts.reactions.models.reaction import Reaction
