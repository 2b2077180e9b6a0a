from typing import Any
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from cueroom.db.session import get_db
from cueroom.deps import get_current_active_user
from cueroom.modules.user_management.models.user import User
from cueroom.modules.posts.services.post import get_post
from cueroom.modules.posts.comments.services.comment import create_bot_comment
from cueroom.modules.bot.schemas.bot import ModerationRequest, ModerationResult, BotReplyRequest, BotReply
from cueroom.modules.bot.services.moderation import detect_content_violations, generate_bot_response
from cueroom.modules.bot.services.replies import generate_mention_reply

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/ai-bot/moderate", response_model=ModerationResult)
def moderate_content(
    *,
    db: Session = Depends(get_db),
    moderation_in: ModerationRequest,
) -> Any:
    """
    Screen content against community guidelines.
    Flagged comments get a bot comment on the post pointing out the violation.
    """
    violations = detect_content_violations(moderation_in.content)
    if not violations:
        return ModerationResult(is_violation=False)

    bot_response = generate_bot_response(violations[0])

    if moderation_in.type == "comment" and moderation_in.post_id:
        if get_post(db, moderation_in.post_id):
            try:
                create_bot_comment(db, moderation_in.post_id, bot_response)
            except Exception as e:
                # The verdict still goes back to the caller
                db.rollback()
                logger.error(f"Error adding bot comment: {e}")
        else:
            logger.warning(f"Moderation for unknown post {moderation_in.post_id}, no bot comment added")

    return ModerationResult(
        is_violation=True,
        violation_type=violations[0],
        bot_response=bot_response,
        should_remove=True,
    )

@router.post("/ai/bot-response", response_model=BotReply)
def bot_response(
    *,
    reply_in: BotReplyRequest,
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """Reply from the bot to a comment that mentions it"""
    if not reply_in.mention_content or not reply_in.post_content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required content for bot response"
        )

    logger.info(f"Bot mentioned by {current_user.id}")
    return BotReply(
        response=generate_mention_reply(reply_in.mention_content, reply_in.post_content, reply_in.post_title)
    )
