"""Optimistic reaction and comment state for a single post.

Local state changes synchronously when the user acts; the network call runs
as an asyncio task and either confirms the state with the server's answer or
rolls it back. Calls are not sequenced, so the last one to resolve wins.
"""

import asyncio
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

import httpx

from cueroom.client.api import CueRoomAPIError, CueRoomClient
from cueroom.core.config import settings
from cueroom.modules.bot.services.replies import FALLBACK_REPLY
from cueroom.modules.posts.comments.mentions import extract_mentions
from cueroom.modules.posts.reactions.types import empty_counts

logger = logging.getLogger(__name__)

BOT_STAGE_NAME = "TheCueRoom Bot"
BOT_USERNAME = "thecueroom"

_temp_ids = itertools.count(1)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class ReactionState:
    current_reaction: Optional[str] = None
    counts: Dict[str, int] = field(default_factory=empty_counts)

    def copy(self) -> "ReactionState":
        return ReactionState(self.current_reaction, dict(self.counts))


def apply_reaction(state: ReactionState, reaction: str) -> ReactionState:
    """
    Local effect of picking a reaction.

    Picking the current reaction toggles it off; picking another one moves the
    user's single reaction over. Counts never go below zero.
    """
    new_state = state.copy()
    counts = new_state.counts
    if state.current_reaction == reaction:
        counts[reaction] = max(0, counts.get(reaction, 0) - 1)
        new_state.current_reaction = None
        return new_state

    if state.current_reaction:
        previous = state.current_reaction
        counts[previous] = max(0, counts.get(previous, 0) - 1)
    counts[reaction] = counts.get(reaction, 0) + 1
    new_state.current_reaction = reaction
    return new_state


class PostCard:
    def __init__(
        self,
        post: Dict[str, Any],
        client: CueRoomClient,
        user: Optional[Dict[str, Any]] = None,
        bot_reply_delay: float = settings.BOT_REPLY_DELAY_SECONDS,
        mention_token: str = settings.BOT_MENTION_TOKEN,
    ):
        self.post = post
        self.post_id = post["id"]
        self.client = client
        self.user = user or {}
        self.bot_reply_delay = bot_reply_delay
        self.mention_token = mention_token.lower()

        # Hearts stand in for the post's like counter until counts are loaded
        counts = empty_counts()
        counts["heart"] = post.get("likesCount", 0) or 0
        self.state = ReactionState(counts=counts)
        self.comments: List[Dict[str, Any]] = []
        self._tasks: Set[asyncio.Task] = set()

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every in-flight request, including ones they start"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def load(self) -> None:
        """Fetch reaction counts and comments from the server"""
        reactions = await self.client.get_reactions(self.post_id)
        self._apply_server_reactions(reactions)
        self.comments = await self.client.get_comments(self.post_id)

    def _apply_server_reactions(self, payload: Dict[str, Any]) -> None:
        counts = empty_counts()
        counts.update(payload.get("reactions") or {})
        self.state = ReactionState(payload.get("userReaction"), counts)

    # Reactions

    def select_reaction(self, reaction: str) -> asyncio.Task:
        snapshot = self.state.copy()
        toggling_off = snapshot.current_reaction == reaction
        self.state = apply_reaction(snapshot, reaction)
        return self._spawn(self._sync_reaction(reaction, toggling_off, snapshot))

    async def _sync_reaction(self, reaction: str, toggling_off: bool, snapshot: ReactionState) -> None:
        try:
            if toggling_off:
                confirmed = await self.client.remove_reaction(self.post_id)
            else:
                confirmed = await self.client.react(self.post_id, reaction)
        except (CueRoomAPIError, httpx.HTTPError) as e:
            logger.warning(f"Reaction {reaction} on post {self.post_id} failed, rolling back: {e}")
            self.state = snapshot
            return
        if not isinstance(confirmed, dict):
            logger.warning(f"Reaction {reaction} on post {self.post_id} got a malformed answer, rolling back")
            self.state = snapshot
            return
        self._apply_server_reactions(confirmed)

    # Comments

    def _local_comment(self, content: str, parent_id: Optional[int], meme_image_url: Optional[str]) -> Dict[str, Any]:
        return {
            "id": f"temp_{_now_ms()}_{next(_temp_ids)}",
            "postId": self.post_id,
            "userId": self.user.get("id"),
            "parentId": parent_id,
            "content": content,
            "mentions": extract_mentions(content),
            "memeImageUrl": meme_image_url,
            "stageName": self.user.get("stageName"),
            "username": self.user.get("username"),
            "isVerified": bool(self.user.get("isVerified")),
            "isBot": False,
            "createdAt": None,
        }

    def submit_comment(
        self,
        content: str,
        parent_id: Optional[int] = None,
        meme_image_url: Optional[str] = None,
    ) -> Optional[asyncio.Task]:
        """Show the comment immediately and send it. Blank content is ignored."""
        content = (content or "").strip()
        if not content:
            return None

        local = self._local_comment(content, parent_id, meme_image_url)
        self.comments.append(local)
        return self._spawn(self._sync_comment(local))

    async def _sync_comment(self, local: Dict[str, Any]) -> None:
        try:
            saved = await self.client.create_comment(
                self.post_id,
                local["content"],
                mentions=local["mentions"],
                parent_id=local["parentId"],
                meme_image_url=local["memeImageUrl"],
            )
        except (CueRoomAPIError, httpx.HTTPError) as e:
            logger.warning(f"Comment on post {self.post_id} failed, removing it: {e}")
            self.comments = [c for c in self.comments if c["id"] != local["id"]]
            return

        if not isinstance(saved, dict):
            logger.warning(f"Comment on post {self.post_id} got a malformed answer, removing it")
            self.comments = [c for c in self.comments if c["id"] != local["id"]]
            return

        self.comments = [saved if c["id"] == local["id"] else c for c in self.comments]
        self.post["commentsCount"] = (self.post.get("commentsCount") or 0) + 1

        if self.mention_token in (saved.get("content") or "").lower():
            self._spawn(self._bot_reply(saved["content"]))

    async def _bot_reply(self, mention_content: str) -> None:
        try:
            answer = await self.client.bot_response(
                mention_content, self.post.get("content", ""), self.post.get("title")
            )
            reply = answer["response"]
            comment_id = f"bot_{_now_ms()}"
        except (CueRoomAPIError, httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.info(f"Bot reply unavailable, using fallback: {e}")
            reply = FALLBACK_REPLY
            comment_id = f"bot_fallback_{_now_ms()}"

        await asyncio.sleep(self.bot_reply_delay)
        self.comments.append({
            "id": comment_id,
            "postId": self.post_id,
            "userId": settings.BOT_USER_ID,
            "parentId": None,
            "content": reply,
            "mentions": [],
            "memeImageUrl": None,
            "stageName": BOT_STAGE_NAME,
            "username": BOT_USERNAME,
            "isVerified": True,
            "isBot": True,
            "createdAt": None,
        })
