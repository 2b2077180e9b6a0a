"""Async HTTP client for the TheCueRoom REST API.

Thin wrapper over httpx used by the post card. Non-2xx answers are raised as
CueRoomAPIError carrying the server's message; transport failures surface as
httpx errors. There is no retry: callers decide how to recover.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0  # seconds


class CueRoomAPIError(Exception):
    """Error answer from the API"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class CueRoomClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url, headers=headers, transport=transport, timeout=timeout
        )

    async def __aenter__(self) -> "CueRoomClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._client.request(method, path, json=json)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("message"):
                message = str(body["message"])
            else:
                message = response.text or response.reason_phrase
            logger.debug(f"{method} {path} failed with {response.status_code}: {message}")
            raise CueRoomAPIError(response.status_code, message)

        try:
            return response.json()
        except ValueError:
            # A proxy or load balancer page instead of an API answer
            logger.debug(f"{method} {path} answered {response.status_code} with a non-JSON body")
            raise CueRoomAPIError(response.status_code, "Unexpected non-JSON response")

    async def react(self, post_id: int, reaction_type: str) -> Dict[str, Any]:
        return await self._request("POST", f"/api/posts/{post_id}/react", {"reactionType": reaction_type})

    async def remove_reaction(self, post_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/api/posts/{post_id}/react")

    async def get_reactions(self, post_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/api/posts/{post_id}/reactions")

    async def create_comment(
        self,
        post_id: int,
        content: str,
        mentions: Optional[List[str]] = None,
        parent_id: Optional[int] = None,
        meme_image_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"content": content, "mentions": mentions or []}
        if parent_id is not None:
            payload["parentId"] = parent_id
        if meme_image_url:
            payload["memeImageUrl"] = meme_image_url
        return await self._request("POST", f"/api/posts/{post_id}/comments", payload)

    async def get_comments(self, post_id: int) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/api/posts/{post_id}/comments")

    async def bot_response(self, mention_content: str, post_content: str, post_title: Optional[str] = None) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/api/ai/bot-response",
            {"mentionContent": mention_content, "postContent": post_content, "postTitle": post_title},
        )
