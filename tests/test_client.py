import asyncio
import json

import httpx
import pytest

from cueroom.client.api import CueRoomAPIError, CueRoomClient
from cueroom.client.post_card import PostCard, ReactionState, apply_reaction
from cueroom.modules.bot.services.replies import FALLBACK_REPLY
from cueroom.modules.posts.reactions.types import empty_counts

POST = {"id": 1, "title": "Warehouse set", "content": "Recorded live", "likesCount": 4, "commentsCount": 0}
USER = {"id": "u1", "username": "acid_annie", "stageName": "Acid Annie"}


def _counts(**values):
    counts = empty_counts()
    counts.update(values)
    return counts


class FakeServer:
    """Answers the post card's calls the way the API does, or fails on demand"""

    def __init__(self, fail_reactions=False, fail_comments=False, bot=None):
        self.requests = []
        self.fail_reactions = fail_reactions
        self.fail_comments = fail_comments
        self.bot = bot
        self.reactions = {}
        self.comment_ids = 100

    def _counts(self):
        counts = empty_counts()
        for reaction in self.reactions.values():
            counts[reaction] += 1
        return counts

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        path = request.url.path
        if path.endswith("/react"):
            if self.fail_reactions:
                return httpx.Response(500, json={"message": "Failed to update reaction"})
            if request.method == "POST":
                self.reactions["u1"] = json.loads(request.content)["reactionType"]
            else:
                self.reactions.pop("u1", None)
            return httpx.Response(
                200, json={"success": True, "reactions": self._counts(), "userReaction": self.reactions.get("u1")}
            )
        if path.endswith("/reactions"):
            return httpx.Response(200, json={"reactions": self._counts(), "userReaction": self.reactions.get("u1")})
        if path.endswith("/comments") and request.method == "POST":
            if self.fail_comments:
                return httpx.Response(500, json={"message": "Failed to add comment"})
            body = json.loads(request.content)
            self.comment_ids += 1
            return httpx.Response(200, json={"id": self.comment_ids, "content": body["content"], "isBot": False})
        if path.endswith("/comments"):
            return httpx.Response(200, json=[])
        if path == "/api/ai/bot-response":
            if self.bot is None:
                raise httpx.ConnectError("bot unreachable", request=request)
            return httpx.Response(200, json={"response": self.bot})
        return httpx.Response(404, json={"message": "Not Found"})


def _card(server, **kwargs):
    client = CueRoomClient(base_url="http://testserver", token="token", transport=httpx.MockTransport(server))
    return PostCard(dict(POST), client, user=USER, bot_reply_delay=0, **kwargs)


def test_apply_reaction_toggle_and_move():
    state = ReactionState(None, _counts(laugh=2))

    state = apply_reaction(state, "laugh")
    assert state.current_reaction == "laugh"
    assert state.counts["laugh"] == 3

    state = apply_reaction(state, "laugh")
    assert state.current_reaction is None
    assert state.counts["laugh"] == 2

    state = apply_reaction(ReactionState("heart", _counts(heart=1)), "like")
    assert state.current_reaction == "like"
    assert state.counts["heart"] == 0
    assert state.counts["like"] == 1


def test_apply_reaction_never_goes_negative():
    state = apply_reaction(ReactionState("heart", _counts()), "heart")
    assert state.counts["heart"] == 0


def test_heart_count_is_seeded_from_likes_count():
    async def scenario():
        card = _card(FakeServer())
        assert card.state.counts["heart"] == 4
        assert card.state.current_reaction is None
        await card.client.aclose()

    asyncio.run(scenario())


def test_reaction_is_applied_before_the_server_answers_then_confirmed():
    async def scenario():
        server = FakeServer()
        card = _card(server)
        await card.load()

        card.select_reaction("laugh")
        # Local state already moved while the request is still in flight
        assert card.state.current_reaction == "laugh"
        assert card.state.counts["laugh"] == 1

        await card.drain()
        assert card.state.current_reaction == "laugh"
        assert card.state.counts == _counts(laugh=1)
        assert ("POST", "/api/posts/1/react") in server.requests

        card.select_reaction("laugh")
        assert card.state.current_reaction is None
        await card.drain()
        assert ("DELETE", "/api/posts/1/react") in server.requests
        assert card.state.counts == _counts()
        await card.client.aclose()

    asyncio.run(scenario())


def test_failed_reaction_restores_the_snapshot():
    async def scenario():
        server = FakeServer()
        card = _card(server)
        await card.load()
        card.select_reaction("heart")
        await card.drain()
        before = card.state.copy()

        server.fail_reactions = True
        card.select_reaction("like")
        assert card.state.current_reaction == "like"
        assert card.state.counts["heart"] == 0

        await card.drain()
        assert card.state == before
        await card.client.aclose()

    asyncio.run(scenario())


def test_network_failure_restores_the_snapshot():
    def unreachable(request):
        raise httpx.ConnectError("offline", request=request)

    async def scenario():
        client = CueRoomClient(base_url="http://testserver", transport=httpx.MockTransport(unreachable))
        card = PostCard(dict(POST), client)
        card.select_reaction("explode")
        await card.drain()
        assert card.state.current_reaction is None
        assert card.state.counts == _counts(heart=4)
        await client.aclose()

    asyncio.run(scenario())


def test_comment_is_shown_then_replaced_by_the_saved_one():
    async def scenario():
        card = _card(FakeServer())
        card.submit_comment("  big tune  ")
        assert len(card.comments) == 1
        assert card.comments[0]["id"].startswith("temp_")
        assert card.comments[0]["content"] == "big tune"
        assert card.comments[0]["stageName"] == "Acid Annie"

        await card.drain()
        assert card.comments == [{"id": 101, "content": "big tune", "isBot": False}]
        assert card.post["commentsCount"] == 1
        await card.client.aclose()

    asyncio.run(scenario())


def test_failed_comment_is_removed():
    async def scenario():
        card = _card(FakeServer(fail_comments=True))
        card.submit_comment("lost in the void")
        assert len(card.comments) == 1

        await card.drain()
        assert card.comments == []
        assert card.post["commentsCount"] == 0
        await card.client.aclose()

    asyncio.run(scenario())


def test_blank_comment_is_not_sent():
    async def scenario():
        server = FakeServer()
        card = _card(server)
        assert card.submit_comment("   ") is None
        assert card.comments == []
        assert server.requests == []
        await card.client.aclose()

    asyncio.run(scenario())


def test_mentioning_the_bot_appends_its_reply():
    async def scenario():
        server = FakeServer(bot="Nice flow in this mix!")
        card = _card(server)
        card.submit_comment("@TheCueRoom rate my mix")
        await card.drain()

        assert [c["content"] for c in card.comments] == ["@TheCueRoom rate my mix", "Nice flow in this mix!"]
        bot_comment = card.comments[1]
        assert bot_comment["isBot"] is True
        assert bot_comment["id"].startswith("bot_")
        assert bot_comment["stageName"] == "TheCueRoom Bot"
        assert ("POST", "/api/ai/bot-response") in server.requests
        await card.client.aclose()

    asyncio.run(scenario())


def test_bot_fallback_when_reply_fails():
    async def scenario():
        card = _card(FakeServer(bot=None))
        card.submit_comment("hey @thecueroom")
        await card.drain()

        assert card.comments[-1]["content"] == FALLBACK_REPLY
        assert card.comments[-1]["id"].startswith("bot_fallback_")
        await card.client.aclose()

    asyncio.run(scenario())


def test_no_bot_call_without_mention():
    async def scenario():
        server = FakeServer(bot="unused")
        card = _card(server)
        card.submit_comment("no mentions here")
        await card.drain()

        assert len(card.comments) == 1
        assert ("POST", "/api/ai/bot-response") not in server.requests
        await card.client.aclose()

    asyncio.run(scenario())


def test_client_raises_api_error_with_server_message():
    async def scenario():
        client = CueRoomClient(base_url="http://testserver", transport=httpx.MockTransport(FakeServer(fail_comments=True)))
        with pytest.raises(CueRoomAPIError) as excinfo:
            await client.create_comment(1, "hello")
        assert excinfo.value.status_code == 500
        assert excinfo.value.message == "Failed to add comment"
        await client.aclose()

    asyncio.run(scenario())


@pytest.mark.parametrize(
    "answer",
    [
        httpx.Response(200, text="<html>proxy</html>"),
        httpx.Response(502, json=["bad gateway"]),
        httpx.Response(200, json=["not", "an", "object"]),
    ],
)
def test_unusable_answers_roll_the_reaction_back(answer):
    async def scenario():
        client = CueRoomClient(base_url="http://testserver", transport=httpx.MockTransport(lambda request: answer))
        card = PostCard(dict(POST, likesCount=0), client)
        card.select_reaction("heart")
        assert card.state.current_reaction == "heart"

        await card.drain()
        assert card.state.current_reaction is None
        assert card.state.counts == _counts()
        await client.aclose()

    asyncio.run(scenario())


def test_error_without_message_object_uses_body_text():
    async def scenario():
        client = CueRoomClient(
            base_url="http://testserver",
            transport=httpx.MockTransport(lambda request: httpx.Response(502, json=["bad gateway"])),
        )
        with pytest.raises(CueRoomAPIError) as excinfo:
            await client.react(1, "heart")
        assert excinfo.value.status_code == 502
        assert "bad gateway" in excinfo.value.message
        await client.aclose()

    asyncio.run(scenario())


def test_non_json_success_raises_api_error():
    async def scenario():
        client = CueRoomClient(
            base_url="http://testserver",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>proxy</html>")),
        )
        with pytest.raises(CueRoomAPIError) as excinfo:
            await client.get_reactions(1)
        assert excinfo.value.status_code == 200
        await client.aclose()

    asyncio.run(scenario())


def test_last_reaction_answer_to_arrive_wins():
    async def scenario():
        release_heart = asyncio.Event()

        async def handler(request):
            reaction = json.loads(request.content)["reactionType"]
            if reaction == "heart":
                await release_heart.wait()
            return httpx.Response(
                200, json={"success": True, "reactions": _counts(**{reaction: 1}), "userReaction": reaction}
            )

        client = CueRoomClient(base_url="http://testserver", transport=httpx.MockTransport(handler))
        card = PostCard(dict(POST, likesCount=0), client)

        card.select_reaction("heart")
        laugh = card.select_reaction("laugh")
        assert card.state.current_reaction == "laugh"

        await laugh
        assert card.state.current_reaction == "laugh"
        assert card.state.counts == _counts(laugh=1)

        # The heart answer was sent first but resolves last, so it overwrites
        release_heart.set()
        await card.drain()
        assert card.state.current_reaction == "heart"
        assert card.state.counts == _counts(heart=1)
        await client.aclose()

    asyncio.run(scenario())


def test_comment_count_starts_from_null():
    async def scenario():
        card = _card(FakeServer())
        card.post["commentsCount"] = None
        card.submit_comment("first one")
        await card.drain()

        assert card.post["commentsCount"] == 1
        assert card.comments[0]["id"] == 101
        await card.client.aclose()

    asyncio.run(scenario())
