"""Replies for @thecueroom mentions in comments"""
from typing import Optional

FALLBACK_REPLY = "Hey! Thanks for mentioning me. I'm here to help with music advice and community support! 🎧"

_KEYWORD_REPLIES = [
    (("track", "song"), "This track has some serious underground energy! The production quality is solid 🔥"),
    (("mix", "set"), "Nice flow in this mix! Perfect for those late-night warehouse sessions 🎧"),
    (("event", "gig"), "This event looks fire! India's underground scene keeps getting stronger 💪"),
]

_DEFAULT_REPLY = "Thanks for the mention! Keep pushing the boundaries of underground music 🎵"

def generate_mention_reply(mention_content: str, post_content: str, post_title: Optional[str] = None) -> str:
    """Keyword-matched reply to a comment that mentions the bot"""
    lower_content = mention_content.lower()
    for keywords, reply in _KEYWORD_REPLIES:
        if any(keyword in lower_content for keyword in keywords):
            return reply
    return _DEFAULT_REPLY
