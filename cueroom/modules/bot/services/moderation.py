"""
Rule-based content moderation for the community feed.
Detects contact details, sketchy links and sales pitches, and produces
the TheCueRoom Bot's canned responses for each violation type.
"""
import logging
import random
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

BOT_NAME = "TheCueRoom Bot"

CONTACT_PATTERNS = [
    re.compile(r"\b\d{10}\b"),  # phone numbers
    re.compile(r"\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b"),
    re.compile(r"\bwhatsapp\b|\binstagram\b|\btelegram\b|\bcontact me\b"),
    re.compile(r"\bpay\b.*\bmoney\b|\bbuy\b.*\bnow\b|\bsale\b|\bpromo\b"),
]

UNSAFE_LINK_PATTERNS = [
    re.compile(r"bit\.ly|tinyurl|t\.co|short\.link"),
    re.compile(r"\.tk\b|\.ml\b|\.ga\b|\.cf\b"),
    re.compile(r"download.*free|crack|pirate|torrent"),
]

MEME_RESTRICTED_TERMS = ["hate", "offensive", "inappropriate", "spam", "scam"]

BOT_RESPONSES = {
    "contact_info": [
        "🤖 Whoa there! Keep the personal details for the DMs, not the feed. This isn't a dating app for DJs! 😄",
        "🎧 TheCueRoom Bot here! Contact info in posts? That's a no-go! Keep it mysterious like a masked DJ set! 🎭",
        "🚫 Personal details detected! Let's keep the community feed for music talk, not phone book entries! 📞❌",
    ],
    "promotional": [
        "💰 TheCueRoom Bot says: This ain't a marketplace! Save the sales pitch for your SoundCloud bio! 🛍️❌",
        "🎪 Promotional content detected! This is a community space, not a bazaar! Keep it about the beats! 🥁",
        "📢 Easy on the sales talk! We're here to discuss 303 basslines, not credit card lines! 💳🚫",
    ],
    "unsafe_link": [
        "🔗 Suspicious link alert! That URL looks sketchier than a free Nexus preset pack! 🎹⚠️",
        "🛡️ Bot security mode: That link smells fishier than week-old sushi! Stick to legit music platforms! 🍣❌",
        "⚠️ Link flagged! Unless it's leading to Beatport or Bandcamp, we're not clicking! 🖱️🚫",
    ],
    "spam": [
        "🤖 Spam detected! This content is more repetitive than a broken loop pedal! 🔄❌",
        "🚨 Bot alert: Copy-paste content spotted! Be original like your unreleased tracks! 🎵✨",
        "📝 Generic message detected! Put some soul into it, like your favorite acid house track! 🏠💖",
    ],
}

def detect_content_violations(content: str) -> List[str]:
    """
    Scan content for community guideline violations.

    Args:
        content: Post or comment text

    Returns:
        Violation types in detection order, possibly repeated
    """
    violations: List[str] = []
    lower_content = (content or "").lower()

    for pattern in CONTACT_PATTERNS:
        if pattern.search(lower_content):
            violations.append("contact_info")

    for pattern in UNSAFE_LINK_PATTERNS:
        if pattern.search(lower_content):
            violations.append("unsafe_link")

    if "buy" in lower_content and "now" in lower_content:
        violations.append("promotional")

    return violations

def generate_bot_response(violation_type: str, rng: Optional[random.Random] = None) -> str:
    """Pick a canned bot line for a violation type, falling back to the spam lines"""
    responses = BOT_RESPONSES.get(violation_type, BOT_RESPONSES["spam"])
    return (rng or random).choice(responses)

def is_meme_caption_allowed(content: str) -> bool:
    """Memes attached to comments must not carry restricted terms in their caption"""
    lower_content = (content or "").lower()
    return not any(term in lower_content for term in MEME_RESTRICTED_TERMS)
