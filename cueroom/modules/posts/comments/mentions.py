import re
from typing import List

MENTION_PATTERN = re.compile(r"@(\w+)")

def extract_mentions(content: str) -> List[str]:
    """Usernames mentioned with @ in a comment"""
    return MENTION_PATTERN.findall(content or "")
