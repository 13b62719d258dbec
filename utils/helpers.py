"""
Helper Utility Module

This module provides various helper functions used throughout the LinkedIn Machine application.
"""

import re
import uuid
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import urlparse

# Matches shared LinkedIn post links, e.g. https://www.linkedin.com/posts/jane_doe-activity-123
# Stops at Slack link markup: <url> and <url|label>
LINKEDIN_POST_URL_PATTERN = re.compile(r"https://(?:www\.)?linkedin\.com/posts/[^\s<>|]+")


def is_valid_url(url: str) -> bool:
    """
    Check if a URL is valid.

    Args:
        url: The URL to validate

    Returns:
        bool: True if the URL is valid, False otherwise
    """
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc])
    except Exception:
        return False


def extract_linkedin_urls(text: Optional[str]) -> List[str]:
    """
    Find every LinkedIn post URL in a message, in source order.

    Args:
        text: Message text, may be None

    Returns:
        List[str]: Matched URLs, duplicates included
    """
    if not text:
        return []
    return LINKEDIN_POST_URL_PATTERN.findall(text)


def truncate_text(text: Optional[str], max_length: int) -> str:
    """
    Cut text down to at most max_length characters.

    Args:
        text: The text to truncate
        max_length: Maximum number of characters to keep

    Returns:
        str: The truncated text ("" for None)
    """
    if not text:
        return ""
    return text[:max_length]


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with a trailing Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_local_id() -> str:
    """Unique token used as a record id when Slack gives us no message ts."""
    return uuid.uuid4().hex
