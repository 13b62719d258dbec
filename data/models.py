"""
Data Models for LinkedIn Machine

This module contains the record types kept in the two JSON log files.
Field names in the files are camelCase so existing data stays readable.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class RecordKind(Enum):
    """The two log collections owned by the store."""
    POSTS = "posts"
    PROMPTS = "prompts"


@dataclass
class SharedPost:
    """A LinkedIn post link somebody shared in Slack."""
    url: str                           # The matched LinkedIn post URL
    user_id: str                       # Slack user id of the author
    timestamp: str                     # ISO-8601 capture time
    channel: str                       # Slack channel id
    message_text: str                  # Full original message, reused as style context

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "userId": self.user_id,
            "timestamp": self.timestamp,
            "channel": self.channel,
            "messageText": self.message_text,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SharedPost":
        # Early logs stored the text under "content"
        return cls(
            url=data.get("url", ""),
            user_id=data.get("userId", ""),
            timestamp=data.get("timestamp", ""),
            channel=data.get("channel", ""),
            message_text=data.get("messageText") or data.get("content") or "",
        )


@dataclass
class GeneratedPrompt:
    """A daily prompt or custom post the bot generated and posted."""
    id: str                            # Slack message ts, or a local unique token
    content: str                       # Generated or fallback text
    timestamp: str                     # ISO-8601 creation time
    channel: str                       # Slack channel id
    request: Optional[str] = None      # User request, custom content only
    type: Optional[str] = None         # None for daily prompts, "custom" otherwise
    image_url: Optional[str] = None
    image_prompt: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "content": self.content}
        if self.request is not None:
            data["request"] = self.request
        if self.type is not None:
            data["type"] = self.type
        if self.image_prompt is not None:
            # The custom path always records the image outcome, null on failure
            data["imageUrl"] = self.image_url
            data["imagePrompt"] = self.image_prompt
        elif self.image_url is not None:
            data["imageUrl"] = self.image_url
        data["timestamp"] = self.timestamp
        data["channel"] = self.channel
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratedPrompt":
        return cls(
            id=data.get("id", ""),
            content=data.get("content") or "",
            timestamp=data.get("timestamp", ""),
            channel=data.get("channel", ""),
            request=data.get("request"),
            type=data.get("type"),
            image_url=data.get("imageUrl"),
            image_prompt=data.get("imagePrompt"),
        )


RECORD_TYPES = {
    RecordKind.POSTS: SharedPost,
    RecordKind.PROMPTS: GeneratedPrompt,
}
