"""
Slack Service Module

This module handles outbound calls to the Slack Web API: posting messages
(optionally threaded, optionally with Block Kit layout) and adding reactions.
Slack API failures are translated into the application's exception types.
"""

from typing import Any, Dict, List, Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from utils.exceptions import PostingError, ReactionError
from utils.logger import get_logger

logger = get_logger(__name__)


class SlackService:
    """Service for Slack Web API calls made by the bot."""

    def __init__(self, client: WebClient):
        """
        Initialize the Slack service.

        Args:
            client: Authenticated Slack WebClient, usually the Bolt app's client
        """
        self.client = client

    def post_message(
        self,
        channel: str,
        text: str,
        blocks: Optional[List[Dict[str, Any]]] = None,
        thread_ts: Optional[str] = None,
    ) -> Optional[str]:
        """
        Post a message to a channel or thread.

        Args:
            channel: Slack channel id
            text: Plain-text body, also the notification fallback for blocks
            blocks: Optional Block Kit layout
            thread_ts: Parent message ts to reply in a thread

        Returns:
            Optional[str]: The ts of the posted message

        Raises:
            PostingError: If Slack rejects the message
        """
        kwargs: Dict[str, Any] = {"channel": channel, "text": text}
        if blocks:
            kwargs["blocks"] = blocks
        if thread_ts:
            kwargs["thread_ts"] = thread_ts

        try:
            response = self.client.chat_postMessage(**kwargs)
        except SlackApiError as e:
            error = e.response.get("error") if e.response is not None else e
            raise PostingError(f"Failed to post message to {channel}: {error}") from e

        ts = response.get("ts")
        logger.info(f"Posted message to {channel} (ts={ts})")
        return ts

    def add_reaction(self, channel: str, timestamp: str, name: str) -> None:
        """
        Add an emoji reaction to a message.

        Args:
            channel: Slack channel id
            timestamp: ts of the message to react to
            name: Emoji name without colons

        Raises:
            ReactionError: If Slack rejects the reaction
        """
        try:
            self.client.reactions_add(channel=channel, timestamp=timestamp, name=name)
        except SlackApiError as e:
            error = e.response.get("error") if e.response is not None else e
            raise ReactionError(f"Failed to add :{name}: to {channel}/{timestamp}: {error}") from e
        logger.debug(f"Reacted :{name}: to {channel}/{timestamp}")
