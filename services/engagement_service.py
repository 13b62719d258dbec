"""
Engagement Service Module

Watches channel messages for shared LinkedIn post links. For every message
that contains at least one link it reacts once, records one SharedPost per
link and replies once in thread pointing the team at the first link.
"""

from typing import Any, Dict

from config.settings import Settings
from data.models import RecordKind, SharedPost
from data.protocols import LogStorage
from services.protocols import ChatPlatformService
from utils.exceptions import LinkedInMachineError
from utils.helpers import extract_linkedin_urls, utc_now_iso
from utils.logger import get_logger

logger = get_logger(__name__)

ENGAGEMENT_REPLY_TEMPLATE = "Great post! 🎉 Team, show some love on this LinkedIn post: {url}"


class EngagementService:
    """Service reacting to shared LinkedIn posts."""

    def __init__(self, store: LogStorage, slack_service: ChatPlatformService, settings: Settings):
        self.store = store
        self.slack_service = slack_service
        self.settings = settings

    def handle_message(self, message: Dict[str, Any]) -> int:
        """
        Process one inbound message event.

        Steps run in order (react, record, reply); the first failure is
        logged and the remaining steps are skipped.

        Args:
            message: Slack message event payload

        Returns:
            int: Number of LinkedIn URLs handled, 0 if skipped or a step failed
        """
        if message.get("subtype") == "bot_message" or message.get("bot_id"):
            return 0

        text = message.get("text")
        urls = extract_linkedin_urls(text)
        if not urls:
            return 0

        channel = message.get("channel", "")
        ts = message.get("ts", "")
        logger.info(f"Found {len(urls)} LinkedIn URL(s) in {channel} from {message.get('user')}")

        try:
            self.slack_service.add_reaction(channel, ts, self.settings.reaction_emoji)

            captured_at = utc_now_iso()
            posts = [
                SharedPost(
                    url=url,
                    user_id=message.get("user", ""),
                    timestamp=captured_at,
                    channel=channel,
                    message_text=text,
                )
                for url in urls
            ]
            self.store.append(RecordKind.POSTS, posts)

            self.slack_service.post_message(
                channel,
                ENGAGEMENT_REPLY_TEMPLATE.format(url=urls[0]),
                thread_ts=ts,
            )
            return len(posts)

        except LinkedInMachineError as e:
            logger.error(f"Error handling LinkedIn URL: {e}")
        except Exception as e:
            logger.error(f"Unexpected error handling LinkedIn URL: {e}", exc_info=True)
        return 0
