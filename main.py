"""
LinkedIn Machine Application

This is the main entry point for the LinkedIn Machine Slack bot.
It posts daily LinkedIn content ideas, generates custom posts (with an
optional illustration) on request, and cheers on teammates who share
their LinkedIn posts.
"""

import argparse
import logging
import sys
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from fastapi import FastAPI, Request
from slack_bolt import App
from slack_bolt.adapter.fastapi import SlackRequestHandler

from config.settings import Settings, get_config_summary, load_settings
from config.validators import validate_settings
from data.models import GeneratedPrompt, RecordKind
from data.protocols import LogStorage
from data.store import JsonLogStore
from services.ai_service import AIService
from services.context_builder import build_context
from services.engagement_service import EngagementService
from services.image_service import ImageService, describe_image
from services.protocols import ChatPlatformService, ContentGeneratorProtocol, ImageGeneratorProtocol
from services.slack_service import SlackService
from utils.exceptions import ConfigurationError, ContentGenerationError, LinkedInMachineError
from utils.helpers import generate_local_id, utc_now_iso
from utils.logger import get_logger, setup_file_logging

# Set up logging
logger = get_logger(__name__)

HEALTH_STATUS = "LinkedIn Machine is running!"

DAILY_PROMPT_HEADER = "🚀 *Daily LinkedIn Content Idea*"
DAILY_PROMPT_FOOTER = "_Once you post, share your LinkedIn URL in this thread so the team can engage! 💪_"
CUSTOM_CONTENT_HEADER = "✨ *Custom LinkedIn Content*"
IMAGE_READY_CAPTION = "✅ Image generated. Right-click to save it for your post."
IMAGE_UNAVAILABLE_CAPTION = "⚠️ Image generation unavailable, the post text is ready to use on its own."

DAILY_PROMPT_POSTED = "Daily LinkedIn prompt posted! 🚀"
DAILY_PROMPT_ERROR = "Error posting prompt. Please try again."
CUSTOM_CONTENT_POSTED = "Custom LinkedIn content posted! ✨"
CUSTOM_CONTENT_WORKING = "🎨 Generating your post and image, this can take a few seconds..."
CUSTOM_CONTENT_ERROR = "Error generating content. Please try again."


def build_daily_prompt_blocks(prompt: str) -> List[Dict[str, Any]]:
    """Block Kit layout for a daily prompt post."""
    return [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"{DAILY_PROMPT_HEADER}\n\n{prompt}"},
        },
        {
            "type": "context",
            "elements": [{"type": "mrkdwn", "text": DAILY_PROMPT_FOOTER}],
        },
    ]


def build_custom_content_blocks(request: str, content: str, image_url: Optional[str]) -> List[Dict[str, Any]]:
    """Block Kit layout for a custom content post, with the image when there is one."""
    blocks: List[Dict[str, Any]] = [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"{CUSTOM_CONTENT_HEADER}\n_Request: {request}_\n\n{content}"},
        },
    ]
    if image_url:
        blocks.append({
            "type": "image",
            "image_url": image_url,
            "alt_text": f"Illustration for: {request}",
        })
    caption = IMAGE_READY_CAPTION if image_url else IMAGE_UNAVAILABLE_CAPTION
    blocks.append({
        "type": "context",
        "elements": [{"type": "mrkdwn", "text": caption}],
    })
    return blocks


class LinkedInMachine:
    """
    Main application class for the LinkedIn Machine.

    This class orchestrates the context builder, the AI services, the
    Slack service and the log store behind the bot's commands and events.
    """

    def __init__(
        self,
        settings: Settings,
        store: LogStorage,
        ai_service: ContentGeneratorProtocol,
        image_service: ImageGeneratorProtocol,
        slack_service: ChatPlatformService,
        engagement_service: Optional[EngagementService] = None,
    ):
        self.settings = settings
        self.store = store
        self.ai_service = ai_service
        self.image_service = image_service
        self.slack_service = slack_service
        self.engagement_service = engagement_service or EngagementService(store, slack_service, settings)

    def _build_context(self, request: Optional[str] = None, image_augmented: bool = False) -> str:
        posts = self.store.load(RecordKind.POSTS)
        prompts = self.store.load(RecordKind.PROMPTS)
        return build_context(
            posts,
            prompts,
            request,
            image_augmented=image_augmented,
            post_window=self.settings.context_post_window,
            prompt_window=self.settings.context_prompt_window,
            truncate_length=self.settings.context_post_truncate_length,
        )

    def post_daily_prompt(self, channel_id: str) -> Optional[str]:
        """
        Generate a daily prompt, post it to a channel and log it.

        Args:
            channel_id: Slack channel to post into

        Returns:
            Optional[str]: ts of the posted message

        Raises:
            PostingError: If Slack rejects the message
        """
        context = self._build_context()
        result = self.ai_service.generate_daily_prompt(context)
        if not result.is_renderable:
            raise ContentGenerationError(f"Daily prompt generation failed: {result.reason}")

        ts = self.slack_service.post_message(
            channel_id,
            f"🚀 **Daily LinkedIn Content Idea**\n\n{result.content}\n\n{DAILY_PROMPT_FOOTER}",
            blocks=build_daily_prompt_blocks(result.content),
        )

        self.store.append(RecordKind.PROMPTS, [
            GeneratedPrompt(
                id=ts or generate_local_id(),
                content=result.content,
                timestamp=utc_now_iso(),
                channel=channel_id,
            )
        ])
        logger.info(f"Daily prompt posted to {channel_id} ({result.status.value})")
        return ts

    def create_custom_content(
        self,
        request: str,
        channel_id: str,
        respond: Optional[Callable[..., Any]] = None,
    ) -> GeneratedPrompt:
        """
        Generate a post (and image) for a request, post it and log it.

        Args:
            request: The user's topic, already trimmed and non-empty
            channel_id: Slack channel to post into
            respond: Command responder used for the interim progress notice

        Returns:
            GeneratedPrompt: The record that was appended to the log

        Raises:
            PostingError: If Slack rejects the message
        """
        context = self._build_context(request, image_augmented=True)
        result = self.ai_service.generate_custom_content(request, context)
        if not result.is_renderable:
            raise ContentGenerationError(f"Custom content generation failed: {result.reason}")

        if respond is not None:
            respond(CUSTOM_CONTENT_WORKING)

        image_prompt = describe_image(request)
        image_url = self.image_service.generate_image(image_prompt)

        ts = self.slack_service.post_message(
            channel_id,
            f"✨ Custom LinkedIn Content\n\n{result.content}",
            blocks=build_custom_content_blocks(request, result.content, image_url),
        )

        record = GeneratedPrompt(
            id=ts or generate_local_id(),
            content=result.content,
            timestamp=utc_now_iso(),
            channel=channel_id,
            request=request,
            type="custom",
            image_url=image_url,
            image_prompt=image_prompt,
        )
        self.store.append(RecordKind.PROMPTS, [record])
        logger.info(
            f"Custom content posted to {channel_id} ({result.status.value}, "
            f"image {'ok' if image_url else 'unavailable'})"
        )
        return record

    def handle_daily_prompt_command(self, ack: Callable[..., Any], command: Dict[str, Any],
                                    respond: Callable[..., Any]) -> None:
        """Slash command: post today's prompt to the invoking channel."""
        ack()
        try:
            self.post_daily_prompt(command["channel_id"])
            respond(DAILY_PROMPT_POSTED)
        except LinkedInMachineError as e:
            logger.error(f"Error posting daily prompt: {e}", exc_info=True)
            respond(DAILY_PROMPT_ERROR)
        except Exception as e:
            logger.error(f"Unexpected error posting daily prompt: {e}", exc_info=True)
            respond(DAILY_PROMPT_ERROR)

    def handle_custom_content_command(self, ack: Callable[..., Any], command: Dict[str, Any],
                                      respond: Callable[..., Any]) -> None:
        """Slash command: generate custom content for the text after the command."""
        ack()
        request = (command.get("text") or "").strip()
        if not request:
            respond(
                "Please tell me what to write about. "
                f"Usage: `{self.settings.custom_content_command} iPhone vs Android messaging stats`"
            )
            return

        try:
            self.create_custom_content(request, command["channel_id"], respond=respond)
            respond(CUSTOM_CONTENT_POSTED)
        except LinkedInMachineError as e:
            logger.error(f"Error creating custom content: {e}", exc_info=True)
            respond(CUSTOM_CONTENT_ERROR)
        except Exception as e:
            logger.error(f"Unexpected error creating custom content: {e}", exc_info=True)
            respond(CUSTOM_CONTENT_ERROR)

    def handle_message(self, message: Dict[str, Any]) -> int:
        """Channel message: look for shared LinkedIn posts."""
        return self.engagement_service.handle_message(message)

    def run_scheduled_prompt(self) -> None:
        """Scheduler job: post the daily prompt to the configured channel."""
        channel = self.settings.daily_prompt_channel
        if not channel:
            return
        try:
            self.post_daily_prompt(channel)
        except Exception as e:
            logger.error(f"Scheduled daily prompt failed: {e}", exc_info=True)


def create_linkedin_machine(settings: Settings, bolt_app: App) -> LinkedInMachine:
    """
    Factory function to create a LinkedInMachine with its default services.

    Args:
        settings: Validated application configuration
        bolt_app: Bolt app whose WebClient the Slack service uses

    Returns:
        LinkedInMachine: A configured instance
    """
    store = JsonLogStore(settings.data_dir)
    store.ensure_data_dir()
    return LinkedInMachine(
        settings=settings,
        store=store,
        ai_service=AIService(settings),
        image_service=ImageService(settings),
        slack_service=SlackService(bolt_app.client),
    )


def register_handlers(bolt_app: App, machine: LinkedInMachine, settings: Settings) -> None:
    """Attach the bot's listeners to a Bolt app."""

    @bolt_app.event("message")
    def on_message(event):
        machine.handle_message(event)

    @bolt_app.command(settings.daily_prompt_command)
    def on_daily_prompt(ack, command, respond):
        machine.handle_daily_prompt_command(ack, command, respond)

    @bolt_app.command(settings.custom_content_command)
    def on_custom_content(ack, command, respond):
        machine.handle_custom_content_command(ack, command, respond)


def create_web_app(bolt_app: App) -> FastAPI:
    """
    Build the HTTP app: a liveness route plus the Slack events endpoint.

    Args:
        bolt_app: Bolt app that handles Slack requests

    Returns:
        FastAPI: The ASGI application
    """
    handler = SlackRequestHandler(bolt_app)
    api = FastAPI(title="LinkedIn Machine")

    @api.get("/")
    def health():
        return {"status": HEALTH_STATUS}

    @api.post("/slack/events")
    async def slack_events(req: Request):
        return await handler.handle(req)

    return api


def start_scheduler(machine: LinkedInMachine, settings: Settings) -> Optional[BackgroundScheduler]:
    """
    Start the weekday daily-prompt job when a channel is configured.

    Returns:
        Optional[BackgroundScheduler]: The running scheduler, or None when disabled
    """
    if not settings.daily_prompt_channel:
        return None

    scheduler = BackgroundScheduler(timezone=settings.daily_prompt_timezone)
    scheduler.add_job(
        machine.run_scheduled_prompt,
        CronTrigger.from_crontab(settings.daily_prompt_cron, timezone=settings.daily_prompt_timezone),
        id="daily_prompt",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        f"Scheduled daily prompt for {settings.daily_prompt_channel} "
        f"at '{settings.daily_prompt_cron}' ({settings.daily_prompt_timezone})"
    )
    return scheduler


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='LinkedIn Machine Slack bot')
    parser.add_argument('--host', type=str, default='0.0.0.0', help='Interface to listen on')
    parser.add_argument('--port', type=int, default=None, help='Port to listen on (overrides PORT)')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='INFO', help='Logging level')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = parse_arguments(argv)

    log_level = getattr(logging, args.log_level)
    setup_file_logging(args.log_file, log_level)

    logger.info("Starting LinkedIn Machine")
    scheduler = None

    try:
        settings = load_settings()
        validate_settings(settings)
        logger.info(f"Configuration: {get_config_summary(settings)}")

        bolt_app = App(token=settings.slack_bot_token, signing_secret=settings.slack_signing_secret)
        machine = create_linkedin_machine(settings, bolt_app)
        register_handlers(bolt_app, machine, settings)
        web_app = create_web_app(bolt_app)
        scheduler = start_scheduler(machine, settings)

        port = args.port or settings.port
        logger.info(f"⚡️ LinkedIn Machine is running on port {port}!")
        uvicorn.run(web_app, host=args.host, port=port, log_level=args.log_level.lower())
        exit_code = 0

    except ConfigurationError as e:
        logger.error(str(e))
        exit_code = 1
    except Exception as e:
        logger.error(f"Unhandled exception in LinkedIn Machine: {e}", exc_info=True)
        exit_code = 2
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)

    logger.info(f"LinkedIn Machine finished with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
