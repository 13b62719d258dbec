"""
Configuration Settings for LinkedIn Machine

This module centralizes all configuration settings for the LinkedIn Machine
application: environment variables, API keys and application constants.
Secrets are not read at import time; call load_settings() once at startup and
pass the resulting Settings object to each component.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

# Determine the application root directory
APP_ROOT = Path(__file__).resolve().parent.parent

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_PORT = 3000
DEFAULT_DATA_DIR = "./storage"
POSTS_FILENAME = "posts.json"
PROMPTS_FILENAME = "prompts.json"

# Slack Settings
DAILY_PROMPT_COMMAND = "/linkedin-prompt"
CUSTOM_CONTENT_COMMAND = "/linkedin-create"
REACTION_EMOJI = "linkedin"
DAILY_PROMPT_CRON = "0 9 * * mon-fri"  # Weekdays at 9am
DAILY_PROMPT_TIMEZONE = "UTC"

# OpenAI Settings
OPENAI_MODEL = "gpt-4"
OPENAI_IMAGE_MODEL = "dall-e-3"
OPENAI_TIMEOUT = 60.0                # Seconds before a generation call is abandoned

# Daily prompt generation
DAILY_MAX_TOKENS = 200
DAILY_TEMPERATURE = 0.8

# Custom content generation
CUSTOM_MAX_TOKENS = 400
CUSTOM_TEMPERATURE = 0.7

# Image generation
IMAGE_SIZE = "1024x1024"
IMAGE_QUALITY = "standard"
IMAGE_COUNT = 1

# =============================================================================
# Context Builder Settings
# =============================================================================

CONTEXT_POST_WINDOW = 10             # Recent shared posts injected as team voice
CONTEXT_PROMPT_WINDOW = 5            # Recent prompts the model is told not to repeat
CONTEXT_POST_TRUNCATE_LENGTH = 100   # Per-post cap when the custom/image path builds context


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return -1  # rejected by validate_settings()


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        return -1.0


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, built once at startup and injected into services."""
    slack_bot_token: Optional[str] = None
    slack_signing_secret: Optional[str] = None
    openai_api_key: Optional[str] = None
    port: int = DEFAULT_PORT
    data_dir: str = DEFAULT_DATA_DIR

    daily_prompt_command: str = DAILY_PROMPT_COMMAND
    custom_content_command: str = CUSTOM_CONTENT_COMMAND
    reaction_emoji: str = REACTION_EMOJI
    daily_prompt_channel: Optional[str] = None
    daily_prompt_cron: str = DAILY_PROMPT_CRON
    daily_prompt_timezone: str = DAILY_PROMPT_TIMEZONE

    openai_model: str = OPENAI_MODEL
    openai_image_model: str = OPENAI_IMAGE_MODEL
    openai_timeout: float = OPENAI_TIMEOUT
    daily_max_tokens: int = DAILY_MAX_TOKENS
    daily_temperature: float = DAILY_TEMPERATURE
    custom_max_tokens: int = CUSTOM_MAX_TOKENS
    custom_temperature: float = CUSTOM_TEMPERATURE
    image_size: str = IMAGE_SIZE
    image_quality: str = IMAGE_QUALITY
    image_count: int = IMAGE_COUNT

    context_post_window: int = CONTEXT_POST_WINDOW
    context_prompt_window: int = CONTEXT_PROMPT_WINDOW
    context_post_truncate_length: int = CONTEXT_POST_TRUNCATE_LENGTH


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build a Settings object from the environment.

    Args:
        env: Mapping to read from. Defaults to os.environ after loading the
            .env file from the application root.

    Returns:
        Settings: The populated configuration.
    """
    if env is None:
        load_dotenv(dotenv_path=os.path.join(APP_ROOT, '.env'))
        env = os.environ

    return Settings(
        slack_bot_token=env.get("SLACK_BOT_TOKEN"),
        slack_signing_secret=env.get("SLACK_SIGNING_SECRET"),
        openai_api_key=env.get("OPENAI_API_KEY"),
        port=_env_int(env, "PORT", DEFAULT_PORT),
        data_dir=env.get("DATA_DIR") or DEFAULT_DATA_DIR,
        daily_prompt_command=env.get("DAILY_PROMPT_COMMAND") or DAILY_PROMPT_COMMAND,
        custom_content_command=env.get("CUSTOM_CONTENT_COMMAND") or CUSTOM_CONTENT_COMMAND,
        reaction_emoji=env.get("REACTION_EMOJI") or REACTION_EMOJI,
        daily_prompt_channel=env.get("DAILY_PROMPT_CHANNEL") or None,
        daily_prompt_cron=env.get("DAILY_PROMPT_CRON") or DAILY_PROMPT_CRON,
        daily_prompt_timezone=env.get("DAILY_PROMPT_TIMEZONE") or DAILY_PROMPT_TIMEZONE,
        openai_model=env.get("OPENAI_MODEL") or OPENAI_MODEL,
        openai_image_model=env.get("OPENAI_IMAGE_MODEL") or OPENAI_IMAGE_MODEL,
        openai_timeout=_env_float(env, "OPENAI_TIMEOUT", OPENAI_TIMEOUT),
        context_post_window=_env_int(env, "CONTEXT_POST_WINDOW", CONTEXT_POST_WINDOW),
        context_prompt_window=_env_int(env, "CONTEXT_PROMPT_WINDOW", CONTEXT_PROMPT_WINDOW),
    )


def get_config_summary(settings: Settings) -> dict:
    """
    Returns a summary of current configuration (without sensitive values).
    Useful for logging startup state.
    """
    return {
        "credentials": {
            "slack_bot_token": bool(settings.slack_bot_token),
            "slack_signing_secret": bool(settings.slack_signing_secret),
            "openai_api_key": bool(settings.openai_api_key),
        },
        "server": {
            "port": settings.port,
            "data_dir": settings.data_dir,
        },
        "commands": {
            "daily_prompt": settings.daily_prompt_command,
            "custom_content": settings.custom_content_command,
            "scheduled_channel": settings.daily_prompt_channel,
            "schedule": settings.daily_prompt_cron if settings.daily_prompt_channel else None,
        },
        "generation": {
            "model": settings.openai_model,
            "image_model": settings.openai_image_model,
            "post_window": settings.context_post_window,
            "prompt_window": settings.context_prompt_window,
        },
    }
