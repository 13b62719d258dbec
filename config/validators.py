"""
Configuration Validation for LinkedIn Machine

This module contains configuration validation logic.
Extracted from settings.py for better separation of concerns.
"""

from apscheduler.triggers.cron import CronTrigger

from config.settings import Settings
from utils.exceptions import ConfigurationError
from utils.logger import get_logger

logger = get_logger(__name__)


def validate_settings(settings: Settings) -> bool:
    """
    Validate that all required settings are properly configured.

    Args:
        settings: The configuration to check.

    Returns:
        bool: True when the configuration is usable.

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    errors = []

    # Required environment variables
    required_vars = [
        ("SLACK_BOT_TOKEN", settings.slack_bot_token),
        ("SLACK_SIGNING_SECRET", settings.slack_signing_secret),
        ("OPENAI_API_KEY", settings.openai_api_key),
    ]

    for var_name, var_value in required_vars:
        if not var_value:
            errors.append(f"Missing required environment variable: {var_name}")

    if not 1 <= settings.port <= 65535:
        errors.append(f"PORT must be between 1 and 65535, got {settings.port}")

    # Validate numeric settings are within reasonable bounds
    numeric_validations = [
        ("CONTEXT_POST_WINDOW", settings.context_post_window, 0, 100),
        ("CONTEXT_PROMPT_WINDOW", settings.context_prompt_window, 0, 100),
        ("CONTEXT_POST_TRUNCATE_LENGTH", settings.context_post_truncate_length, 1, 10000),
        ("DAILY_MAX_TOKENS", settings.daily_max_tokens, 1, 4096),
        ("CUSTOM_MAX_TOKENS", settings.custom_max_tokens, 1, 4096),
        ("DAILY_TEMPERATURE", settings.daily_temperature, 0.0, 2.0),
        ("CUSTOM_TEMPERATURE", settings.custom_temperature, 0.0, 2.0),
        ("IMAGE_COUNT", settings.image_count, 1, 10),
    ]

    for name, value, min_val, max_val in numeric_validations:
        if value < min_val or value > max_val:
            errors.append(f"{name} must be between {min_val} and {max_val}, got {value}")

    if settings.openai_timeout <= 0:
        errors.append(f"OPENAI_TIMEOUT must be positive, got {settings.openai_timeout}")

    for name, command in [
        ("DAILY_PROMPT_COMMAND", settings.daily_prompt_command),
        ("CUSTOM_CONTENT_COMMAND", settings.custom_content_command),
    ]:
        if not command.startswith("/"):
            errors.append(f"{name} must start with '/', got {command!r}")

    if settings.daily_prompt_command == settings.custom_content_command:
        errors.append("DAILY_PROMPT_COMMAND and CUSTOM_CONTENT_COMMAND must differ")

    if not settings.daily_prompt_channel:
        logger.info("DAILY_PROMPT_CHANNEL not set, scheduled daily prompts are disabled")
    else:
        try:
            CronTrigger.from_crontab(settings.daily_prompt_cron, timezone=settings.daily_prompt_timezone)
        except (ValueError, KeyError, TypeError) as e:
            errors.append(
                f"DAILY_PROMPT_CRON/DAILY_PROMPT_TIMEZONE invalid "
                f"('{settings.daily_prompt_cron}', '{settings.daily_prompt_timezone}'): {e}"
            )

    # Raise all errors at once
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True
