"""
Service Protocol Definitions

This module defines typing.Protocol interfaces for the services used by the
LinkedIn Machine. These protocols enable loose coupling, dependency injection,
and easier testing.

Protocols defined:
- ContentGeneratorProtocol: Interface for daily/custom text generation
- ImageGeneratorProtocol: Interface for image generation
- ChatPlatformService: Interface for outbound Slack calls
"""

from typing import Any, Dict, List, Optional, Protocol

from services.ai_service import GenerationResult


class ContentGeneratorProtocol(Protocol):
    """Protocol defining the interface for text generation services.

    Both methods return a result even when the backend fails; the result
    then carries the entry point's fallback text.
    """

    def generate_daily_prompt(self, context: str) -> GenerationResult:
        """Generate one actionable post idea.

        Args:
            context: System context from the context builder.

        Returns:
            GenerationResult with generated or fallback text.
        """
        ...

    def generate_custom_content(self, request: str, context: str) -> GenerationResult:
        """Generate a full post about a user topic.

        Args:
            request: The user's topic.
            context: System context from the context builder.

        Returns:
            GenerationResult with generated or fallback text.
        """
        ...


class ImageGeneratorProtocol(Protocol):
    """Protocol defining the interface for image generation services."""

    def generate_image(self, instruction: str) -> Optional[str]:
        """Render an instruction to an image.

        Args:
            instruction: Text prompt for the image model.

        Returns:
            URL of the image, or None if generation failed.
        """
        ...


class ChatPlatformService(Protocol):
    """Protocol defining the outbound chat calls the bot makes."""

    def post_message(
        self,
        channel: str,
        text: str,
        blocks: Optional[List[Dict[str, Any]]] = None,
        thread_ts: Optional[str] = None,
    ) -> Optional[str]:
        """Post a message, optionally with blocks and in a thread.

        Returns:
            The ts of the posted message.
        """
        ...

    def add_reaction(self, channel: str, timestamp: str, name: str) -> None:
        """Add an emoji reaction to a message."""
        ...
