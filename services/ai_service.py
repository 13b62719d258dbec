"""
AI Service Module

This module handles text generation using the OpenAI chat completions API.
It provides the two content entry points (daily prompt and custom content)
and substitutes fixed fallback text whenever the API call fails, so callers
always have something to post.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from openai import OpenAI, OpenAIError

from config.settings import Settings
from utils.exceptions import ContentGenerationError
from utils.logger import get_logger

logger = get_logger(__name__)

DAILY_PROMPT_INSTRUCTION = (
    "Generate a specific, actionable LinkedIn post idea that would be valuable for a sales "
    "team member to share. Include the angle/hook and 2-3 bullet points on what to include. "
    "Make it relevant to messaging/SMS/API space or general sales insights."
)

CUSTOM_CONTENT_TEMPLATE = """Create a LinkedIn post for a SendBlue sales team member about: {request}

Include:
1. An attention-grabbing hook in the first line
2. 3-4 key points or insights, with concrete numbers where they make sense
3. A short description of a visual that would go well with the post (optional)
4. 3-5 relevant hashtags
5. A call-to-action that invites comments

Keep it conversational and professional, under 250 words."""

DAILY_PROMPT_FALLBACK = (
    "💡 **Daily LinkedIn Prompt**\n\n"
    "Share a quick tip about how businesses can improve their customer communication. "
    "What's one SMS/messaging mistake you see companies make, and how can they fix it?\n\n"
    "• Include a real example (anonymized)\n"
    "• Add your perspective on why it matters\n"
    "• End with a question to encourage engagement"
)

CUSTOM_CONTENT_FALLBACK = (
    "📱 **iPhone vs Android: The Messaging Gap Nobody Talks About**\n\n"
    "Over half of US smartphone users are on iPhone, and most of them live in iMessage. "
    "When a business texts them from a plain SMS number, the message lands as a green bubble "
    "and gets treated like spam.\n\n"
    "• Blue bubbles get opened and answered far more often than green ones\n"
    "• Android users still expect fast, reliable SMS with rich media\n"
    "• The winning play is meeting each customer on the channel they already trust\n\n"
    "How is your team handling the iPhone/Android split in customer messaging? 👇\n\n"
    "#SalesTips #CustomerExperience #Messaging #iMessage #SMS"
)


class GenerationStatus(Enum):
    """Outcome of a generation call."""
    OK = "ok"
    FALLBACK = "fallback"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """Generated text plus how it was obtained."""
    status: GenerationStatus
    content: str
    reason: Optional[str] = None

    @property
    def is_renderable(self) -> bool:
        """True when content can be posted (generated or fallback)."""
        return self.status in (GenerationStatus.OK, GenerationStatus.FALLBACK)


class AIService:
    """Service for text generation with the OpenAI API."""

    def __init__(self, settings: Settings, client: Optional[OpenAI] = None):
        """
        Initialize the AI service.

        Args:
            settings: Application configuration
            client: Pre-built OpenAI client (tests inject a mock here)
        """
        self.settings = settings
        if client is None:
            if not settings.openai_api_key:
                raise ValueError("Missing required OPENAI_API_KEY")
            client = OpenAI(api_key=settings.openai_api_key, timeout=settings.openai_timeout)
        self.client = client
        logger.info(f"AI service using model: {settings.openai_model}")

    def _complete(self, context: str, instruction: str, max_tokens: int, temperature: float) -> str:
        """
        Run one chat completion and return the message text.

        Raises:
            ContentGenerationError: If the API fails or returns no text.
        """
        try:
            completion = self.client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[
                    {"role": "system", "content": context},
                    {"role": "user", "content": instruction},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except OpenAIError as e:
            raise ContentGenerationError(f"OpenAI request failed: {e}") from e

        try:
            content = completion.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise ContentGenerationError(f"Malformed completion response: {e}") from e

        if not content or not content.strip():
            raise ContentGenerationError("Completion returned no text")
        return content.strip()

    def _generate(self, label: str, context: str, instruction: str,
                  max_tokens: int, temperature: float, fallback: str) -> GenerationResult:
        try:
            content = self._complete(context, instruction, max_tokens, temperature)
            logger.info(f"Generated {label} ({len(content)} chars)")
            return GenerationResult(GenerationStatus.OK, content)
        except ContentGenerationError as e:
            logger.error(f"Error generating {label}, using fallback: {e}")
            return GenerationResult(GenerationStatus.FALLBACK, fallback, reason=str(e))
        except Exception as e:
            logger.error(f"Unexpected error generating {label}, using fallback: {e}", exc_info=True)
            return GenerationResult(GenerationStatus.FALLBACK, fallback, reason=str(e))

    def generate_daily_prompt(self, context: str) -> GenerationResult:
        """
        Generate one actionable post idea for the daily prompt.

        Args:
            context: System context from the context builder

        Returns:
            GenerationResult: Generated text, or the daily fallback on failure
        """
        return self._generate(
            "daily prompt",
            context,
            DAILY_PROMPT_INSTRUCTION,
            self.settings.daily_max_tokens,
            self.settings.daily_temperature,
            DAILY_PROMPT_FALLBACK,
        )

    def generate_custom_content(self, request: str, context: str) -> GenerationResult:
        """
        Generate a full LinkedIn post about a user-supplied topic.

        Args:
            request: The user's topic, already trimmed
            context: System context from the context builder

        Returns:
            GenerationResult: Generated text, or the custom fallback on failure
        """
        return self._generate(
            "custom content",
            context,
            CUSTOM_CONTENT_TEMPLATE.format(request=request),
            self.settings.custom_max_tokens,
            self.settings.custom_temperature,
            CUSTOM_CONTENT_FALLBACK,
        )
