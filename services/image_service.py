"""
Image Service Module

Turns a custom content request into an image-generation instruction with a
fixed keyword rule table, and calls the OpenAI images API to render it.
"""

from typing import Callable, List, Optional, Tuple

from openai import OpenAI, OpenAIError

from config.settings import Settings
from utils.exceptions import ImageGenerationError
from utils.helpers import is_valid_url
from utils.logger import get_logger

logger = get_logger(__name__)

IPHONE_ANDROID_INSTRUCTION = (
    "A clean, professional infographic comparing iPhone and Android messaging. "
    "Split layout with an iPhone on the left showing blue iMessage bubbles and an Android "
    "phone on the right showing green SMS bubbles, simple icons for delivery, read receipts "
    "and media support, modern flat design, white background, suitable for LinkedIn."
)

DATA_VISUALIZATION_INSTRUCTION = (
    "A modern, minimal data visualization for a business audience: clean bar and line "
    "charts with a blue and white color scheme, clear labels, no dense text, "
    "professional style suitable for LinkedIn."
)

COMPARISON_INSTRUCTION = (
    "A professional side-by-side comparison graphic with two clearly separated columns, "
    "simple icons and check marks, modern flat design, white background, "
    "suitable for LinkedIn."
)

GENERIC_INSTRUCTION_TEMPLATE = (
    "A professional, modern illustration for a LinkedIn post about: {request}. "
    "Business messaging and customer communication theme, clean composition, "
    "blue and white color palette, no text in the image."
)

Rule = Tuple[Callable[[str], bool], str]

# Evaluated in order, first match wins. Predicates receive the lower-cased request.
IMAGE_PROMPT_RULES: List[Rule] = [
    (lambda text: "iphone" in text and "android" in text, IPHONE_ANDROID_INSTRUCTION),
    (lambda text: "chart" in text or "graph" in text or "data" in text, DATA_VISUALIZATION_INSTRUCTION),
    (lambda text: "comparison" in text, COMPARISON_INSTRUCTION),
]


def describe_image(request: Optional[str]) -> str:
    """
    Pick an image-generation instruction for a request.

    Args:
        request: The user's free-text request

    Returns:
        str: The instruction; the generic template when no rule matches
    """
    request = request or ""
    text = request.lower()
    for predicate, instruction in IMAGE_PROMPT_RULES:
        if predicate(text):
            return instruction
    return GENERIC_INSTRUCTION_TEMPLATE.format(request=request)


class ImageService:
    """Service for image generation with the OpenAI API."""

    def __init__(self, settings: Settings, client: Optional[OpenAI] = None):
        self.settings = settings
        if client is None:
            if not settings.openai_api_key:
                raise ValueError("Missing required OPENAI_API_KEY")
            client = OpenAI(api_key=settings.openai_api_key, timeout=settings.openai_timeout)
        self.client = client

    def _request_image(self, instruction: str) -> str:
        try:
            response = self.client.images.generate(
                model=self.settings.openai_image_model,
                prompt=instruction,
                size=self.settings.image_size,
                quality=self.settings.image_quality,
                n=self.settings.image_count,
            )
        except OpenAIError as e:
            raise ImageGenerationError(f"OpenAI image request failed: {e}") from e

        try:
            url = response.data[0].url
        except (AttributeError, IndexError, TypeError) as e:
            raise ImageGenerationError(f"Malformed image response: {e}") from e

        if not url or not is_valid_url(url):
            raise ImageGenerationError(f"Image response had no usable URL: {url!r}")
        return url

    def generate_image(self, instruction: str) -> Optional[str]:
        """
        Render an instruction to an image.

        Args:
            instruction: Text prompt, usually from describe_image()

        Returns:
            Optional[str]: URL of the generated image, or None on any failure
        """
        try:
            url = self._request_image(instruction)
            logger.info("Generated image for custom content")
            return url
        except ImageGenerationError as e:
            logger.error(f"Error generating image: {e}")
            return None
        except Exception as e:
            logger.error(f"Unexpected error generating image: {e}", exc_info=True)
            return None
