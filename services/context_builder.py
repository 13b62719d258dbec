"""
Context Builder Module

Assembles the system context handed to the generation model: a fixed identity
sentence followed by the tail of recent shared posts (team voice) and recent
generated prompts (things not to repeat). Records are used in append order;
nothing is scored or deduplicated.
"""

from typing import Optional, Sequence

from data.models import GeneratedPrompt, SharedPost
from config.settings import (
    CONTEXT_POST_TRUNCATE_LENGTH,
    CONTEXT_POST_WINDOW,
    CONTEXT_PROMPT_WINDOW,
)
from utils.helpers import truncate_text

IDENTITY_CONTEXT = (
    "You are helping a sales team at SendBlue.com create engaging LinkedIn content. "
    "SendBlue provides SMS/messaging APIs for businesses."
)
RECENT_POSTS_HEADER = "\n\nHere are some recent successful posts from the team:\n"
RECENT_PROMPTS_HEADER = "\n\nAvoid repeating these recent prompts:\n"


def _tail(records: Sequence, window: int) -> Sequence:
    if window <= 0:
        return []
    return records[-window:]


def build_context(
    posts: Sequence[SharedPost],
    prompts: Sequence[GeneratedPrompt],
    request: Optional[str] = None,
    *,
    image_augmented: bool = False,
    post_window: int = CONTEXT_POST_WINDOW,
    prompt_window: int = CONTEXT_PROMPT_WINDOW,
    truncate_length: int = CONTEXT_POST_TRUNCATE_LENGTH,
) -> str:
    """
    Build the system context string for a generation call.

    Args:
        posts: All shared posts, oldest first
        prompts: All generated prompts, oldest first
        request: The user's topic for custom content, if any
        image_augmented: Truncate each post to truncate_length characters
        post_window: How many of the most recent posts to include
        prompt_window: How many of the most recent prompts to include
        truncate_length: Per-post character cap when image_augmented is set

    Returns:
        str: The assembled context
    """
    context = IDENTITY_CONTEXT

    recent_posts = _tail(posts, post_window)
    if recent_posts:
        context += RECENT_POSTS_HEADER
        for post in recent_posts:
            text = post.message_text
            if image_augmented:
                text = truncate_text(text, truncate_length)
            context += f"- {text}\n"

    recent_prompts = _tail(prompts, prompt_window)
    if recent_prompts:
        context += RECENT_PROMPTS_HEADER
        for prompt in recent_prompts:
            context += f"- {prompt.content}\n"

    if request:
        context += f"\n\nThe team member has asked for content about: {request}\n"

    return context
