"""
Custom Exception Classes for LinkedIn Machine

This module defines custom exceptions for better error handling and
categorization of failures across the application.
"""


class LinkedInMachineError(Exception):
    """Base exception for all LinkedIn Machine application errors."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(LinkedInMachineError):
    """Raised when configuration validation fails or required settings are missing."""
    pass


# =============================================================================
# AI Service Errors
# =============================================================================

class AIServiceError(LinkedInMachineError):
    """Base exception for AI service errors."""
    pass


class ContentGenerationError(AIServiceError):
    """Raised when the text generation call fails or returns nothing usable."""
    pass


class ImageGenerationError(AIServiceError):
    """Raised when the image generation call fails or returns no image."""
    pass


# =============================================================================
# Slack Errors
# =============================================================================

class SlackError(LinkedInMachineError):
    """Base exception for Slack platform errors."""
    pass


class PostingError(SlackError):
    """Raised when posting a message to Slack fails."""
    pass


class ReactionError(SlackError):
    """Raised when adding a reaction to a message fails."""
    pass
