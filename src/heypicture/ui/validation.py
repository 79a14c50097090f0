"""Validation utilities for Hey Picture UI inputs."""

import logging

from heypicture.core.models import GenerationRequest

logger = logging.getLogger(__name__)

MISSING_CREDENTIAL_MESSAGE = "Please enter your Gemini API Key to generate images."


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_generation_request(request: GenerationRequest) -> None:
    """Validate a generation request with user-friendly messages.

    Args:
        request: Generation request to validate

    Raises:
        ValidationError: If validation fails with user-friendly message
    """
    try:
        request.validate()
    except ValueError as e:
        raise ValidationError(str(e)) from e


def validate_credential(credential: str | None) -> str:
    """Validate the API key typed by the user.

    Returns:
        The key with surrounding whitespace removed

    Raises:
        ValidationError: If the key is missing or blank
    """
    if not credential or not credential.strip():
        raise ValidationError(MISSING_CREDENTIAL_MESSAGE)
    return credential.strip()


def validate_inputs(prompt: str | None, credential: str | None, count: int) -> GenerationRequest:
    """Validate everything needed before a generation request is sent.

    The prompt is checked before the credential, so a user who left both
    blank is asked for the prompt first.

    Returns:
        Validated GenerationRequest

    Raises:
        ValidationError: If the prompt or credential is missing
    """
    request = GenerationRequest(prompt=prompt or "", count=count)
    validate_generation_request(request)
    validate_credential(credential)
    return request


def normalize_caption(caption: str | None) -> str:
    """Return the caption to overlay, or "" when no overlay should happen."""
    if not caption or not caption.strip():
        return ""
    return caption
