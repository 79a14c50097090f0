"""Async client for the Imagen predict endpoint.

The client issues exactly one ``POST {model}:predict`` request per call and
turns the response into a list of encoded image payloads. There is no retry
and no backoff: a failed attempt is reported to the caller as a
``GenerationError`` and the user decides whether to try again.

Usage Example
-------------
    async with ImagenClient() as client:
        images = await client.generate("a red balloon", api_key)
"""

from __future__ import annotations

import base64
import binascii
import logging
from enum import Enum

import httpx
from pydantic import ValidationError as PydanticValidationError

from .config import HeyPictureConfig, config as default_config
from .models import ErrorResponse, GenerationRequest, PredictResponse

logger = logging.getLogger(__name__)

TRANSPORT_FALLBACK_MESSAGE = "An unexpected error occurred during image generation."
REJECTED_FALLBACK_MESSAGE = "Failed to generate images. Please check your API key and prompt."
EMPTY_RESULT_MESSAGE = "No images were generated. Please try a different prompt."


class GenerationErrorKind(str, Enum):
    """Why a generation attempt failed."""

    TRANSPORT = "transport"
    SERVICE_REJECTED = "service_rejected"
    EMPTY_RESULT = "empty_result"


class GenerationError(Exception):
    """Generation failure with a message suitable for the error banner.

    Attributes:
        kind: Failure category
        message: Most specific human-readable message available
        status_code: HTTP status of the response, if one was received
    """

    def __init__(
        self, kind: GenerationErrorKind, message: str, status_code: int | None = None
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"GenerationError(kind={self.kind.value}, status={self.status_code}, message={self.message!r})"


def decode_predictions(response: PredictResponse) -> list[bytes]:
    """Decode every usable prediction, dropping entries without an image.

    Args:
        response: Parsed predict response

    Returns:
        Encoded image payloads, in the order the service returned them
    """
    images: list[bytes] = []
    for index, prediction in enumerate(response.predictions):
        if not prediction.bytesBase64Encoded:
            logger.warning(f"Prediction {index} has no image payload, skipping")
            continue
        try:
            images.append(base64.b64decode(prediction.bytesBase64Encoded, validate=True))
        except (ValueError, binascii.Error) as e:
            logger.warning(f"Prediction {index} payload is not valid base64, skipping: {e}")
    return images


def _service_message(response: httpx.Response) -> str:
    """Extract ``error.message`` from a failed response, or a fallback."""
    try:
        body = ErrorResponse.model_validate(response.json())
    except (ValueError, PydanticValidationError):
        return REJECTED_FALLBACK_MESSAGE

    if body.error is not None and body.error.message:
        return body.error.message
    return REJECTED_FALLBACK_MESSAGE


class ImagenClient:
    """Single-attempt client for the image generation service.

    The client owns an ``httpx.AsyncClient`` and should be closed after use,
    preferably through ``async with``.

    Args:
        config: Configuration to read endpoint, model and timeout from
            (default: global config)
        transport: Optional httpx transport, used by tests to stub the service
    """

    def __init__(
        self,
        config: HeyPictureConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or default_config
        self._client = httpx.AsyncClient(
            timeout=self.config.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ImagenClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def generate(
        self, prompt: str, credential: str, count: int | None = None
    ) -> list[bytes]:
        """Generate images for a prompt.

        Args:
            prompt: Text prompt; trimmed before use
            credential: API key appended as the ``key`` query parameter
            count: Number of images to request (default: config.sample_count).
                The service may return fewer.

        Returns:
            Encoded image payloads in service order. Never empty and never
            more than ``count``.

        Raises:
            ValueError: If the prompt or credential is blank, or count < 1.
                Raised before any network call.
            GenerationError: On transport failure, a non-success status, or
                a response without usable predictions
        """
        request = GenerationRequest(
            prompt=prompt,
            count=count if count is not None else self.config.sample_count,
        )
        request.validate()
        if not credential or not credential.strip():
            raise ValueError("Please enter your Gemini API Key to generate images.")

        payload = request.to_payload().model_dump()
        logger.info(
            f"Requesting {request.count} image(s) from {self.config.model_id} "
            f"(prompt length {len(request.clean_prompt)})"
        )

        try:
            response = await self._client.post(
                self.config.predict_url,
                params={"key": credential.strip()},
                json=payload,
            )
        except httpx.HTTPError as e:
            # Don't log the request URL: it carries the key
            logger.error(f"Image generation request failed: {type(e).__name__}")
            raise GenerationError(
                GenerationErrorKind.TRANSPORT, str(e) or TRANSPORT_FALLBACK_MESSAGE
            ) from e

        if not response.is_success:
            message = _service_message(response)
            logger.error(f"Image service rejected request (HTTP {response.status_code}): {message}")
            raise GenerationError(
                GenerationErrorKind.SERVICE_REJECTED, message, status_code=response.status_code
            )

        try:
            result = PredictResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Image service returned an unreadable response: {e}")
            raise GenerationError(
                GenerationErrorKind.SERVICE_REJECTED,
                REJECTED_FALLBACK_MESSAGE,
                status_code=response.status_code,
            ) from e

        images = decode_predictions(result)
        if not images:
            logger.warning(
                f"Image service returned {len(result.predictions)} prediction(s) with no usable image"
            )
            raise GenerationError(
                GenerationErrorKind.EMPTY_RESULT,
                EMPTY_RESULT_MESSAGE,
                status_code=response.status_code,
            )

        if len(images) > request.count:
            logger.warning(
                f"Image service returned {len(images)} image(s) for {request.count} requested, "
                f"discarding {len(images) - request.count}"
            )
            images = images[: request.count]

        logger.info(f"Received {len(images)} image(s) from {self.config.model_id}")
        return images
