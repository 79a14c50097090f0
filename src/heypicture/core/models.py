"""Request and response models for the image generation service.

These models describe the JSON exchanged with the model's ``:predict``
endpoint, plus the in-process ``GenerationRequest`` built for every
generation.

Models
------
GenerationRequest
    Prompt and image count for one generation; validated before any
    network call is made.
PredictRequest
    JSON body of the ``POST ...:predict`` call.
PredictResponse
    JSON body of a successful predict call. Each entry of ``predictions``
    may or may not carry a base64-encoded image.
ErrorResponse
    JSON body returned by the service alongside a non-success status.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


@dataclass
class GenerationRequest:
    """Prompt and image count for a single generation.

    Constructed fresh for every invocation and never persisted.
    """

    prompt: str
    count: int = 3

    def validate(self) -> None:
        """Validate the request.

        Raises:
            ValueError: If the prompt is blank or the count is not positive
        """
        if not self.prompt or not self.prompt.strip():
            raise ValueError("Please enter a prompt to generate images.")

        if self.count < 1:
            raise ValueError(f"Image count must be a positive integer, got {self.count}")

    @property
    def clean_prompt(self) -> str:
        """Prompt with surrounding whitespace removed."""
        return self.prompt.strip()

    def to_payload(self) -> "PredictRequest":
        """Build the predict request body for this generation."""
        return PredictRequest(
            instances=PredictInstance(prompt=self.clean_prompt),
            parameters=PredictParameters(sampleCount=self.count),
        )


class PredictInstance(BaseModel):
    """The ``instances`` object of a predict request."""

    prompt: str = Field(..., description="Text prompt describing the images to generate.")


class PredictParameters(BaseModel):
    """The ``parameters`` object of a predict request."""

    sampleCount: int = Field(
        default=3,
        ge=1,
        description="Number of images the service is asked to generate.",
    )


class PredictRequest(BaseModel):
    """Request body for the ``POST {model}:predict`` endpoint.

    Attributes:
        instances: Prompt wrapper. The service accepts a single object here.
        parameters: Sampling parameters; only ``sampleCount`` is sent.
    """

    instances: PredictInstance
    parameters: PredictParameters = Field(default_factory=PredictParameters)


class Prediction(BaseModel):
    """One entry of ``predictions`` in a predict response.

    Entries without ``bytesBase64Encoded`` (e.g. filtered by the service's
    safety settings) are tolerated and simply carry no image.
    """

    model_config = ConfigDict(extra="ignore")

    bytesBase64Encoded: str | None = Field(
        default=None,
        description="Base64-encoded image bytes.",
    )
    mimeType: str | None = Field(
        default=None,
        description="MIME type of the encoded image (e.g. 'image/png').",
    )


class PredictResponse(BaseModel):
    """Response body of a successful predict call.

    A null ``predictions`` is read as an empty list. Entries that are not
    prediction objects are dropped one by one so that a single bad entry
    does not discard the rest of the batch.
    """

    model_config = ConfigDict(extra="ignore")

    predictions: list[Prediction] = Field(default_factory=list)

    @field_validator("predictions", mode="before")
    @classmethod
    def drop_malformed_predictions(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            return value

        predictions = []
        for index, entry in enumerate(value):
            try:
                predictions.append(Prediction.model_validate(entry))
            except ValidationError as e:
                logger.warning(
                    f"Prediction {index} is malformed, skipping: {e.error_count()} error(s)"
                )
        return predictions


class ErrorDetail(BaseModel):
    """The ``error`` object of a failed call."""

    model_config = ConfigDict(extra="ignore")

    code: int | None = None
    message: str | None = None
    status: str | None = None


class ErrorResponse(BaseModel):
    """Response body accompanying a non-success status."""

    model_config = ConfigDict(extra="ignore")

    error: ErrorDetail | None = None
