"""Core functionality for Hey Picture.

- **HeyPictureConfig / config**: Configuration using Pydantic Settings
- **ImagenClient**: Single-attempt async client for the image generation service
- **Caption compositor**: Word-wrapped caption overlay rendered with Pillow
- **Pipeline**: Generate a batch and caption every image concurrently

Usage Example
-------------
    from heypicture.core import ImagenClient, generate_captioned_images

    async with ImagenClient() as client:
        images = await generate_captioned_images(
            client, prompt="a red balloon", caption="Sale Now", credential=api_key
        )
"""

from heypicture.core.compositor import (
    CaptionStyle,
    CompositeError,
    LineLayout,
    composite,
    layout_caption,
    overlay_caption,
    wrap_caption,
)
from heypicture.core.config import HeyPictureConfig, config
from heypicture.core.generation_client import GenerationError, GenerationErrorKind, ImagenClient
from heypicture.core.pipeline import caption_images, generate_captioned_images

__all__ = [
    "CaptionStyle",
    "CompositeError",
    "GenerationError",
    "GenerationErrorKind",
    "HeyPictureConfig",
    "ImagenClient",
    "LineLayout",
    "caption_images",
    "composite",
    "config",
    "generate_captioned_images",
    "layout_caption",
    "overlay_caption",
    "wrap_caption",
]
