"""Generate-then-caption pipeline.

Runs one generation request and captions every returned image concurrently.
Output order always matches the order the service returned the images in.
"""

import asyncio
import logging

from .compositor import CaptionStyle, overlay_caption
from .generation_client import ImagenClient

logger = logging.getLogger(__name__)


async def caption_images(
    images: list[bytes], caption: str, style: CaptionStyle | None = None
) -> list[bytes]:
    """Caption a batch of images concurrently.

    Each image is captioned independently; an image that cannot be decoded
    is passed through unchanged without affecting the others. With a blank
    caption every image is passed through as-is.

    Args:
        images: Encoded source images
        caption: Caption to burn onto each image
        style: Caption sizing parameters

    Returns:
        One image per input, in input order
    """
    if not caption or not caption.strip():
        return list(images)

    logger.info(f"Captioning {len(images)} image(s)")
    return list(await asyncio.gather(*(overlay_caption(image, caption, style) for image in images)))


async def generate_captioned_images(
    client: ImagenClient,
    prompt: str,
    caption: str,
    credential: str,
    count: int | None = None,
    style: CaptionStyle | None = None,
) -> list[bytes]:
    """Generate images for ``prompt`` and burn ``caption`` onto each.

    Raises:
        ValueError: If prompt or credential is blank (no request is sent)
        GenerationError: If the generation request fails
    """
    images = await client.generate(prompt, credential, count)
    return await caption_images(images, caption, style)
