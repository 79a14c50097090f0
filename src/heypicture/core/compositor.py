"""Caption compositor: burn a word-wrapped caption onto a generated image.

Layout Algorithm
----------------
For an image of W x H pixels and a caption:

1. font size   = max(20, W / 20)
2. width budget = 0.8 * W
3. Greedy word wrap. Words are appended to the current line until the
   *prospective* line ("current + word + space") measures wider than the
   budget; the line is then closed and the word starts a new one. A word that
   is wider than the budget on its own is never split: it sits alone on its
   line and overflows.
4. line height = font size * 1.2
5. The block of N lines is vertically centred: the first line is drawn at
   y = H/2 - (N - 1) * line_height / 2 and each following line one
   line height lower.
6. Every line is horizontally centred, drawn in white over a blurred,
   semi-transparent black drop shadow offset down and to the right.

The image is re-encoded as PNG. Text is measured by the advance width of the
rendered string in the chosen font (``FreeTypeFont.getlength``), so line
breaks depend on the font that is actually available.

Failure Policy
--------------
``composite`` raises ``CompositeError`` when the source cannot be decoded.
``overlay_caption`` is the best-effort wrapper used by the pipeline: it
returns the original bytes untouched when the caption is blank or the image
cannot be decoded.
"""

from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Callable

from PIL import Image, ImageDraw, ImageFilter, ImageFont

from .config import HeyPictureConfig

logger = logging.getLogger(__name__)

MIN_FONT_SIZE = 20.0
FONT_SCALE_DIVISOR = 20.0
MAX_WIDTH_RATIO = 0.8
LINE_HEIGHT_RATIO = 1.2

# Tried in order after the configured font_path
FALLBACK_FONTS = (
    "Inter-Regular.ttf",
    "Inter.ttf",
    "DejaVuSans.ttf",
    "Arial.ttf",
    "arial.ttf",
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


class CompositeErrorKind(str, Enum):
    DECODE_FAILED = "decode_failed"


class CompositeError(Exception):
    """Raised when an image cannot be captioned."""

    def __init__(self, kind: CompositeErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class CaptionStyle:
    """Sizing and shadow parameters for caption rendering."""

    min_font_size: float = MIN_FONT_SIZE
    font_scale_divisor: float = FONT_SCALE_DIVISOR
    max_width_ratio: float = MAX_WIDTH_RATIO
    line_height_ratio: float = LINE_HEIGHT_RATIO
    shadow_blur: float = 5.0
    shadow_offset: int = 2
    shadow_opacity: float = 0.7
    font_path: Path | None = None

    @classmethod
    def from_config(cls, config: HeyPictureConfig) -> "CaptionStyle":
        return cls(
            min_font_size=config.min_font_size,
            font_scale_divisor=config.font_scale_divisor,
            max_width_ratio=config.max_width_ratio,
            line_height_ratio=config.line_height_ratio,
            shadow_blur=config.shadow_blur,
            shadow_offset=config.shadow_offset,
            shadow_opacity=config.shadow_opacity,
            font_path=config.font_path,
        )


@dataclass(frozen=True)
class LineLayout:
    """Wrapped caption lines and their vertical placement on one image.

    Attributes:
        lines: Caption lines in drawing order, without trailing spaces
        font_size: Font size the lines were measured with
        line_height: Distance between consecutive line centres
        max_width: Width budget the lines were wrapped against
        start_y: Vertical position of the first line
    """

    lines: tuple[str, ...]
    font_size: float
    line_height: float
    max_width: float
    start_y: float

    @property
    def baselines(self) -> list[float]:
        """Vertical position of every line, top to bottom."""
        return [self.start_y + i * self.line_height for i in range(len(self.lines))]


def font_size_for_width(
    width: float,
    min_font_size: float = MIN_FONT_SIZE,
    divisor: float = FONT_SCALE_DIVISOR,
) -> float:
    """Caption font size for an image of the given width."""
    return max(min_font_size, width / divisor)


def line_height_for(font_size: float, ratio: float = LINE_HEIGHT_RATIO) -> float:
    return font_size * ratio


def vertical_start(height: float, line_count: int, line_height: float) -> float:
    """Y of the first line so that ``line_count`` lines are centred vertically."""
    return height / 2 - (line_count - 1) * line_height / 2


def wrap_caption(caption: str, measure: Callable[[str], float], max_width: float) -> list[str]:
    """Greedily wrap a caption into lines no wider than ``max_width``.

    Args:
        caption: Caption text; split on any whitespace
        measure: Returns the rendered width of a string
        max_width: Width budget per line

    Returns:
        Lines in order, each stripped of the trailing space. A single word
        wider than the budget is kept whole on its own line. An empty list is
        returned for a blank caption.
    """
    words = caption.split()
    if not words:
        return []

    lines: list[str] = []
    line = ""
    for word in words:
        candidate = f"{line}{word} "
        if measure(candidate) > max_width and line:
            lines.append(line.rstrip())
            line = f"{word} "
        else:
            line = candidate
    lines.append(line.rstrip())
    return lines


@lru_cache(maxsize=32)
def load_font(size: float, font_path: Path | None = None) -> Font:
    """Load a scalable sans-serif font at ``size``.

    The configured ``font_path`` is tried first, then the common system fonts
    in FALLBACK_FONTS, then Pillow's bundled default font.
    """
    candidates = ([str(font_path)] if font_path else []) + list(FALLBACK_FONTS)
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            logger.debug(f"Font not available: {candidate}")

    logger.info(f"No TrueType font found, using Pillow default font at size {size}")
    return ImageFont.load_default(size=size)


def layout_caption(
    caption: str,
    width: int,
    height: int,
    font: Font | None = None,
    style: CaptionStyle | None = None,
) -> LineLayout:
    """Compute the wrapped, vertically centred layout of a caption.

    Args:
        caption: Caption text
        width: Image width in pixels
        height: Image height in pixels
        font: Font to measure with (default: ``load_font`` at the computed size)
        style: Sizing parameters (default: CaptionStyle())

    Returns:
        LineLayout for the caption
    """
    style = style or CaptionStyle()
    font_size = font_size_for_width(width, style.min_font_size, style.font_scale_divisor)
    if font is None:
        font = load_font(font_size, style.font_path)

    max_width = style.max_width_ratio * width
    lines = wrap_caption(caption, font.getlength, max_width)
    line_height = line_height_for(font_size, style.line_height_ratio)

    return LineLayout(
        lines=tuple(lines),
        font_size=font_size,
        line_height=line_height,
        max_width=max_width,
        start_y=vertical_start(height, len(lines), line_height),
    )


def decode_image(data: bytes) -> Image.Image:
    """Decode encoded image bytes, forcing pixel data to load.

    Raises:
        CompositeError: If the bytes are not a readable image
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise CompositeError(CompositeErrorKind.DECODE_FAILED, f"Could not decode image: {e}") from e
    return image


def _has_alpha(image: Image.Image) -> bool:
    return "A" in image.getbands() or "transparency" in image.info


def render_caption(image: bytes, caption: str, style: CaptionStyle | None = None) -> bytes:
    """Draw ``caption`` onto ``image`` and return the result as PNG bytes.

    This is the synchronous worker behind ``composite``.

    Raises:
        CompositeError: If the image cannot be decoded
    """
    style = style or CaptionStyle()
    source = decode_image(image)
    width, height = source.size
    keep_alpha = _has_alpha(source)

    # Base layer is an unmodified copy of the source pixels
    canvas = source.convert("RGBA")

    font_size = font_size_for_width(width, style.min_font_size, style.font_scale_divisor)
    font = load_font(font_size, style.font_path)
    layout = layout_caption(caption, width, height, font=font, style=style)

    shadow = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    text = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    shadow_draw = ImageDraw.Draw(shadow)
    text_draw = ImageDraw.Draw(text)

    center_x = width / 2
    offset = style.shadow_offset
    shadow_fill = (0, 0, 0, round(255 * style.shadow_opacity))
    for line, y in zip(layout.lines, layout.baselines):
        shadow_draw.text((center_x + offset, y + offset), line, font=font, fill=shadow_fill, anchor="mm")
        text_draw.text((center_x, y), line, font=font, fill=(255, 255, 255, 255), anchor="mm")

    if style.shadow_blur > 0:
        # A canvas shadow blur of b corresponds to a gaussian with sigma b / 2
        shadow = shadow.filter(ImageFilter.GaussianBlur(radius=style.shadow_blur / 2))

    canvas = Image.alpha_composite(canvas, shadow)
    canvas = Image.alpha_composite(canvas, text)
    if not keep_alpha:
        canvas = canvas.convert("RGB")

    buffer = io.BytesIO()
    canvas.save(buffer, format="PNG")
    logger.debug(f"Captioned {width}x{height} image with {len(layout.lines)} line(s)")
    return buffer.getvalue()


async def composite(image: bytes, caption: str, style: CaptionStyle | None = None) -> bytes:
    """Caption an image without blocking the event loop.

    A blank caption returns ``image`` unchanged.

    Raises:
        CompositeError: If the image cannot be decoded
    """
    if not caption or not caption.strip():
        return image
    return await asyncio.to_thread(render_caption, image, caption, style)


async def overlay_caption(image: bytes, caption: str, style: CaptionStyle | None = None) -> bytes:
    """Best-effort captioning: fall back to the original image on failure.

    Returns:
        The captioned PNG, or ``image`` itself when the caption is blank or
        the image cannot be decoded
    """
    try:
        return await composite(image, caption, style)
    except CompositeError as e:
        logger.warning(f"Skipping caption overlay: {e}")
        return image
