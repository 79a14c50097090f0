"""Hey Picture - Generate images from a prompt and burn a caption onto them."""

__version__ = "0.1.0"

from heypicture.core.config import HeyPictureConfig, config

__all__ = [
    "HeyPictureConfig",
    "config",
]
