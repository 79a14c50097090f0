"""Configuration management for Hey Picture.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the HEYPICTURE_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (HEYPICTURE_* prefix)
2. .env file in the project root
3. Default values defined in HeyPictureConfig

Example .env file:
    HEYPICTURE_MODEL_ID=imagen-3.0-generate-002
    HEYPICTURE_SAMPLE_COUNT=3
    HEYPICTURE_FONT_PATH=fonts/Inter-Regular.ttf
    HEYPICTURE_LOG_LEVEL=DEBUG

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.

Usage Example
-------------
    from heypicture.core.config import config

    print(config.predict_url)
    print(config.downloads_dir)

Credentials
-----------
The image service API key is deliberately NOT a setting. It is typed by the
user into the UI for each session and handed straight to the generation
client, so it never lands in the environment, a .env file or this object.

Caption Layout Settings
-----------------------
The caption compositor constants default to the values the layout algorithm
is defined with:
- min_font_size: 20
- font_scale_divisor: 20 (font size = max(20, width / 20))
- max_width_ratio: 0.8 (text block may use 80% of the image width)
- line_height_ratio: 1.2 (line height = font size * 1.2)
"""

import tempfile
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HeyPictureConfig(BaseSettings):
    """Main configuration for Hey Picture.

    Values are loaded from environment variables with the HEYPICTURE_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Image Service Settings:
        api_base_url : str
            Base URL of the generative language API
        model_id : str
            Image generation model addressed by the predict call
        sample_count : int
            Number of images requested per generation (1-8)
        request_timeout : float
            Seconds to wait for the single predict request

    Caption Settings:
        font_path : Path | None
            Optional TrueType font used for captions
        min_font_size : float
            Lower bound of the caption font size
        font_scale_divisor : float
            Image width is divided by this to get the caption font size
        max_width_ratio : float
            Fraction of the image width a caption line may occupy
        line_height_ratio : float
            Line height as a multiple of the font size
        shadow_blur : float
            Blur of the caption drop shadow
        shadow_offset : int
            Down-and-right offset of the drop shadow in pixels
        shadow_opacity : float
            Opacity of the black drop shadow (0-1)

    Paths:
        downloads_dir : Path
            Scratch directory for downloadable result files

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root logging level

    Examples
    --------
        >>> custom_config = HeyPictureConfig(sample_count=2, log_level="DEBUG")
        >>> custom_config.predict_url
        'https://generativelanguage.googleapis.com/v1beta/models/imagen-3.0-generate-002:predict'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HEYPICTURE_",
        case_sensitive=False,
    )

    # Image service settings
    api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the generative language API",
    )
    model_id: str = Field(
        default="imagen-3.0-generate-002",
        description="Image generation model used for the predict call",
    )
    sample_count: int = Field(
        default=3,
        description="Number of images requested per generation",
        ge=1,
        le=8,
    )
    request_timeout: float = Field(
        default=120.0,
        description="Timeout in seconds for the predict request",
        gt=0,
    )

    # Caption settings
    font_path: Path | None = Field(
        default=None,
        description="TrueType font for captions (falls back to system sans fonts)",
    )
    min_font_size: float = Field(default=20.0, gt=0)
    font_scale_divisor: float = Field(default=20.0, gt=0)
    max_width_ratio: float = Field(default=0.8, gt=0, le=1)
    line_height_ratio: float = Field(default=1.2, gt=0)
    shadow_blur: float = Field(default=5.0, ge=0)
    shadow_offset: int = Field(default=2, ge=0)
    shadow_opacity: float = Field(default=0.7, ge=0, le=1)

    # Paths
    downloads_dir: Path = Field(
        default=Path(tempfile.gettempdir()) / "hey-picture",
        description="Scratch directory for downloadable result images",
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the downloads directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.downloads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def predict_url(self) -> str:
        """Full URL of the model's predict endpoint (without the key parameter)."""
        return f"{self.api_base_url.rstrip('/')}/models/{self.model_id}:predict"


# Global configuration instance
# Loads values from environment variables (HEYPICTURE_* prefix) and .env file.
config = HeyPictureConfig()
