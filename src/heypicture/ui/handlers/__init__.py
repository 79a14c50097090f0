"""UI event handlers organized by feature area.

- generation: Image generation and notice dismissal
- gallery: Result files, download names, and rendering state into components
"""

from .gallery import (
    discard_results,
    download_filename,
    render_outputs,
    save_results,
)
from .generation import (
    dismiss_notice_handler,
    generate_images,
)

__all__ = [
    # Generation handlers
    "dismiss_notice_handler",
    "generate_images",
    # Gallery handlers
    "discard_results",
    "download_filename",
    "render_outputs",
    "save_results",
]
