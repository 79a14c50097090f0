"""Data models for Hey Picture UI state."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Where the session is in the generate/display cycle."""

    IDLE = "idle"
    REQUESTING = "requesting"
    DISPLAYING = "displaying"
    FAILED = "failed"


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each browser session gets its own UIState. The API key is never stored
    here; it only lives in the password textbox.

    Attributes
    ----------
    phase : Phase
        Current phase of the generate/display cycle
    generation_token : int
        Incremented by every generation request. A completion carrying an
        older token is stale and is discarded.
    results : list[Path]
        Downloadable result files of the displayed generation, in gallery order
    error : str
        Error banner text (generation failures), empty when hidden
    message : str
        Dismissible notice text (validation messages), empty when hidden
    """

    phase: Phase = Phase.IDLE
    generation_token: int = 0
    results: list[Path] = field(default_factory=list)
    error: str = ""
    message: str = ""

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"UIState(phase={self.phase.value}, "
            f"token={self.generation_token}, "
            f"results={len(self.results)})"
        )


# Name of the Nth (1-based) downloadable result
DOWNLOAD_NAME_TEMPLATE = "hey-picture-image-{index}.png"
