"""Result gallery and download handlers."""

import logging
import shutil
import uuid
from pathlib import Path

import gradio as gr

from heypicture.core.config import config

from ..models import DOWNLOAD_NAME_TEMPLATE, UIState

logger = logging.getLogger(__name__)


def download_filename(index: int) -> str:
    """File name offered for the result at 0-based ``index``."""
    return DOWNLOAD_NAME_TEMPLATE.format(index=index + 1)


def save_results(images: list[bytes], downloads_dir: Path | None = None) -> list[Path]:
    """Write result images to a fresh batch folder for display and download.

    Files are named hey-picture-image-1.png, hey-picture-image-2.png, ... in
    gallery order. Each batch gets its own folder so that names never clash
    between generations.

    Args:
        images: Encoded result images, in display order
        downloads_dir: Parent folder (default: config.downloads_dir)

    Returns:
        Paths of the written files, in the same order as ``images``
    """
    base_dir = downloads_dir or config.downloads_dir
    batch_dir = base_dir / uuid.uuid4().hex
    batch_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for index, image in enumerate(images):
        path = batch_dir / download_filename(index)
        path.write_bytes(image)
        paths.append(path)

    logger.info(f"Saved {len(paths)} result image(s) to {batch_dir}")
    return paths


def discard_results(paths: list[Path], downloads_dir: Path | None = None) -> None:
    """Delete the batch folders holding result files that are no longer shown.

    Only folders directly under ``downloads_dir`` are removed.

    Args:
        paths: Result files written by ``save_results``
        downloads_dir: Parent folder (default: config.downloads_dir)
    """
    base_dir = (downloads_dir or config.downloads_dir).resolve()
    for batch_dir in {path.parent for path in paths}:
        if batch_dir.resolve().parent != base_dir:
            logger.warning(f"Not removing {batch_dir}: outside {base_dir}")
            continue
        try:
            shutil.rmtree(batch_dir)
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.warning(f"Could not remove old results in {batch_dir}: {e}")
            continue
        logger.debug(f"Removed old results in {batch_dir}")


def format_notice(message: str) -> str:
    return f"ℹ️ {message}" if message else ""


def format_error(error: str) -> str:
    return f"❌ **Error**\n\n{error}" if error else ""


def render_outputs(state: UIState) -> tuple:
    """Build every result component update from the session state.

    Returns:
        Tuple of (gallery_value, downloads_update, notice_update,
        dismiss_button_update, error_banner_update, state)
    """
    paths = [str(path) for path in state.results]
    return (
        paths,
        gr.update(value=paths or None, visible=bool(paths)),
        gr.update(value=format_notice(state.message), visible=bool(state.message)),
        gr.update(visible=bool(state.message)),
        gr.update(value=format_error(state.error), visible=bool(state.error)),
        state,
    )
