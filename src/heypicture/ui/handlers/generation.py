"""Image generation and notice handlers."""

import logging

from heypicture.core.compositor import CaptionStyle
from heypicture.core.config import config
from heypicture.core.generation_client import GenerationError, ImagenClient
from heypicture.core.pipeline import generate_captioned_images

from ..models import UIState
from ..state import (
    begin_generation,
    complete_generation,
    dismiss_notice,
    fail_generation,
    initialize_ui_state,
    show_notice,
)
from ..validation import ValidationError, normalize_caption, validate_inputs
from .gallery import discard_results, render_outputs, save_results

logger = logging.getLogger(__name__)


async def generate_images(
    prompt: str,
    caption: str,
    api_key: str,
    state: UIState | None,
) -> tuple:
    """Generate images from the UI inputs and caption them.

    Validation problems are shown as a dismissible notice and no request is
    sent. Generation failures are shown in the error banner. If another
    generation was started while this one was in flight, this one's outcome
    is dropped and the newer request's state is rendered instead.

    Args:
        prompt: Text prompt
        caption: Optional caption burned onto every image
        api_key: Image service API key typed by the user
        state: UI state

    Returns:
        Tuple of (gallery_value, downloads_update, notice_update,
        dismiss_button_update, error_banner_update, updated_state)
    """
    state = initialize_ui_state(state)

    try:
        request = validate_inputs(prompt, api_key, config.sample_count)
    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
        show_notice(state, str(e))
        return render_outputs(state)

    previous = list(state.results)
    token = begin_generation(state)
    discard_results(previous, config.downloads_dir)
    caption_text = normalize_caption(caption)
    logger.info(
        f"Generation {token}: {request.count} image(s), "
        f"caption {'enabled' if caption_text else 'disabled'}"
    )

    try:
        async with ImagenClient(config) as client:
            images = await generate_captioned_images(
                client,
                request.clean_prompt,
                caption_text,
                api_key,
                count=request.count,
                style=CaptionStyle.from_config(config),
            )
        paths = save_results(images, config.downloads_dir)
        if not complete_generation(state, token, paths):
            discard_results(paths, config.downloads_dir)

    except GenerationError as e:
        logger.error(f"Generation {token} failed: {e!r}")
        fail_generation(state, token, e.message)

    except Exception as e:
        logger.error(f"Error generating images: {e}", exc_info=True)
        fail_generation(
            state,
            token,
            f"An unexpected error occurred. Check logs for details.\n\n`{str(e)}`",
        )

    return render_outputs(state)


def dismiss_notice_handler(state: UIState | None) -> tuple:
    """Hide the notice, leaving results and error banner as they are."""
    state = dismiss_notice(initialize_ui_state(state))
    return render_outputs(state)
