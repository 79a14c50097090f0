"""Gradio UI for Hey Picture."""

import logging

import gradio as gr

from heypicture.core.config import config

from .handlers import dismiss_notice_handler, generate_images
from .models import UIState

# Configure logging
logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> gr.Blocks:
    """Create the Gradio UI.

    Returns:
        Gradio Blocks app
    """
    app = gr.Blocks(title="Hey Picture")

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState())

        gr.Markdown(
            """
            # Hey Picture
            ### Generate high-quality images with custom text overlays.
            """
        )

        api_key_input = gr.Textbox(
            label="Your Gemini API Key",
            placeholder="Paste your Gemini API key here (e.g., AIzaSy...)",
            type="password",
        )
        prompt_input = gr.Textbox(
            label="Image Prompt",
            placeholder="e.g., A futuristic city at sunset with flying cars",
            lines=3,
        )
        caption_input = gr.Textbox(
            label="Custom Text Overlay (Optional)",
            placeholder="e.g., 'Welcome to the Future!'",
        )

        generate_btn = gr.Button("Generate Images", variant="primary", size="lg")

        # Dismissible notice for validation messages
        with gr.Row():
            notice = gr.Markdown(visible=False)
            dismiss_btn = gr.Button("Dismiss", size="sm", visible=False)

        # Error banner for generation failures
        error_banner = gr.Markdown(visible=False)

        gr.Markdown("### Generated Images")
        gallery = gr.Gallery(
            label="Output",
            type="filepath",
            columns=3,
            rows=1,
            height=400,
            object_fit="contain",
        )
        downloads = gr.File(
            label="Download",
            file_count="multiple",
            interactive=False,
            visible=False,
        )

        outputs = [gallery, downloads, notice, dismiss_btn, error_banner, ui_state]

        generate_btn.click(
            fn=generate_images,
            inputs=[prompt_input, caption_input, api_key_input, ui_state],
            outputs=outputs,
        )
        prompt_input.submit(
            fn=generate_images,
            inputs=[prompt_input, caption_input, api_key_input, ui_state],
            outputs=outputs,
        )
        dismiss_btn.click(
            fn=dismiss_notice_handler,
            inputs=[ui_state],
            outputs=outputs,
        )

    return app


def main():
    """Main entry point for the application."""
    logger.info("Starting Hey Picture...")
    logger.info(f"Configuration: {config.model_dump()}")

    app = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        allowed_paths=[str(config.downloads_dir)],
    )


if __name__ == "__main__":
    main()
