"""Gradio web interface for PixelPerfect ID."""

from __future__ import annotations

import atexit
import logging
import shutil
import sys
import tempfile

import gradio as gr

from .config import Settings
from .constants import ID_PRESETS
from .critique import CritiqueClient
from .exceptions import (
    DecodeError,
    NoImageLoadedError,
    RenderError,
    ValidationError,
)
from .logging_config import setup_logging
from .session import PhotoSession

logger = logging.getLogger("pixelperfect.main")

# Every download of this process goes into one temp directory
_download_dir: str | None = None


def _get_download_dir() -> str:
    global _download_dir
    if _download_dir is None:
        _download_dir = tempfile.mkdtemp(prefix="pixelperfect-")
    return _download_dir


def _cleanup_temp_files() -> None:
    """Remove the download directory and everything in it."""
    global _download_dir
    if _download_dir is not None:
        shutil.rmtree(_download_dir, ignore_errors=True)
        _download_dir = None


atexit.register(_cleanup_temp_files)


def _dimension_badge(session: PhotoSession) -> str:
    if not session.has_image:
        return ""
    width, height = session.dimensions
    return f"**{width} x {height} px**"


def _view(session: PhotoSession) -> tuple:
    """Values for (state, preview, badge, width field, height field)."""
    return (
        session,
        session.display_image,
        _dimension_badge(session),
        session.target_width,
        session.target_height,
    )


def critique_for_display(session: PhotoSession) -> str | None:
    """Critique the displayed image for the critique panel.

    Returns None if a different image went on display while the model was
    answering; the panel then keeps whatever the newer action put there.
    """
    if not session.has_image:
        return ""
    digest = session.displayed_digest
    result = session.request_critique()
    if session.displayed_digest != digest:
        logger.info("Dropping critique for an image no longer on display")
        return None
    return result


def create_interface(settings: Settings | None = None) -> gr.Blocks:
    """Create Gradio interface for PixelPerfect ID."""
    settings = settings or Settings.from_env()
    critique_client = CritiqueClient(settings)

    def get_session(state: PhotoSession | None) -> PhotoSession:
        if state is None:
            return PhotoSession(settings, critique_client)
        return state

    with gr.Blocks(title="PixelPerfect ID", theme=gr.themes.Soft()) as interface:
        gr.Markdown(
            """
        # PixelPerfect ID

        **Resize your photo to standard ID sizes, check it with AI, and download it.**
        """
        )

        session_state = gr.State(None)

        with gr.Row():
            # Left column - Upload & Preview
            with gr.Column(scale=2):
                file_input = gr.File(
                    label="Upload your photo",
                    file_types=["image"],
                    type="filepath",
                )

                preview_image = gr.Image(
                    label="Preview",
                    type="pil",
                    interactive=False,
                    height=500,
                )
                dimension_badge = gr.Markdown()

                with gr.Row():
                    reset_btn = gr.Button("Reset Changes")

                gr.Markdown("### AI Quality Check")
                gr.Markdown("Get instant feedback on ID photo suitability")
                analyze_btn = gr.Button("Analyze Photo", variant="secondary")
                critique_output = gr.Markdown()

            # Right column - Controls
            with gr.Column(scale=1):
                gr.Markdown("### Custom Dimensions")

                with gr.Row():
                    width_input = gr.Number(label="Width (px)", precision=0)
                    height_input = gr.Number(label="Height (px)", precision=0)

                apply_btn = gr.Button("Apply Resize", variant="primary")

                gr.Markdown("### Standard ID Sizes")

                preset_buttons = []
                for preset in ID_PRESETS:
                    btn = gr.Button(f"{preset.label}  ({preset.width} x {preset.height} px)")
                    gr.Markdown(f"<small>{preset.description}</small>")
                    preset_buttons.append((preset.id, btn))

                gr.Markdown("*Note: Presets apply a center crop to maintain aspect ratio.*")

                download_btn = gr.Button("Download Photo", variant="primary", size="lg")
                download_file = gr.File(label="Download")

        view_outputs = [
            session_state,
            preview_image,
            dimension_badge,
            width_input,
            height_input,
        ]

        # Event handlers
        def handle_upload(uploaded_file: str | None, state: PhotoSession | None) -> tuple:
            session = get_session(state)
            if uploaded_file is None:
                return (*_view(session), "")

            try:
                session.load_file(uploaded_file)
            except (DecodeError, ValidationError) as e:
                logger.error("Error loading image: %s", e)
                raise gr.Error("Failed to load image") from e

            return (*_view(session), "")

        file_input.upload(
            handle_upload,
            inputs=[file_input, session_state],
            outputs=[*view_outputs, critique_output],
        )

        def run_resize(session: PhotoSession, action) -> tuple:
            try:
                action()
            except NoImageLoadedError as e:
                raise gr.Error(str(e)) from e
            except ValidationError as e:
                raise gr.Error("Please enter valid dimensions") from e
            except RenderError as e:
                raise gr.Error("Failed to process image") from e
            return (*_view(session), "")

        def handle_custom_resize(
            width: float | None, height: float | None, state: PhotoSession | None
        ) -> tuple:
            session = get_session(state)
            return run_resize(session, lambda: session.apply_custom(width, height))

        apply_btn.click(
            handle_custom_resize,
            inputs=[width_input, height_input, session_state],
            outputs=[*view_outputs, critique_output],
        )

        for preset_id, btn in preset_buttons:

            def handle_preset(state: PhotoSession | None, preset_id: str = preset_id) -> tuple:
                session = get_session(state)
                return run_resize(session, lambda: session.apply_preset(preset_id))

            btn.click(
                handle_preset,
                inputs=[session_state],
                outputs=[*view_outputs, critique_output],
            )

        def handle_reset(state: PhotoSession | None) -> tuple:
            session = get_session(state)
            if session.has_image:
                session.reset()
            return (*_view(session), "")

        reset_btn.click(
            handle_reset,
            inputs=[session_state],
            outputs=[*view_outputs, critique_output],
        )

        def handle_download(state: PhotoSession | None) -> str | None:
            session = get_session(state)
            if not session.has_image:
                return None
            try:
                path = session.download(_get_download_dir())
            except RenderError as e:
                raise gr.Error("Failed to process image") from e
            return str(path)

        download_btn.click(
            handle_download,
            inputs=[session_state],
            outputs=[download_file],
        )

        def handle_analysis(state: PhotoSession | None):
            session = get_session(state)
            try:
                result = critique_for_display(session)
            except RenderError as e:
                raise gr.Error("Failed to process image") from e
            if result is None:
                return gr.update()
            return result

        analyze_btn.click(
            handle_analysis,
            inputs=[session_state],
            outputs=[critique_output],
        )

    return interface


def main() -> None:
    """Main entry point."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    logger.info("=" * 70)
    logger.info("PIXELPERFECT ID - ID Photo Resizer")
    logger.info("=" * 70)

    if not settings.has_api_key:
        logger.warning("No Gemini API key configured; AI quality check is disabled")

    logger.info("Starting web interface...")

    try:
        interface = create_interface(settings)
        interface.launch(
            server_name=settings.host,
            server_port=settings.port,
            share=False,
            show_error=True,
        )
    except Exception as e:
        logger.error("Failed to start: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
