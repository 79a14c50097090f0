"""Unit tests for result gallery handlers."""

from pathlib import Path
from unittest.mock import patch

from heypicture.ui.handlers.gallery import (
    discard_results,
    download_filename,
    format_error,
    format_notice,
    render_outputs,
    save_results,
)
from heypicture.ui.models import Phase, UIState


class TestDownloadFilename:
    def test_one_based_names(self):
        assert download_filename(0) == "hey-picture-image-1.png"
        assert download_filename(2) == "hey-picture-image-3.png"


class TestSaveResults:
    def test_writes_files_in_order(self, temp_dir, three_images):
        paths = save_results(three_images, temp_dir)

        assert [p.name for p in paths] == [
            "hey-picture-image-1.png",
            "hey-picture-image-2.png",
            "hey-picture-image-3.png",
        ]
        assert [p.read_bytes() for p in paths] == three_images

    def test_each_batch_gets_its_own_folder(self, temp_dir, png_bytes):
        first = save_results([png_bytes], temp_dir)
        second = save_results([png_bytes], temp_dir)

        assert first[0].parent != second[0].parent
        assert first[0].name == second[0].name
        assert first[0].exists() and second[0].exists()

    def test_empty_batch(self, temp_dir):
        assert save_results([], temp_dir) == []

    def test_defaults_to_configured_downloads_dir(self, test_config, png_bytes):
        with patch("heypicture.ui.handlers.gallery.config", test_config):
            paths = save_results([png_bytes])

        assert test_config.downloads_dir in paths[0].parents


class TestDiscardResults:
    def test_removes_batch_folder(self, temp_dir, three_images):
        paths = save_results(three_images, temp_dir)

        discard_results(paths, temp_dir)

        assert not paths[0].parent.exists()
        assert temp_dir.exists()

    def test_keeps_other_batches(self, temp_dir, png_bytes):
        old = save_results([png_bytes], temp_dir)
        new = save_results([png_bytes], temp_dir)

        discard_results(old, temp_dir)

        assert not old[0].exists()
        assert new[0].exists()

    def test_missing_folder_is_ignored(self, temp_dir, png_bytes):
        paths = save_results([png_bytes], temp_dir)
        discard_results(paths, temp_dir)

        discard_results(paths, temp_dir)

        assert not paths[0].parent.exists()

    def test_folders_outside_downloads_dir_are_left_alone(self, temp_dir, png_bytes):
        outside = temp_dir / "elsewhere" / "batch"
        outside.mkdir(parents=True)
        stray = outside / "hey-picture-image-1.png"
        stray.write_bytes(png_bytes)

        discard_results([stray], temp_dir / "downloads")

        assert stray.exists()

    def test_empty_list(self, temp_dir):
        discard_results([], temp_dir)


class TestFormatting:
    def test_notice(self):
        assert format_notice("") == ""
        assert "Please enter a prompt" in format_notice("Please enter a prompt")

    def test_error(self):
        assert format_error("") == ""
        assert "boom" in format_error("boom")
        assert "Error" in format_error("boom")


class TestRenderOutputs:
    def test_idle_state_hides_everything(self, ui_state):
        gallery, downloads, notice, dismiss, banner, state = render_outputs(ui_state)

        assert gallery == []
        assert downloads["visible"] is False
        assert downloads["value"] is None
        assert notice["visible"] is False
        assert dismiss["visible"] is False
        assert banner["visible"] is False
        assert state is ui_state

    def test_results_are_listed_in_order(self):
        state = UIState(phase=Phase.DISPLAYING, results=[Path("/tmp/a/1.png"), Path("/tmp/a/2.png")])

        gallery, downloads, *_ = render_outputs(state)

        assert gallery == ["/tmp/a/1.png", "/tmp/a/2.png"]
        assert downloads["value"] == gallery
        assert downloads["visible"] is True

    def test_notice_and_error_are_independent(self):
        state = UIState(phase=Phase.FAILED, error="boom", message="note")

        _, _, notice, dismiss, banner, _ = render_outputs(state)

        assert notice["visible"] is True
        assert dismiss["visible"] is True
        assert banner["visible"] is True
        assert "boom" in banner["value"]
        assert "note" in notice["value"]
