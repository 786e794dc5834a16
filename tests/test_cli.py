"""Tests for the imgclean command-line interface."""

from pathlib import Path

import numpy as np
import pytest

from imgclean.cli import main
from imgclean.io.file_handler import load_image, make_file_path

SAMPLE_PPM = Path(__file__).parent / "data" / "3x3-test.ppm"


def _run(*args):
    """Run the CLI and return its exit code (0 when it returns normally)."""
    try:
        main([str(a) for a in args])
    except SystemExit as e:
        return e.code
    return 0


class TestCLI:
    @pytest.mark.parametrize("strategy", ["adaptive", "integral"])
    def test_success(self, tmp_path, capsys, strategy):
        output = tmp_path / "out.png"
        code = _run("-i", SAMPLE_PPM, "-o", output, "--strategy", strategy)

        assert code == 0
        assert f"Saved image to '{output}'" in capsys.readouterr().out
        result = load_image(make_file_path(output))
        rgb = result.pixels.reshape(-1, 3)
        assert np.all(rgb[:, 0] == rgb[:, 2])
        assert set(np.unique(rgb)) <= {0, 255}

    def test_verbose_reports_time(self, tmp_path, capsys):
        code = _run("--input", SAMPLE_PPM, "--output", tmp_path / "out.ppm", "-v")
        assert code == 0
        assert "Processing time:" in capsys.readouterr().out

    def test_missing_arguments(self, capsys):
        assert _run("-i", SAMPLE_PPM) == 2
        assert "required" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys):
        code = _run("-i", tmp_path / "nope.ppm", "-o", tmp_path / "out.ppm")
        assert code == 1
        assert "Image not found" in capsys.readouterr().err

    def test_unsupported_output_format(self, tmp_path, capsys):
        code = _run("-i", SAMPLE_PPM, "-o", tmp_path / "out.tiff")
        assert code == 1
        assert "Unsupported image format" in capsys.readouterr().err
        assert not (tmp_path / "out.tiff").exists()

    def test_malformed_input(self, tmp_path, capsys):
        bad = tmp_path / "bad.ppm"
        bad.write_text("P3 2 2 255 0 0 0\n")
        code = _run("-i", bad, "-o", tmp_path / "out.ppm")
        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_half_window(self, tmp_path):
        assert _run("-i", SAMPLE_PPM, "-o", tmp_path / "o.ppm", "--half-window", "-1") == 2
