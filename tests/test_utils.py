"""Unit tests for utility functions (precast.utils).

Tests cover:
- Logger levels, debug gating and markup escaping
- ensure_dir / is_empty_dir / remove_tree
- Rich output helpers
"""

from __future__ import annotations

import io
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from precast.utils import (
    Logger,
    ensure_dir,
    is_empty_dir,
    print_error,
    print_success,
    print_warning,
    remove_tree,
)


def _capture(debug: bool | None) -> tuple[Logger, io.StringIO]:
    buf = io.StringIO()
    return Logger(debug=debug, out=Console(file=buf, width=1000, color_system=None)), buf


# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------


class TestLogger:
    @pytest.mark.unit
    def test_levels(self):
        logger, buf = _capture(debug=False)
        logger.info("plain")
        logger.success("done")
        logger.warn("careful")
        logger.error("broken")
        out = buf.getvalue()
        assert "plain" in out
        assert "✓ done" in out
        assert "⚠ careful" in out
        assert "✗ broken" in out

    @pytest.mark.unit
    def test_debug_hidden_by_default(self):
        logger, buf = _capture(debug=False)
        logger.debug("noisy")
        assert buf.getvalue() == ""

    @pytest.mark.unit
    def test_debug_shown_when_enabled(self):
        logger, buf = _capture(debug=True)
        logger.debug("Generated: a.txt")
        assert "[DEBUG] Generated: a.txt" in buf.getvalue()

    @pytest.mark.unit
    def test_debug_from_environment(self):
        with patch.dict(os.environ, {"DEBUG": "1"}):
            logger, _ = _capture(debug=None)
        assert logger.debug_enabled is True

    @pytest.mark.unit
    def test_brackets_printed_verbatim(self):
        logger, buf = _capture(debug=False)
        logger.info("routes/[id].tsx")
        assert "routes/[id].tsx" in buf.getvalue()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestFileHelpers:
    @pytest.mark.unit
    def test_ensure_dir(self, tmp_path: Path):
        target = tmp_path / "a" / "b"
        assert ensure_dir(target) == target
        assert target.is_dir()
        ensure_dir(target)

    @pytest.mark.unit
    def test_is_empty_dir(self, tmp_path: Path):
        assert is_empty_dir(tmp_path / "missing") is True
        assert is_empty_dir(tmp_path) is True
        (tmp_path / "f").write_text("x", encoding="utf-8")
        assert is_empty_dir(tmp_path) is False

    @pytest.mark.unit
    def test_file_is_not_empty_dir(self, tmp_path: Path):
        path = tmp_path / "f"
        path.write_text("x", encoding="utf-8")
        assert is_empty_dir(path) is False

    @pytest.mark.unit
    def test_remove_tree(self, tmp_path: Path):
        target = tmp_path / "proj"
        (target / "src").mkdir(parents=True)
        (target / "src" / "a.txt").write_text("a", encoding="utf-8")
        remove_tree(target)
        assert not target.exists()
        remove_tree(target)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    @pytest.mark.unit
    @pytest.mark.parametrize("fn", [print_success, print_error, print_warning])
    def test_helpers_print(self, fn):
        with patch("precast.utils.console") as mock_console:
            fn("message")
        mock_console.print.assert_called_once()
        assert "message" in mock_console.print.call_args[0][0]
