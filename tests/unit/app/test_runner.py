"""Tests for the application runner."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from durs.app.runner import ApplicationRunner, Mode
from durs.core.config import ConfigurationError, SortKey
from durs.core.filesystem import TraversalError


def _make_runner(path: Path, mode: Mode, **kwargs: object) -> tuple[ApplicationRunner, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, color_system=None)
    runner = ApplicationRunner(path, mode=mode, console=console, **kwargs)  # pyright: ignore[reportArgumentType]
    return runner, buffer


class TestApplicationRunnerModes:
    """Test each output mode."""

    def test_list_mode(self, sample_tree: Path) -> None:
        """Test that direct children are printed one per line."""
        runner, buffer = _make_runner(sample_tree, Mode.LIST)

        assert runner.run() == 0

        lines = buffer.getvalue().splitlines()
        assert sorted(lines) == sorted([str(sample_tree / "file"), str(sample_tree / "dir")])

    def test_recursive_mode(self, sample_tree: Path) -> None:
        """Test that every descendant is printed."""
        runner, buffer = _make_runner(sample_tree, Mode.RECURSIVE)

        _ = runner.run()

        lines = buffer.getvalue().splitlines()
        assert len(lines) == 4
        assert set(lines) == {
            str(sample_tree / "file"),
            str(sample_tree / "dir"),
            str(sample_tree / "dir" / "other_file"),
            str(sample_tree / "dir" / "and_another_file"),
        }

    def test_size_mode_human(self, sample_tree: Path) -> None:
        """Test the total in display units."""
        runner, buffer = _make_runner(sample_tree, Mode.SIZE)

        _ = runner.run()

        assert buffer.getvalue() == f"37 B\t{sample_tree}\n"

    def test_size_mode_bytes_override(self, sample_tree: Path) -> None:
        """Test that the command-line override wins over the config."""
        runner, buffer = _make_runner(sample_tree, Mode.SIZE, human_readable=False)

        _ = runner.run()

        assert buffer.getvalue() == f"37\t{sample_tree}\n"

    def test_summary_mode(self, sample_tree: Path) -> None:
        """Test the table of children."""
        runner, buffer = _make_runner(sample_tree, Mode.SUMMARY)

        _ = runner.run()

        output = buffer.getvalue()
        assert "dir/" in output
        assert "file" in output
        assert "Total" in output
        assert "37 B" in output

    def test_browse_falls_back_without_terminal(self, sample_tree: Path) -> None:
        """Test that browse prints the summary when not attached to a terminal."""
        runner, buffer = _make_runner(sample_tree, Mode.BROWSE)

        with patch.object(ApplicationRunner, "_is_interactive", return_value=False):
            _ = runner.run()

        assert "Total" in buffer.getvalue()

    def test_browse_runs_browser(self, sample_tree: Path) -> None:
        """Test that browse hands a configured browser to the event loop."""
        runner, _ = _make_runner(sample_tree, Mode.BROWSE)

        with (
            patch.object(ApplicationRunner, "_is_interactive", return_value=True),
            patch("durs.app.runner.TerminalController") as mock_terminal,
            patch("durs.app.runner.run_browser") as mock_run_browser,
            patch("durs.app.runner.sys") as mock_sys,
        ):
            mock_sys.stdin.fileno.return_value = 0
            mock_sys.stdout.fileno.return_value = 1
            _ = runner.run()

        mock_terminal.assert_called_once_with(0, 1)
        browser = mock_run_browser.call_args.args[0]
        assert browser.path == sample_tree
        assert browser.sort_by is SortKey.SIZE
        assert mock_run_browser.call_args.kwargs["poll_interval"] == 2.0

    def test_browse_disables_console_logging(self, sample_tree: Path) -> None:
        """Test that no stderr handler is installed while the screen is owned."""
        runner, _ = _make_runner(sample_tree, Mode.BROWSE)

        with (
            patch.object(ApplicationRunner, "_is_interactive", return_value=True),
            patch("durs.app.runner.TerminalController", MagicMock()),
            patch("durs.app.runner.run_browser"),
        ):
            _ = runner.run()

        handlers = logging.getLogger().handlers
        assert all(isinstance(handler, logging.NullHandler) for handler in handlers)


class TestApplicationRunnerConfig:
    """Test configuration handling."""

    def test_defaults_without_config_file(self, sample_tree: Path) -> None:
        """Test that no file means default settings."""
        runner = ApplicationRunner(sample_tree)

        config = runner.load_config()

        assert config.output.human_readable is True
        assert config.logging.level == "WARNING"

    def test_overrides_applied(self, sample_tree: Path, tmp_path: Path) -> None:
        """Test that command-line overrides replace file values."""
        config_path = tmp_path / "durs.yaml"
        _ = config_path.write_text("output:\n  human_readable: true\nlogging:\n  level: ERROR\n")
        runner = ApplicationRunner(
            sample_tree,
            config_path=config_path,
            log_level="DEBUG",
            human_readable=False,
        )

        config = runner.load_config()

        assert config.output.human_readable is False
        assert config.logging.level == "DEBUG"

    def test_config_sort_order_used(self, sample_tree: Path, tmp_path: Path) -> None:
        """Test that the configured sort key orders the summary."""
        config_path = tmp_path / "durs.yaml"
        _ = config_path.write_text("browser:\n  sort_by: name\n")
        runner, buffer = _make_runner(sample_tree, Mode.SUMMARY, config_path=config_path)

        _ = runner.run()

        output = buffer.getvalue()
        assert output.index("dir/") < output.index("file")

    def test_log_file_written(self, sample_tree: Path, tmp_path: Path) -> None:
        """Test that the configured log file receives records."""
        log_file = tmp_path / "durs.log"
        config_path = tmp_path / "durs.yaml"
        _ = config_path.write_text(f"logging:\n  level: DEBUG\n  file: {log_file}\n")
        runner, _ = _make_runner(sample_tree, Mode.SIZE, config_path=config_path)

        _ = runner.run()
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text()
        assert "Running in size mode" in content
        assert f"[{sample_tree}]" in content

    def test_unopenable_log_file_is_configuration_error(self, sample_tree: Path, tmp_path: Path) -> None:
        """Test that a log file that cannot be opened is reported as a configuration error."""
        config_path = tmp_path / "durs.yaml"
        _ = config_path.write_text(f"logging:\n  file: {tmp_path / 'durs.log'}\n")
        runner, buffer = _make_runner(sample_tree, Mode.SIZE, config_path=config_path)

        with patch("durs.utils.logging.logging.FileHandler", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(ConfigurationError, match="Cannot open log file") as exc_info:
                _ = runner.run()

        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert buffer.getvalue() == ""

    def test_invalid_config_raises(self, sample_tree: Path, tmp_path: Path) -> None:
        """Test that configuration errors propagate."""
        config_path = tmp_path / "durs.yaml"
        _ = config_path.write_text("browser:\n  sort_by: random\n")
        runner, _ = _make_runner(sample_tree, Mode.SIZE, config_path=config_path)

        with pytest.raises(ConfigurationError):
            _ = runner.run()


class TestApplicationRunnerErrors:
    """Test traversal failures."""

    def test_traversal_error_propagates(self, tmp_path: Path) -> None:
        """Test that the error is logged and re-raised."""
        runner, buffer = _make_runner(tmp_path / "missing", Mode.SIZE)

        with pytest.raises(TraversalError) as exc_info:
            _ = runner.run()

        assert exc_info.value.operation == "stat"
        assert buffer.getvalue() == ""
