"""Application runner for durs."""

from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path

from rich.console import Console

from durs.app.browser import Browser, run_browser
from durs.app.output import build_summary_table, collect_rows, print_paths, print_total, sort_rows
from durs.app.terminal import TerminalController
from durs.core.config import ConfigurationError, DursConfig, load_config
from durs.core.filesystem import TraversalError, list_entries, list_recursive, total_size
from durs.utils.logging import configure_logging, get_logger, path_context

logger = get_logger(__name__)


class Mode(str, Enum):
    """What a single invocation does with its path."""

    BROWSE = "browse"
    LIST = "list"
    RECURSIVE = "recursive"
    SIZE = "size"
    SUMMARY = "summary"


class ApplicationRunner:
    """Coordinates configuration, logging and one inspection of a path."""

    def __init__(
        self,
        path: Path,
        mode: Mode = Mode.BROWSE,
        config_path: Path | None = None,
        log_level: str | None = None,
        human_readable: bool | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize the application runner.

        Args:
            path: Path to inspect
            mode: What to do with the path
            config_path: Configuration file (None uses defaults)
            log_level: Override for the configured log level
            human_readable: Override for the configured size display
            console: Console receiving command output (stdout by default)
        """
        self.path: Path = path
        self.mode: Mode = mode
        self.config_path: Path | None = config_path
        self.log_level: str | None = log_level
        self.human_readable: bool | None = human_readable
        self.console: Console = console or Console()

    def load_config(self) -> DursConfig:
        """Load the configuration file and apply command-line overrides.

        Raises:
            ConfigurationError: If the configuration file is invalid
        """
        config = DursConfig() if self.config_path is None else load_config(self.config_path)
        if self.log_level is not None:
            config.logging.level = self.log_level
        if self.human_readable is not None:
            config.output.human_readable = self.human_readable
        return config

    def run(self) -> int:
        """Run the application.

        Returns:
            Process exit code

        Raises:
            ConfigurationError: If the configuration file is invalid
                or the log file cannot be opened
            TraversalError: If the path cannot be inspected
        """
        config = self.load_config()
        mode = self.mode
        if mode is Mode.BROWSE and not self._is_interactive():
            mode = Mode.SUMMARY

        try:
            configure_logging(
                log_level=config.logging.level,
                log_file=config.logging.file,
                enable_console=mode is not Mode.BROWSE,
            )
        except OSError as e:
            msg = f"Cannot open log file {config.logging.file}: {e}"
            raise ConfigurationError(msg) from e
        if self.config_path is not None:
            logger.info("Loaded configuration from %s", self.config_path)

        with path_context(self.path):
            logger.debug("Running in %s mode", mode.value)
            try:
                self._dispatch(mode, config)
            except TraversalError as exc:
                logger.error("Inspection failed: %s", exc)
                raise
            logger.debug("Finished %s", mode.value)
        return 0

    def _dispatch(self, mode: Mode, config: DursConfig) -> None:
        human_readable = config.output.human_readable
        if mode is Mode.LIST:
            print_paths(self.console, list_entries(self.path))
        elif mode is Mode.RECURSIVE:
            print_paths(self.console, list_recursive(self.path))
        elif mode is Mode.SIZE:
            print_total(self.console, self.path, total_size(self.path), human_readable=human_readable)
        elif mode is Mode.SUMMARY:
            rows = sort_rows(collect_rows(self.path), config.browser.sort_by)
            self.console.print(build_summary_table(rows, human_readable=human_readable, title=str(self.path)))
        else:
            browser = Browser(
                self.path,
                sort_by=config.browser.sort_by,
                show_hidden=config.browser.show_hidden,
                human_readable=human_readable,
            )
            terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
            run_browser(browser, terminal, poll_interval=config.browser.poll_interval)

    def _is_interactive(self) -> bool:
        return sys.stdin.isatty() and sys.stdout.isatty()
