"""Command-line interface for durs."""

from __future__ import annotations

from pathlib import Path

import click

from durs.app.runner import Mode
from durs.core.config import VALID_LOG_LEVELS, ConfigurationError, discover_config_file
from durs.core.filesystem import TraversalError

EXIT_INTERRUPTED = 130

CONFIG_EXTENSIONS = frozenset({".yaml", ".yml"})


def validate_config_path(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: Path | None,
) -> Path | None:
    """Validate configuration file path.

    Raises:
        click.BadParameter: If the path is a directory or not a YAML file
    """
    if value is None:
        return value

    if value.exists() and value.is_dir():
        raise click.BadParameter("Configuration path must be a file, not a directory")

    if value.suffix.lower() not in CONFIG_EXTENSIONS:
        extensions_str = ", ".join(sorted(CONFIG_EXTENSIONS))
        raise click.BadParameter(f"Invalid configuration file extension. Supported extensions: {extensions_str}")

    return value


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level to upper case.

    Raises:
        click.BadParameter: If the level is not recognised
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()
    if normalized_value not in VALID_LOG_LEVELS:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(VALID_LOG_LEVELS))}'
        )
    return normalized_value


try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("durs")
except PackageNotFoundError:
    __version__ = "unknown"


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "path",
    type=click.Path(path_type=Path),
    default=Path.cwd,
    required=False,
)
@click.option("--browse", "mode", flag_value=Mode.BROWSE.value, default=True, help="Browse interactively (default).")
@click.option("--list", "mode", flag_value=Mode.LIST.value, help="List the direct children of PATH.")
@click.option("--recursive", "-r", "mode", flag_value=Mode.RECURSIVE.value, help="List everything below PATH.")
@click.option("--size", "-s", "mode", flag_value=Mode.SIZE.value, help="Print the total size of PATH.")
@click.option("--summary", "mode", flag_value=Mode.SUMMARY.value, help="Print a table of children and their sizes.")
@click.option(
    "--bytes", "-b",
    "raw_bytes",
    is_flag=True,
    help="Show raw byte counts instead of binary units.",
)
@click.option(
    "--config", "-c",
    type=click.Path(path_type=Path),
    default=None,
    callback=validate_config_path,
    help="Configuration file (.yaml or .yml). If not specified, searches standard locations.",
)
@click.option(
    "--log-level", "-l",
    type=str,
    default=None,
    callback=validate_log_level,
    help="Logging verbosity level (DEBUG, INFO, WARNING, ERROR).",
)
@click.version_option(version=__version__, prog_name="durs")
def cli(
    path: Path,
    mode: str,
    raw_bytes: bool,
    config: Path | None,
    log_level: str | None,
) -> None:
    """durs - inspect disk usage below PATH.

    PATH defaults to the current directory. Symbolic links are never
    followed; a link counts as the size of the link itself.

    Examples:

        # Browse the current directory
        durs

        # Total size of a directory in bytes
        durs --size --bytes /var/log

        # Everything below a directory, one path per line
        durs --recursive ~/projects
    """
    from durs.app.runner import ApplicationRunner

    runner = ApplicationRunner(
        path=path,
        mode=Mode(mode),
        config_path=config if config is not None else discover_config_file(),
        log_level=log_level,
        human_readable=False if raw_bytes else None,
    )

    try:
        exit_code = runner.run()
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        raise SystemExit(EXIT_INTERRUPTED) from None
    except (TraversalError, ConfigurationError) as e:
        raise click.ClickException(str(e)) from e

    if exit_code:
        raise SystemExit(exit_code)
