# journal_watch/cli/__init__.py
"""Main CLI entry point."""

import sys
from pathlib import Path

# Configure rich-click BEFORE importing it as click, otherwise the settings
# don't take effect.
import rich_click.rich_click as rc

rc.USE_RICH_MARKUP = True
rc.SHOW_ARGUMENTS = True
rc.SHOW_METAVARS_COLUMN = False
rc.APPEND_METAVARS_HELP = True
rc.MAX_WIDTH = 100

# Nord color scheme
rc.STYLE_OPTION = "bold #8fbcbb"  # Nord7 teal
rc.STYLE_SWITCH = "#a3be8c"  # Nord14 green
rc.STYLE_METAVAR = "#d8dee9"  # Nord4 light gray
rc.STYLE_USAGE = "bold #8fbcbb"
rc.STYLE_OPTION_DEFAULT = "#4c566a"  # Nord3 dim gray
rc.STYLE_HELPTEXT_FIRST_LINE = "bold"
rc.STYLE_HELPTEXT = "#d8dee9"

import rich_click as click

from .. import __version__
from ..config import Config
from ..io.logger import setup_logging
from .bootstrap import check_privileges, run_tail
from .error_handler import ConfigError, handle_cli_error


def load_config(
    config_path: Path = None,
    history: int = None,
    on_invalidate: str = None,
    log_level: str = None,
) -> Config:
    """Load configuration and apply command line overrides."""
    try:
        config = Config(config_path)
        if history is not None:
            config.set("tail.history", history)
        if on_invalidate is not None:
            config.set("tail.on_invalidate", on_invalidate)
        if log_level is not None:
            config.set("logging.level", log_level)
    except (ValueError, FileNotFoundError) as e:
        raise ConfigError(
            str(e), suggestion="Fix or remove the configuration file."
        ) from e
    return config


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="journal-watch")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file (default: ~/.config/journal-watch/journal-watch.yaml)",
)
@click.option(
    "--history",
    type=click.IntRange(min=0),
    help="Number of past records to show before following [default: 20]",
)
@click.option(
    "--on-invalidate",
    type=click.Choice(["reopen", "drain"]),
    help="Re-open the journal on rotation, or keep draining the old handle",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Diagnostic verbosity on standard error",
)
@handle_cli_error
def cli(config_path, history, on_invalidate, log_level):
    """Follow the local system journal.

    Prints the most recent records, then streams new ones as they are
    written, colored by severity. Diagnostics go to standard error.

    Press Ctrl+C to exit.
    """
    config = load_config(config_path, history, on_invalidate, log_level)
    setup_logging(config.get("logging.level"), config.get("logging.file"))

    check_privileges()
    sys.exit(run_tail(config))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
