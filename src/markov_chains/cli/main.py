"""
Main CLI entry point
"""

import click
import logging

from .. import __version__
from ..config import get_settings
from ..utils.exceptions import ConfigurationError
from ..utils.logging_config import setup_logging
from .chain_cli import diffusion, sample, show, stationary

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Log file path")
@click.option("--json-logs", is_flag=True, help="Write the log file as JSON lines")
@click.pass_context
def main(ctx, verbose, log_file, json_logs):
    """Continuous-time Markov chain toolkit"""

    try:
        settings = get_settings()
    except ConfigurationError as e:
        raise click.ClickException(e.message) from e

    if verbose or log_file:
        level = "DEBUG" if verbose else settings.logging_level
        setup_logging(level=level, log_file=log_file, json_format=json_logs)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings

    logger.debug("markov-chains CLI initialized")


main.add_command(show)
main.add_command(stationary)
main.add_command(sample)
main.add_command(diffusion)

if __name__ == "__main__":
    main()
