"""CLI entry point for parsebench"""

import logging
import sys

import click

from parsebench.__version__ import __version__
from parsebench.errors import DiscoveryError
from parsebench.models import PoolConfig
from parsebench.parser import LANGUAGE_EXTENSIONS, LANGUAGES
from parsebench.pipeline import run_pipeline
from parsebench.profiling import cpu_profile
from parsebench.utils import default_worker_count, setup_logging

logger = logging.getLogger(__name__)


@click.command('parsebench')
@click.argument('directories', nargs=-1, required=True, type=click.Path())
@click.option(
    '--cpuprofile',
    type=click.Path(dir_okay=False, writable=True),
    help='Write a CPU profile of all threads to file (pstats format)',
)
@click.option(
    '--workers',
    '-w',
    type=click.IntRange(min=1),
    default=None,
    help='Number of parallel parse workers (default: $PARSEBENCH_WORKERS or 12)',
)
@click.option(
    '--language',
    type=click.Choice(sorted(LANGUAGES)),
    default='typescript',
    show_default=True,
    help='Grammar used to parse every file',
)
@click.option(
    '--ext',
    'extensions',
    multiple=True,
    help='File extension to collect, repeatable (default depends on --language)',
)
@click.option('--log-level', default=None, help='Log level (default: $PARSEBENCH_LOG_LEVEL or INFO)')
@click.version_option(version=__version__, prog_name='parsebench')
def cli(
    directories: tuple[str, ...],
    cpuprofile: str | None,
    workers: int | None,
    language: str,
    extensions: tuple[str, ...],
    log_level: str | None,
):
    """
    Parse source files under DIRECTORY... in parallel and report timings.

    Prints one line per successfully parsed file:

    \b
        Parsed <path> in <duration> with <count> elements

    Files that cannot be read or parsed are logged to stderr and left out.

    \b
    Examples:
        parsebench src/
        parsebench src/ lib/ --workers 4
        parsebench app/ --language tsx
        parsebench src/ --cpuprofile parse.prof
    """
    setup_logging(log_level)

    config = PoolConfig(
        worker_count=workers or default_worker_count(),
        language=language,
        extensions=extensions or LANGUAGE_EXTENSIONS[language],
    )

    with cpu_profile(cpuprofile):
        try:
            run_pipeline(directories, config)
        except DiscoveryError as e:
            logger.critical(f'Failed to get files from {e.root}: {e.cause}')
            sys.exit(1)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
