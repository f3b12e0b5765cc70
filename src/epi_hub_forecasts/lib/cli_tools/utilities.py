from bdb import BdbQuit
import datetime
import functools
from pathlib import Path
import sys
from typing import Any, Callable, Optional, Union

from loguru import logger


LOG_FORMAT = ('<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | '
              '<level>{level: <8}</level> | '
              '<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - '
              '<level>{message}</level>')


def handle_exceptions(func: Callable, logger: Any, with_debugger: bool) -> Callable:
    """Drops a user into an interactive debugger if func raises an error."""

    @functools.wraps(func)
    def wrapped(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (BdbQuit, KeyboardInterrupt):
            raise
        except Exception as e:
            logger.exception("Uncaught exception {}".format(e))
            if with_debugger:
                import pdb
                import traceback
                traceback.print_exc()
                pdb.post_mortem()
            else:
                raise

    return wrapped


def configure_logging_to_terminal(verbose: int) -> None:
    """Replace the default loguru sink with one at the requested verbosity.

    ``0`` logs warnings and errors, ``1`` adds info and ``2`` or more adds
    debug messages.

    """
    level = {0: 'WARNING', 1: 'INFO'}.get(verbose, 'DEBUG')
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=True)


def configure_logging_to_files(run_directory: Union[str, Path]) -> None:
    """Adds a main log and a debug log to the run directory."""
    log_dir = Path(run_directory) / 'logs'
    log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(log_dir / 'main_log.txt', level='INFO', format=LOG_FORMAT, colorize=False)
    logger.add(log_dir / 'debug_log.txt', level='DEBUG', format=LOG_FORMAT, colorize=False)


def get_input_root(cli_argument: Optional[str], specification_value: Optional[str]) -> Path:
    """Determine the input version to use hierarchically.

    CLI args override spec args.  There is no default input version.

    """
    version = _get_argument_hierarchically(cli_argument, specification_value, None)
    if version is None:
        raise ValueError('No input version provided on the command line or in the specification.')
    return Path(version).resolve()


def get_output_root(cli_argument: Optional[str], specification_value: Optional[str]) -> Path:
    """Determine the output root hierarchically.

    CLI arguments override specification args.  Both default to the
    current working directory.

    """
    version = _get_argument_hierarchically(cli_argument, specification_value, Path.cwd())
    version = Path(version).resolve()
    return version


def make_run_directory(output_root: Union[str, Path]) -> Path:
    """Make a new run directory named ``YYYY_MM_DD.NN`` under the output root.

    The run number increments over existing run directories made on the
    same day.

    """
    output_root = Path(output_root)
    output_root.mkdir(parents=True, exist_ok=True)
    today = datetime.date.today().strftime('%Y_%m_%d')
    existing = [p.name for p in output_root.glob(f'{today}.*') if p.is_dir()]
    run_numbers = [int(name.split('.')[-1]) for name in existing if name.split('.')[-1].isdigit()]
    run_number = max(run_numbers, default=0) + 1
    run_directory = output_root / f'{today}.{run_number:0>2}'
    run_directory.mkdir()
    return run_directory


def _get_argument_hierarchically(cli_argument: Optional,
                                 specification_value: Optional,
                                 default: Any) -> Any:
    """Determine the argument to use hierarchically.

    Prefer cli args over values in a specification file over the default.
    """
    if cli_argument:
        output = cli_argument
    elif specification_value:
        output = specification_value
    else:
        output = default
    return output
