import functools
from typing import Any, Callable, List, Optional

from loguru import logger
from pathos import multiprocessing
import tqdm


def run_parallel(runner: Callable,
                 arg_list: List,
                 num_cores: int,
                 progress_bar: bool = False,
                 description: Optional[str] = None) -> List[Any]:
    """Map a single argument function over ``arg_list``.

    Results come back in the order of ``arg_list``. With one core the work
    runs in this process so breakpoints and ``--pdb`` still work.

    """
    num_cores = min(num_cores, len(arg_list)) or 1
    progress = functools.partial(tqdm.tqdm, total=len(arg_list), disable=not progress_bar, desc=description)
    if num_cores == 1:
        results = [runner(arg) for arg in progress(arg_list)]
    else:
        logger.debug(f'Running {len(arg_list)} tasks on {num_cores} processes.')
        with multiprocessing.ProcessPool(num_cores) as pool:
            results = list(progress(pool.imap(runner, arg_list)))
    return results
