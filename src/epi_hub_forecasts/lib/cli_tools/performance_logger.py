from collections import OrderedDict
import time
from typing import Optional

from loguru import logger


class _TaskPerformanceLogger:
    """Loguru passthrough that times how long a stage spends in each context.

    Logging with a new ``context`` closes the running context and opens the
    new one. Logging without a context leaves the clock alone.
    """

    def __init__(self):
        self.current_context: Optional[str] = None
        self.current_context_start: Optional[float] = None
        self.times = OrderedDict()

    def _switch_context(self, context: Optional[str]) -> None:
        if context is None or context == self.current_context:
            return
        self._stop_clock()
        self.current_context = context
        self.current_context_start = time.perf_counter()

    def _stop_clock(self) -> None:
        if self.current_context is not None:
            elapsed = time.perf_counter() - self.current_context_start
            self.times[self.current_context] = self.times.get(self.current_context, 0.) + elapsed
        self.current_context = None
        self.current_context_start = None

    def info(self, *args, context=None, **kwargs):
        self._switch_context(context)
        logger.info(*args, **kwargs)

    def debug(self, *args, context=None, **kwargs):
        self._switch_context(context)
        logger.debug(*args, **kwargs)

    def warning(self, *args, context=None, **kwargs):
        self._switch_context(context)
        logger.warning(*args, **kwargs)

    def report(self) -> None:
        """Log the time spent per context and start over."""
        self._stop_clock()
        total = sum(self.times.values())
        rows = [f'{context:<20}:{elapsed:>10.2f}' for context, elapsed in self.times.items()]
        rows.append(f'{"total":<20}:{total:>10.2f}')
        logger.info('\nRuntime report\n' + '=' * 31 + '\n' + '\n'.join(rows))
        self.times.clear()


task_performance_logger = _TaskPerformanceLogger()
