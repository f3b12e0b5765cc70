"""Errors raised while aggregating posterior draws into weekly forecasts.

All of these are fatal. The aggregation is a deterministic batch transform
so there is nothing to retry and no partial table is ever returned.
"""
from typing import Iterable, List, Tuple

import pandas as pd


class AggregationError(Exception):
    """Base class for forecast aggregation failures."""


class SchemaMismatch(AggregationError):
    """Draw matrices or the daily series disagree with the expected layout."""


class IncompleteWeekError(AggregationError):
    """A current or future epiweek aggregated fewer than seven days."""

    def __init__(self, weeks: Iterable[Tuple[str, pd.Timestamp]]):
        self.weeks: List[Tuple[str, pd.Timestamp]] = list(weeks)
        described = ', '.join(f'({location}, {pd.Timestamp(end_date):%Y-%m-%d})'
                              for location, end_date in self.weeks)
        super().__init__(f'Incomplete epiweeks with horizon >= 0 found for '
                         f'(location, target_end_date): {described}.')


class InvalidQuantileLevel(AggregationError, ValueError):
    """A requested quantile level is not strictly between 0 and 1."""

    def __init__(self, levels: Iterable):
        self.levels = list(levels)
        super().__init__(f'Quantile levels must be numbers strictly between 0 and 1. '
                         f'Invalid levels: {self.levels}.')
