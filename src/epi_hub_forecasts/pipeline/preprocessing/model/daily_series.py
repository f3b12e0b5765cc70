"""Reshaping of raw daily counts into a complete daily series."""
from typing import Iterable, Optional

from loguru import logger
import pandas as pd

from epi_hub_forecasts.lib.static_vars import (
    COL_DATE,
    COL_LOCATION,
    COL_OBSERVED,
)


def parse_daily_counts(raw: pd.DataFrame,
                       date_column: str = 'date',
                       location_column: str = 'location',
                       count_column: str = 'count') -> pd.DataFrame:
    """Standardize a raw daily table to ``location, date, observed_count``.

    Raises
    ------
    ValueError
        If a named column is missing, a count is negative or a location has
        more than one row for the same date.

    """
    missing = {date_column, location_column, count_column}.difference(raw.columns)
    if missing:
        raise ValueError(f'Raw data is missing columns {sorted(missing)}. '
                         f'Available columns are {list(raw.columns)}.')

    data = pd.DataFrame({
        COL_LOCATION: raw[location_column].astype(str),
        COL_DATE: pd.to_datetime(raw[date_column]).dt.normalize(),
        COL_OBSERVED: pd.to_numeric(raw[count_column], errors='raise'),
    })

    negative = data[COL_OBSERVED] < 0
    if negative.any():
        raise ValueError(f'{negative.sum()} negative counts found, e.g. '
                         f'{data.loc[negative].head().values.tolist()}.')

    duplicated = data.duplicated([COL_LOCATION, COL_DATE])
    if duplicated.any():
        raise ValueError(f'{duplicated.sum()} duplicate (location, date) rows found, e.g. '
                         f'{data.loc[duplicated, [COL_LOCATION, COL_DATE]].head().values.tolist()}.')

    return data.sort_values([COL_LOCATION, COL_DATE]).reset_index(drop=True)


def complete_daily_series(data: pd.DataFrame,
                          start_date: Optional[pd.Timestamp] = None,
                          end_date: Optional[pd.Timestamp] = None,
                          locations: Optional[Iterable[str]] = None) -> pd.DataFrame:
    """Give every location exactly one row for every date in the range.

    Dates without a count get an explicit missing ``observed_count``. Rows
    outside the date range or for unlisted locations are dropped.

    """
    start_date = start_date if start_date is not None else data[COL_DATE].min()
    end_date = end_date if end_date is not None else data[COL_DATE].max()
    locations = sorted(locations) if locations else sorted(data[COL_LOCATION].unique())

    index = pd.MultiIndex.from_product(
        [locations, pd.date_range(start_date, end_date, freq='D')],
        names=[COL_LOCATION, COL_DATE],
    )
    observed = data.set_index([COL_LOCATION, COL_DATE])[COL_OBSERVED]
    completed = observed.reindex(index).reset_index()

    n_filled = len(index.difference(observed.index))
    if n_filled:
        logger.info(f'Filled {n_filled} missing (location, date) rows with no observation.')
    return completed
