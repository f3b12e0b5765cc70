"""Daily to epiweek aggregation of long prediction records."""
from loguru import logger
import pandas as pd

from epi_hub_forecasts.lib.static_vars import (
    COL_COUNT,
    COL_DATE,
    COL_LOCATION,
    COL_OBSERVED,
    DAYS_PER_WEEK,
    WEEKLY_COLUMNS,
)
from epi_hub_forecasts.pipeline.aggregation.model.errors import IncompleteWeekError

WEEK_KEYS = ['reference_date', 'target_end_date', COL_LOCATION]


def compute_horizon(target_end_dates: pd.Series, reference_dates: pd.Series) -> pd.Series:
    """Signed number of epiweeks from the reference date to the target end date."""
    return ((target_end_dates - reference_dates).dt.days // DAYS_PER_WEEK).astype(int)


def observed_weekly_sums(predictions: pd.DataFrame) -> pd.Series:
    """Sum of the observed counts available in each epiweek.

    Days without an observation are left out of the sum. A week with no
    observed days at all has a missing sum rather than zero.

    """
    daily = predictions.drop_duplicates([COL_LOCATION, COL_DATE])
    return (daily
            .groupby(WEEK_KEYS)[COL_OBSERVED]
            .sum(min_count=1)
            .rename('obs_weekly_sum'))


def validate_complete_weeks(weekly: pd.DataFrame) -> None:
    """Current and future epiweeks must aggregate exactly seven days."""
    incomplete = weekly.loc[(weekly['horizon'] >= 0) & (weekly['n_days_data'] != DAYS_PER_WEEK)]
    if not incomplete.empty:
        weeks = (incomplete[[COL_LOCATION, 'target_end_date']]
                 .drop_duplicates()
                 .sort_values([COL_LOCATION, 'target_end_date']))
        raise IncompleteWeekError(weeks.itertuples(index=False, name=None))


def aggregate_weekly(predictions: pd.DataFrame) -> pd.DataFrame:
    """Sum daily draws into epiweeks.

    Parameters
    ----------
    predictions
        Long prediction records tagged with ``reference_date`` and
        ``target_end_date``.

    Returns
    -------
    pd.DataFrame
        One weekly aggregate record per reference date, target end date,
        location and draw.

    Raises
    ------
    IncompleteWeekError
        If any week with ``horizon >= 0`` has fewer than seven days.

    """
    weekly = (predictions
              .groupby([*WEEK_KEYS, 'draw'], sort=True)
              .agg(n_days_data=(COL_COUNT, 'size'), count_7d=(COL_COUNT, 'sum'))
              .reset_index())
    weekly = weekly.merge(observed_weekly_sums(predictions).reset_index(), on=WEEK_KEYS, how='left')
    weekly['horizon'] = compute_horizon(weekly['target_end_date'], weekly['reference_date'])

    partial = weekly.loc[weekly['n_days_data'] < DAYS_PER_WEEK, [COL_LOCATION, 'target_end_date']]
    if not partial.empty:
        logger.debug(f'{len(partial.drop_duplicates())} partial (location, week) pairs found.')
    validate_complete_weeks(weekly)
    return weekly[WEEKLY_COLUMNS]
