"""Epidemiological week bookkeeping.

Epiweeks run Sunday through Saturday and are numbered on the MMWR calendar
(not the ISO calendar). Every week is identified downstream by the Saturday
that ends it.
"""
import datetime
from typing import Union

from epiweeks import Week
import pandas as pd

from epi_hub_forecasts.lib.static_vars import COL_DATE, DAYS_PER_WEEK

DateLike = Union[str, datetime.date, pd.Timestamp]


def sunday_weekday_index(dates: pd.Series) -> pd.Series:
    """Day of week numbered 1 for Sunday through 7 for Saturday."""
    return (dates.dt.dayofweek + 1) % DAYS_PER_WEEK + 1


def week_ending_dates(dates: pd.Series) -> pd.Series:
    """The Saturday ending the epiweek of each date. Saturdays map to themselves."""
    dates = pd.to_datetime(dates)
    return dates + pd.to_timedelta(DAYS_PER_WEEK - sunday_weekday_index(dates), unit='D')


def reference_date(forecast_date: DateLike) -> pd.Timestamp:
    """The Saturday ending the epiweek that contains the forecast date."""
    forecast_date = pd.Series([pd.Timestamp(forecast_date).normalize()])
    return week_ending_dates(forecast_date).iloc[0]


def epiweek_numbers(dates: pd.Series) -> pd.DataFrame:
    """MMWR epiweek and epiweek year of each date."""
    dates = pd.to_datetime(dates)
    unique_dates = pd.DatetimeIndex(dates.unique())
    weeks = [Week.fromdate(date.date(), system='cdc') for date in unique_dates]
    # Look up each unique date once and broadcast to the rows.
    epiweek = pd.Series([week.week for week in weeks], index=unique_dates)
    year = pd.Series([week.year for week in weeks], index=unique_dates)
    return pd.DataFrame({
        'epiweek': dates.map(epiweek),
        'year': dates.map(year),
    }, index=dates.index)


def assign_epiweeks(predictions: pd.DataFrame, forecast_date: DateLike) -> pd.DataFrame:
    """Tag long prediction records with their epiweek and week boundaries.

    Adds ``epiweek``, ``year``, ``target_end_date`` and ``reference_date``
    columns. The input is not modified.

    """
    predictions = predictions.copy()
    numbers = epiweek_numbers(predictions[COL_DATE])
    predictions['epiweek'] = numbers['epiweek']
    predictions['year'] = numbers['year']
    predictions['target_end_date'] = week_ending_dates(predictions[COL_DATE])
    predictions['reference_date'] = reference_date(forecast_date)
    return predictions
