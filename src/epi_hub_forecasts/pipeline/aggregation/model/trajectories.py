"""Flattening of posterior draw matrices into long prediction records."""
from typing import Mapping, Optional, Union

from loguru import logger
import numpy as np
import pandas as pd

from epi_hub_forecasts.lib.static_vars import (
    COL_COUNT,
    COL_DATE,
    COL_DRAW,
    COL_LOCATION,
    COL_OBSERVED,
    COL_PERIOD,
    COL_TIME,
    PERIODS,
)
from epi_hub_forecasts.pipeline.aggregation.model.errors import SchemaMismatch

DrawMatrix = Union[pd.DataFrame, np.ndarray]

LONG_COLUMNS = [COL_DRAW, COL_TIME, COL_LOCATION, COL_COUNT, COL_PERIOD, COL_DATE, COL_OBSERVED]


def coerce_draw_matrix(matrix: DrawMatrix) -> pd.DataFrame:
    """Coerce a draws x days matrix to a frame indexed by draw id.

    A frame whose index is named ``draw`` keeps its draw ids. Anything else
    is numbered ``1..D`` in row order.

    """
    if isinstance(matrix, pd.DataFrame) and matrix.index.name == COL_DRAW:
        frame = matrix.copy()
    else:
        values = np.asarray(matrix, dtype=float)
        if values.ndim != 2:
            raise SchemaMismatch(f'Draw matrices must be two dimensional (draws x days). '
                                 f'Got an array with shape {values.shape}.')
        frame = pd.DataFrame(values, index=pd.RangeIndex(1, values.shape[0] + 1, name=COL_DRAW))
    frame.columns = range(frame.shape[1])
    return frame.astype(float)


def history_dates(observed: pd.DataFrame,
                  start_date: Optional[pd.Timestamp] = None,
                  end_date: Optional[pd.Timestamp] = None) -> pd.DatetimeIndex:
    """The modeled history, ``t = 1`` at the first date.

    Bounds default to the earliest and latest dates in the daily series.

    """
    start_date = start_date if start_date is not None else observed[COL_DATE].min()
    end_date = end_date if end_date is not None else observed[COL_DATE].max()
    if end_date < start_date:
        raise SchemaMismatch(f'History end date {end_date:%Y-%m-%d} is before '
                             f'history start date {start_date:%Y-%m-%d}.')
    return pd.date_range(start_date, end_date, freq='D', name=COL_DATE)


def _flatten_matrix(matrix: pd.DataFrame, t_start: int, location: str, period: str) -> pd.DataFrame:
    n_draws, n_days = matrix.shape
    return pd.DataFrame({
        COL_DRAW: np.repeat(matrix.index.to_numpy(), n_days),
        COL_TIME: np.tile(np.arange(t_start, t_start + n_days), n_draws),
        COL_LOCATION: location,
        COL_COUNT: matrix.to_numpy().ravel(),
        COL_PERIOD: period,
    })


def _check_location(location: str,
                    hindcast: pd.DataFrame,
                    forecast: pd.DataFrame,
                    n_history_days: int,
                    n_forecast_days: int) -> None:
    if hindcast.shape[1] != n_history_days:
        raise SchemaMismatch(f'Hindcast matrix for {location} has {hindcast.shape[1]} days. '
                             f'Expected {n_history_days} days of history.')
    if forecast.shape[1] != n_forecast_days:
        raise SchemaMismatch(f'Forecast matrix for {location} has {forecast.shape[1]} days. '
                             f'Expected {n_forecast_days} forecast days.')
    if not hindcast.index.equals(forecast.index):
        raise SchemaMismatch(f'Hindcast and forecast draws for {location} are not aligned. '
                             f'Hindcast has {len(hindcast)} draws and forecast has {len(forecast)} draws.')
    if not hindcast.index.is_unique:
        raise SchemaMismatch(f'Duplicate draw ids in the draw matrices for {location}.')
    if hindcast.isnull().values.any() or forecast.isnull().values.any():
        raise SchemaMismatch(f'Missing values in the draw matrices for {location}.')


def _join_observed(predictions: pd.DataFrame, observed: pd.DataFrame) -> pd.DataFrame:
    observed = observed[[COL_LOCATION, COL_DATE, COL_OBSERVED]]
    duplicated = observed.duplicated([COL_LOCATION, COL_DATE])
    if duplicated.any():
        examples = observed.loc[duplicated, [COL_LOCATION, COL_DATE]].head().values.tolist()
        raise SchemaMismatch(f'Daily series has duplicate (location, date) rows, e.g. {examples}.')

    predictions = predictions.merge(observed, on=[COL_LOCATION, COL_DATE], how='left', indicator=True)
    is_hindcast = predictions[COL_PERIOD] == PERIODS['hindcast']
    unmatched = predictions.loc[is_hindcast & (predictions['_merge'] == 'left_only'), [COL_DATE, COL_LOCATION]]
    if not unmatched.empty:
        unmatched = unmatched.drop_duplicates()
        examples = [(d.strftime('%Y-%m-%d'), loc) for d, loc in unmatched.head().itertuples(index=False)]
        raise SchemaMismatch(f'{len(unmatched)} hindcast (date, location) pairs have no daily series '
                             f'point, e.g. {examples}.')
    return predictions.drop(columns='_merge')


def flatten_draws(hindcasts: Mapping[str, DrawMatrix],
                  forecasts: Mapping[str, DrawMatrix],
                  observed: pd.DataFrame,
                  dates: pd.DatetimeIndex,
                  n_forecast_days: Optional[int] = None) -> pd.DataFrame:
    """Flatten per-location hindcast and forecast draws into long records.

    Parameters
    ----------
    hindcasts
        Mapping of location to a draws x history-days matrix. Column ``j``
        is time index ``t = j + 1``.
    forecasts
        Mapping of location to a draws x forecast-days matrix continuing
        the hindcast at ``t = H + 1``. Draw ``i`` must be the same posterior
        sample as draw ``i`` of the location's hindcast.
    observed
        Daily series with columns ``location``, ``date`` and
        ``observed_count``. Every hindcast day of every location must have
        a row here. Forecast days are joined when present.
    dates
        The history dates, ``dates[0]`` is ``t = 1`` for every location.
    n_forecast_days
        Expected forecast matrix width. When omitted it is taken from the
        first location and every other location must agree.

    Returns
    -------
    pd.DataFrame
        One row per draw, time index and location with columns
        ``draw, t, location, count, period, date, observed_count``.

    """
    if set(hindcasts) != set(forecasts):
        raise SchemaMismatch(f'Hindcast locations {sorted(hindcasts)} do not match '
                             f'forecast locations {sorted(forecasts)}.')
    if not hindcasts:
        raise SchemaMismatch('No locations provided to flatten.')

    n_history_days = len(dates)
    frames = []
    for location in sorted(hindcasts):
        hindcast = coerce_draw_matrix(hindcasts[location])
        forecast = coerce_draw_matrix(forecasts[location])
        if n_forecast_days is None:
            n_forecast_days = forecast.shape[1]
        _check_location(location, hindcast, forecast, n_history_days, n_forecast_days)
        logger.debug(f'Flattening {len(hindcast)} draws for {location}.')
        frames.append(_flatten_matrix(hindcast, 1, location, PERIODS['hindcast']))
        frames.append(_flatten_matrix(forecast, n_history_days + 1, location, PERIODS['forecast']))

    predictions = pd.concat(frames, ignore_index=True)
    predictions[COL_DATE] = dates[0] + pd.to_timedelta(predictions[COL_TIME] - 1, unit='D')
    predictions = _join_observed(predictions, observed)
    return predictions[LONG_COLUMNS]

