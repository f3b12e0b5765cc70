from typing import Iterable, Mapping, NamedTuple, Optional

import pandas as pd

from epi_hub_forecasts.lib import cli_tools
from epi_hub_forecasts.lib.static_vars import (
    COL_DATE,
    FLUSIGHT_QUANTILES,
)
from epi_hub_forecasts.pipeline.aggregation.model.epiweek_dates import (
    DateLike,
    assign_epiweeks,
)
from epi_hub_forecasts.pipeline.aggregation.model.quantiles import (
    summarize_quantiles,
    validate_quantile_levels,
)
from epi_hub_forecasts.pipeline.aggregation.model.trajectories import (
    DrawMatrix,
    flatten_draws,
    history_dates,
)
from epi_hub_forecasts.pipeline.aggregation.model.weekly import aggregate_weekly

logger = cli_tools.task_performance_logger


class AggregatedForecasts(NamedTuple):
    """Every table produced by a single aggregation run."""
    predictions: pd.DataFrame
    weekly: pd.DataFrame
    quantiles: pd.DataFrame


def aggregate_forecasts(hindcasts: Mapping[str, DrawMatrix],
                        forecasts: Mapping[str, DrawMatrix],
                        observed: pd.DataFrame,
                        forecast_date: DateLike,
                        target: str,
                        quantiles: Iterable[float] = FLUSIGHT_QUANTILES,
                        location_rename: Optional[Mapping[str, str]] = None,
                        history_start_date: Optional[DateLike] = None,
                        history_end_date: Optional[DateLike] = None,
                        n_forecast_days: Optional[int] = None,
                        horizons: Optional[Iterable[int]] = None) -> AggregatedForecasts:
    """Turn daily posterior draws into weekly quantile forecasts.

    This is a pure function of its arguments. Any failure raises before
    a table is returned.

    Parameters
    ----------
    hindcasts
        Mapping of location to a draws x history-days matrix.
    forecasts
        Mapping of location to a draws x forecast-days matrix.
    observed
        Complete daily series with ``location``, ``date`` and
        ``observed_count`` columns.
    forecast_date
        The as-of date of the forecast. The reference date is the Saturday
        ending its epiweek.
    target
        Description of the forecast target.
    quantiles
        Probability levels to report.
    location_rename
        Map from canonical location labels to hub labels.
    history_start_date, history_end_date
        Bounds of the modeled history. Default to the bounds of ``observed``.
    n_forecast_days
        Expected width of every forecast matrix.
    horizons
        Horizons to keep in the quantile table. Defaults to all.

    """
    levels = validate_quantile_levels(quantiles)

    observed = observed.copy()
    observed[COL_DATE] = pd.to_datetime(observed[COL_DATE])
    dates = history_dates(
        observed,
        pd.Timestamp(history_start_date) if history_start_date is not None else None,
        pd.Timestamp(history_end_date) if history_end_date is not None else None,
    )

    logger.info(f'Flattening draws for {len(hindcasts)} locations over {len(dates)} history days.',
                context='flatten')
    predictions = flatten_draws(hindcasts, forecasts, observed, dates, n_forecast_days)
    predictions = assign_epiweeks(predictions, forecast_date)

    logger.info('Aggregating daily draws to epiweeks.', context='aggregate')
    weekly = aggregate_weekly(predictions)

    logger.info(f'Summarizing {len(levels)} quantiles.', context='summarize')
    summary = summarize_quantiles(weekly, levels, target, location_rename, horizons)
    return AggregatedForecasts(predictions, weekly, summary)
