"""Quantile summaries of aggregated draws."""
import numbers
from typing import Iterable, List, Mapping, Optional

import pandas as pd

from epi_hub_forecasts.lib.static_vars import (
    COL_COUNT,
    COL_DATE,
    COL_LOCATION,
    COL_OBSERVED,
    COL_PERIOD,
    QUANTILE_OUTPUT_TYPE,
    SUBMISSION_COLUMNS,
)
from epi_hub_forecasts.pipeline.aggregation.model.errors import InvalidQuantileLevel

WEEK_KEYS = [COL_LOCATION, 'reference_date', 'target_end_date', 'horizon']


def validate_quantile_levels(levels: Iterable) -> List[float]:
    """Check that every level is a number strictly between 0 and 1.

    Returns the distinct levels in increasing order.

    """
    levels = list(levels)
    invalid = [level for level in levels
               if isinstance(level, bool)
               or not isinstance(level, numbers.Real)
               or not 0. < float(level) < 1.]
    if invalid or not levels:
        raise InvalidQuantileLevel(invalid)
    return sorted({float(level) for level in levels})


def rename_locations(locations: pd.Series, location_rename: Mapping[str, str]) -> pd.Series:
    """Swap canonical location labels for hub labels. Unlisted labels are kept."""
    renamed = locations.map(lambda location: location_rename.get(location, location))
    pairs = pd.DataFrame({'from': locations, 'to': renamed}).drop_duplicates()
    collisions = pairs.loc[pairs['to'].duplicated(keep=False)]
    if not collisions.empty:
        raise ValueError(f'Location rename maps several locations onto the same label: '
                         f'{sorted(collisions["from"].tolist())}.')
    return renamed


def summarize_quantiles(weekly: pd.DataFrame,
                        quantiles: Iterable[float],
                        target: str,
                        location_rename: Optional[Mapping[str, str]] = None,
                        horizons: Optional[Iterable[int]] = None) -> pd.DataFrame:
    """Empirical quantiles of weekly totals across draws in hub submission format.

    Quantiles use linear interpolation between order statistics (type 7).

    Parameters
    ----------
    weekly
        Weekly aggregate records.
    quantiles
        Probability levels, each strictly between 0 and 1.
    target
        Description of the forecast target written to every row.
    location_rename
        Map from canonical location labels to hub labels.
    horizons
        If given, only these horizons are kept. It is an error for none of
        them to be present.

    """
    levels = validate_quantile_levels(quantiles)
    location_rename = location_rename or {}

    if horizons is not None:
        horizons = list(horizons)
        weekly = weekly.loc[weekly['horizon'].isin(horizons)]
        if weekly.empty:
            raise ValueError(f'No weekly aggregates have a horizon in {horizons}.')

    values = (weekly
              .groupby(WEEK_KEYS, sort=True)['count_7d']
              .quantile(levels)
              .rename('value'))
    values.index = values.index.set_names([*WEEK_KEYS, 'output_type_id'])
    values = values.reset_index()

    observed = weekly[[COL_LOCATION, 'target_end_date', 'obs_weekly_sum']].drop_duplicates()
    summary = values.merge(observed, on=[COL_LOCATION, 'target_end_date'], how='left')
    summary['target'] = target
    summary['output_type'] = QUANTILE_OUTPUT_TYPE
    summary[COL_LOCATION] = rename_locations(summary[COL_LOCATION], location_rename)

    summary = summary.sort_values([COL_LOCATION, 'target_end_date', 'output_type_id'])
    return summary[SUBMISSION_COLUMNS].reset_index(drop=True)


def summarize_daily(predictions: pd.DataFrame, ci: float = 0.95) -> pd.DataFrame:
    """Mean, median and a central interval of the daily draws.

    Used to compare hindcasts against the observed series.

    """
    assert 0. < ci < 1.
    upper = 1 - (1 - ci) / 2
    keys = [COL_LOCATION, COL_DATE, COL_PERIOD]
    grouped = predictions.groupby(keys, sort=True)
    counts = grouped[COL_COUNT]
    summary = pd.concat([
        counts.mean().rename('mean'),
        counts.median().rename('median'),
        counts.quantile(1 - upper).rename('lower'),
        counts.quantile(upper).rename('upper'),
        grouped[COL_OBSERVED].first().rename(COL_OBSERVED),
    ], axis=1)
    return summary.reset_index()
