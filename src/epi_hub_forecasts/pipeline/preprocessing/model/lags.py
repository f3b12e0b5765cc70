from typing import Iterable

import pandas as pd

from epi_hub_forecasts.lib.static_vars import (
    COL_DATE,
    COL_LOCATION,
    COL_OBSERVED,
)


def build_lag_matrix(data: pd.DataFrame, lags: Iterable[int]) -> pd.DataFrame:
    """Append lagged copies of the daily counts as ``lag_{k}`` columns.

    Lags are taken within each location over the complete daily series so
    a lag never reaches into another location's history. The first ``k``
    days of each location have a missing ``lag_{k}``.

    """
    lags = list(lags)
    bad_lags = [lag for lag in lags if isinstance(lag, bool) or not isinstance(lag, int) or lag < 1]
    if bad_lags:
        raise ValueError(f'Lags must be positive integers. Got {bad_lags}.')

    data = data.sort_values([COL_LOCATION, COL_DATE]).reset_index(drop=True)
    counts = data.groupby(COL_LOCATION)[COL_OBSERVED]
    for lag in sorted(set(lags)):
        data[f'lag_{lag}'] = counts.shift(lag)
    return data
