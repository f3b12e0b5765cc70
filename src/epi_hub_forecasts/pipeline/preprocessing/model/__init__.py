from epi_hub_forecasts.pipeline.preprocessing.model.daily_series import (
    complete_daily_series,
    parse_daily_counts,
)
from epi_hub_forecasts.pipeline.preprocessing.model.lags import (
    build_lag_matrix,
)
