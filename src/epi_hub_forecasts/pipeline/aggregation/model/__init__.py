from epi_hub_forecasts.pipeline.aggregation.model.errors import (
    AggregationError,
    IncompleteWeekError,
    InvalidQuantileLevel,
    SchemaMismatch,
)
from epi_hub_forecasts.pipeline.aggregation.model.trajectories import (
    LONG_COLUMNS,
    coerce_draw_matrix,
    flatten_draws,
    history_dates,
)
from epi_hub_forecasts.pipeline.aggregation.model.epiweek_dates import (
    assign_epiweeks,
    epiweek_numbers,
    reference_date,
    week_ending_dates,
)
from epi_hub_forecasts.pipeline.aggregation.model.weekly import (
    aggregate_weekly,
    compute_horizon,
    validate_complete_weeks,
)
from epi_hub_forecasts.pipeline.aggregation.model.quantiles import (
    rename_locations,
    summarize_daily,
    summarize_quantiles,
    validate_quantile_levels,
)
from epi_hub_forecasts.pipeline.aggregation.model.aggregator import (
    AggregatedForecasts,
    aggregate_forecasts,
)
