from epi_hub_forecasts.pipeline import (
    preprocessing,
    aggregation,
)
