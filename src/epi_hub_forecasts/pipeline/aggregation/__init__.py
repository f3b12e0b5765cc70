from epi_hub_forecasts.pipeline.aggregation.specification import (
    AggregationSpecification,
)
from epi_hub_forecasts.pipeline.aggregation.data import AggregationDataInterface
from epi_hub_forecasts.pipeline.aggregation.main import (
    aggregate,
    do_aggregation,
)

SPECIFICATION = AggregationSpecification
COMMAND = aggregate
APPLICATION_MAIN = do_aggregation
