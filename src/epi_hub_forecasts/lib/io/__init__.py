from epi_hub_forecasts.lib.io.keys import (
    DatasetKey,
    MetadataKey,
)
from epi_hub_forecasts.lib.io.data_roots import (
    PosteriorDrawsRoot,
    PreprocessingRoot,
    AggregationRoot,
)
from epi_hub_forecasts.lib.io.api import (
    dump,
    load,
    exists,
    leaves,
    touch,
)
