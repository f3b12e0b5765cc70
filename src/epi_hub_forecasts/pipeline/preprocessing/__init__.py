from epi_hub_forecasts.pipeline.preprocessing.specification import (
    PreprocessingSpecification,
)
from epi_hub_forecasts.pipeline.preprocessing.data import PreprocessingDataInterface
from epi_hub_forecasts.pipeline.preprocessing.main import (
    preprocess,
    do_preprocessing,
)

SPECIFICATION = PreprocessingSpecification
COMMAND = preprocess
APPLICATION_MAIN = do_preprocessing
