from pathlib import Path

import pandas as pd

from epi_hub_forecasts.lib import (
    io,
    utilities,
)
from epi_hub_forecasts.lib.static_vars import COL_DATE
from epi_hub_forecasts.pipeline.preprocessing.specification import PreprocessingSpecification


class PreprocessingDataInterface:

    def __init__(self,
                 raw_data_path: Path,
                 preprocessing_root: io.PreprocessingRoot):
        self.raw_data_path = raw_data_path
        self.preprocessing_root = preprocessing_root

    @classmethod
    def from_specification(cls, specification: PreprocessingSpecification) -> 'PreprocessingDataInterface':
        preprocessing_root = io.PreprocessingRoot(specification.data.output_root,
                                                  data_format=specification.data.output_format)
        return cls(
            raw_data_path=Path(specification.data.raw_data_path),
            preprocessing_root=preprocessing_root,
        )

    def make_dirs(self) -> None:
        io.touch(self.preprocessing_root)

    ############
    # Raw data #
    ############

    def load_raw_data(self) -> pd.DataFrame:
        return pd.read_csv(self.raw_data_path)

    ############################
    # Preprocessing stage data #
    ############################

    def save_specification(self, specification: PreprocessingSpecification) -> None:
        io.dump(specification.to_dict(), self.preprocessing_root.specification())

    def save_observed_counts(self, data: pd.DataFrame) -> None:
        io.dump(utilities.format_dates(data), self.preprocessing_root.observed_counts())

    def load_observed_counts(self) -> pd.DataFrame:
        data = io.load(self.preprocessing_root.observed_counts())
        data[COL_DATE] = pd.to_datetime(data[COL_DATE])
        return data

    def save_lag_matrix(self, data: pd.DataFrame) -> None:
        io.dump(utilities.format_dates(data), self.preprocessing_root.lag_matrix())

