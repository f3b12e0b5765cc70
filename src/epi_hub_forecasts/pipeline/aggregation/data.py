import functools
from typing import Dict, List, Tuple

import pandas as pd

from epi_hub_forecasts.lib import (
    io,
    parallel,
    utilities,
)
from epi_hub_forecasts.lib.static_vars import (
    COL_DATE,
    COL_DRAW,
    COL_LOCATION,
    COL_OBSERVED,
)
from epi_hub_forecasts.pipeline.aggregation.specification import AggregationSpecification


class AggregationDataInterface:

    def __init__(self,
                 draws_root: io.PosteriorDrawsRoot,
                 preprocessing_root: io.PreprocessingRoot,
                 aggregation_root: io.AggregationRoot):
        self.draws_root = draws_root
        self.preprocessing_root = preprocessing_root
        self.aggregation_root = aggregation_root

    @classmethod
    def from_specification(cls, specification: AggregationSpecification) -> 'AggregationDataInterface':
        draws_root = io.PosteriorDrawsRoot(specification.data.draws_version)
        preprocessing_root = io.PreprocessingRoot(specification.data.observed_version)
        aggregation_root = io.AggregationRoot(specification.data.output_root,
                                              data_format=specification.data.output_format)
        return cls(
            draws_root=draws_root,
            preprocessing_root=preprocessing_root,
            aggregation_root=aggregation_root,
        )

    def make_dirs(self) -> None:
        io.touch(self.aggregation_root)

    ####################
    # Prior Stage Data #
    ####################

    def load_locations(self) -> List[str]:
        """Locations with both hindcast and forecast draws on disk."""
        hindcast_locations = set(io.leaves(self.draws_root.hindcast))
        forecast_locations = set(io.leaves(self.draws_root.forecast))
        return sorted(hindcast_locations & forecast_locations)

    def load_observed_counts(self) -> pd.DataFrame:
        observed = io.load(self.preprocessing_root.observed_counts())
        observed[COL_DATE] = pd.to_datetime(observed[COL_DATE])
        observed[COL_LOCATION] = observed[COL_LOCATION].astype(str)
        return observed[[COL_LOCATION, COL_DATE, COL_OBSERVED]]

    def load_hindcast_draws(self, location: str) -> pd.DataFrame:
        return self._load_draw_matrix(self.draws_root.hindcast(location=location))

    def load_forecast_draws(self, location: str) -> pd.DataFrame:
        return self._load_draw_matrix(self.draws_root.forecast(location=location))

    def load_location_draws(self, location: str) -> Tuple[pd.DataFrame, pd.DataFrame]:
        return self.load_hindcast_draws(location), self.load_forecast_draws(location)

    def load_all_draws(self,
                       locations: List[str],
                       num_cores: int = 1,
                       progress_bar: bool = False) -> Tuple[Dict[str, pd.DataFrame], Dict[str, pd.DataFrame]]:
        """Loads hindcast and forecast draws for every location.

        Returns
        -------
            Mappings from location to its hindcast and forecast draw
            matrices, respectively.

        """
        _runner = functools.partial(
            _load_location_draws,
            data_interface=self,
        )
        results = parallel.run_parallel(
            runner=_runner,
            arg_list=locations,
            num_cores=num_cores,
            progress_bar=progress_bar,
            description='Loading draws',
        )
        hindcasts = {location: hindcast for location, (hindcast, _) in zip(locations, results)}
        forecasts = {location: forecast for location, (_, forecast) in zip(locations, results)}
        return hindcasts, forecasts

    @staticmethod
    def _load_draw_matrix(key: io.DatasetKey) -> pd.DataFrame:
        """Draw matrices are stored one row per draw with a ``draw`` id column."""
        matrix = io.load(key)
        if COL_DRAW in matrix.columns:
            matrix = matrix.set_index(COL_DRAW)
        else:
            matrix.index = pd.RangeIndex(1, len(matrix) + 1, name=COL_DRAW)
        return matrix

    ##########################
    # Aggregation stage data #
    ##########################

    def save_specification(self, specification: AggregationSpecification) -> None:
        io.dump(specification.to_dict(), self.aggregation_root.specification())

    def load_specification(self) -> AggregationSpecification:
        spec_dict = io.load(self.aggregation_root.specification())
        return AggregationSpecification.from_dict(spec_dict)

    def save_quantile_forecasts(self, data: pd.DataFrame) -> None:
        io.dump(utilities.format_dates(data), self.aggregation_root.quantile_forecasts())

    def load_quantile_forecasts(self) -> pd.DataFrame:
        return io.load(self.aggregation_root.quantile_forecasts())

    def save_weekly_draws(self, data: pd.DataFrame) -> None:
        io.dump(utilities.format_dates(data), self.aggregation_root.weekly_draws())

    def save_daily_summary(self, data: pd.DataFrame) -> None:
        io.dump(utilities.format_dates(data), self.aggregation_root.daily_summary())


def _load_location_draws(location: str,
                         data_interface: AggregationDataInterface) -> Tuple[pd.DataFrame, pd.DataFrame]:
    return data_interface.load_location_draws(location)

