"""The directories each pipeline stage reads from and writes to."""
from pathlib import Path
from typing import Dict, List, Union

from epi_hub_forecasts.lib.io.keys import (
    DatasetType,
    MetadataType,
    LOCATION_TEMPLATE,
)
from epi_hub_forecasts.lib.io.marshall import (
    DATA_STRATEGIES,
    METADATA_STRATEGIES,
)


class DataRoot:
    """A directory holding one version of a stage's inputs or outputs.

    Subclasses list what the directory holds as :class:`DatasetType` and
    :class:`MetadataType` class attributes. On an instance those attributes
    make keys for :mod:`epi_hub_forecasts.lib.io.api`.

    Parameters
    ----------
    root
        Directory on disk. It is created by :func:`io.touch`.
    data_format
        File format of the tables.
    metadata_format
        File format of the metadata documents.

    """

    def __init__(self, root: Union[str, Path], data_format: str = 'csv', metadata_format: str = 'yaml'):
        self._root = Path(root)
        self._data_format = self._check_format(data_format, DATA_STRATEGIES)
        self._metadata_format = self._check_format(metadata_format, METADATA_STRATEGIES)

    def _check_format(self, disk_format: str, strategies: Dict) -> str:
        if disk_format not in strategies:
            raise ValueError(f'{type(self).__name__} cannot store {disk_format} files. '
                             f'Choose one of {list(strategies)}.')
        return disk_format

    @property
    def root(self) -> Path:
        return self._root

    def _declared(self, kind: type) -> Dict[str, Union[DatasetType, MetadataType]]:
        return {name: attr for name, attr in type(self).__dict__.items() if isinstance(attr, kind)}

    @property
    def dataset_types(self) -> List[str]:
        return list(self._declared(DatasetType))

    @property
    def metadata_types(self) -> List[str]:
        return list(self._declared(MetadataType))

    def terminal_paths(self) -> List[Path]:
        """Directories that must exist before anything is written.

        Per-location datasets get a directory of their own. Everything
        else sits in the root.

        """
        paths = {self._root}
        for dataset_type in self._declared(DatasetType).values():
            if dataset_type.leaf_template is not None:
                paths.add(self._root / dataset_type.name)
        return sorted(paths)


###############
# Input Roots #
###############

class PosteriorDrawsRoot(DataRoot):
    """Posterior draw matrices written by the model fit, one file per location."""
    hindcast = DatasetType('hindcast', LOCATION_TEMPLATE)
    forecast = DatasetType('forecast', LOCATION_TEMPLATE)


##################
# Pipeline Roots #
##################

class PreprocessingRoot(DataRoot):
    specification = MetadataType('preprocessing_specification')

    observed_counts = DatasetType('observed_counts')
    lag_matrix = DatasetType('lag_matrix')


class AggregationRoot(DataRoot):
    specification = MetadataType('aggregation_specification')

    quantile_forecasts = DatasetType('quantile_forecasts')
    weekly_draws = DatasetType('weekly_draws')
    daily_summary = DatasetType('daily_summary')
