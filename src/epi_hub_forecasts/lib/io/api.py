from typing import Any, List, Union

from .data_roots import DataRoot
from .keys import (
    DatasetKey,
    DatasetType,
    MetadataKey,
)
from .marshall import DATA_STRATEGIES, STRATEGIES


def _get_strategy(key: Union[MetadataKey, DatasetKey]):
    if key.disk_format not in STRATEGIES:
        raise ValueError(f'Unknown disk format {key.disk_format} for key {key}. '
                         f'Known formats are {list(STRATEGIES)}.')
    return STRATEGIES[key.disk_format]


def load(key: Union[MetadataKey, DatasetKey]) -> Any:
    return _get_strategy(key).load(key)


def dump(dataset: Any, key: Union[MetadataKey, DatasetKey], strict: bool = True) -> None:
    _get_strategy(key).dump(dataset, key, strict=strict)


def exists(key: Union[MetadataKey, DatasetKey]) -> bool:
    return _get_strategy(key).exists(key)


def leaves(dataset_type: DatasetType) -> List[str]:
    """Locations with a file on disk for a per-location dataset."""
    dataset_type._check_bound()
    if dataset_type.leaf_template is None:
        raise TypeError(f'Dataset {dataset_type.name} has no leaf nodes.')
    key = DatasetKey(dataset_type.root, dataset_type.disk_format, dataset_type.name, None)
    return _get_strategy(key).leaves(key)


def touch(data_root: DataRoot) -> None:
    DATA_STRATEGIES[data_root._data_format].touch(*data_root.terminal_paths())
