from pathlib import Path
from typing import Any, List, Union

import pandas as pd

from epi_hub_forecasts.lib import utilities
from epi_hub_forecasts.lib.io.keys import (
    DatasetKey,
    MetadataKey,
)
from epi_hub_forecasts.lib.static_vars import COL_LOCATION


class _FileMarshall:
    """One file per key. Subclasses say how to read and write a file."""
    suffix = ''

    @classmethod
    def dump(cls, data: Any, key: Union[DatasetKey, MetadataKey], strict: bool = True) -> None:
        path = cls._resolve_key(key)
        if strict and path.exists():
            raise LookupError(f'Refusing to overwrite {path} for key {key}.')
        cls._write(data, path)

    @classmethod
    def load(cls, key: Union[DatasetKey, MetadataKey]) -> Any:
        return cls._read(cls._resolve_key(key))

    @classmethod
    def exists(cls, key: Union[DatasetKey, MetadataKey]) -> bool:
        return cls._resolve_key(key).exists()

    @classmethod
    def touch(cls, *paths: Path) -> None:
        for path in paths:
            path.mkdir(parents=True, exist_ok=True)

    @classmethod
    def _resolve_key(cls, key: Union[DatasetKey, MetadataKey]) -> Path:
        # Names are joined rather than passed through with_suffix so
        # locations like "St. Louis" keep their dots.
        leaf_name = getattr(key, 'leaf_name', None)
        if leaf_name is not None:
            return key.root / key.data_type / f'{leaf_name}{cls.suffix}'
        return key.root / f'{key.data_type}{cls.suffix}'

    @classmethod
    def _read(cls, path: Path) -> Any:
        raise NotImplementedError

    @classmethod
    def _write(cls, data: Any, path: Path) -> None:
        raise NotImplementedError


class CSVMarshall(_FileMarshall):
    """DataFrames as CSV files without the index.

    Location labels are always read back as strings so numeric codes keep
    their leading zeros.
    """
    suffix = '.csv'

    @classmethod
    def leaves(cls, key: DatasetKey) -> List[str]:
        """Names of the per-location files stored for a dataset."""
        directory = key.root / key.data_type
        return sorted(path.name[:-len(cls.suffix)] for path in directory.glob(f'*{cls.suffix}'))

    @classmethod
    def _read(cls, path: Path) -> pd.DataFrame:
        return pd.read_csv(path, dtype={COL_LOCATION: str})

    @classmethod
    def _write(cls, data: pd.DataFrame, path: Path) -> None:
        data.to_csv(path, index=False)


class YamlMarshall(_FileMarshall):
    """Plain python structures as YAML documents."""
    suffix = '.yaml'

    @classmethod
    def _read(cls, path: Path) -> Any:
        return utilities.read_yaml(path)

    @classmethod
    def _write(cls, data: Any, path: Path) -> None:
        utilities.write_yaml(data, path)


DATA_STRATEGIES = {
    'csv': CSVMarshall,
}
METADATA_STRATEGIES = {
    'yaml': YamlMarshall,
}
STRATEGIES = {**DATA_STRATEGIES, **METADATA_STRATEGIES}
