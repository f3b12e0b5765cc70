from __future__ import annotations

import abc
import dataclasses
import datetime
from pathlib import Path
from pprint import pformat
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np
import pandas as pd
import yaml

YAML_SUFFIXES = ('.yaml', '.yml')


def _yaml_path(path: Union[str, Path]) -> Path:
    path = Path(path)
    if path.suffix not in YAML_SUFFIXES:
        raise ValueError(f'Expected a path ending in one of {YAML_SUFFIXES}. Got {path}.')
    return path


def read_yaml(path: Union[str, Path]) -> Any:
    with _yaml_path(path).open() as f:
        return yaml.full_load(f)


def write_yaml(data: Any, path: Union[str, Path]) -> None:
    with _yaml_path(path).open('w') as f:
        yaml.dump(data, f, sort_keys=False)


class Specification(abc.ABC):
    """Base for the YAML file that configures a pipeline stage.

    Subclasses split the parsed YAML into their dataclass sections in
    :meth:`parse_spec_dict` and put them back together in :meth:`to_dict`.
    The sections validate themselves on construction.

    """

    @classmethod
    def from_path(cls, specification_path: Union[str, Path]) -> Specification:
        return cls.from_dict(read_yaml(specification_path))

    @classmethod
    def from_dict(cls, spec_dict: Optional[Dict]) -> Specification:
        return cls(*cls.parse_spec_dict(spec_dict or {}))

    @classmethod
    @abc.abstractmethod
    def parse_spec_dict(cls, spec_dict: Dict) -> Tuple:
        """Split a specification dict into constructor arguments."""
        raise NotImplementedError

    @abc.abstractmethod
    def to_dict(self) -> Dict:
        raise NotImplementedError

    def dump(self, path: Union[str, Path]) -> None:
        write_yaml(self.to_dict(), path)

    def __repr__(self):
        return f'{type(self).__name__}(\n{pformat(self.to_dict())}\n)'


def _serializable(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _serializable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serializable(v) for v in value]
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (datetime.date, pd.Timestamp)):
        return value.strftime('%Y-%m-%d')
    return value


def asdict(data_class) -> Dict:
    """Dataclass fields as plain YAML friendly values. Dates become ``YYYY-MM-DD``."""
    return {k: _serializable(v) for k, v in dataclasses.asdict(data_class).items()}


def to_timestamp(value: Union[str, datetime.date, pd.Timestamp, None]) -> Optional[pd.Timestamp]:
    """Coerce a date-like specification value to a midnight timestamp."""
    if value is None or value == '':
        return None
    return pd.Timestamp(value).normalize()


def format_dates(data: pd.DataFrame) -> pd.DataFrame:
    """Copy of the data with datetime columns written as ``YYYY-MM-DD`` strings."""
    data = data.copy()
    for column in data.columns:
        if pd.api.types.is_datetime64_any_dtype(data[column]):
            data[column] = data[column].dt.strftime('%Y-%m-%d')
    return data
