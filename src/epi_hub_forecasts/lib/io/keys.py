"""Keys naming datasets and metadata inside a data root.

A :class:`DataRoot` subclass declares its contents as :class:`DatasetType`
and :class:`MetadataType` class attributes. Looking one up on an instance
binds it to that root, and calling the bound type returns the key the
marshalling layer resolves to a file.
"""
from pathlib import Path
from typing import NamedTuple, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .data_roots import DataRoot

# Datasets split across files are split by location.
LOCATION_TEMPLATE = '{location}'
LEAF_TEMPLATES = (LOCATION_TEMPLATE,)


class DatasetKey(NamedTuple):
    """Where a table lives: ``root/data_type/leaf_name`` or ``root/data_type``."""
    root: Path
    disk_format: str
    data_type: str
    leaf_name: Optional[str]


class MetadataKey(NamedTuple):
    """Where a metadata document lives: ``root/data_type``."""
    root: Path
    disk_format: str
    data_type: str


class _RootBoundType:
    """Descriptor that rebinds itself to the data root it is looked up on."""

    def __init__(self, name: str, root: Path = None, disk_format: str = None):
        self.name = name
        self.root = root
        self.disk_format = disk_format

    def _bind(self, instance: 'DataRoot'):
        raise NotImplementedError

    def __get__(self, instance: 'DataRoot', owner=None):
        if instance is None:
            return self
        return self._bind(instance)

    def _check_bound(self) -> None:
        if self.root is None or self.disk_format is None:
            raise TypeError(f'{type(self).__name__} {self.name} must be looked up on a '
                            f'DataRoot instance before it can make keys.')

    def __eq__(self, other):
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __repr__(self):
        fields = ', '.join(f'{k}={v}' for k, v in self.__dict__.items())
        return f'{type(self).__name__}({fields})'


class DatasetType(_RootBoundType):
    """A table in a data root, optionally stored one file per location."""

    def __init__(self,
                 name: str,
                 leaf_template: str = None,
                 root: Path = None,
                 disk_format: str = None):
        if leaf_template is not None and leaf_template not in LEAF_TEMPLATES:
            raise ValueError(f'Unknown leaf template {leaf_template} for dataset {name}. '
                             f'Known templates are {LEAF_TEMPLATES}.')
        super().__init__(name, root, disk_format)
        self.leaf_template = leaf_template

    def _bind(self, instance: 'DataRoot') -> 'DatasetType':
        return DatasetType(self.name, self.leaf_template, instance.root, instance._data_format)

    def __call__(self, *args, **key_kwargs) -> DatasetKey:
        self._check_bound()
        if args:
            raise TypeError(f'Keys for {self.name} take keyword arguments only. Got {args}.')
        if self.leaf_template is None:
            if key_kwargs:
                raise TypeError(f'Dataset {self.name} is a single file. Got {key_kwargs}.')
            return DatasetKey(self.root, self.disk_format, self.name, None)
        return DatasetKey(self.root, self.disk_format, self.name, self.leaf_template.format(**key_kwargs))


class MetadataType(_RootBoundType):
    """A YAML document in a data root, such as the stage specification."""

    def _bind(self, instance: 'DataRoot') -> 'MetadataType':
        return MetadataType(self.name, instance.root, instance._metadata_format)

    def __call__(self, *args, **key_kwargs) -> MetadataKey:
        self._check_bound()
        if args or key_kwargs:
            raise TypeError(f'Metadata {self.name} takes no key arguments. '
                            f'Got {args} and {key_kwargs}.')
        return MetadataKey(self.root, self.disk_format, self.name)
