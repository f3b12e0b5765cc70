from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from epi_hub_forecasts.lib import (
    utilities,
)


@dataclass
class PreprocessingData:
    """Specifies the inputs and outputs for preprocessing."""
    raw_data_path: str = field(default='')
    output_root: str = field(default='')
    output_format: str = field(default='csv')

    def to_dict(self) -> Dict:
        """Converts to a dict, coercing list-like items to lists."""
        return utilities.asdict(self)


@dataclass
class PreprocessingParameters:
    """Column names, date range and lags for the daily series."""
    date_column: str = field(default='date')
    location_column: str = field(default='location')
    count_column: str = field(default='count')
    start_date: Optional[str] = field(default=None)
    end_date: Optional[str] = field(default=None)
    locations: List[str] = field(default_factory=list)
    lags: List[int] = field(default_factory=list)

    def __post_init__(self):
        for date_field in ['start_date', 'end_date']:
            value = utilities.to_timestamp(getattr(self, date_field))
            setattr(self, date_field, value.strftime('%Y-%m-%d') if value is not None else None)
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError(f'end_date {self.end_date} is before start_date {self.start_date}.')
        self.locations = [str(location) for location in self.locations]

    def to_dict(self) -> Dict:
        """Converts to a dict, coercing list-like items to lists."""
        return utilities.asdict(self)


class PreprocessingSpecification(utilities.Specification):
    """Specification for a preprocessing run."""

    def __init__(self,
                 data: PreprocessingData,
                 parameters: PreprocessingParameters):
        self._data = data
        self._parameters = parameters

    @classmethod
    def parse_spec_dict(cls, preprocessing_spec_dict: Dict) -> Tuple:
        """Constructs a preprocessing specification from a dictionary."""
        data = PreprocessingData(**preprocessing_spec_dict.get('data', {}))
        parameters = PreprocessingParameters(**preprocessing_spec_dict.get('parameters', {}))
        return data, parameters

    @property
    def data(self) -> PreprocessingData:
        """The preprocessing data specification."""
        return self._data

    @property
    def parameters(self) -> PreprocessingParameters:
        """The daily series parameters."""
        return self._parameters

    def to_dict(self) -> Dict:
        """Converts the specification to a dict."""
        return {
            'data': self.data.to_dict(),
            'parameters': self.parameters.to_dict(),
        }
