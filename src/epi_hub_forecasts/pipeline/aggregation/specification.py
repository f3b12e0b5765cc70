from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pandas as pd

from epi_hub_forecasts.lib import (
    utilities,
)
from epi_hub_forecasts.lib.static_vars import FLUSIGHT_QUANTILES
from epi_hub_forecasts.pipeline.aggregation.model import validate_quantile_levels


@dataclass
class AggregationData:
    """Specifies the inputs and outputs for an aggregation."""
    draws_version: str = field(default='')
    observed_version: str = field(default='')
    output_root: str = field(default='')
    output_format: str = field(default='csv')

    def to_dict(self) -> Dict:
        """Converts to a dict, coercing list-like items to lists."""
        return utilities.asdict(self)


@dataclass
class AggregationParameters:
    """Forecast date, quantile grid and submission labels."""
    forecast_date: str = field(default='')
    target: str = field(default='')
    history_start_date: Optional[str] = field(default=None)
    history_end_date: Optional[str] = field(default=None)
    forecast_end_date: Optional[str] = field(default=None)
    quantiles: List[float] = field(default_factory=lambda: list(FLUSIGHT_QUANTILES))
    location_rename: Dict[str, str] = field(default_factory=dict)
    locations: List[str] = field(default_factory=list)
    submission_horizons: List[int] = field(default_factory=list)

    def __post_init__(self):
        if not self.forecast_date:
            raise ValueError('A forecast_date must be provided.')
        if not self.target:
            raise ValueError('A target description must be provided.')
        for date_field in ['forecast_date', 'history_start_date', 'history_end_date', 'forecast_end_date']:
            value = utilities.to_timestamp(getattr(self, date_field))
            setattr(self, date_field, value.strftime('%Y-%m-%d') if value is not None else None)

        if self.forecast_end_date is not None and self.history_end_date is None:
            raise ValueError('A forecast_end_date requires a history_end_date.')
        if self.n_forecast_days is not None and self.n_forecast_days <= 0:
            raise ValueError(f'forecast_end_date {self.forecast_end_date} must be after '
                             f'history_end_date {self.history_end_date}.')

        self.quantiles = validate_quantile_levels(self.quantiles)
        self.locations = [str(location) for location in self.locations]
        self.location_rename = {str(k): str(v) for k, v in self.location_rename.items()}
        if not all(isinstance(h, int) for h in self.submission_horizons):
            raise TypeError(f'Submission horizons must be integers. Got {self.submission_horizons}.')

    @property
    def n_forecast_days(self) -> Optional[int]:
        """Expected forecast window length, if the forecast end date is given."""
        if self.forecast_end_date is None:
            return None
        return (pd.Timestamp(self.forecast_end_date) - pd.Timestamp(self.history_end_date)).days

    def to_dict(self) -> Dict:
        """Converts to a dict, coercing list-like items to lists."""
        return utilities.asdict(self)


@dataclass
class AggregationWorkflowSpecification:
    """Specification of execution parameters for an aggregation run."""
    num_cores: int = field(default=1)
    progress_bar: bool = field(default=False)
    write_weekly_draws: bool = field(default=False)
    write_daily_summary: bool = field(default=True)

    def __post_init__(self):
        if not isinstance(self.num_cores, int) or self.num_cores < 1:
            raise ValueError(f'num_cores must be a positive integer. Got {self.num_cores}.')

    def to_dict(self) -> Dict:
        """Converts to a dict, coercing list-like items to lists."""
        return utilities.asdict(self)


class AggregationSpecification(utilities.Specification):
    """Specification for an aggregation run."""

    def __init__(self,
                 data: AggregationData,
                 parameters: AggregationParameters,
                 workflow: AggregationWorkflowSpecification):
        self._data = data
        self._parameters = parameters
        self._workflow = workflow

    @classmethod
    def parse_spec_dict(cls, aggregation_spec_dict: Dict) -> Tuple:
        """Constructs an aggregation specification from a dictionary."""
        data = AggregationData(**aggregation_spec_dict.get('data', {}))
        parameters = AggregationParameters(**aggregation_spec_dict.get('parameters', {}))
        workflow = AggregationWorkflowSpecification(**aggregation_spec_dict.get('workflow', {}))
        return data, parameters, workflow

    @property
    def data(self) -> AggregationData:
        """The aggregation data specification."""
        return self._data

    @property
    def parameters(self) -> AggregationParameters:
        """The forecast and submission parameters."""
        return self._parameters

    @property
    def workflow(self) -> AggregationWorkflowSpecification:
        """The execution parameters for the run."""
        return self._workflow

    def to_dict(self) -> Dict:
        """Converts the specification to a dict."""
        return {
            'data': self.data.to_dict(),
            'parameters': self.parameters.to_dict(),
            'workflow': self.workflow.to_dict(),
        }
