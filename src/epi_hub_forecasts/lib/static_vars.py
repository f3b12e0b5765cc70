PREPROCESSING_SPECIFICATION_FILE = 'preprocessing_specification.yaml'
AGGREGATION_SPECIFICATION_FILE = 'aggregation_specification.yaml'

DAYS_PER_WEEK = 7

# Columns of the daily series and long prediction tables
COL_LOCATION = 'location'
COL_DATE = 'date'
COL_OBSERVED = 'observed_count'
COL_DRAW = 'draw'
COL_TIME = 't'
COL_COUNT = 'count'
COL_PERIOD = 'period'

# Values of the period column
PERIODS = {
    'hindcast': 'hindcast',
    'forecast': 'forecast',
}

WEEKLY_COLUMNS = [
    'reference_date',
    'target_end_date',
    'location',
    'draw',
    'n_days_data',
    'count_7d',
    'obs_weekly_sum',
    'horizon',
]

SUBMISSION_COLUMNS = [
    'reference_date',
    'location',
    'horizon',
    'obs_weekly_sum',
    'target',
    'target_end_date',
    'output_type',
    'output_type_id',
    'value',
]

QUANTILE_OUTPUT_TYPE = 'quantile'

# The standard 23 level FluSight quantile grid.
FLUSIGHT_QUANTILES = (
    0.01, 0.025,
    0.05, 0.10, 0.15, 0.20, 0.25, 0.30, 0.35, 0.40, 0.45, 0.50,
    0.55, 0.60, 0.65, 0.70, 0.75, 0.80, 0.85, 0.90, 0.95,
    0.975, 0.99,
)
