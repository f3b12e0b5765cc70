import numpy
import pandas
import pytest


HISTORY_DATES = pandas.date_range('2024-12-04', '2025-01-02', name='date')
N_FORECAST_DAYS = 23
N_DRAWS = 50
LOCATIONS = ['Bronx', 'Citywide']
FORECAST_DATE = '2025-01-03'


@pytest.fixture
def history_dates():
    "Wednesday 2024-12-04 through Thursday 2025-01-02."
    return HISTORY_DATES


@pytest.fixture
def observed():
    """
    Example complete daily series for two locations.

    Bronx is missing its observation on 2024-12-31.
    """
    rng = numpy.random.default_rng(42)
    n_days = len(HISTORY_DATES)
    data = pandas.DataFrame({
        'location': numpy.repeat(LOCATIONS, n_days),
        'date': numpy.tile(HISTORY_DATES.values, len(LOCATIONS)),
        'observed_count': rng.poisson(50, size=n_days * len(LOCATIONS)).astype(float),
    })
    missing = (data['location'] == 'Bronx') & (data['date'] == pandas.Timestamp('2024-12-31'))
    data.loc[missing, 'observed_count'] = numpy.nan
    return data


def _draw_matrix(rng, n_days):
    return pandas.DataFrame(
        rng.poisson(50, size=(N_DRAWS, n_days)).astype(float),
        index=pandas.RangeIndex(1, N_DRAWS + 1, name='draw'),
    )


@pytest.fixture
def hindcasts():
    "Example hindcast draws, draws x history days, by location."
    rng = numpy.random.default_rng(7)
    return {location: _draw_matrix(rng, len(HISTORY_DATES)) for location in LOCATIONS}


@pytest.fixture
def forecasts():
    "Example forecast draws, draws x forecast days, by location. Ends Saturday 2025-01-25."
    rng = numpy.random.default_rng(11)
    return {location: _draw_matrix(rng, N_FORECAST_DAYS) for location in LOCATIONS}


def _make_predictions(location, dates, counts, observed_counts=None, draw=1, period='hindcast'):
    "Long prediction records for a single draw."
    dates = pandas.to_datetime(pandas.Series(dates))
    return pandas.DataFrame({
        'draw': draw,
        't': range(1, len(dates) + 1),
        'location': location,
        'count': [float(c) for c in counts],
        'period': period,
        'date': dates,
        'observed_count': [float(c) for c in (counts if observed_counts is None else observed_counts)],
    })


@pytest.fixture
def make_predictions():
    "Factory for long prediction records of a single draw."
    return _make_predictions
