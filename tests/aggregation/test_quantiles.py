import numpy
import pandas
import pytest

from epi_hub_forecasts.lib.static_vars import FLUSIGHT_QUANTILES, SUBMISSION_COLUMNS
from epi_hub_forecasts.pipeline.aggregation import model


def _weekly(location, target_end_date, counts, obs_weekly_sum=10., reference_date='2025-01-04'):
    reference_date = pandas.Timestamp(reference_date)
    target_end_date = pandas.Timestamp(target_end_date)
    return pandas.DataFrame({
        'reference_date': reference_date,
        'target_end_date': target_end_date,
        'location': location,
        'draw': range(1, len(counts) + 1),
        'n_days_data': 7,
        'count_7d': [float(c) for c in counts],
        'obs_weekly_sum': obs_weekly_sum,
        'horizon': (target_end_date - reference_date).days // 7,
    })


@pytest.fixture
def weekly():
    return pandas.concat([
        _weekly('Citywide', '2025-01-04', [1, 2, 3, 4, 5], obs_weekly_sum=3.),
        _weekly('Citywide', '2025-01-11', [10, 20, 30, 40, 50], obs_weekly_sum=numpy.nan),
        _weekly('Bronx', '2024-12-28', [5, 5, 5, 5, 5], obs_weekly_sum=5.),
        _weekly('Bronx', '2025-01-04', [2, 4, 6, 8, 10], obs_weekly_sum=6.),
    ], ignore_index=True)


def test_validate_quantile_levels_sorts_and_deduplicates():
    assert model.validate_quantile_levels([0.9, 0.1, 0.5, 0.1]) == [0.1, 0.5, 0.9]


@pytest.mark.parametrize('levels', [
    [0., 0.5],
    [0.5, 1.],
    [1.5],
    [-0.1],
    ['0.5'],
    [True],
    [numpy.nan],
    [],
])
def test_validate_quantile_levels_rejects(levels):
    with pytest.raises(model.InvalidQuantileLevel):
        model.validate_quantile_levels(levels)


def test_invalid_quantile_level_is_a_value_error():
    with pytest.raises(ValueError) as error:
        model.validate_quantile_levels([0.5, 2])
    assert error.value.levels == [2]


def test_summarize_quantiles_layout(weekly):
    summary = model.summarize_quantiles(weekly, FLUSIGHT_QUANTILES, 'wk inc covid ed visits')

    assert summary.columns.tolist() == SUBMISSION_COLUMNS
    assert len(summary) == 4 * len(FLUSIGHT_QUANTILES)
    assert set(summary['target']) == {'wk inc covid ed visits'}
    assert set(summary['output_type']) == {'quantile'}
    assert summary['reference_date'].unique().tolist() == [pandas.Timestamp('2025-01-04')]

    for _, week in summary.groupby(['location', 'target_end_date']):
        assert week['output_type_id'].tolist() == list(FLUSIGHT_QUANTILES)
        assert week['value'].is_monotonic_increasing


def test_summarize_quantiles_uses_linear_interpolation(weekly):
    summary = model.summarize_quantiles(weekly, [0.1, 0.25, 0.5, 0.9], 'target')

    citywide = summary.loc[(summary['location'] == 'Citywide')
                           & (summary['target_end_date'] == pandas.Timestamp('2025-01-04'))]
    numpy.testing.assert_allclose(citywide['value'].values, [1.4, 2., 3., 4.6])

    constant = summary.loc[summary['location'] == 'Bronx'].iloc[:4]
    numpy.testing.assert_allclose(constant['value'].values, [5., 5., 5., 5.])


def test_summarize_quantiles_carries_observed_sums(weekly):
    summary = model.summarize_quantiles(weekly, [0.5], 'target')

    observed = summary.set_index(['location', 'target_end_date'])['obs_weekly_sum']
    assert observed.loc[('Citywide', pandas.Timestamp('2025-01-04'))] == 3.
    assert numpy.isnan(observed.loc[('Citywide', pandas.Timestamp('2025-01-11'))])
    assert observed.loc[('Bronx', pandas.Timestamp('2024-12-28'))] == 5.


def test_summarize_quantiles_is_sorted(weekly):
    summary = model.summarize_quantiles(weekly.sample(frac=1, random_state=3), [0.75, 0.25], 'target')

    expected = summary.sort_values(['location', 'target_end_date', 'output_type_id']).reset_index(drop=True)
    pandas.testing.assert_frame_equal(summary, expected)
    assert summary['location'].iloc[0] == 'Bronx'
    assert summary['horizon'].tolist() == [-1, -1, 0, 0, 0, 0, 1, 1]


def test_summarize_quantiles_filters_horizons(weekly):
    summary = model.summarize_quantiles(weekly, [0.5], 'target', horizons=[0, 1])

    assert sorted(summary['horizon'].unique()) == [0, 1]
    assert len(summary) == 3


def test_summarize_quantiles_renames_locations(weekly):
    summary = model.summarize_quantiles(weekly, [0.5], 'target', location_rename={'Citywide': 'NYC'})

    assert set(summary['location']) == {'Bronx', 'NYC'}


def test_rename_locations_rejects_collisions():
    locations = pandas.Series(['Bronx', 'Citywide', 'Bronx'])

    with pytest.raises(ValueError, match='same label'):
        model.rename_locations(locations, {'Bronx': 'NYC', 'Citywide': 'NYC'})


def test_rename_locations_keeps_unlisted_labels():
    locations = pandas.Series(['Bronx', 'Citywide', 'Bronx'])

    renamed = model.rename_locations(locations, {'Citywide': 'NYC'})

    assert renamed.tolist() == ['Bronx', 'NYC', 'Bronx']


def test_summarize_daily(make_predictions):
    dates = pandas.date_range('2024-12-29', '2024-12-30')
    predictions = pandas.concat([
        make_predictions('Citywide', dates, [draw, 10 * draw], observed_counts=[4, 5], draw=draw)
        for draw in range(1, 6)
    ])

    summary = model.summarize_daily(predictions, ci=0.5)

    assert summary.columns.tolist() == [
        'location', 'date', 'period', 'mean', 'median', 'lower', 'upper', 'observed_count',
    ]
    assert summary['mean'].tolist() == [3., 30.]
    assert summary['median'].tolist() == [3., 30.]
    assert summary['lower'].tolist() == [2., 20.]
    assert summary['upper'].tolist() == [4., 40.]
    assert summary['observed_count'].tolist() == [4., 5.]


def test_summarize_quantiles_rejects_horizons_with_no_weeks(weekly):
    with pytest.raises(ValueError, match='horizon'):
        model.summarize_quantiles(weekly, [0.5], 'target', horizons=[5, 6])
