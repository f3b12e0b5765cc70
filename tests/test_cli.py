from click.testing import CliRunner
import pandas
import pytest

from epi_hub_forecasts.cli import epihub


@pytest.fixture
def quiet_logging(mocker):
    mocker.patch('epi_hub_forecasts.lib.cli_tools.configure_logging_to_terminal')
    mocker.patch('epi_hub_forecasts.lib.cli_tools.configure_logging_to_files')


def test_stages_are_registered():
    result = CliRunner().invoke(epihub, ['--help'])

    assert result.exit_code == 0
    assert 'aggregate' in result.output
    assert 'preprocess' in result.output


@pytest.mark.parametrize('command', ['aggregate', 'preprocess'])
def test_stage_help(command):
    result = CliRunner().invoke(epihub, [command, '--help'])

    assert result.exit_code == 0
    assert '--output-root' in result.output
    assert '--pdb' in result.output


def test_preprocess_command(tmp_path, quiet_logging):
    raw_data_path = tmp_path / 'raw.csv'
    pandas.DataFrame({
        'date': ['2025-01-01', '2025-01-02'],
        'location': ['Citywide', 'Citywide'],
        'count': [3, 4],
    }).to_csv(raw_data_path, index=False)
    specification_path = tmp_path / 'preprocessing.yaml'
    specification_path.write_text(f'data:\n  raw_data_path: {raw_data_path}\n')

    result = CliRunner().invoke(epihub, ['preprocess', str(specification_path), '-o', str(tmp_path / 'runs')])

    assert result.exit_code == 0, result.output
    run_directories = list((tmp_path / 'runs').iterdir())
    assert len(run_directories) == 1
    assert (run_directories[0] / 'observed_counts.csv').exists()
    assert (run_directories[0] / 'preprocessing_specification.yaml').exists()


def test_aggregate_preprocess_only(tmp_path, quiet_logging):
    specification_path = tmp_path / 'aggregation.yaml'
    specification_path.write_text(
        'parameters:\n'
        '  forecast_date: 2025-01-03\n'
        '  target: wk inc covid ed visits\n'
    )
    (tmp_path / 'draws').mkdir()
    (tmp_path / 'observed').mkdir()

    result = CliRunner().invoke(epihub, [
        'aggregate', str(specification_path),
        '--draws-version', str(tmp_path / 'draws'),
        '--observed-version', str(tmp_path / 'observed'),
        '-o', str(tmp_path / 'runs'),
        '--preprocess-only',
    ])

    assert result.exit_code == 0, result.output
    run_directory = next((tmp_path / 'runs').iterdir())
    assert (run_directory / 'aggregation_specification.yaml').exists()
    assert not (run_directory / 'quantile_forecasts.csv').exists()


def test_aggregate_requires_versions(tmp_path, quiet_logging):
    specification_path = tmp_path / 'aggregation.yaml'
    specification_path.write_text(
        'parameters:\n'
        '  forecast_date: 2025-01-03\n'
        '  target: wk inc covid ed visits\n'
    )

    result = CliRunner().invoke(epihub, ['aggregate', str(specification_path), '-o', str(tmp_path / 'runs')])

    assert result.exit_code != 0
    assert isinstance(result.exception, ValueError)
