from typing import Optional

import click
from loguru import logger

from epi_hub_forecasts.lib import (
    cli_tools,
    utilities,
)
from epi_hub_forecasts.pipeline.preprocessing.specification import PreprocessingSpecification
from epi_hub_forecasts.pipeline.preprocessing.data import PreprocessingDataInterface
from epi_hub_forecasts.pipeline.preprocessing import model


def do_preprocessing(specification: PreprocessingSpecification,
                     output_root: Optional[str],
                     preprocess_only: bool,
                     with_debugger: bool) -> PreprocessingSpecification:
    output_root = cli_tools.get_output_root(output_root, specification.data.output_root)
    run_directory = cli_tools.make_run_directory(output_root)
    specification.data.output_root = str(run_directory)

    cli_tools.configure_logging_to_files(run_directory)
    main = cli_tools.handle_exceptions(preprocessing_main, logger, with_debugger)
    main(specification, preprocess_only)

    return specification


def preprocessing_main(specification: PreprocessingSpecification, preprocess_only: bool) -> None:
    perf_logger = cli_tools.task_performance_logger
    perf_logger.info(f'Starting preprocessing for version {specification.data.output_root}.', context='setup')

    data_interface = PreprocessingDataInterface.from_specification(specification)
    data_interface.make_dirs()
    data_interface.save_specification(specification)

    if preprocess_only:
        return

    parameters = specification.parameters
    perf_logger.info(f'Loading raw data from {specification.data.raw_data_path}.', context='read')
    raw = data_interface.load_raw_data()

    perf_logger.info('Building the complete daily series.', context='transform')
    daily = model.parse_daily_counts(
        raw,
        date_column=parameters.date_column,
        location_column=parameters.location_column,
        count_column=parameters.count_column,
    )
    daily = model.complete_daily_series(
        daily,
        start_date=utilities.to_timestamp(parameters.start_date),
        end_date=utilities.to_timestamp(parameters.end_date),
        locations=parameters.locations,
    )
    lag_matrix = model.build_lag_matrix(daily, parameters.lags) if parameters.lags else None

    perf_logger.info(f'Writing {len(daily)} daily rows.', context='write')
    data_interface.save_observed_counts(daily)
    if lag_matrix is not None:
        data_interface.save_lag_matrix(lag_matrix)

    perf_logger.report()
    logger.info(f'Preprocessing version {specification.data.output_root} complete.')


@click.command()
@cli_tools.with_specification(PreprocessingSpecification)
@cli_tools.add_output_options
@click.option('--preprocess-only',
              is_flag=True,
              help='Only make the run directory and save the specification.')
@cli_tools.add_verbose_and_with_debugger
def preprocess(specification,
               output_root,
               preprocess_only,
               verbose, with_debugger):
    """Build the complete daily series consumed by model fits and aggregation."""
    cli_tools.configure_logging_to_terminal(verbose)

    do_preprocessing(
        specification=specification,
        output_root=output_root,
        preprocess_only=preprocess_only,
        with_debugger=with_debugger,
    )

    logger.info('**Done**')
