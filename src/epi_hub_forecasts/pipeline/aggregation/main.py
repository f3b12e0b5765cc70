from typing import Optional

import click
from loguru import logger

from epi_hub_forecasts.lib import cli_tools
from epi_hub_forecasts.pipeline.aggregation.specification import AggregationSpecification
from epi_hub_forecasts.pipeline.aggregation.data import AggregationDataInterface
from epi_hub_forecasts.pipeline.aggregation import model


def do_aggregation(specification: AggregationSpecification,
                   draws_version: Optional[str],
                   observed_version: Optional[str],
                   output_root: Optional[str],
                   preprocess_only: bool,
                   with_debugger: bool) -> AggregationSpecification:
    specification.data.draws_version = str(cli_tools.get_input_root(
        draws_version, specification.data.draws_version,
    ))
    specification.data.observed_version = str(cli_tools.get_input_root(
        observed_version, specification.data.observed_version,
    ))
    output_root = cli_tools.get_output_root(output_root, specification.data.output_root)
    run_directory = cli_tools.make_run_directory(output_root)
    specification.data.output_root = str(run_directory)

    cli_tools.configure_logging_to_files(run_directory)
    main = cli_tools.handle_exceptions(aggregation_main, logger, with_debugger)
    main(specification, preprocess_only)

    return specification


def aggregation_main(specification: AggregationSpecification, preprocess_only: bool) -> None:
    perf_logger = cli_tools.task_performance_logger
    perf_logger.info(f'Starting aggregation for version {specification.data.output_root}.', context='setup')

    data_interface = AggregationDataInterface.from_specification(specification)
    data_interface.make_dirs()
    data_interface.save_specification(specification)

    if preprocess_only:
        return

    parameters = specification.parameters
    locations = parameters.locations or data_interface.load_locations()
    if not locations:
        raise FileNotFoundError(f'No location draws found in {specification.data.draws_version}.')

    perf_logger.info(f'Loading draws for {len(locations)} locations.', context='read')
    observed = data_interface.load_observed_counts()
    hindcasts, forecasts = data_interface.load_all_draws(
        locations,
        num_cores=specification.workflow.num_cores,
        progress_bar=specification.workflow.progress_bar,
    )

    results = model.aggregate_forecasts(
        hindcasts,
        forecasts,
        observed,
        forecast_date=parameters.forecast_date,
        target=parameters.target,
        quantiles=parameters.quantiles,
        location_rename=parameters.location_rename,
        history_start_date=parameters.history_start_date,
        history_end_date=parameters.history_end_date,
        n_forecast_days=parameters.n_forecast_days,
        horizons=parameters.submission_horizons or None,
    )

    daily_summary = None
    if specification.workflow.write_daily_summary:
        perf_logger.info('Summarizing daily draws.', context='summarize')
        daily_summary = model.summarize_daily(results.predictions)

    # Nothing is written until every table has been built.
    perf_logger.info(f'Writing {len(results.quantiles)} quantile rows.', context='write')
    data_interface.save_quantile_forecasts(results.quantiles)
    if specification.workflow.write_weekly_draws:
        data_interface.save_weekly_draws(results.weekly)
    if daily_summary is not None:
        data_interface.save_daily_summary(daily_summary)

    perf_logger.report()
    logger.info(f'Aggregation version {specification.data.output_root} complete.')


@click.command()
@cli_tools.with_specification(AggregationSpecification)
@cli_tools.with_version('draws')
@cli_tools.with_version('observed')
@cli_tools.add_output_options
@click.option('--preprocess-only',
              is_flag=True,
              help='Only make the run directory and save the specification.')
@cli_tools.add_verbose_and_with_debugger
def aggregate(specification,
              draws_version, observed_version,
              output_root,
              preprocess_only,
              verbose, with_debugger):
    """Aggregate daily posterior draws into weekly quantile forecasts."""
    cli_tools.configure_logging_to_terminal(verbose)

    do_aggregation(
        specification=specification,
        draws_version=draws_version,
        observed_version=observed_version,
        output_root=output_root,
        preprocess_only=preprocess_only,
        with_debugger=with_debugger,
    )

    logger.info('**Done**')
