# This is just exposing the api from this namespace.
from epi_hub_forecasts.lib.cli_tools.decorators import (
    add_output_options,
    add_verbose_and_with_debugger,
    with_specification,
    with_version,
)
from epi_hub_forecasts.lib.cli_tools.utilities import (
    configure_logging_to_files,
    configure_logging_to_terminal,
    get_input_root,
    get_output_root,
    handle_exceptions,
    make_run_directory,
)
from epi_hub_forecasts.lib.cli_tools.performance_logger import (
    task_performance_logger,
)
