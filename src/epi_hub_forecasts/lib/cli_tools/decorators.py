from typing import Callable

import click


###########################
# Specification arguments #
###########################


def with_specification(specification_class):
    def _callback(ctx, param, value):
        return specification_class.from_path(value)
    return click.argument(
        'specification',
        type=click.Path(exists=True, dir_okay=False),
        callback=_callback
    )

###########################
# Main input data options #
###########################


def with_version(name: str):
    """Option for overriding an input version named in the specification ``data`` block."""
    return click.option(
        f'--{name.replace("_", "-")}-version',
        f'{name}_version',
        type=click.Path(exists=True, file_okay=False),
        help=f'Which version of {name.replace("_", " ")} to use. '
             f'Overrides the {name}_version in the specification.',
    )


######################
# Other main options #
######################

def add_output_options(func: Callable) -> Callable:
    func = click.option(
        '-o', '--output-root',
        type=click.Path(file_okay=False),
        help='Directory in which to make a new run directory. '
             'Overrides the output_root in the specification.',
    )(func)
    return func


def add_verbose_and_with_debugger(func: Callable) -> Callable:
    func = click.option(
        '-v', 'verbose',
        count=True,
        help='Configure logging verbosity.',
    )(func)
    func = click.option(
        '--pdb', 'with_debugger',
        is_flag=True,
        help='Drop into python debugger if an error occurs.',
    )(func)
    return func
