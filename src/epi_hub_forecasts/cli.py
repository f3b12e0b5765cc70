import importlib
import pkgutil

import click

from epi_hub_forecasts import pipeline


@click.group()
def epihub():
    """Top level entry point for running forecast pipeline stages."""
    pass


# Loops over every pipeline stage and adds its command to `epihub`.
for importer, modname, is_pkg in pkgutil.iter_modules(pipeline.__path__):
    if is_pkg:
        stage = importlib.import_module(f'{pipeline.__name__}.{modname}')
        epihub.add_command(stage.COMMAND)
