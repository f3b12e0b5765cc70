__all__ = [
    "__title__",
    "__summary__",
    "__uri__",
    "__version__",
    "__author__",
    "__email__",
    "__license__",
    "__copyright__",
]

__title__ = "epi-hub-forecasts"
__summary__ = "Epiweek aggregation and quantile summaries of dynamic GAM posterior draws for forecast hubs."
__uri__ = ""

__version__ = "0.1.0"

__author__ = "The Epi Hub Forecasting Team"
__email__ = ""

__license__ = "GNU GPLv3"
__copyright__ = f"Copyright 2025 {__author__}"
