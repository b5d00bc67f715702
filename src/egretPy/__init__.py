from importlib.metadata import version, PackageNotFoundError

"""
egretPy: data containers for WRTDS water-quality trend exploration.
"""

try:
    __version__ = version("egretPy")
except PackageNotFoundError:
    # If the package is not installed, we don't have a version number
    __version__ = "unknown"

from .accessors import get_daily, get_info, get_sample, get_surfaces
from .egret import EgretList, as_egret, egret_from_mapping, is_egret
from .exceptions import ContractViolation, EgretError, MissingFieldError
from .helpers import (
    format_egret,
    n_censored_vals,
    n_discharge,
    n_observations,
    plot_egret,
    print_egret,
    run_model_estimation,
    with_surfaces,
)

__all__ = [
    "EgretList",
    "as_egret",
    "egret_from_mapping",
    "is_egret",
    "get_daily",
    "get_info",
    "get_sample",
    "get_surfaces",
    "n_discharge",
    "n_observations",
    "n_censored_vals",
    "format_egret",
    "print_egret",
    "plot_egret",
    "run_model_estimation",
    "with_surfaces",
    "EgretError",
    "MissingFieldError",
    "ContractViolation",
]
