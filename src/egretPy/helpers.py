import io
import logging
import sys
import warnings
from typing import Callable, Optional

import pandas as pd

from .accessors import get_daily, get_sample
from .egret import EgretList, find_stack_level, is_egret
from .exceptions import ContractViolation

logger = logging.getLogger(__name__)

# Value of the Uncen column marking a censored (below detection) sample.
CENSORED_FLAG = 0

DAILY_PRINT_COLUMNS = ("Date", "Q")
SAMPLE_PRINT_COLUMNS = ("Date", "ConcLow", "ConcHigh", "Q")

def _require_egret(x, func_name: str):
    if not is_egret(x):
        raise ContractViolation(
            f"{func_name}() requires an EgretList, got {type(x).__name__}."
        )

def _row_count(part) -> int:
    if isinstance(part, pd.DataFrame):
        return len(part)
    return len(pd.DataFrame(part))

def n_discharge(x) -> Optional[int]:
    """
    Counts the days of discharge data in an EgretList.

    Returns:
        Optional[int]: The number of Daily rows, or None (with a warning)
        if the bundle has no Daily data.
    """
    _require_egret(x, "n_discharge")
    daily = get_daily(x)
    if daily is None:
        warnings.warn(
            "No Daily data found; returning None.",
            UserWarning,
            stacklevel=find_stack_level(),
        )
        return None
    return _row_count(daily)

def n_observations(x) -> Optional[int]:
    """
    Counts the water-quality samples in an EgretList.

    Returns:
        Optional[int]: The number of Sample rows, or None (with a warning)
        if the bundle has no Sample data.
    """
    _require_egret(x, "n_observations")
    sample = get_sample(x)
    if sample is None:
        warnings.warn(
            "No Sample data found; returning None.",
            UserWarning,
            stacklevel=find_stack_level(),
        )
        return None
    return _row_count(sample)

def n_censored_vals(x) -> Optional[int]:
    """
    Counts the censored samples in an EgretList.

    A sample is censored when its ``Uncen`` value is exactly 0. Samples
    without an ``Uncen`` column have no censored values.

    Returns:
        Optional[int]: The number of censored samples, or None (with a
        warning) if the bundle has no Sample data.
    """
    _require_egret(x, "n_censored_vals")
    sample = get_sample(x)
    if sample is None:
        warnings.warn(
            "No Sample data found; returning None.",
            UserWarning,
            stacklevel=find_stack_level(),
        )
        return None
    if "Uncen" not in sample:
        return 0
    uncen = pd.Series(sample["Uncen"])
    return int((uncen == CENSORED_FLAG).sum())

def _format_value(value) -> str:
    return "NA" if value is None else str(value)

def _first_and_last(df: pd.DataFrame, columns) -> str:
    columns = [c for c in df.columns if c in columns]
    first = df.iloc[[0]][columns].to_string()
    last = df.iloc[[-1]][columns].to_string()
    return f"{first}\n...\n{last}\n"

def format_egret(x: EgretList) -> str:
    """
    Builds the text summary of an EgretList.

    The summary shows the first and last Daily records (Date, Q), the first
    and last Sample records (Date, ConcLow, ConcHigh, Q) and the cached
    station and parameter names, units and drainage area.
    """
    _require_egret(x, "format_egret")
    out = io.StringIO()

    daily = get_daily(x)
    if daily is not None and _row_count(daily) > 0:
        out.write("Daily discharge:\n")
        out.write(_first_and_last(pd.DataFrame(daily), DAILY_PRINT_COLUMNS))

    sample = get_sample(x)
    if sample is not None and _row_count(sample) > 0:
        out.write("\nSample data:\n")
        out.write(_first_and_last(pd.DataFrame(sample), SAMPLE_PRINT_COLUMNS))

    out.write(
        f"\n{_format_value(x.short_name)}:{_format_value(x.param_short_name)}\n"
    )
    out.write(f"Parameter units: {_format_value(x.param_units)}\n")
    out.write(f"Drainage area: {_format_value(x.drain_sq_km)} km^2\n")
    return out.getvalue()

def print_egret(x: EgretList, file=None) -> None:
    """Writes the summary of an EgretList to ``file`` (stdout by default)."""
    if file is None:
        file = sys.stdout
    file.write(format_egret(x))

def plot_egret(x: EgretList, plotter: Callable, **kwargs):
    """
    Draws the multi-panel data overview for an EgretList.

    Plotting is not part of egretPy; this calls ``plotter(x, **kwargs)``
    and returns whatever it returns.

    Args:
        x (EgretList): The bundle to plot.
        plotter (Callable): The overview plotting function.
        **kwargs: Passed through to the plotter unchanged.

    Raises:
        ContractViolation: If ``x`` is not an EgretList or ``plotter`` is
            not callable.
    """
    _require_egret(x, "plot_egret")
    if not callable(plotter):
        raise ContractViolation(
            f"plot_egret() requires a callable plotter, got {type(plotter).__name__}."
        )
    return plotter(x, **kwargs)

def run_model_estimation(x: EgretList, estimator: Callable, **kwargs) -> EgretList:
    """
    Runs an external WRTDS model estimation routine on an EgretList.

    Args:
        x (EgretList): The input bundle. It is not modified.
        estimator (Callable): Called as ``estimator(x, **kwargs)``; must
            return a new EgretList, typically with ``surfaces`` filled in.
        **kwargs: Passed through to the estimator.

    Returns:
        EgretList: The bundle returned by the estimator.

    Raises:
        ContractViolation: If ``x`` or the estimator's result is not an
            EgretList.
    """
    _require_egret(x, "run_model_estimation")
    logger.info(
        "Running model estimation with %s...",
        getattr(estimator, "__name__", estimator),
    )
    result = estimator(x, **kwargs)
    if not is_egret(result):
        raise ContractViolation(
            "The model estimation routine must return an EgretList, "
            f"got {type(result).__name__}."
        )
    logger.info("Model estimation complete.")
    return result

def with_surfaces(x: EgretList, surfaces) -> EgretList:
    """Returns a copy of ``x`` carrying a new surfaces array."""
    _require_egret(x, "with_surfaces")
    return x.replace(surfaces=surfaces)
