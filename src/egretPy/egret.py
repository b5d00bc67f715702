import dataclasses
import inspect
import logging
import os
import warnings
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from .exceptions import MissingFieldError

logger = logging.getLogger(__name__)

# Columns the downstream WRTDS routines expect on each part.
DAILY_REQUIRED_COLUMNS = ("Q",)
SAMPLE_REQUIRED_COLUMNS = ("ConcLow", "ConcHigh", "Uncen", "ConcAve")

# INFO fields copied onto the bundle at construction, keyed by their INFO
# column name and mapped to the attribute that caches them.
INFO_ATTRIBUTE_FIELDS = {
    "param.units": "param_units",
    "shortName": "short_name",
    "paramShortName": "param_short_name",
    "constitAbbrev": "constit_abbrev",
    "drainSqKm": "drain_sq_km",
}

# The surface estimation grid always has 14 rows in its first dimension.
SURFACES_N_ROWS = 14

# Names used for the parts in a plain named list, and the EgretList
# attribute each one is stored under.
PART_NAMES = {
    "INFO": "info",
    "Daily": "daily",
    "Sample": "sample",
    "surfaces": "surfaces",
}


def _is_missing(value: Any) -> bool:
    """True for None and scalar NA placeholders (np.nan, pd.NA, pd.NaT)."""
    if value is None:
        return True
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def _column_names(part: Any) -> List[str]:
    """Returns the column (or key) names of a table-like part."""
    if part is None:
        return []
    if isinstance(part, pd.DataFrame):
        return list(part.columns)
    if isinstance(part, pd.Series):
        return list(part.index)
    if isinstance(part, Mapping):
        return list(part.keys())
    return list(getattr(part, "columns", []))


def find_stack_level() -> int:
    """
    Finds the first frame outside egretPy, for use as a warning stacklevel.

    Warnings are then reported at the caller's line rather than inside the
    package, so repeated diagnostics from different call sites are not
    collapsed by the default warning filter. Frames of dataclass-generated
    methods are skipped as part of the package.
    """
    pkg_dir = os.path.dirname(os.path.abspath(__file__))
    skipped = {os.path.abspath(dataclasses.__file__), "<string>"}

    frame = inspect.currentframe()
    try:
        n = 0
        while frame is not None:
            fname = frame.f_code.co_filename
            if fname in skipped or os.path.abspath(fname).startswith(pkg_dir + os.sep):
                frame = frame.f_back
                n += 1
            else:
                break
    finally:
        del frame
    return n


def _info_value(info: Any, name: str) -> Any:
    """Reads a single metadata field from a one-row INFO record."""
    if name not in _column_names(info):
        return None
    if isinstance(info, pd.DataFrame):
        if info.empty:
            return None
        # Duplicated column names select a frame; use the first column.
        value = info.loc[:, name]
        if isinstance(value, pd.DataFrame):
            value = value.iloc[:, 0]
        value = value.iloc[0]
    else:
        value = info[name]
        if isinstance(value, pd.Series):
            value = value.iloc[0]
    return None if _is_missing(value) else value


def _n_rows(part: Any) -> Optional[int]:
    """Row count of a table or the first dimension of an array."""
    try:
        shape = np.shape(part)
    except (TypeError, ValueError):
        # Ragged nested sequences have no shape.
        return None
    if len(shape) == 0:
        return None
    return int(shape[0])


@dataclass(frozen=True, eq=False, repr=False)
class EgretList:
    """
    Container for one WRTDS analysis unit.

    Holds the INFO metadata record, the Daily discharge series, the Sample
    water-quality series and the fitted surfaces array. Any part may be
    None. A handful of INFO fields are copied onto the instance when it is
    created (``param_units``, ``short_name``, ``param_short_name``,
    ``constit_abbrev`` and ``drain_sq_km``); they are not refreshed if INFO
    is swapped out other than through :meth:`replace`.

    Instances are immutable. Use :meth:`replace` to obtain a bundle with
    different parts.
    """

    info: Any = None
    daily: Optional[pd.DataFrame] = None
    sample: Optional[pd.DataFrame] = None
    surfaces: Optional[np.ndarray] = None

    param_units: Any = field(default=None, init=False)
    short_name: Any = field(default=None, init=False)
    param_short_name: Any = field(default=None, init=False)
    constit_abbrev: Any = field(default=None, init=False)
    drain_sq_km: Any = field(default=None, init=False)

    def __post_init__(self):
        # NA placeholders (np.nan, pd.NA) become None.
        for attr in PART_NAMES.values():
            if _is_missing(getattr(self, attr)):
                object.__setattr__(self, attr, None)

        _check_parts(self.info, self.daily, self.sample, self.surfaces)

        for info_name, attr in INFO_ATTRIBUTE_FIELDS.items():
            object.__setattr__(self, attr, _info_value(self.info, info_name))

    def replace(self, **parts) -> "EgretList":
        """
        Returns a new EgretList with some parts swapped in.

        Args:
            **parts: New values keyed by ``info``, ``daily``, ``sample`` or
                ``surfaces``.

        Returns:
            EgretList: A new, re-validated bundle. The cached INFO
            attributes are recomputed from the resulting ``info``.

        Raises:
            MissingFieldError: If a keyword is not one of the four parts.
        """
        for name in parts:
            if name not in PART_NAMES.values():
                raise MissingFieldError(
                    name,
                    message=(
                        f"Unknown part '{name}'. Expected one of: "
                        f"{', '.join(PART_NAMES.values())}."
                    ),
                )
        logger.debug("Replacing parts %s of EgretList.", sorted(parts))
        return dataclasses.replace(self, **parts)

    def to_dict(self) -> Dict[str, Any]:
        """Returns the parts as a plain named list (INFO, Daily, Sample, surfaces)."""
        return {key: getattr(self, attr) for key, attr in PART_NAMES.items()}

    def __repr__(self):
        def describe(part):
            if part is None:
                return "None"
            if isinstance(part, np.ndarray):
                return f"array{part.shape}"
            if isinstance(part, Mapping):
                return f"{type(part).__name__}[{len(part)} keys]"
            n_rows = _n_rows(part)
            return f"{type(part).__name__}[{n_rows} rows]"

        parts = ", ".join(
            f"{key}={describe(getattr(self, attr))}"
            for key, attr in PART_NAMES.items()
        )
        return f"EgretList({parts})"

    def __str__(self):
        from .helpers import format_egret

        return format_egret(self)


def _check_parts(info, daily, sample, surfaces):
    """Issues a UserWarning for each part that does not look right."""
    daily_cols = _column_names(daily)
    if daily is not None and not all(c in daily_cols for c in DAILY_REQUIRED_COLUMNS):
        warnings.warn(
            "Please double check that the Daily dataframe is correctly defined.",
            UserWarning,
            stacklevel=find_stack_level(),
        )

    sample_cols = _column_names(sample)
    if sample is not None and not all(
        c in sample_cols for c in SAMPLE_REQUIRED_COLUMNS
    ):
        warnings.warn(
            "Please double check that the Sample dataframe is correctly defined.",
            UserWarning,
            stacklevel=find_stack_level(),
        )

    info_cols = _column_names(info)
    if not any(c in info_cols for c in INFO_ATTRIBUTE_FIELDS):
        warnings.warn(
            "Please double check that the INFO dataframe is correctly defined.",
            UserWarning,
            stacklevel=find_stack_level(),
        )

    if surfaces is not None and _n_rows(surfaces) != SURFACES_N_ROWS:
        warnings.warn(
            "Please double check that the surfaces matrix is correctly defined.",
            UserWarning,
            stacklevel=find_stack_level(),
        )


def as_egret(info, daily=None, sample=None, surfaces=None) -> EgretList:
    """
    Creates an EgretList from the INFO, Daily and Sample data and the
    surfaces array.

    Structural problems are reported as warnings and never stop the bundle
    from being created, so the result may still be unusable by some
    downstream routines.

    Args:
        info (pd.DataFrame | pd.Series | Mapping): Site and parameter
            metadata. Expected to carry at least one of ``param.units``,
            ``shortName``, ``paramShortName``, ``constitAbbrev`` or
            ``drainSqKm``.
        daily (pd.DataFrame, optional): Daily data with a ``Q`` column.
        sample (pd.DataFrame, optional): Sample data with ``ConcLow``,
            ``ConcHigh``, ``Uncen`` and ``ConcAve`` columns.
        surfaces (np.ndarray, optional): Array returned by the model
            estimation engine, 14 rows in its first dimension.

    Returns:
        EgretList: The new bundle.
    """
    egret = EgretList(info=info, daily=daily, sample=sample, surfaces=surfaces)
    logger.debug("Created %r", egret)
    return egret


def egret_from_mapping(named_list: Mapping) -> EgretList:
    """
    Creates an EgretList from a plain named list.

    Keys are the part names ``INFO``, ``Daily``, ``Sample`` and
    ``surfaces``; missing keys become None. The same checks as
    :func:`as_egret` are applied.
    """
    if not isinstance(named_list, Mapping):
        raise TypeError(
            f"Expected a mapping of named parts, got {type(named_list).__name__}."
        )
    extra = [key for key in named_list if key not in PART_NAMES]
    if extra:
        logger.debug("Ignoring unknown keys in named list: %s", extra)
    return as_egret(
        named_list.get("INFO"),
        daily=named_list.get("Daily"),
        sample=named_list.get("Sample"),
        surfaces=named_list.get("surfaces"),
    )


def is_egret(x) -> bool:
    """Checks whether an object is an EgretList."""
    return isinstance(x, EgretList)
