"""
Accessors for the parts of an EgretList.

Each accessor accepts either an EgretList or a plain named list (any
Mapping with the EGRET part names as keys), so that routines can be used
with data assembled outside this package.
"""
from collections.abc import Mapping
from typing import Any

from .egret import PART_NAMES, EgretList
from .exceptions import MissingFieldError


def _get_part(x: Any, key: str, part_kind: str) -> Any:
    if isinstance(x, EgretList):
        return getattr(x, PART_NAMES[key])
    if isinstance(x, Mapping) and key in x:
        return x[key]
    raise MissingFieldError(key, part_kind)


def get_daily(x):
    """
    Gets the Daily dataframe from an EgretList or named list.

    Args:
        x (EgretList | Mapping): The bundle or a mapping with a "Daily" key.

    Returns:
        The Daily dataframe, or None if the EgretList has no daily data.

    Raises:
        MissingFieldError: If a mapping without a "Daily" key is given.
    """
    return _get_part(x, "Daily", "dataframe")


def get_info(x):
    """Gets the INFO record from an EgretList or named list."""
    return _get_part(x, "INFO", "dataframe")


def get_sample(x):
    """Gets the Sample dataframe from an EgretList or named list."""
    return _get_part(x, "Sample", "dataframe")


def get_surfaces(x):
    """Gets the surfaces array from an EgretList or named list."""
    return _get_part(x, "surfaces", "matrix")
