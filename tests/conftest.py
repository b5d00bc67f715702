import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def info_df():
    """A one-row INFO record like the ones produced for a USGS site."""
    return pd.DataFrame(
        {
            "station.nm": ["CHOPTANK RIVER NEAR GREENSBORO, MD"],
            "shortName": ["Choptank"],
            "paramShortName": ["Nitrate"],
            "param.units": ["mg/l as N"],
            "constitAbbrev": ["NO3"],
            "drainSqKm": [292.67],
        }
    )


@pytest.fixture
def daily_df():
    dates = pd.date_range("1979-10-01", periods=30, freq="D")
    return pd.DataFrame(
        {
            "Date": dates,
            "Q": np.linspace(1.0, 3.9, 30),
            "Julian": np.arange(30),
        }
    )


def _make_sample(uncen, start="1979-10-15"):
    """Builds a Sample dataframe with the given Uncen flags."""
    n = len(uncen)
    conc_high = np.linspace(0.5, 1.5, n)
    conc_low = np.where(np.asarray(uncen) == 0, 0.0, conc_high)
    return pd.DataFrame(
        {
            "Date": pd.date_range(start, periods=n, freq="7D"),
            "ConcLow": conc_low,
            "ConcHigh": conc_high,
            "Uncen": uncen,
            "ConcAve": (conc_low + conc_high) / 2,
            "Q": np.linspace(2.0, 4.0, n),
        }
    )


@pytest.fixture
def sample_df():
    return _make_sample([1, 0, 1, 1, 0])


@pytest.fixture
def surfaces_array():
    return np.zeros((14, 16, 3))


@pytest.fixture
def make_sample():
    """Factory fixture for Sample dataframes with chosen Uncen flags."""
    return _make_sample
