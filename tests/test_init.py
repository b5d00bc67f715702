import types

import egretPy
from egretPy import EgretList, as_egret, get_sample, n_censored_vals


def test_top_level_imports():
    """
    Test that key functions can be imported from the top-level package.
    """
    assert isinstance(as_egret, types.FunctionType)
    assert isinstance(get_sample, types.FunctionType)
    assert isinstance(n_censored_vals, types.FunctionType)
    assert issubclass(EgretList, object)


def test_version_is_present():
    """
    Test that the package has a __version__ attribute.
    """
    assert hasattr(egretPy, "__version__")
    assert isinstance(egretPy.__version__, str)
