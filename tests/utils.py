import importlib
import inspect
import pkgutil
import warnings
from inspect import isabstract

import numpy as np
import pytest
import sfsynth as sf
from traits.api import HasTraits


def get_all_classes(hastraits_only=False):
    classes = []
    package = importlib.import_module('sfsynth')
    for module_info in pkgutil.walk_packages(package.__path__, package.__name__ + '.'):
        module = importlib.import_module(module_info.name)
        for _, cls in inspect.getmembers(module, inspect.isclass):
            # ensure class is defined in the current module
            if cls.__module__ == module_info.name and (not hastraits_only or issubclass(cls, HasTraits)):
                classes.append(cls)
    return classes


def get_subclasses(cls, include_abstract=False):
    classes = []
    for _, subcls in inspect.getmembers(sf):
        if all(
            [inspect.isclass(subcls) and issubclass(subcls, cls), not inspect.isabstract(subcls) or include_abstract]
        ):
            classes.append(subcls)
    return classes


def create_instance(sfsynth_cls):
    with warnings.catch_warnings():
        warnings.filterwarnings('ignore', category=DeprecationWarning)
        if isabstract(sfsynth_cls):
            pytest.skip(f'{sfsynth_cls.__name__} is an abstract base class.')
        if sfsynth_cls.__name__ == 'CustomArray':
            return sfsynth_cls(table=sf.LinearArray(number=4).x0)
        return sfsynth_cls()


def cyclic_gaps(pos):
    """Return the distances between consecutive secondary sources of a closed loop.

    Parameters
    ----------
    pos : numpy.ndarray
        Positions, shape (3, n).
    """
    return np.linalg.norm(np.roll(pos, -1, axis=1) - pos, axis=0)


def phase_gradient(p, dx):
    """Return the spatial derivative of the unwrapped phase of a sampled field."""
    return np.gradient(np.unwrap(np.angle(p)), dx)
