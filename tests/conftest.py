import numpy as np
import pytest
import sfsynth as sf
import tables as tb
from pytest_cases import fixture, parametrize


@pytest.hookimpl()
def pytest_sessionfinish(session):  # noqa ARG001
    """Close all open files after the test session.

    This hook is called after the test session is finished and is used to get rid of the
    annoying UnclosedFile warnings from pytables that cannot be suppressed by filterwarnings.
    """
    tb.file._open_files.close_all()


@fixture(scope='session')
def create_sofa_file(tmp_path_factory):
    """Fixture factory for writing minimal SOFA (HDF5) files with PyTables."""

    def _create_sofa_file(name, variables, types=None):
        types = types or {}
        fname = tmp_path_factory.mktemp('sofa') / name
        with tb.open_file(str(fname), mode='w') as h5:
            for var, value in variables.items():
                node = h5.create_array(h5.root, var, np.asarray(value, dtype=np.float64))
                if var in types:
                    node.attrs['Type'] = np.bytes_(types[var])
        return fname

    return _create_sofa_file


@fixture(scope='session')
def ring_positions():
    """Eight loudspeakers on a circle of radius 2 m, counter-clockwise from angle 0."""
    phi = np.arange(8) * np.pi / 4
    return np.column_stack((2 * np.cos(phi), 2 * np.sin(phi), np.zeros(8)))


@fixture(scope='module')
@parametrize('num_workers', [1, 3], ids=['serial', 'threads'])
def linear_synthesis(num_workers):
    """Synthesis with a linear array of 11 loudspeakers over 1 m and no tapering."""
    return sf.SoundFieldSynthesis(
        secondary_sources=sf.LinearArray(number=11, size=1.0),
        tapering=sf.TaperingWindow(usetapwin=False),
        driving=sf.DrivingFunction(xref=(0.0, -1.0, 0.0)),
        num_workers=num_workers,
        block_size=4,
    )
