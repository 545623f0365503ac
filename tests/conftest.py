"""Shared fixtures for the test suite."""

import pytest
from hydra.core.global_hydra import GlobalHydra

from slide_solver.config import reset_config
from slide_solver.core.data_models import GridState


@pytest.fixture(autouse=True)
def clean_global_config():
    """Make sure no test sees configuration loaded by another."""
    reset_config()
    yield
    reset_config()
    GlobalHydra.instance().clear()


@pytest.fixture
def goal():
    """Standard 3x3 goal arrangement."""
    return GridState((3, 3), [1, 2, 3, 4, 5, 6, 7, 8, 0])


@pytest.fixture
def unsolvable():
    """3x3 arrangement with odd inversions relative to the goal."""
    return GridState((3, 3), [4, 5, 0, 6, 1, 8, 7, 3, 2])
