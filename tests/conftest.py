# -*- coding: utf-8 -*-
"""Setup code for testing pybsplines.

@author: Donald Erb
Created on September 8, 2026

"""

import pytest

from .base_tests import get_data, get_grid_data, make_table


@pytest.fixture()
def data_fixture():
    """Test fixture for creating x- and y-data for testing."""
    return get_data()


@pytest.fixture()
def no_noise_data_fixture():
    """Test fixture that creates x- and y-data without noise for testing."""
    return get_data(include_noise=False)


@pytest.fixture()
def grid_data_fixture():
    """Test fixture that creates two dimensional grid samples for testing."""
    return get_grid_data()


@pytest.fixture()
def square_table():
    """The samples of ``y = x**2`` at x = 0, 1, 2, and 3."""
    return make_table([0, 1, 2, 3], [0, 1, 4, 9])
