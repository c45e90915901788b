# -*- coding: utf-8 -*-
"""Tests for pybsplines.utils and the package namespace.

@author: Donald Erb
Created on September 8, 2026

"""

import warnings

import numpy as np
import pytest

import pybsplines
from pybsplines import config, utils


@pytest.mark.parametrize(
    'error', (utils.ConfigurationError, utils.DataError, utils.SingularSystemError)
)
def test_errors_are_value_errors(error):
    """Ensures all errors can be caught as ValueError."""
    assert issubclass(error, ValueError)
    with pytest.raises(ValueError):
        raise error('message')


def test_singular_system_error_is_lin_alg_error():
    """Ensures the singular system error is also a numpy LinAlgError."""
    assert issubclass(utils.SingularSystemError, np.linalg.LinAlgError)


def test_parameter_warning():
    """Ensures ParameterWarning is a UserWarning that can be filtered."""
    assert issubclass(utils.ParameterWarning, UserWarning)
    with warnings.catch_warnings():
        warnings.simplefilter('error', utils.ParameterWarning)
        with pytest.raises(utils.ParameterWarning):
            warnings.warn('test', utils.ParameterWarning)


def test_config_defaults():
    """Ensures the configuration defaults are sensible."""
    assert config.DENSE_SOLVE_LIMIT > 0
    assert 0 < config.RCOND < 1
    assert config.PSPLINE_DIFF_ORDER >= 1


@pytest.mark.parametrize(
    'name',
    (
        'Builder', 'BSpline', 'DataTable', 'KnotSpacing', 'Smoothing', 'build_knot_vector',
        'build_knot_vectors', 'evaluate_basis', 'bspline_interpolator', 'bspline_smoother',
        'bspline_unfitted', 'ConfigurationError', 'DataError', 'SingularSystemError',
        'ParameterWarning', 'config', 'utils', '__version__'
    )
)
def test_namespace(name):
    """Ensures the public objects are available from the top level of the package."""
    assert hasattr(pybsplines, name)
