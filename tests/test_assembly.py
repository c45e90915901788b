# -*- coding: utf-8 -*-
"""Tests for pybsplines._assembly.

@author: Donald Erb
Created on September 8, 2026

"""

import numpy as np
from numpy.testing import assert_allclose
import pytest
from scipy.sparse import issparse

from pybsplines import _assembly
from pybsplines._spline_utils import tensor_basis
from pybsplines.knots import build_knot_vectors
from pybsplines.utils import ConfigurationError, DataError, ParameterWarning


@pytest.fixture
def samples_2d():
    """Scattered two dimensional samples with two outputs."""
    rng = np.random.default_rng(5)
    x = rng.uniform(0, 1, (40, 2))
    y = np.column_stack((x[:, 0] + x[:, 1]**2, np.cos(x[:, 0])))
    degrees = [2, 3]
    knots = build_knot_vectors(x, degrees, [5, 6])
    return x, y, knots, degrees


def test_assemble_system(samples_2d):
    """Ensures the design matrix is the tensor basis when no weights are given."""
    x, y, knots, degrees = samples_2d

    design, rhs = _assembly.assemble_system(x, y, knots, degrees)

    assert issparse(design)
    assert design.format == 'csr'
    assert design.shape == (40, 30)
    assert rhs.shape == (40, 2)
    assert_allclose(design.toarray(), tensor_basis(x, knots, degrees).toarray(), rtol=1e-14)
    assert_allclose(rhs, y, rtol=1e-14)
    # every row has at most prod(degrees + 1) non-zero values
    assert (np.diff(design.indptr) <= 12).all()


def test_assemble_system_weights(samples_2d):
    """Ensures rows are scaled by the square root of the weights."""
    x, y, knots, degrees = samples_2d
    weights = np.random.default_rng(6).uniform(0.5, 4, len(x))

    design, rhs = _assembly.assemble_system(x, y, knots, degrees, weights)
    unweighted_design, unweighted_rhs = _assembly.assemble_system(x, y, knots, degrees)

    sqrt_weights = np.sqrt(weights)[:, None]
    assert_allclose(design.toarray(), sqrt_weights * unweighted_design.toarray(), rtol=1e-14)
    assert_allclose(rhs, sqrt_weights * unweighted_rhs, rtol=1e-14)


def test_assemble_system_duplicated_rows_equal_integer_weights(samples_2d):
    """Ensures an integer weight gives the same normal equations as duplicating the sample."""
    x, y, knots, degrees = samples_2d
    weights = np.ones(len(x))
    weights[3] = 3

    design, rhs = _assembly.assemble_system(x, y, knots, degrees, weights)
    repeated_x = np.vstack((x, x[[3, 3]]))
    repeated_y = np.vstack((y, y[[3, 3]]))
    repeated_design, repeated_rhs = _assembly.assemble_system(
        repeated_x, repeated_y, knots, degrees
    )

    assert_allclose(
        (design.T @ design).toarray(), (repeated_design.T @ repeated_design).toarray(),
        rtol=1e-12, atol=1e-14
    )
    assert_allclose(design.T @ rhs, repeated_design.T @ repeated_rhs, rtol=1e-12, atol=1e-14)


def test_assemble_system_zero_weight_warns(samples_2d):
    """Ensures samples with a weight of 0 emit a warning."""
    x, y, knots, degrees = samples_2d
    weights = np.ones(len(x))
    weights[0] = 0

    with pytest.warns(ParameterWarning):
        design, _ = _assembly.assemble_system(x, y, knots, degrees, weights)

    assert_allclose(design.toarray()[0], 0)


def test_assemble_system_outside_domain_fails(samples_2d):
    """Ensures samples outside of the knot domain raise an error."""
    x, y, knots, degrees = samples_2d
    x = x.copy()
    x[0, 1] = 2.

    with pytest.raises(DataError):
        _assembly.assemble_system(x, y, knots, degrees)


def test_assemble_system_degree_count_mismatch_fails(samples_2d):
    """Ensures a different number of knot vectors and degrees is a configuration error."""
    x, y, knots, degrees = samples_2d
    with pytest.raises(ConfigurationError):
        _assembly.assemble_system(x, y, knots, degrees[:1])


@pytest.mark.parametrize('weights', (np.ones(39), -np.ones(40), np.zeros(40)))
def test_assemble_system_bad_weights_fails(samples_2d, weights):
    """Ensures invalid weights raise an error."""
    x, y, knots, degrees = samples_2d
    with pytest.raises(DataError):
        _assembly.assemble_system(x, y, knots, degrees, weights)


def test_check_samples_1d():
    """Ensures one dimensional inputs are converted to single columns."""
    x, y = _assembly._check_samples(np.arange(5.), np.arange(5.), 1)

    assert x.shape == (5, 1)
    assert y.shape == (5, 1)


@pytest.mark.parametrize(
    'x_shape, y_shape, dim_x, dim_y',
    (
        ((10, 2), (10, 1), 3, 1),  # wrong input dimension
        ((10, 2), (10, 2), 2, 1),  # wrong output dimension
        ((10, 2), (9, 1), 2, 1),  # different number of samples
        ((0, 2), (0, 1), 2, 1),  # no samples
        ((10,), (10,), 2, 1),  # one dimensional x for multiple dimensions
    )
)
def test_check_samples_fails(x_shape, y_shape, dim_x, dim_y):
    """Ensures mismatched dimensions raise an error."""
    with pytest.raises(DataError):
        _assembly._check_samples(np.ones(x_shape), np.ones(y_shape), dim_x, dim_y)


def test_check_samples_non_finite_fails():
    """Ensures non-finite samples raise an error."""
    y = np.ones(5)
    y[1] = np.nan
    with pytest.raises(DataError):
        _assembly._check_samples(np.arange(5.), y, 1)
