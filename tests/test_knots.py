# -*- coding: utf-8 -*-
"""Tests for pybsplines.knots.

@author: Donald Erb
Created on September 8, 2026

"""

import numpy as np
from numpy.testing import assert_allclose, assert_array_equal
import pytest

from pybsplines import knots
from pybsplines.utils import ConfigurationError, DataError


def _check_clamped(knot_vector, degree, num_basis_functions, lower, upper):
    """Checks the shared invariants of clamped knot vectors."""
    assert len(knot_vector) == num_basis_functions + degree + 1
    assert (np.diff(knot_vector) >= 0).all()
    assert_array_equal(knot_vector[:degree + 1], lower)
    assert_array_equal(knot_vector[-(degree + 1):], upper)
    # the ends are repeated exactly degree + 1 times
    interior = knot_vector[degree + 1:len(knot_vector) - degree - 1]
    assert (interior > lower).all()
    assert (interior < upper).all()


@pytest.mark.parametrize('knot_spacing', knots.KnotSpacing)
@pytest.mark.parametrize('degree', (0, 1, 2, 3, 5))
@pytest.mark.parametrize('num_basis_functions', (6, 11, 40))
def test_knot_vector_invariants(knot_spacing, degree, num_basis_functions):
    """Ensures all knot spacings give valid clamped knot vectors."""
    values = np.random.default_rng(0).uniform(-5, 20, 60)

    output = knots.build_knot_vector(values, degree, num_basis_functions, knot_spacing)

    _check_clamped(output, degree, num_basis_functions, values.min(), values.max())


@pytest.mark.parametrize('knot_spacing', knots.KnotSpacing)
def test_knot_vector_strings(knot_spacing):
    """Ensures the knot spacing can be given as a string."""
    values = np.linspace(0, 1, 20)
    expected = knots.build_knot_vector(values, 3, 8, knot_spacing)
    output = knots.build_knot_vector(values, 3, 8, knot_spacing.value)

    assert_array_equal(output, expected)


def test_knot_vector_unsorted_duplicates():
    """Ensures the input order and repeated values do not change the knots."""
    values = np.array([3., 1., 2., 0., 2., 3., 1.])

    output = knots.build_knot_vector(values, 2)
    expected = knots.build_knot_vector([0., 1., 2., 3.], 2)

    assert_array_equal(output, expected)


def test_as_sampled_worked_example():
    """Ensures the knots for the samples 0, 1, 2, 3 with degree 2 are averages of the sites."""
    output = knots.build_knot_vector([0, 1, 2, 3], 2, 4, knots.KnotSpacing.AS_SAMPLED)

    assert_allclose(output, [0, 0, 0, 1.5, 3, 3, 3], rtol=0, atol=1e-15)


def test_as_sampled_default_num_basis_functions():
    """Ensures the default number of basis functions is the number of distinct values."""
    values = np.array([0., 0.5, 0.7, 2., 5., 5.5, 9.])
    degree = 3

    output = knots.build_knot_vector(values, degree)

    assert len(output) == len(values) + degree + 1
    # interior knots are moving averages of the interior sites
    expected_interior = np.convolve(values[1:-1], np.ones(degree) / degree, mode='valid')
    assert_allclose(output[degree + 1:-(degree + 1)], expected_interior, rtol=1e-14)


def test_as_sampled_degree_zero():
    """Ensures degree 0 knots are the midpoints between sites."""
    output = knots.build_knot_vector([0., 1., 3., 7.], 0)

    assert_allclose(output, [0, 0.5, 2, 5, 7], rtol=1e-15)


def test_as_sampled_follows_density():
    """Ensures AS_SAMPLED knots cluster where the samples are dense."""
    values = np.concatenate((np.linspace(0, 1, 90), np.linspace(1.1, 10, 10)))
    output = knots.build_knot_vector(values, 3, 20, knots.KnotSpacing.AS_SAMPLED)
    interior = output[4:-4]

    assert (interior < 1).sum() > len(interior) // 2


def test_rank_sites():
    """Ensures rank sites include the ends and are unique."""
    values = np.arange(100.)
    for num_sites in range(2, 101):
        output = knots._rank_sites(values, num_sites)

        assert len(output) == num_sites
        assert output[0] == 0
        assert output[-1] == 99
        assert len(np.unique(output)) == num_sites


@pytest.mark.parametrize('degree', (1, 3))
def test_equidistant(degree):
    """Ensures EQUIDISTANT interior knots are uniformly spaced."""
    values = np.array([0., 0.1, 0.2, 9., 10.])
    output = knots.build_knot_vector(values, degree, 5, knots.KnotSpacing.EQUIDISTANT)

    num_intervals = 5 - degree
    expected_interior = np.linspace(0, 10, num_intervals + 1)[1:-1]
    assert_allclose(output[degree + 1:len(output) - degree - 1], expected_interior)


def test_experimental():
    """Ensures EXPERIMENTAL knots move towards the mean of the samples in their bucket."""
    values = np.array([0., 4.5, 4.6, 4.7, 10.])
    degree = 1
    # one interior knot, initially at 5 with a bucket of [2.5, 7.5)
    output = knots.build_knot_vector(values, degree, 3, knots.KnotSpacing.EXPERIMENTAL)

    assert_allclose(output, [0, 0, 4.6, 10, 10])


def test_experimental_empty_bucket():
    """Ensures knots with no samples in their bucket stay equidistant."""
    values = np.array([0., 0.1, 9.9, 10.])
    output = knots.build_knot_vector(values, 1, 3, knots.KnotSpacing.EXPERIMENTAL)

    assert_allclose(output, [0, 0, 5, 10, 10])


@pytest.mark.parametrize('values', ([1., 1., 1.], [2.], []))
def test_single_distinct_value_fails(values):
    """Ensures dimensions with fewer than two distinct values raise an error."""
    with pytest.raises(DataError):
        knots.build_knot_vector(values, 1)


def test_non_finite_values_fails():
    """Ensures non-finite values raise an error."""
    with pytest.raises(DataError):
        knots.build_knot_vector([0, 1, np.nan, 3], 1)


def test_too_few_basis_functions_fails():
    """Ensures the number of basis functions must be at least degree + 1."""
    with pytest.raises(ConfigurationError):
        knots.build_knot_vector(np.arange(10), 3, 3)


def test_too_many_basis_functions_fails():
    """Ensures the number of basis functions cannot exceed the number of distinct values."""
    with pytest.raises(ConfigurationError):
        knots.build_knot_vector([0, 1, 2, 3, 3, 3], 1, 5)


def test_negative_degree_fails():
    """Ensures a negative degree raises an error."""
    with pytest.raises(ConfigurationError):
        knots.build_knot_vector(np.arange(10), -1)


def test_invalid_spacing_fails():
    """Ensures an unknown knot spacing raises an error."""
    with pytest.raises(ConfigurationError):
        knots.build_knot_vector(np.arange(10), 3, knot_spacing='random')


def test_build_knot_vectors():
    """Ensures each dimension gets its own knot vector."""
    x = np.column_stack((np.linspace(0, 1, 12), np.linspace(-3, 3, 12)[::-1]))

    output = knots.build_knot_vectors(x, [1, 3], [5, 6], 'equidistant')

    assert len(output) == 2
    _check_clamped(output[0], 1, 5, 0, 1)
    _check_clamped(output[1], 3, 6, -3, 3)
    assert_allclose(output[0], knots.build_knot_vector(x[:, 0], 1, 5, 'equidistant'))


def test_build_knot_vectors_wrong_dimensions_fails():
    """Ensures the degrees must match the number of dimensions."""
    x = np.ones((10, 2)) * np.arange(10)[:, None]
    with pytest.raises(ConfigurationError):
        knots.build_knot_vectors(x, [3])
