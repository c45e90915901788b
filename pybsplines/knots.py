# -*- coding: utf-8 -*-
"""Functions for building clamped knot vectors from sample coordinates.

Created on September 3, 2026
@author: Donald Erb

"""

from enum import Enum

import numpy as np

from ._validation import _check_array, _check_option
from .utils import ConfigurationError, DataError


class KnotSpacing(Enum):
    """
    The methods for placing the interior knots of a knot vector.

    Attributes
    ----------
    AS_SAMPLED
        Interior knots are moving averages of sample coordinates chosen evenly in
        rank space, so the knots follow the density of the samples.
    EQUIDISTANT
        Interior knots are uniformly spaced between the minimum and maximum sample
        coordinates, independent of the sample density.
    EXPERIMENTAL
        Interior knots start uniformly spaced and are then moved to the mean of the
        sample coordinates within their surrounding bucket.

    """

    AS_SAMPLED = 'as_sampled'
    EQUIDISTANT = 'equidistant'
    EXPERIMENTAL = 'experimental'


def _rank_sites(values, num_sites):
    """
    Selects sites evenly spaced in rank space from sorted, unique values.

    Parameters
    ----------
    values : numpy.ndarray, shape (N,)
        The sorted, unique values.
    num_sites : int
        The number of sites to select. Must be between 2 and `N`.

    Returns
    -------
    numpy.ndarray, shape (`num_sites`,)
        The selected values, always including the first and last values.

    """
    num_values = len(values)
    if num_sites == num_values:
        return values
    # round half up rather than to even so that indices spaced at least 1 apart stay unique
    indices = np.floor(np.linspace(0, num_values - 1, num_sites) + 0.5).astype(np.intp)
    return values[indices]


def _as_sampled_knots(values, degree, num_basis_functions):
    """
    Places interior knots at moving averages of sample coordinates.

    Parameters
    ----------
    values : numpy.ndarray, shape (N,)
        The sorted, unique sample coordinates.
    degree : int
        The spline degree.
    num_basis_functions : int
        The number of basis functions.

    Returns
    -------
    numpy.ndarray, shape (``num_basis_functions - degree - 1``,)
        The interior knots.

    Notes
    -----
    Each interior knot is the average of `degree` consecutive sites (midpoints of
    consecutive sites for degree 0), which places site `i` within the support of
    basis function `i`. The Schoenberg-Whitney conditions are thus satisfied by the
    selected sites, so the design matrix has full column rank.

    References
    ----------
    de Boor, C. A Practical Guide to Splines, Revised Edition. Springer, 2001. Chapter 13.

    """
    sites = _rank_sites(values, num_basis_functions)
    if degree == 0:
        return 0.5 * (sites[1:] + sites[:-1])

    num_interior = num_basis_functions - degree - 1
    if num_interior == 0:
        return np.array([])
    windows = np.lib.stride_tricks.sliding_window_view(sites[1:-1], degree)
    return windows.mean(axis=1)


def _equidistant_knots(lower, upper, degree, num_basis_functions):
    """Places interior knots uniformly between `lower` and `upper`."""
    return np.linspace(lower, upper, num_basis_functions - degree + 1)[1:-1]


def _experimental_knots(values, degree, num_basis_functions):
    """
    Places interior knots at the sample mean within equal-width buckets.

    Parameters
    ----------
    values : numpy.ndarray, shape (N,)
        The sorted, unique sample coordinates.
    degree : int
        The spline degree.
    num_basis_functions : int
        The number of basis functions.

    Returns
    -------
    interior : numpy.ndarray, shape (``num_basis_functions - degree - 1``,)
        The interior knots.

    Notes
    -----
    The buckets are centered on the equidistant interior knots and are as wide as the
    equidistant knot spacing, so they do not overlap and never reach the domain ends.
    The output is therefore strictly increasing and inside the domain. Knots with an
    empty bucket keep their equidistant position.

    """
    lower = values[0]
    upper = values[-1]
    interior = _equidistant_knots(lower, upper, degree, num_basis_functions)
    half_width = 0.5 * (upper - lower) / (num_basis_functions - degree)
    starts = np.searchsorted(values, interior - half_width, side='left')
    ends = np.searchsorted(values, interior + half_width, side='left')
    for i, (start, end) in enumerate(zip(starts, ends)):
        if end > start:
            interior[i] = values[start:end].mean()

    return interior


def build_knot_vector(values, degree=3, num_basis_functions=None,
                      knot_spacing=KnotSpacing.AS_SAMPLED):
    """
    Builds a clamped knot vector for one input dimension.

    Parameters
    ----------
    values : array-like, shape (N,)
        The sample coordinates along the dimension. Does not need to be sorted or unique.
    degree : int, optional
        The spline degree. Default is 3, which is a cubic spline.
    num_basis_functions : int, optional
        The number of basis functions. Default is None, which uses the number of
        distinct values in `values`.
    knot_spacing : KnotSpacing or {'as_sampled', 'equidistant', 'experimental'}, optional
        The method for placing the interior knots. Default is KnotSpacing.AS_SAMPLED.

    Returns
    -------
    knots : numpy.ndarray, shape (``num_basis_functions + degree + 1``,)
        The non-decreasing knot vector. The minimum and maximum of `values` are each
        repeated ``degree + 1`` times at the ends.

    Raises
    ------
    DataError
        Raised if `values` has fewer than two distinct values or contains non-finite values.
    ConfigurationError
        Raised if `degree` is negative, if `num_basis_functions` is less than ``degree + 1``,
        if `num_basis_functions` is greater than the number of distinct values, or if
        `knot_spacing` is not a valid option.

    """
    knot_spacing = _check_option(knot_spacing, KnotSpacing, 'knot spacing')
    degree = int(degree)
    if degree < 0:
        raise ConfigurationError('spline degree must be >= 0')

    unique_values = np.unique(
        _check_array(values, dtype=float, check_finite=True, ensure_1d=True, name='values')
    )
    num_unique = len(unique_values)
    if num_unique < 2:
        raise DataError(
            'cannot build a knot vector for a dimension with fewer than 2 distinct values'
        )

    if num_basis_functions is None:
        num_basis_functions = num_unique
    num_basis_functions = int(num_basis_functions)
    if num_basis_functions < degree + 1:
        raise ConfigurationError(
            f'the number of basis functions ({num_basis_functions}) must be at least '
            f'degree + 1 ({degree + 1})'
        )
    elif num_basis_functions > num_unique:
        raise ConfigurationError(
            f'cannot have more basis functions ({num_basis_functions}) than distinct '
            f'sample values ({num_unique})'
        )

    lower = unique_values[0]
    upper = unique_values[-1]
    if knot_spacing is KnotSpacing.AS_SAMPLED:
        interior = _as_sampled_knots(unique_values, degree, num_basis_functions)
    elif knot_spacing is KnotSpacing.EQUIDISTANT:
        interior = _equidistant_knots(lower, upper, degree, num_basis_functions)
    else:
        interior = _experimental_knots(unique_values, degree, num_basis_functions)

    return np.concatenate((
        np.full(degree + 1, lower), interior, np.full(degree + 1, upper)
    ))


def build_knot_vectors(x, degrees, num_basis_functions=None,
                       knot_spacing=KnotSpacing.AS_SAMPLED):
    """
    Builds the knot vector for each input dimension.

    Parameters
    ----------
    x : array-like, shape (N, D)
        The sample coordinates, with one column per input dimension.
    degrees : Sequence[int]
        The spline degree for each of the `D` dimensions.
    num_basis_functions : Sequence[int or None], optional
        The number of basis functions for each dimension. Default is None, which uses
        the number of distinct values along each dimension.
    knot_spacing : KnotSpacing or str, optional
        The method for placing the interior knots; the same method is used for all
        dimensions. Default is KnotSpacing.AS_SAMPLED.

    Returns
    -------
    tuple[numpy.ndarray, ...]
        The knot vector for each dimension.

    """
    x = _check_array(x, dtype=float, ensure_1d=False, ensure_2d=True, name='x')
    dim_x = x.shape[1]
    if num_basis_functions is None:
        num_basis_functions = [None] * dim_x
    if len(degrees) != dim_x or len(num_basis_functions) != dim_x:
        raise ConfigurationError(
            f'expected degrees and number of basis functions for {dim_x} dimensions'
        )

    return tuple(
        build_knot_vector(x[:, i], degrees[i], num_basis_functions[i], knot_spacing)
        for i in range(dim_x)
    )
