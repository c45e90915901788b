# -*- coding: utf-8 -*-
"""Code for assembling the least squares system of a tensor-product spline fit.

Created on September 4, 2026
@author: Donald Erb

"""

import warnings

import numpy as np

from ._compat import diags
from ._spline_utils import tensor_basis
from ._validation import _check_array, _check_weights
from .utils import ConfigurationError, DataError, ParameterWarning


def _check_samples(x, y, dim_x, dim_y=None):
    """
    Validates the sample coordinates and values against the spline dimensions.

    Parameters
    ----------
    x : array-like, shape (N, `dim_x`) or (N,)
        The sample coordinates. One dimensional input is only allowed if `dim_x` is 1.
    y : array-like, shape (N, `dim_y`) or (N,)
        The sample values. One dimensional input is treated as a single output dimension.
    dim_x : int
        The number of input dimensions.
    dim_y : int, optional
        The number of output dimensions. Default is None, which accepts any number.

    Returns
    -------
    x : numpy.ndarray, shape (N, `dim_x`)
        The validated sample coordinates.
    y : numpy.ndarray, shape (N, `dim_y`)
        The validated sample values.

    Raises
    ------
    DataError
        Raised if the dimensions of `x` or `y` do not match `dim_x` and `dim_y`, if the
        number of samples in `x` and `y` differ, or if any values are not finite.

    """
    x = _check_array(x, dtype=float, check_finite=True, ensure_1d=False, ensure_2d=True, name='x')
    y = _check_array(y, dtype=float, check_finite=True, ensure_1d=False, ensure_2d=True, name='y')
    if x.shape[1] != dim_x:
        raise DataError(f'samples have {x.shape[1]} input dimensions but expected {dim_x}')
    elif dim_y is not None and y.shape[1] != dim_y:
        raise DataError(f'samples have {y.shape[1]} output dimensions but expected {dim_y}')
    elif x.shape[0] != y.shape[0]:
        raise DataError(
            f'number of sample coordinates ({x.shape[0]}) and values ({y.shape[0]}) differ'
        )
    elif x.shape[0] == 0:
        raise DataError('at least one sample is required')

    return x, y


def assemble_system(x, y, knots, spline_degrees, weights=None):
    """
    Creates the weighted design matrix and right hand side for a spline fit.

    Parameters
    ----------
    x : array-like, shape (N, D)
        The sample coordinates, with one column for each of the `D` input dimensions.
    y : array-like, shape (N, K)
        The sample values, with one column for each of the `K` output dimensions.
    knots : Sequence[numpy.ndarray]
        The knot vector for each input dimension.
    spline_degrees : Sequence[int]
        The spline degree for each input dimension.
    weights : array-like, shape (N,), optional
        The non-negative weight of each sample. Default is None, which gives every
        sample a weight of 1.

    Returns
    -------
    design : scipy.sparse.csr_array or scipy.sparse.csr_matrix, shape (N, M)
        The design matrix, where `M` is the product of the number of basis functions of
        each dimension. Row `i` is the tensor-product basis evaluated at ``x[i]``, scaled
        by ``sqrt(weights[i])``, so it has at most ``prod(spline_degrees + 1)`` non-zero
        values.
    rhs : numpy.ndarray, shape (N, K)
        The sample values, scaled by the square root of the weights.

    Raises
    ------
    ConfigurationError
        Raised if the number of knot vectors and spline degrees differ.
    DataError
        Raised if the sample dimensions do not match the number of knot vectors, if the
        weights are invalid, or if any sample is outside of the knot domain.

    Notes
    -----
    Scaling by the square root of the weights makes the ordinary least squares solution
    of ``design @ c = rhs`` equal to the weighted least squares solution of the unscaled
    system.

    """
    if len(knots) != len(spline_degrees):
        raise ConfigurationError('must have one spline degree for each knot vector')
    x, y = _check_samples(x, y, len(knots))
    weights = _check_weights(weights, x.shape[0])
    if not weights.all():
        warnings.warn(
            f'{np.count_nonzero(weights == 0)} samples have a weight of 0 and will not '
            'affect the fit', ParameterWarning, stacklevel=2
        )

    try:
        design = tensor_basis(x, knots, spline_degrees)
    except ValueError as e:
        raise DataError(f'samples are outside of the spline domain: {e}') from e

    sqrt_weights = np.sqrt(weights)
    num_samples = x.shape[0]
    design = diags(sqrt_weights, 0, shape=(num_samples, num_samples), format='csr') @ design
    rhs = sqrt_weights[:, None] * y

    return design.tocsr(), rhs
