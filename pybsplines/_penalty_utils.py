# -*- coding: utf-8 -*-
"""Helper functions for creating the penalties of regularized spline fits.

Created on September 3, 2026
@author: Donald Erb

"""

import numpy as np

from ._compat import csr_object, diags, identity, kron


def difference_matrix(data_size, diff_order=2, diff_format=None):
    """
    Creates an n-order finite-difference matrix.

    Parameters
    ----------
    data_size : int
        The number of data points.
    diff_order : int, optional
        The integer differential order; must be >= 0. Default is 2.
    diff_format : str or None, optional
        The sparse format to use for the difference matrix. Default is None,
        which will use the default specified in :func:`scipy.sparse.diags`.

    Returns
    -------
    diff_matrix : scipy.sparse.spmatrix or scipy.sparse.sparray
        The sparse difference matrix, with shape (``data_size - diff_order``, `data_size`).

    Raises
    ------
    ValueError
        Raised if `diff_order` or `data_size` is negative.

    Notes
    -----
    The resulting matrices are sparse versions of::

        import numpy as np
        np.diff(np.eye(data_size), diff_order, axis=0)

    """
    if diff_order < 0:
        raise ValueError('the differential order must be >= 0')
    elif data_size < 0:
        raise ValueError('data size must be >= 0')
    elif diff_order > data_size:
        # maintain parity with np.diff
        diff_order = data_size

    if diff_order == 0:
        diff_matrix = identity(data_size, format=diff_format)
    else:
        diagonals = np.zeros(2 * diff_order + 1)
        diagonals[diff_order] = 1
        for _ in range(diff_order):
            diagonals = diagonals[:-1] - diagonals[1:]

        diff_matrix = diags(
            diagonals, np.arange(diff_order + 1),
            shape=(data_size - diff_order, data_size), format=diff_format
        )

    return diff_matrix


def diff_penalty_matrix(data_size, diff_order=2, diff_format='csr'):
    """
    Creates the finite difference penalty matrix, ``D.T @ D``.

    Parameters
    ----------
    data_size : int
        The number of coefficients.
    diff_order : int, optional
        The integer differential order; must be >= 0. Default is 2.
    diff_format : str or None, optional
        The sparse format to use for the penalty matrix. Default is 'csr'.

    Returns
    -------
    penalty_matrix : scipy.sparse.spmatrix or scipy.sparse.sparray
        The sparse, symmetric difference penalty matrix with shape (`data_size`, `data_size`).

    Raises
    ------
    ValueError
        Raised if `data_size` is not greater than `diff_order`.

    """
    if data_size <= diff_order:
        raise ValueError('data size must be greater than the difference order')
    diff_matrix = difference_matrix(data_size, diff_order, 'csr')

    return (diff_matrix.T @ diff_matrix).asformat(diff_format)


def _effective_diff_order(num_bases, diff_order):
    """
    The difference order that can be applied along a dimension with `num_bases` coefficients.

    Dimensions with fewer coefficients than ``diff_order + 1`` use the highest possible
    order, ``num_bases - 1``; a value of 0 means the dimension is not penalized.

    """
    return min(diff_order, num_bases - 1)


def tensor_diff_penalty(num_bases, diff_order=2):
    """
    Creates the difference penalty for a tensor-product coefficient lattice.

    Parameters
    ----------
    num_bases : Sequence[int]
        The number of basis functions along each dimension.
    diff_order : int, optional
        The difference order applied along each dimension. Default is 2.

    Returns
    -------
    scipy.sparse.csr_array or scipy.sparse.csr_matrix, shape (M, M)
        The penalty ``sum_k I ⊗ ... ⊗ D_k.T @ D_k ⊗ ... ⊗ I``, where `M` is the
        product of `num_bases`. The ordering of the coefficients matches C-ordering
        of the lattice, with the first dimension varying slowest.

    Raises
    ------
    ValueError
        Raised if `diff_order` is less than 1.

    References
    ----------
    Eilers, P., et al. Fast and compact smoothing on large multidimensional grids. Computational
    Statistics and Data Analysis, 2006, 50(1), 61-76.

    """
    if diff_order < 1:
        raise ValueError('the difference order must be > 0 for a penalized spline')

    num_bases = [int(value) for value in num_bases]
    total_size = int(np.prod(num_bases))
    penalty = csr_object((total_size, total_size))
    for axis, size in enumerate(num_bases):
        axis_order = _effective_diff_order(size, diff_order)
        if axis_order < 1:
            continue
        size_before = int(np.prod(num_bases[:axis]))
        size_after = int(np.prod(num_bases[axis + 1:]))
        axis_penalty = kron(
            kron(identity(size_before), diff_penalty_matrix(size, axis_order)),
            identity(size_after), format='csr'
        )
        penalty = penalty + axis_penalty

    return penalty.tocsr()


def tikhonov_penalty(num_coefficients):
    """
    Creates the Tikhonov (ridge) penalty, which is the identity matrix.

    Parameters
    ----------
    num_coefficients : int
        The total number of coefficients.

    Returns
    -------
    scipy.sparse.csr_array or scipy.sparse.csr_matrix
        The sparse identity matrix with shape (`num_coefficients`, `num_coefficients`).

    """
    return identity(num_coefficients, format='csr')
