# -*- coding: utf-8 -*-
"""Functions for evaluating univariate and tensor-product B-spline bases.

Created on September 2, 2026
@author: Donald Erb


Several functions were adapted from Cython, Python, and C files from SciPy
(https://github.com/scipy/scipy, accessed September 2, 2026), which was
licensed under the BSD-3-Clause below.

Copyright (c) 2001-2002 Enthought, Inc.  2003-2019, SciPy Developers.
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions
are met:

1. Redistributions of source code must retain the above copyright
   notice, this list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above
   copyright notice, this list of conditions and the following
   disclaimer in the documentation and/or other materials provided
   with the distribution.

3. Neither the name of the copyright holder nor the names of its
   contributors may be used to endorse or promote products derived
   from this software without specific prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
"AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR
A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
OWNER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,
DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY
THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
(INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

"""

import numpy as np
from scipy.interpolate import BSpline

from ._compat import _HAS_NUMBA, csr_object, jit


# adapted from scipy (scipy/interpolate/_bspl.pyx/find_interval); see license above
@jit(nopython=True, cache=True)
def _find_interval(knots, spline_degree, x_val, last_left, num_bases):
    """
    Finds the knot interval containing the x-value.

    Parameters
    ----------
    knots : numpy.ndarray, shape (K,)
        The array of knots for the spline. Should be clamped on each end with
        `spline_degree` extra knots.
    spline_degree : int
        The spline degree.
    x_val : float
        The x-value to find the interval for.
    last_left : int
        The previous output of this function. For the first call, use any value
        less than `spline_degree` to start.
    num_bases : int
        The total number of basis functions. Equals ``len(knots) - spline_degree - 1``,
        but is precomputed rather than having to recompute each function call.

    Returns
    -------
    int
        The index in `knots` such that ``knots[index] <= x_val < knots[index + 1]``. If
        `x_val` is equal to the last knot of the domain, ``knots[num_bases]``, the last
        non-empty interval, ``num_bases - 1``, is returned instead.

    """
    left = last_left if spline_degree < last_left < num_bases else spline_degree

    # x_val less than expected so shift knot interval left
    while x_val < knots[left] and left != spline_degree:
        left -= 1

    left += 1
    while x_val >= knots[left] and left != num_bases:
        left += 1

    return left - 1


# adapted from scipy (scipy/interpolate/src/__fitpack.h/_deBoor_D); see license above
@jit(nopython=True, cache=True)
def _de_boor(knots, x_val, spline_degree, left_knot_idx, work, derivative):
    """
    Computes the non-zero values of the spline bases, or their derivatives, at the x-value.

    Parameters
    ----------
    knots : numpy.ndarray, shape (K,)
        The array of knots for the spline.
    x_val : float
        The x-value at which the spline basis is being computed.
    spline_degree : int
        The degree of the spline.
    left_knot_idx : int
        The index in `knots` that defines the interval such that
        ``knots[left_knot_idx] <= x_val < knots[left_knot_idx + 1]``.
    work : numpy.ndarray, shape (``2 * (spline_degree + 1)``,)
        The working array. Modified inplace so that the first ``spline_degree + 1`` items
        are the non-zero values of the spline bases for `x_val`.
    derivative : int
        The derivative order of the basis values. Use 0 for the basis values themselves.

    Notes
    -----
    The output values correspond to the basis functions with indices
    ``left_knot_idx - spline_degree`` through ``left_knot_idx``. The first
    ``spline_degree - derivative`` steps are the Cox-de Boor recursion for the values
    of the lower degree bases, and the remaining `derivative` steps convert them into
    the derivatives of the full degree bases.

    """
    spline_order = spline_degree + 1
    if derivative > spline_degree:
        work[:spline_order] = 0.0
        return

    temp = work[spline_order:]
    work[0] = 1.0
    for i in range(1, spline_order):
        temp[:i] = work[:i]
        work[0] = 0.0
        value_step = i <= spline_degree - derivative
        for j in range(1, i + 1):
            idx = left_knot_idx + j
            right_knot = knots[idx]
            left_knot = knots[idx - i]
            if left_knot == right_knot:
                work[j] = 0.0
                continue

            if value_step:
                factor = temp[j - 1] / (right_knot - left_knot)
                work[j - 1] += factor * (right_knot - x_val)
                work[j] = factor * (x_val - left_knot)
            else:
                factor = i * temp[j - 1] / (right_knot - left_knot)
                work[j - 1] -= factor
                work[j] = factor


# adapted from scipy (scipy/interpolate/_bspl.pyx/_make_design_matrix); see license above
@jit(nopython=True, cache=True)
def __make_design_matrix(x, knots, spline_degree, derivative):
    """
    Calculates the data needed to create the sparse matrix of basis functions for the spline.

    Parameters
    ----------
    x : numpy.ndarray, shape (N,)
        The x-values for the spline.
    knots : numpy.ndarray, shape (K,)
        The array of knots for the spline.
    spline_degree : int
        The degree of the spline.
    derivative : int
        The derivative order of the basis functions.

    Returns
    -------
    basis_data : numpy.ndarray, shape (``N * (spline_degree + 1)``,)
        The data for all of the basis functions. The basis for each `x[i]` value is represented
        by ``basis_data[i * (spline_degree + 1):(i + 1) * (spline_degree + 1)]``.
    row_ind : numpy.ndarray, shape (``N * (spline_degree + 1)``,)
        The row indices of the data; used for converting `data` into a CSR matrix.
    col_ind : numpy.ndarray, shape (``N * (spline_degree + 1)``,)
        The column indices of the data; used for converting `data` into a CSR matrix.

    """
    len_x = len(x)
    spline_order = spline_degree + 1
    data_length = len_x * spline_order
    num_bases = len(knots) - spline_order
    work = np.zeros(2 * spline_order)
    basis_data = np.zeros(data_length)
    row_ind = np.zeros(data_length, dtype=np.intp)
    col_ind = np.zeros(data_length, dtype=np.intp)

    idx = 0
    left_knot_idx = spline_degree
    for i in range(len_x):
        x_val = x[i]
        left_knot_idx = _find_interval(knots, spline_degree, x_val, left_knot_idx, num_bases)
        _de_boor(knots, x_val, spline_degree, left_knot_idx, work, derivative)

        next_idx = idx + spline_order
        basis_data[idx:next_idx] = work[:spline_order]
        row_ind[idx:next_idx] = i
        col_ind[idx:next_idx] = np.arange(left_knot_idx - spline_degree, left_knot_idx + 1)
        idx = next_idx

    return basis_data, row_ind, col_ind


def _make_design_matrix(x, knots, spline_degree, derivative=0):
    """
    Creates the sparse matrix of basis functions for a B-spline.

    Parameters
    ----------
    x : numpy.ndarray, shape (N,)
        The x-values for the spline.
    knots : numpy.ndarray, shape (K,)
        The array of knots for the spline.
    spline_degree : int
        The degree of the spline.
    derivative : int, optional
        The derivative order of the basis functions. Default is 0.

    Returns
    -------
    scipy.sparse.csr_array or scipy.sparse.csr_matrix, shape (N, K - `spline_degree` - 1)
        The sparse matrix containing all the spline basis functions.

    """
    data, row_ind, col_ind = __make_design_matrix(x, knots, spline_degree, derivative)
    return csr_object((data, (row_ind, col_ind)), (len(x), len(knots) - spline_degree - 1))


def _check_domain(x, knots, spline_degree):
    """
    Ensures all x-values are within the domain of the knots.

    Parameters
    ----------
    x : numpy.ndarray
        The x-values.
    knots : numpy.ndarray, shape (K,)
        The array of knots for the spline.
    spline_degree : int
        The degree of the spline.

    Raises
    ------
    ValueError
        Raised if any x-value is outside of
        ``[knots[spline_degree], knots[K - spline_degree - 1]]``.

    """
    lower = knots[spline_degree]
    upper = knots[len(knots) - spline_degree - 1]
    if np.any(x < lower) or np.any(x > upper):
        raise ValueError(f'x-values are either < {lower} or > {upper}')


def _spline_basis(x, knots, spline_degree=3, derivative=0):
    """
    Constructs the spline basis matrix.

    Chooses the fastest construction route based on the available options.

    Parameters
    ----------
    x : numpy.ndarray, shape (N,)
        The x-values for the spline.
    knots : numpy.ndarray, shape (K,)
        The array of knots for the spline.
    spline_degree : int, optional
        The degree of the spline. Default is 3, which is a cubic spline.
    derivative : int, optional
        The derivative order of the basis functions. Default is 0, which gives
        the basis values.

    Returns
    -------
    scipy.sparse.csr_array or scipy.sparse.csr_matrix, shape (N, K - `spline_degree` - 1)
        The matrix of basis functions for the spline.

    Raises
    ------
    ValueError
        Raised if any x-value is outside of the domain of the knots.

    Notes
    -----
    The numba version is faster than scipy's `BSpline.design_matrix`, so it is preferred
    when numba is installed. Without numba, scipy is used for the basis values and the
    interpreted loop is only used for derivatives.

    """
    x = np.asarray(x, dtype=float)
    _check_domain(x, knots, spline_degree)
    if _HAS_NUMBA or derivative:
        basis = _make_design_matrix(x, knots, spline_degree, derivative)
    else:
        basis = csr_object(BSpline.design_matrix(x, knots, spline_degree))

    return basis


def evaluate_basis(knots, spline_degree, x, derivative=0):
    """
    Evaluates every univariate basis function at a single point.

    Parameters
    ----------
    knots : array-like, shape (K,)
        The clamped knot vector.
    spline_degree : int
        The degree of the spline.
    x : float
        The point at which to evaluate the basis.
    derivative : int, optional
        The derivative order. Default is 0, which gives the basis values.

    Returns
    -------
    values : numpy.ndarray, shape (K - `spline_degree` - 1,)
        The values of all basis functions at `x`. At most ``spline_degree + 1``
        consecutive values are non-zero.

    Raises
    ------
    ValueError
        Raised if `x` is outside of the domain of the knots or if `derivative` is negative.

    """
    if derivative < 0:
        raise ValueError('derivative order must be >= 0')
    knots = np.asarray(knots, dtype=float)
    x_val = float(x)
    _check_domain(x_val, knots, spline_degree)

    spline_order = spline_degree + 1
    num_bases = len(knots) - spline_order
    work = np.zeros(2 * spline_order)
    left_knot_idx = _find_interval(knots, spline_degree, x_val, spline_degree, num_bases)
    _de_boor(knots, x_val, spline_degree, left_knot_idx, work, derivative)

    values = np.zeros(num_bases)
    values[left_knot_idx - spline_degree:left_knot_idx + 1] = work[:spline_order]

    return values


def _basis_blocks(x, knots, spline_degree, derivative=0):
    """
    Gives the ``spline_degree + 1`` possibly non-zero basis values for each x-value.

    Parameters
    ----------
    x : numpy.ndarray, shape (N,)
        The x-values for the spline.
    knots : numpy.ndarray, shape (K,)
        The array of knots for the spline.
    spline_degree : int
        The degree of the spline.
    derivative : int, optional
        The derivative order of the basis functions. Default is 0.

    Returns
    -------
    values : numpy.ndarray, shape (N, ``spline_degree + 1``)
        The values of the consecutive basis functions that can be non-zero at each x-value.
    first_columns : numpy.ndarray, shape (N,)
        The index of the first basis function in each row of `values`.

    """
    spline_order = spline_degree + 1
    basis = _spline_basis(x, knots, spline_degree, derivative)
    if basis.nnz != len(x) * spline_order:
        # scipy's design matrix is not guaranteed to store explicit zeros
        basis = _make_design_matrix(x, knots, spline_degree, derivative)
    basis.sort_indices()

    return basis.data.reshape(-1, spline_order), basis.indices[::spline_order]


def tensor_basis(x, knots, spline_degrees, derivatives=None):
    """
    Creates the sparse tensor-product basis for multivariate points.

    Parameters
    ----------
    x : numpy.ndarray, shape (N, D)
        The points, with one column per input dimension.
    knots : Sequence[numpy.ndarray]
        The knot vector for each of the `D` input dimensions.
    spline_degrees : Sequence[int]
        The spline degree for each input dimension.
    derivatives : Sequence[int], optional
        The derivative order for each input dimension. Default is None, which
        evaluates the basis values.

    Returns
    -------
    scipy.sparse.csr_array or scipy.sparse.csr_matrix, shape (N, M)
        The basis rows, where `M` is the product of the number of basis functions
        in each dimension. Columns are ordered lexicographically, with the first
        dimension varying slowest.

    Notes
    -----
    Each row is the face-splitting (row-wise Kronecker) product of the univariate basis
    rows. Only the ``prod(spline_degrees + 1)`` entries that can be non-zero are computed,
    so every row stores exactly that many values.

    References
    ----------
    Eilers, P., et al. Fast and compact smoothing on large multidimensional grids. Computational
    Statistics and Data Analysis, 2006, 50(1), 61-76.

    """
    if derivatives is None:
        derivatives = [0] * len(knots)

    num_points = x.shape[0]
    values = np.ones((num_points, 1))
    columns = np.zeros((num_points, 1), dtype=np.intp)
    total_bases = 1
    for i, (dim_knots, degree, derivative) in enumerate(zip(knots, spline_degrees, derivatives)):
        dim_values, first_columns = _basis_blocks(
            np.ascontiguousarray(x[:, i]), dim_knots, degree, derivative
        )
        num_bases = len(dim_knots) - degree - 1
        dim_columns = first_columns[:, None] + np.arange(degree + 1)
        values = (values[:, :, None] * dim_values[:, None, :]).reshape(num_points, -1)
        columns = (
            columns[:, :, None] * num_bases + dim_columns[:, None, :]
        ).reshape(num_points, -1)
        total_bases *= num_bases

    row_size = values.shape[1]
    indptr = np.arange(0, (num_points + 1) * row_size, row_size)

    return csr_object((values.ravel(), columns.ravel(), indptr), shape=(num_points, total_bases))
