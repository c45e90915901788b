# -*- coding: utf-8 -*-
"""The builder for fitting tensor-product B-splines to samples.

Created on September 6, 2026
@author: Donald Erb

"""

import numpy as np

from ._assembly import _check_samples, assemble_system
from ._solvers import RegularizedSystem, Smoothing
from ._validation import (
    _check_dimension_vector, _check_option, _check_scalar_variable, _check_weights
)
from .bspline import BSpline
from .data_table import DataTable
from .knots import KnotSpacing, build_knot_vectors
from .utils import ConfigurationError, DataError


def _as_table(data):
    """Ensures the input is a non-empty DataTable."""
    if not isinstance(data, DataTable):
        raise TypeError(f'data must be a DataTable, not {type(data).__name__}')
    elif not data.num_samples:
        raise DataError('cannot fit a spline to an empty data table')
    return data


class Builder:
    """
    Configures and fits tensor-product B-splines.

    The setters return the builder itself so that calls can be chained, and can be called
    in any order; later calls override earlier ones. Nothing is computed until
    :meth:`~Builder.fit` is called.

    Examples
    --------
    >>> import numpy as np
    >>> x = np.linspace(0, 3, 20)
    >>> table = DataTable.from_arrays(x, x**2)
    >>> spline = Builder(1, 1).degree(2).num_basis_functions(8).fit(table)
    >>> spline.num_basis_functions
    (8,)

    """

    def __init__(self, dim_x, dim_y=1):
        """
        Initializes the builder with cubic splines and sample-derived knots.

        Parameters
        ----------
        dim_x : int
            The number of input dimensions. Must be at least 1.
        dim_y : int, optional
            The number of output dimensions. Must be at least 1. Default is 1.

        Raises
        ------
        ConfigurationError
            Raised if `dim_x` or `dim_y` is less than 1.

        """
        if int(dim_x) < 1 or int(dim_y) < 1:
            raise ConfigurationError('dim_x and dim_y must be at least 1')
        self._dim_x = int(dim_x)
        self._dim_y = int(dim_y)
        self._degrees = np.full(self._dim_x, 3, dtype=np.intp)
        self._num_basis_functions = None
        self._knot_spacing = KnotSpacing.AS_SAMPLED

    def __repr__(self):
        if self._num_basis_functions is None:
            num_bases = None
        else:
            num_bases = self._num_basis_functions.tolist()
        return (
            f'{self.__class__.__name__}(dim_x={self._dim_x}, dim_y={self._dim_y}, '
            f'degree={self._degrees.tolist()}, num_basis_functions={num_bases}, '
            f'knot_spacing={self._knot_spacing.value!r})'
        )

    @property
    def dim_x(self):
        """The number of input dimensions."""
        return self._dim_x

    @property
    def dim_y(self):
        """The number of output dimensions."""
        return self._dim_y

    def degree(self, degree):
        """
        Sets the spline degree.

        Parameters
        ----------
        degree : int or Sequence[int]
            The non-negative degree. A single value is used for every input dimension,
            otherwise one value must be given for each dimension.

        Returns
        -------
        Builder
            The builder, to allow chaining calls.

        Raises
        ------
        ConfigurationError
            Raised if a sequence of degrees does not have length `dim_x` or if any
            degree is negative.

        """
        self._degrees = _check_dimension_vector(
            degree, self._dim_x, allow_zero=True, variable_name='degree'
        )
        return self

    def num_basis_functions(self, num_basis_functions):
        """
        Sets the number of basis functions.

        Parameters
        ----------
        num_basis_functions : int or Sequence[int] or None
            The positive number of basis functions. A single value is used for every
            input dimension, otherwise one value must be given for each dimension. None
            resets to the default, which uses the number of distinct sample values of
            each dimension.

        Returns
        -------
        Builder
            The builder, to allow chaining calls.

        Raises
        ------
        ConfigurationError
            Raised if a sequence does not have length `dim_x` or if any value is less
            than 1.

        Notes
        -----
        The requirement that each value is at least ``degree + 1`` is only checked by
        :meth:`~Builder.fit` since the degree can be set after this method is called.

        """
        if num_basis_functions is None:
            self._num_basis_functions = None
        else:
            self._num_basis_functions = _check_dimension_vector(
                num_basis_functions, self._dim_x, allow_zero=False,
                variable_name='number of basis functions'
            )
        return self

    def knot_spacing(self, knot_spacing):
        """
        Sets the method for placing the knots of each dimension.

        Parameters
        ----------
        knot_spacing : KnotSpacing or {'as_sampled', 'equidistant', 'experimental'}
            The knot spacing method.

        Returns
        -------
        Builder
            The builder, to allow chaining calls.

        Raises
        ------
        ConfigurationError
            Raised if `knot_spacing` is not a valid option.

        """
        self._knot_spacing = _check_option(knot_spacing, KnotSpacing, 'knot spacing')
        return self

    def _validate(self, data):
        """
        Checks the builder configuration against the data before any computation.

        Returns
        -------
        degrees : numpy.ndarray
            A copy of the degree of each dimension.
        num_bases : list[int or None]
            The number of basis functions for each dimension, or None to use the number
            of distinct values.
        x : numpy.ndarray, shape (N, `dim_x`)
            The sample coordinates.
        y : numpy.ndarray, shape (N, `dim_y`)
            The sample values.

        """
        data = _as_table(data)
        degrees = self._degrees.copy()
        if self._num_basis_functions is None:
            num_bases = [None] * self._dim_x
        else:
            num_bases = self._num_basis_functions.tolist()
            for i, (num_basis, degree) in enumerate(zip(num_bases, degrees)):
                if num_basis < degree + 1:
                    raise ConfigurationError(
                        f'the number of basis functions ({num_basis}) for dimension {i} '
                        f'must be at least degree + 1 ({degree + 1})'
                    )
        if data.dim_x != self._dim_x or data.dim_y != self._dim_y:
            raise DataError(
                f'data has dimensions ({data.dim_x}, {data.dim_y}) but the builder expects '
                f'({self._dim_x}, {self._dim_y})'
            )
        x, y = _check_samples(data.x, data.y, self._dim_x, self._dim_y)

        return degrees, num_bases, x, y

    def knot_vectors(self, data):
        """
        Builds the knot vector of each input dimension without fitting.

        Parameters
        ----------
        data : DataTable
            The samples.

        Returns
        -------
        tuple[numpy.ndarray, ...]
            The knot vector for each input dimension.

        """
        degrees, num_bases, x, _ = self._validate(data)
        return build_knot_vectors(x, degrees, num_bases, self._knot_spacing)

    def fit(self, data, smoothing=Smoothing.NONE, alpha=0.1, weights=None):
        """
        Fits a B-spline to the samples.

        Parameters
        ----------
        data : DataTable
            The samples to fit. Its dimensions must match `dim_x` and `dim_y`.
        smoothing : Smoothing or {'none', 'tikhonov', 'pspline'}, optional
            The regularization of the least squares fit. Default is Smoothing.NONE.
        alpha : float, optional
            The regularization factor; must be >= 0. Larger values give smoother fits.
            Default is 0.1. Ignored if `smoothing` is Smoothing.NONE.
        weights : array-like, shape (N,), optional
            The non-negative weight of each sample. Default is None, which gives every
            sample a weight of 1.

        Returns
        -------
        BSpline
            The fitted spline.

        Raises
        ------
        ConfigurationError
            Raised if the configuration is invalid, such as a number of basis functions
            less than ``degree + 1`` or more than the number of distinct sample values,
            or an invalid `smoothing` or `alpha`.
        DataError
            Raised if the data does not match the builder dimensions, if a dimension has
            only one distinct value, or if `weights` is invalid.
        SingularSystemError
            Raised if the least squares system is singular or severely rank deficient.

        """
        degrees, num_bases, x, y = self._validate(data)
        system_smoothing = _check_option(smoothing, Smoothing, 'smoothing')
        alpha = _check_scalar_variable(alpha, allow_zero=True, variable_name='alpha', dtype=float)
        weights = _check_weights(weights, x.shape[0])

        knots = build_knot_vectors(x, degrees, num_bases, self._knot_spacing)
        num_bases = [len(dim_knots) - degree - 1 for dim_knots, degree in zip(knots, degrees)]
        system = RegularizedSystem(num_bases, system_smoothing, alpha)
        design, rhs = assemble_system(x, y, knots, degrees, weights)
        coef = system.solve(design, rhs)

        return BSpline(knots, degrees, coef)


def bspline_interpolator(data, degree=3):
    """
    Creates a B-spline that interpolates samples on a regular grid.

    Parameters
    ----------
    data : DataTable
        The samples, which must cover every point of the grid of their distinct
        coordinates.
    degree : int, optional
        The degree of the spline. Default is 3, which is a cubic spline.

    Returns
    -------
    BSpline
        The interpolating spline, with one basis function for each distinct coordinate
        value along each dimension.

    Raises
    ------
    DataError
        Raised if the samples do not form a complete grid.

    """
    data = _as_table(data)
    if not data.is_grid_complete():
        raise DataError('interpolation requires samples on a complete regular grid')
    num_bases = [len(values) for values in data.grid]

    return (
        Builder(data.dim_x, data.dim_y)
        .degree(degree)
        .num_basis_functions(num_bases)
        .knot_spacing(KnotSpacing.AS_SAMPLED)
        .fit(data, Smoothing.NONE)
    )


def bspline_smoother(data, degree=3, smoothing=Smoothing.PSPLINE, alpha=0.1, weights=None):
    """
    Creates a B-spline that smooths the samples using regularization.

    Parameters
    ----------
    data : DataTable
        The samples.
    degree : int, optional
        The degree of the spline. Default is 3, which is a cubic spline.
    smoothing : Smoothing or {'none', 'tikhonov', 'pspline'}, optional
        The regularization. Default is Smoothing.PSPLINE.
    alpha : float, optional
        The regularization factor. Default is 0.1.
    weights : array-like, shape (N,), optional
        The non-negative weight of each sample. Default is None, which gives every
        sample a weight of 1.

    Returns
    -------
    BSpline
        The smoothing spline.

    """
    data = _as_table(data)
    return (
        Builder(data.dim_x, data.dim_y)
        .degree(degree)
        .fit(data, smoothing=smoothing, alpha=alpha, weights=weights)
    )


def bspline_unfitted(data, degrees, knot_spacing, num_basis_functions):
    """
    Creates a B-spline with zero coefficients.

    Gives more control over the knot vectors and degrees; coefficients can be set
    afterwards with :meth:`.BSpline.with_coefficients`.

    Parameters
    ----------
    data : DataTable
        The samples used to place the knots.
    degrees : int or Sequence[int]
        The degree of each input dimension.
    knot_spacing : KnotSpacing or {'as_sampled', 'equidistant', 'experimental'}
        The knot spacing method.
    num_basis_functions : int or Sequence[int]
        The number of basis functions of each input dimension. Each must be at least
        ``degree + 1``.

    Returns
    -------
    BSpline
        The spline with all coefficients equal to 0.

    """
    data = _as_table(data)
    degrees = _check_dimension_vector(
        degrees, data.dim_x, allow_zero=True, variable_name='degree'
    )
    builder = (
        Builder(data.dim_x, data.dim_y)
        .degree(degrees)
        .knot_spacing(knot_spacing)
        .num_basis_functions(num_basis_functions)
    )
    knots = builder.knot_vectors(data)

    return BSpline(knots, degrees, dim_y=data.dim_y)
