# -*- coding: utf-8 -*-
"""The tensor-product B-spline model produced by fitting.

Created on September 5, 2026
@author: Donald Erb

"""

import numpy as np

from ._spline_utils import tensor_basis
from ._validation import _check_array, _check_dimension_vector
from .utils import ConfigurationError, DataError


def _read_only(array):
    """Returns a read-only copy of the array."""
    output = np.array(array, dtype=float)
    output.setflags(write=False)
    return output


class BSpline:
    """
    A multivariate, tensor-product B-spline with clamped knot vectors.

    The spline is immutable: its knots, degrees, and coefficients are read-only arrays,
    and :meth:`~BSpline.with_coefficients` creates a new spline rather than modifying
    the current one.

    Attributes
    ----------
    coef : numpy.ndarray, shape (M, `dim_y`)
        The spline coefficients, where `M` is the product of `num_basis_functions`.
        Row ordering matches C-ordering of the coefficient lattice, so the first input
        dimension varies slowest.
    degrees : numpy.ndarray, shape (`dim_x`,)
        The degree of the spline along each input dimension.
    knots : tuple[numpy.ndarray, ...]
        The knot vector for each input dimension.

    """

    def __init__(self, knots, degrees, coef=None, dim_y=1):
        """
        Initializes the spline.

        Parameters
        ----------
        knots : Sequence[array-like]
            The clamped knot vector for each input dimension.
        degrees : int or Sequence[int]
            The spline degree for each input dimension. A single value is used for
            all dimensions.
        coef : array-like, shape (M, `dim_y`) or (M,), optional
            The spline coefficients. Default is None, which sets all coefficients to 0.
        dim_y : int, optional
            The number of output dimensions. Only used if `coef` is None. Default is 1.

        Raises
        ------
        ConfigurationError
            Raised if the knot vectors are not valid clamped knot vectors for the given
            degrees or if the number of coefficients does not match the knots.

        """
        if not len(knots):
            raise ConfigurationError('a spline requires at least one knot vector')
        self.degrees = _check_dimension_vector(
            degrees, len(knots), allow_zero=True, variable_name='degree'
        )
        self.degrees.setflags(write=False)

        checked_knots = []
        for dim_knots, degree in zip(knots, self.degrees):
            dim_knots = _read_only(_check_array(dim_knots, dtype=float, check_finite=True))
            if len(dim_knots) < 2 * (degree + 1):
                raise ConfigurationError(
                    f'a knot vector for degree {degree} must have at least {2 * (degree + 1)} '
                    f'knots, but got {len(dim_knots)}'
                )
            elif (np.diff(dim_knots) < 0).any():
                raise ConfigurationError('knot vectors must be non-decreasing')
            elif not dim_knots[degree] < dim_knots[len(dim_knots) - degree - 1]:
                raise ConfigurationError('knot vectors must span a non-empty domain')
            elif (
                (dim_knots[:degree + 1] != dim_knots[0]).any()
                or (dim_knots[-(degree + 1):] != dim_knots[-1]).any()
            ):
                raise ConfigurationError(
                    f'the first and last knots must each be repeated {degree + 1} times '
                    f'for a clamped knot vector of degree {degree}'
                )
            checked_knots.append(dim_knots)
        self.knots = tuple(checked_knots)
        self._num_bases = tuple(
            len(dim_knots) - degree - 1 for dim_knots, degree in zip(self.knots, self.degrees)
        )

        num_coefficients = self.num_coefficients
        if coef is None:
            coef = np.zeros((num_coefficients, int(dim_y)))
        else:
            coef = _check_array(
                coef, dtype=float, check_finite=True, ensure_1d=False, ensure_2d=True,
                name='coefficients'
            )
            if coef.shape[0] != num_coefficients:
                raise ConfigurationError(
                    f'expected {num_coefficients} coefficients but got {coef.shape[0]}'
                )
        self.coef = _read_only(coef)

    def __repr__(self):
        return (
            f'{self.__class__.__name__}(dim_x={self.dim_x}, dim_y={self.dim_y}, '
            f'degrees={self.degrees.tolist()}, num_basis_functions={list(self._num_bases)})'
        )

    @property
    def dim_x(self):
        """The number of input dimensions."""
        return len(self.knots)

    @property
    def dim_y(self):
        """The number of output dimensions."""
        return self.coef.shape[1]

    @property
    def num_basis_functions(self):
        """The number of basis functions along each input dimension."""
        return self._num_bases

    @property
    def num_coefficients(self):
        """The total number of coefficients for each output dimension."""
        return int(np.prod(self._num_bases))

    @property
    def domain(self):
        """
        The lower and upper bounds of the spline along each input dimension.

        Returns
        -------
        lower : numpy.ndarray, shape (`dim_x`,)
            The lower bounds.
        upper : numpy.ndarray, shape (`dim_x`,)
            The upper bounds.

        """
        lower = np.array([
            dim_knots[degree] for dim_knots, degree in zip(self.knots, self.degrees)
        ])
        upper = np.array([
            dim_knots[len(dim_knots) - degree - 1]
            for dim_knots, degree in zip(self.knots, self.degrees)
        ])
        return lower, upper

    @property
    def tck(self):
        """
        The knots, coefficient lattice, and degrees to reconstruct the spline.

        Convenience property for using the spline with outside modules, such as
        :class:`scipy.interpolate.NdBSpline`::

            from scipy.interpolate import NdBSpline
            values = NdBSpline(*spline.tck)(points)  # same as spline(points)

        The coefficient lattice has shape (``*num_basis_functions``, `dim_y`).

        """
        lattice = self.coef.reshape(*self._num_bases, self.dim_y)
        return self.knots, lattice, tuple(int(degree) for degree in self.degrees)

    def _check_points(self, x):
        """Converts `x` into a two dimensional array of points, shape (N, `dim_x`)."""
        x = np.asarray(x, dtype=float)
        if x.ndim == 0 or (x.ndim == 1 and self.dim_x > 1):
            x = x.reshape(1, -1)
        elif x.ndim == 1:
            x = x.reshape(-1, 1)
        if x.ndim != 2 or x.shape[1] != self.dim_x:
            raise DataError(f'points must have {self.dim_x} input dimensions')
        return x

    def eval_basis(self, x):
        """
        Evaluates the tensor-product basis functions at the points.

        Parameters
        ----------
        x : array-like, shape (N, `dim_x`)
            The points. A one dimensional input is a single point if `dim_x` is greater
            than 1, otherwise it is `N` points.

        Returns
        -------
        scipy.sparse.csr_array or scipy.sparse.csr_matrix, shape (N, `num_coefficients`)
            The values of the basis functions at each point.

        Raises
        ------
        DataError
            Raised if the points have the wrong dimensions or are outside of the domain.

        """
        x = self._check_points(x)
        try:
            return tensor_basis(x, self.knots, self.degrees)
        except ValueError as e:
            raise DataError(f'points are outside of the spline domain: {e}') from e

    def evaluate(self, x):
        """
        Evaluates the spline at the points.

        Parameters
        ----------
        x : array-like, shape (N, `dim_x`)
            The points. A one dimensional input is a single point if `dim_x` is greater
            than 1, otherwise it is `N` points.

        Returns
        -------
        numpy.ndarray, shape (N, `dim_y`)
            The spline values at each point.

        """
        return self.eval_basis(x) @ self.coef

    def __call__(self, x):
        return self.evaluate(x)

    def with_coefficients(self, coef):
        """
        Creates a new spline with the same knots and degrees but different coefficients.

        Parameters
        ----------
        coef : array-like, shape (`num_coefficients`, K) or (`num_coefficients`,)
            The new coefficients.

        Returns
        -------
        BSpline
            The new spline.

        """
        return self.__class__(self.knots, self.degrees, coef)
