# -*- coding: utf-8 -*-
"""Solvers for the ordinary and regularized least squares spline systems.

Created on September 4, 2026
@author: Donald Erb

"""

from enum import Enum
import warnings

import numpy as np
from scipy.linalg import LinAlgError, cho_factor, cho_solve, lstsq
from scipy.sparse.linalg import splu

from . import config
from ._penalty_utils import tensor_diff_penalty, tikhonov_penalty
from ._validation import _check_option, _check_scalar_variable
from .utils import ParameterWarning, SingularSystemError


class Smoothing(Enum):
    """
    The regularization applied to the least squares system.

    Attributes
    ----------
    NONE
        Ordinary least squares, ``min ||A @ c - b||^2``.
    TIKHONOV
        Penalizes the magnitude of the coefficients, ``min ||A @ c - b||^2 + alpha ||c||^2``.
    PSPLINE
        Penalizes the finite differences of the coefficient lattice along each dimension,
        ``min ||A @ c - b||^2 + alpha ||D @ c||^2``, which smooths the fitted function.

    """

    NONE = 'none'
    TIKHONOV = 'tikhonov'
    PSPLINE = 'pspline'


def _check_pivots(pivots, num_coefficients):
    """
    Raises an error if the pivots of a factorization indicate a rank-deficient system.

    Parameters
    ----------
    pivots : numpy.ndarray
        The absolute values of the pivots of the factorization.
    num_coefficients : int
        The number of unknowns in the system, used for the error message.

    Raises
    ------
    SingularSystemError
        Raised if the ratio of the smallest to the largest pivot is below `config.RCOND`.

    """
    max_pivot = pivots.max()
    if not max_pivot > 0 or not np.isfinite(max_pivot) or pivots.min() / max_pivot < config.RCOND:
        raise SingularSystemError(
            f'the system for the {num_coefficients} spline coefficients is singular or '
            'severely rank deficient; add samples, reduce the number of basis functions, '
            'or increase the regularization'
        )


class RegularizedSystem:
    """
    An object for setting up and solving regularized least squares spline systems.

    Solves ``(A.T @ A + P) c = A.T @ b`` for the spline coefficients `c`, where `A` is the
    (weighted) design matrix, `b` is the (weighted) target values, and the penalty `P` is
    0, ``alpha * I``, or ``alpha * D.T @ D`` depending on the smoothing. All columns of `b`
    share a single factorization.

    Attributes
    ----------
    alpha : float
        The regularization factor.
    diff_order : int
        The difference order used for the P-spline penalty.
    num_coefficients : int
        The total number of spline coefficients.
    penalty : scipy.sparse.csr_array or scipy.sparse.csr_matrix or None
        The penalty matrix, already multiplied by `alpha`. Is None if `smoothing` is
        Smoothing.NONE.
    smoothing : Smoothing
        The type of regularization.

    """

    def __init__(self, num_bases, smoothing=Smoothing.NONE, alpha=0.1, diff_order=None):
        """
        Initializes the system by calculating the penalty.

        Parameters
        ----------
        num_bases : Sequence[int]
            The number of basis functions along each input dimension.
        smoothing : Smoothing or {'none', 'tikhonov', 'pspline'}, optional
            The type of regularization. Default is Smoothing.NONE.
        alpha : float, optional
            The regularization factor. Must be >= 0. Larger values give smoother fits.
            Default is 0.1. Ignored if `smoothing` is Smoothing.NONE.
        diff_order : int, optional
            The difference order of the P-spline penalty. Default is None, which uses
            :data:`pybsplines.config.PSPLINE_DIFF_ORDER`.

        """
        self._num_bases = tuple(int(value) for value in num_bases)
        self.num_coefficients = int(np.prod(self._num_bases))
        self.reset_penalty(smoothing, alpha, diff_order)

    def reset_penalty(self, smoothing=Smoothing.NONE, alpha=0.1, diff_order=None):
        """
        Resets the penalty of the system and all of the attributes.

        Parameters
        ----------
        smoothing : Smoothing or {'none', 'tikhonov', 'pspline'}, optional
            The type of regularization. Default is Smoothing.NONE.
        alpha : float, optional
            The regularization factor. Must be >= 0. Default is 0.1.
        diff_order : int, optional
            The difference order of the P-spline penalty. Default is None, which uses
            :data:`pybsplines.config.PSPLINE_DIFF_ORDER`.

        Raises
        ------
        ConfigurationError
            Raised if `smoothing` is not a valid option or if `alpha` is negative or
            not finite.

        """
        self.smoothing = _check_option(smoothing, Smoothing, 'smoothing')
        self.alpha = float(
            _check_scalar_variable(alpha, allow_zero=True, variable_name='alpha', dtype=float)
        )
        self.diff_order = config.PSPLINE_DIFF_ORDER if diff_order is None else int(diff_order)

        if self.smoothing is Smoothing.NONE:
            self.penalty = None
        else:
            if self.alpha == 0:
                warnings.warn(
                    f'alpha is 0, so {self.smoothing.value} smoothing will have no effect',
                    ParameterWarning, stacklevel=2
                )
            if self.smoothing is Smoothing.TIKHONOV:
                penalty = tikhonov_penalty(self.num_coefficients)
            else:
                penalty = tensor_diff_penalty(self._num_bases, self.diff_order)
            self.penalty = self.alpha * penalty

    def solve(self, design, rhs):
        """
        Solves the least squares system for the spline coefficients.

        Parameters
        ----------
        design : scipy.sparse.csr_array or scipy.sparse.csr_matrix, shape (N, M)
            The design matrix, with rows already scaled by the square root of the weights.
        rhs : numpy.ndarray, shape (N, K)
            The target values, with rows already scaled by the square root of the weights.

        Returns
        -------
        coef : numpy.ndarray, shape (M, K)
            The spline coefficients.

        Raises
        ------
        ValueError
            Raised if `design` does not have `num_coefficients` columns or if the number
            of rows in `design` and `rhs` differ.
        SingularSystemError
            Raised if the system is singular or severely rank deficient.

        """
        rhs = np.asarray(rhs, dtype=float)
        if rhs.ndim == 1:
            rhs = rhs.reshape(-1, 1)
        if design.shape[1] != self.num_coefficients:
            raise ValueError(
                f'design matrix has {design.shape[1]} columns but the system has '
                f'{self.num_coefficients} coefficients'
            )
        elif design.shape[0] != rhs.shape[0]:
            raise ValueError('design matrix and right hand side have different number of rows')

        if self.penalty is None:
            coef = self._solve_least_squares(design, rhs)
        else:
            coef = self.direct_solve(design.T @ design + self.penalty, design.T @ rhs)

        if not np.isfinite(coef).all():
            raise SingularSystemError('non-finite value encountered in the spline coefficients')

        return coef

    def _solve_least_squares(self, design, rhs):
        """
        Solves the unregularized system.

        Small systems use an SVD-based solver to directly get the rank of `design`,
        while large systems use the normal equations to keep `design` sparse.

        """
        num_rows, num_columns = design.shape
        if num_rows < num_columns:
            raise SingularSystemError(
                f'{num_rows} samples cannot determine {num_columns} spline coefficients '
                'without regularization'
            )
        if num_columns > config.DENSE_SOLVE_LIMIT:
            return self.direct_solve(design.T @ design, design.T @ rhs)

        coef, _, rank, _ = lstsq(design.toarray(), rhs, cond=config.RCOND, check_finite=False)
        if rank < num_columns:
            raise SingularSystemError(
                f'the design matrix has rank {rank} but there are {num_columns} spline '
                'coefficients; add samples, reduce the number of basis functions, or use '
                'regularization'
            )

        return coef

    def direct_solve(self, lhs, rhs):
        """
        Solves the symmetric normal equations ``lhs @ c = rhs``.

        Parameters
        ----------
        lhs : scipy.sparse.spmatrix or scipy.sparse.sparray, shape (M, M)
            The symmetric, positive semi-definite left hand side.
        rhs : numpy.ndarray, shape (M, K)
            The right hand side.

        Returns
        -------
        numpy.ndarray, shape (M, K)
            The solution.

        Raises
        ------
        SingularSystemError
            Raised if the factorization fails or if its pivots indicate the system is
            severely rank deficient.

        Notes
        -----
        Uses a dense Cholesky factorization if the number of coefficients is at most
        :data:`pybsplines.config.DENSE_SOLVE_LIMIT`, otherwise uses a sparse LU factorization.

        """
        num_columns = lhs.shape[0]
        if num_columns <= config.DENSE_SOLVE_LIMIT:
            try:
                factor, lower = cho_factor(lhs.toarray(), lower=True, check_finite=False)
            except LinAlgError as e:
                raise SingularSystemError(
                    f'the system for the {num_columns} spline coefficients is singular'
                ) from e
            _check_pivots(np.diag(factor)**2, num_columns)
            output = cho_solve((factor, lower), rhs, check_finite=False)
        else:
            try:
                factorization = splu(lhs.tocsc())
            except RuntimeError as e:
                raise SingularSystemError(
                    f'the system for the {num_columns} spline coefficients is singular'
                ) from e
            _check_pivots(np.abs(factorization.U.diagonal()), num_columns)
            output = factorization.solve(rhs)

        return output


def solve_system(design, rhs, num_bases, smoothing=Smoothing.NONE, alpha=0.1):
    """
    Solves the (regularized) least squares system for the spline coefficients.

    Parameters
    ----------
    design : scipy.sparse.csr_array or scipy.sparse.csr_matrix, shape (N, M)
        The weighted design matrix.
    rhs : numpy.ndarray, shape (N, K)
        The weighted target values.
    num_bases : Sequence[int]
        The number of basis functions along each input dimension; their product is `M`.
    smoothing : Smoothing or {'none', 'tikhonov', 'pspline'}, optional
        The type of regularization. Default is Smoothing.NONE.
    alpha : float, optional
        The regularization factor. Default is 0.1.

    Returns
    -------
    numpy.ndarray, shape (M, K)
        The spline coefficients.

    """
    return RegularizedSystem(num_bases, smoothing, alpha).solve(design, rhs)
