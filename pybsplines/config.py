# -*- coding: utf-8 -*-
"""Configuration settings for pybsplines.

Created on September 2, 2026
@author: Donald Erb

"""

# Note: the triple quotes are for including the attributes within the documentation
DENSE_SOLVE_LIMIT = 2000
"""The maximum number of spline coefficients for which the system is solved densely.

Systems with more coefficients are solved by factorizing the sparse normal equations
with :func:`scipy.sparse.linalg.splu` rather than with dense LAPACK routines.

"""

RCOND = 1e-12
"""The relative threshold below which a linear system is considered rank deficient.

Used as the cutoff for small singular values when solving unregularized systems and as
the minimum ratio between the smallest and largest pivots of the factorized
normal equations. Systems below the threshold raise a
:class:`~pybsplines.utils.SingularSystemError`.

"""

PSPLINE_DIFF_ORDER = 2
"""The order of the finite difference operator used for P-spline penalties.

Should be a positive integer; 2 (default) penalizes the curvature of the coefficient
surface, so linear functions are not penalized.

"""
