# -*- coding: utf-8 -*-
"""
=======================================================================================
pybsplines - A library for fitting tensor-product B-splines to scattered data.
=======================================================================================

pybsplines provides a builder for fitting multivariate B-splines to samples using
ordinary, Tikhonov-regularized, or penalized (P-spline) least squares.

@author: Donald Erb
Created on September 2, 2026

"""

try:
    from ._version import __version__
except ImportError:
    # in case of local use without installing first
    __version__ = '0.1.0'

# import utils and config first since they are imported by the other modules
from . import utils, config, knots

from .bspline import BSpline
from .builder import Builder, bspline_interpolator, bspline_smoother, bspline_unfitted
from .data_table import DataTable
from ._solvers import Smoothing
from ._spline_utils import evaluate_basis
from .knots import KnotSpacing, build_knot_vector, build_knot_vectors
from .utils import ConfigurationError, DataError, ParameterWarning, SingularSystemError
