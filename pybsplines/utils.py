# -*- coding: utf-8 -*-
"""Exceptions and warnings for pybsplines.

Created on September 2, 2026
@author: Donald Erb

"""

import numpy as np


class ParameterWarning(UserWarning):
    """
    Warning issued when a parameter value is outside of the recommended range.

    For cases where a parameter value is valid and will not cause errors, but is
    outside of the recommended range of values and as a result may not have the
    intended effect, such as a regularized fit with no regularization.
    """


class ConfigurationError(ValueError):
    """
    Raised when the spline configuration is invalid.

    Examples are degree or basis-function vectors whose length does not match the
    number of input dimensions, fewer basis functions than ``degree + 1``, more basis
    functions than can be supported by the data, or unknown knot spacing and smoothing
    options. Detected before any numerical work is done.
    """


class DataError(ValueError):
    """
    Raised when the sample data cannot be used for the requested spline.

    Examples are samples whose dimensions do not match the spline, input dimensions
    with only a single distinct value, or weights with the wrong length or negative
    values.
    """


class SingularSystemError(np.linalg.LinAlgError):
    """
    Raised when the least squares system for the spline coefficients is singular.

    The system has too few independent samples for the number of basis functions. Add
    samples, reduce the number of basis functions, or increase the regularization.

    Notes
    -----
    Subclasses :class:`numpy.linalg.LinAlgError`, which is itself a :class:`ValueError`.
    """
