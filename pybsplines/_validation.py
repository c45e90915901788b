# -*- coding: utf-8 -*-
"""Code for validating inputs.

Created on September 2, 2026
@author: Donald Erb

"""

from enum import Enum

import numpy as np

from .utils import ConfigurationError, DataError


def _check_scalar(data, desired_length, fill_scalar=False, coerce_0d=True, **asarray_kwargs):
    """
    Checks if the input is scalar and potentially coerces it to the desired length.

    Only intended for one dimensional data.

    Parameters
    ----------
    data : array-like
        Either a scalar value or an array. Array-like inputs with only 1 item will also
        be considered scalar.
    desired_length : int or None
        If `data` is an array, `desired_length` is the length the array must have. If `data`
        is a scalar and `fill_scalar` is True, then `desired_length` is the length of the output.
    fill_scalar : bool, optional
        If True and `data` is a scalar, then will output an array with a length of
        `desired_length`. Default is False, which leaves scalar values unchanged.
    coerce_0d : bool, optional
        If True (default) and `data` is an array-like with a single item, `output` will be
        a scalar. If False, `output` will also be an array with shape (1,).
    **asarray_kwargs : dict
        Additional keyword arguments to pass to :func:`numpy.asarray`.

    Returns
    -------
    output : numpy.ndarray or numpy.number
        The array of values or the single array scalar, depending on the input parameters.
    is_scalar : bool
        True if the input was a scalar value or had a length of 1; otherwise, is False.

    Raises
    ------
    ConfigurationError
        Raised if `data` is not a scalar and its length is not equal to `desired_length`.

    """
    output = np.asarray(data, **asarray_kwargs)
    ndim = output.ndim
    if not ndim:
        is_scalar = True
    else:
        if ndim > 1:
            output = output.reshape(-1)
        len_output = len(output)
        if len_output == 1 and coerce_0d:
            is_scalar = True
            output = np.asarray(output[0], **asarray_kwargs)
        else:
            is_scalar = False

    if is_scalar:
        if fill_scalar:
            output = np.full(desired_length, output)
        else:
            # index with an empty tuple to get the single scalar while maintaining the numpy dtype
            output = output[()]
    elif desired_length is not None and len_output != desired_length:
        raise ConfigurationError(
            f'desired length was {desired_length} but instead got {len_output}'
        )

    return output, is_scalar


def _check_scalar_variable(value, allow_zero=False, variable_name='alpha', **asarray_kwargs):
    """
    Ensures the input is a single, finite scalar value.

    Parameters
    ----------
    value : numpy.Number or array-like
        The value to check.
    allow_zero : bool, optional
        If False (default), only allows `value` > 0. If True, allows `value` >= 0.
    variable_name : str, optional
        The name displayed if an error occurs. Default is 'alpha'.
    **asarray_kwargs : dict
        Additional keyword arguments to pass to :func:`numpy.asarray`.

    Returns
    -------
    output : numpy.Number
        The verified scalar value.

    Raises
    ------
    ConfigurationError
        Raised if `value` is not a scalar, is not finite, or is less than or equal to 0
        if `allow_zero` is False or less than 0 if `allow_zero` is True.

    """
    output, is_scalar = _check_scalar(value, None, **asarray_kwargs)
    if not is_scalar:
        raise ConfigurationError(f'{variable_name} must be a single value')
    elif not np.isfinite(output):
        raise ConfigurationError(f'{variable_name} must be finite')

    if allow_zero:
        operation = np.less
        text = 'greater than or equal to'
    else:
        operation = np.less_equal
        text = 'greater than'
    if operation(output, 0):
        raise ConfigurationError(f'{variable_name} must be {text} 0')

    return output


def _check_dimension_vector(value, dim_x, allow_zero=False, variable_name='degree'):
    """
    Broadcasts a scalar or validates a per-dimension vector of integers.

    Parameters
    ----------
    value : int or Sequence[int]
        Either a single value, which is used for every input dimension, or one value
        for each input dimension.
    dim_x : int
        The number of input dimensions.
    allow_zero : bool, optional
        If False (default), only allows values > 0. If True, allows values >= 0.
    variable_name : str, optional
        The name displayed if an error occurs. Default is 'degree'.

    Returns
    -------
    output : numpy.ndarray, shape (`dim_x`,)
        The validated integer values for each dimension.

    Raises
    ------
    ConfigurationError
        Raised if `value` is a sequence whose length is not `dim_x`, if any value is not
        an integer, or if any value is out of the allowed range.

    """
    values = np.asarray(value)
    if values.ndim > 1:
        raise ConfigurationError(f'{variable_name} must be a scalar or a one dimensional sequence')
    elif values.ndim == 1 and len(values) != dim_x:
        raise ConfigurationError(
            f'expected {variable_name} vector of length {dim_x} but got length {len(values)}'
        )
    elif values.dtype.kind not in 'iu':
        if values.dtype.kind != 'f' or not np.array_equal(values, np.round(values)):
            raise ConfigurationError(f'{variable_name} must only contain integers')

    output = np.full(dim_x, values, dtype=np.intp) if values.ndim == 0 else values.astype(np.intp)
    if allow_zero:
        if (output < 0).any():
            raise ConfigurationError(f'{variable_name} must be greater than or equal to 0')
    elif (output <= 0).any():
        raise ConfigurationError(f'{variable_name} must be greater than 0')

    return output


def _check_option(value, options, variable_name):
    """
    Converts a string or enum member into a member of the given enum.

    Parameters
    ----------
    value : str or enum.Enum
        The option to check. Strings must equal the value of a member of `options`,
        ignoring case; for example, 'as_sampled' but not 'as-sampled'.
    options : type[enum.Enum]
        The enum class of valid options.
    variable_name : str
        The name displayed if an error occurs.

    Returns
    -------
    enum.Enum
        The matching member of `options`.

    Raises
    ------
    ConfigurationError
        Raised if `value` does not correspond to any member of `options`.

    """
    if isinstance(value, options):
        return value
    elif isinstance(value, str) and not isinstance(value, Enum):
        key = value.lower()
        for member in options:
            if key == member.value:
                return member

    valid = ', '.join(repr(member.value) for member in options)
    raise ConfigurationError(f'{value!r} is not a valid {variable_name}; must be one of {valid}')


def _check_array(array, dtype=None, order=None, check_finite=False, ensure_1d=True,
                 ensure_2d=False, name='array'):
    """
    Validates the shape and values of the input array and controls the output parameters.

    Parameters
    ----------
    array : array-like
        The input array to check.
    dtype : type or numpy.dtype, optional
        The dtype to cast the output array. Default is None, which uses the typing of `array`.
    order : {None, 'C', 'F'}, optional
        The order for the output array. Default is None, which will use the default array
        ordering. Other valid options are 'C' for C ordering or 'F' for Fortran ordering.
    check_finite : bool, optional
        If True, will raise an error if any values in `array` are not finite. Default is False,
        which skips the check.
    ensure_1d : bool, optional
        If True (default), will raise an error if the shape of `array` is not a one dimensional
        array with shape (N,) or a two dimensional array with shape (N, 1) or (1, N).
    ensure_2d : bool, optional
        If True, will output a two dimensional array with shape (N, M). One dimensional
        inputs are treated as a single column, (N, 1). Only used if `ensure_1d` is False.
        Default is False.
    name : str, optional
        The name for the variable if an exception is raised. Default is 'array'.

    Returns
    -------
    output : numpy.ndarray
        The array after performing all validations.

    Raises
    ------
    DataError
        Raised if `array` does not have the required dimensions or if `check_finite`
        is True and `array` contains non-finite values.

    Notes
    -----
    If `ensure_1d` is True and `array` has a shape of (N, 1) or (1, N), it is reshaped to
    (N,) for better compatibility for all functions.

    """
    output = np.asarray(array, dtype=dtype, order=order)
    if check_finite and not np.isfinite(output).all():
        raise DataError(f'{name} must not contain infs or NaNs')
    if ensure_1d:
        output = np.atleast_1d(output)
        dimensions = output.ndim
        if dimensions == 2 and 1 in output.shape:
            output = output.reshape(-1)
        elif dimensions != 1:
            raise DataError(f'{name} must be a one dimensional array')
    elif ensure_2d:
        if output.ndim < 2:
            output = output.reshape(-1, 1)
        elif output.ndim != 2:
            raise DataError(f'{name} must be a two dimensional array')

    return output


def _check_sized_array(array, length, dtype=None, order=None, check_finite=False,
                       ensure_1d=True, ensure_2d=False, axis=-1, name='weights'):
    """
    Validates the input array and ensures its length is correct.

    Parameters
    ----------
    array : array-like
        The input array to check.
    length : int
        The length that the input should have on the specified `axis`.
    dtype : type or numpy.dtype, optional
        The dtype to cast the output array. Default is None, which uses the typing of `array`.
    order : {None, 'C', 'F'}, optional
        The order for the output array. Default is None, which will use the default array
        ordering. Other valid options are 'C' for C ordering or 'F' for Fortran ordering.
    check_finite : bool, optional
        If True, will raise an error if any values if `array` are not finite. Default is False,
        which skips the check.
    ensure_1d : bool, optional
        If True (default), will raise an error if the shape of `array` is not a one dimensional
        array with shape (N,) or a two dimensional array with shape (N, 1) or (1, N).
    ensure_2d : bool, optional
        If True, will output a two dimensional array. See :func:`._check_array`.
    axis : int, optional
        The axis of the input on which to check its length. Default is -1.
    name : str, optional
        The name for the variable if an exception is raised. Default is 'weights'.

    Returns
    -------
    output : numpy.ndarray
        The array after performing all validations.

    Raises
    ------
    DataError
        Raised if `array` does not match `length` on the given `axis`.

    """
    output = _check_array(
        array, dtype=dtype, order=order, check_finite=check_finite, ensure_1d=ensure_1d,
        ensure_2d=ensure_2d, name=name
    )
    if output.shape[axis] != length:
        raise DataError(
            f'length mismatch for {name}; expected {length} but got {output.shape[axis]}'
        )
    return output


def _check_weights(weights, num_samples):
    """
    Validates the sample weights.

    Parameters
    ----------
    weights : array-like, shape (N,) or None
        The weight of each sample. If None, all samples have a weight of 1.
    num_samples : int
        The number of samples, `N`.

    Returns
    -------
    numpy.ndarray, shape (N,)
        The validated weights.

    Raises
    ------
    DataError
        Raised if `weights` has the wrong length, contains negative or non-finite values,
        or if all weights are 0.

    """
    if weights is None:
        return np.ones(num_samples)

    output = _check_sized_array(
        weights, num_samples, dtype=float, check_finite=True, ensure_1d=True, name='weights'
    )
    if (output < 0).any():
        raise DataError('weights must be greater than or equal to 0')
    elif not output.any():
        raise DataError('at least one weight must be greater than 0')

    return output
