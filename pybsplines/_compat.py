# -*- coding: utf-8 -*-
"""Code to help use optional dependencies and handle changes within dependency versions.

Created on September 2, 2026
@author: Donald Erb

"""

from functools import lru_cache, wraps

import scipy
from scipy import sparse


try:
    from numba import jit
    _HAS_NUMBA = True
except ImportError:
    _HAS_NUMBA = False

    def jit(func=None, *jit_args, **jit_kwargs):
        """Dummy decorator that does nothing if numba is not installed."""
        # the first positional argument of numba's jit can be a signature rather than
        # the function, in which case the decorator itself is returned
        if func is None or not callable(func):
            return jit

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper


@lru_cache(maxsize=1)
def _use_sparse_arrays():
    """
    Checks that the installed scipy version is new enough to use sparse arrays.

    The result is cached so the version parsing only happens once.

    Returns
    -------
    bool
        True if the installed scipy version is 1.12 or newer; False otherwise.

    Notes
    -----
    Scipy's sparse arrays were added in version 1.8, but their helper functions
    (`eye_array`, `diags_array`) were not stable until version 1.12, and the matrix
    interface emits warnings starting in version 1.13.

    """
    try:
        _scipy_version = [int(val) for val in scipy.__version__.lstrip('v').split('.')[:2]]
    except Exception:
        # non-semantic version string; assume a modern scipy
        return True

    return _scipy_version[0] > 1 or (_scipy_version[0] == 1 and _scipy_version[1] >= 12)


def csr_object(*args, **kwargs):
    """
    Handles creation of a sparse csr object.

    Parameters
    ----------
    *args
        Any arguments to pass to the creation functions.
    **kwargs
        Additional keyword arguments to pass to the creation functions.

    Returns
    -------
    scipy.sparse.csr_matrix or scipy.sparse.csr_array
        A sparse csr matrix if the installed scipy version is older than 1.12,
        otherwise a sparse csr array.

    """
    if _use_sparse_arrays():
        return sparse.csr_array(*args, **kwargs)
    else:
        return sparse.csr_matrix(*args, **kwargs)


def identity(size, format=None, **kwargs):
    """
    Handles creation of a sparse square identity matrix.

    Parameters
    ----------
    size : int
        The length of the rows and columns of the sparse matrix.
    format : str, optional
        The sparse format to use for the identity matrix. Default is None, which
        will use the default of the underlying functions.
    **kwargs
        Additional keyword arguments to pass to the creation functions.

    Returns
    -------
    scipy.sparse.spmatrix or scipy.sparse.sparray
        The sparse identity matrix.

    """
    if _use_sparse_arrays():
        return sparse.eye_array(size, size, format=format, **kwargs)
    else:
        return sparse.identity(size, format=format, **kwargs)


def diags(data, offsets=0, **kwargs):
    """
    Handles creation of a sparse diagonal matrix.

    Parameters
    ----------
    data : array-like
        The data to be put in the diagonals.
    offsets : int or Sequence[int], optional
        The offsets for `data`. Default is 0, which is the main diagonal.
    **kwargs
        Additional keyword arguments to pass to the creation functions.

    Returns
    -------
    scipy.sparse.spmatrix or scipy.sparse.sparray
        The sparse diagonal matrix.

    """
    if _use_sparse_arrays():
        return sparse.diags_array(data, offsets=offsets, **kwargs)
    else:
        return sparse.diags(data, offsets=offsets, **kwargs)


def kron(matrix_1, matrix_2, format=None):
    """
    Computes the Kronecker product of two sparse or dense matrices.

    Parameters
    ----------
    matrix_1 : numpy.ndarray or scipy.sparse.spmatrix or scipy.sparse.sparray
        The left matrix.
    matrix_2 : numpy.ndarray or scipy.sparse.spmatrix or scipy.sparse.sparray
        The right matrix.
    format : str, optional
        The sparse format of the output. Default is None, which uses the default
        of :func:`scipy.sparse.kron`.

    Returns
    -------
    scipy.sparse.spmatrix or scipy.sparse.sparray
        The sparse Kronecker product. Is a sparse array if the installed scipy
        version supports it, otherwise a sparse matrix.

    """
    output = sparse.kron(matrix_1, matrix_2, format=format)
    if _use_sparse_arrays() and not isinstance(output, sparse.sparray):
        output = sparse.csr_array(output)
        if format is not None:
            output = output.asformat(format)

    return output
