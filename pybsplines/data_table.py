# -*- coding: utf-8 -*-
"""A simple container for the samples used to fit splines.

Created on September 5, 2026
@author: Donald Erb

"""

import numpy as np

from ._validation import _check_array
from .utils import DataError


class DataTable:
    """
    An ordered collection of samples, ``(x, y)``, with fixed input and output dimensions.

    The dimensions are set by the first added sample, and all later samples must match
    them. Samples cannot be changed or removed once added.

    Attributes
    ----------
    allow_duplicates : bool
        If False, adding a sample whose x-values equal an existing sample raises an error.

    Examples
    --------
    >>> table = DataTable()
    >>> table.add_sample([0.0, 1.0], 2.0)
    >>> table.dim_x, table.dim_y, table.num_samples
    (2, 1, 1)

    """

    def __init__(self, allow_duplicates=False):
        """
        Initializes an empty table.

        Parameters
        ----------
        allow_duplicates : bool, optional
            If True, multiple samples can share the same x-values. Default is False.

        """
        self.allow_duplicates = allow_duplicates
        self._dim_x = None
        self._dim_y = None
        self._x_list = []
        self._y_list = []
        self._keys = set()
        self._x = None
        self._y = None

    @classmethod
    def from_arrays(cls, x, y, allow_duplicates=False):
        """
        Creates a table from arrays of sample coordinates and values.

        Parameters
        ----------
        x : array-like, shape (N, D) or (N,)
            The sample coordinates. One dimensional input is treated as `N` samples
            with one input dimension.
        y : array-like, shape (N, K) or (N,)
            The sample values. One dimensional input is treated as `N` samples
            with one output dimension.
        allow_duplicates : bool, optional
            If True, multiple samples can share the same x-values. Default is False.

        Returns
        -------
        DataTable
            The table containing all samples in order.

        """
        table = cls(allow_duplicates=allow_duplicates)
        table.add_samples(x, y)
        return table

    @staticmethod
    def _check_sample(x, y, dim_x, dim_y):
        """
        Validates a single sample against the given dimensions.

        Returns
        -------
        x_values : numpy.ndarray, shape (D,)
            The validated sample coordinates.
        y_values : numpy.ndarray, shape (K,)
            The validated sample values.
        key : tuple[float, ...]
            The hashable x-values used for finding duplicates.

        """
        x_values = _check_array(x, dtype=float, check_finite=True, ensure_1d=True, name='x')
        y_values = _check_array(y, dtype=float, check_finite=True, ensure_1d=True, name='y')
        if not x_values.size or not y_values.size:
            raise DataError('samples must have at least one input and one output dimension')
        elif dim_x is not None and x_values.size != dim_x:
            raise DataError(
                f'sample has {x_values.size} input dimensions but the table has {dim_x}'
            )
        elif dim_y is not None and y_values.size != dim_y:
            raise DataError(
                f'sample has {y_values.size} output dimensions but the table has {dim_y}'
            )

        return x_values, y_values, tuple(x_values.tolist())

    def _extend(self, samples):
        """
        Checks every sample before adding any of them to the table.

        Parameters
        ----------
        samples : Iterable[tuple[array-like, array-like]]
            The ``(x, y)`` pairs to add.

        Raises
        ------
        DataError
            Raised if any sample is invalid, in which case the table is left unchanged.

        """
        dim_x = self._dim_x
        dim_y = self._dim_y
        new_keys = set()
        checked = []
        for x, y in samples:
            x_values, y_values, key = self._check_sample(x, y, dim_x, dim_y)
            if dim_x is None:
                dim_x = x_values.size
                dim_y = y_values.size
            if not self.allow_duplicates and (key in self._keys or key in new_keys):
                raise DataError(f'a sample already exists at x={list(key)}')
            new_keys.add(key)
            checked.append((x_values, y_values))

        if not checked:
            return
        self._dim_x = dim_x
        self._dim_y = dim_y
        self._keys.update(new_keys)
        for x_values, y_values in checked:
            # copies so that later changes to the inputs do not affect the table
            self._x_list.append(x_values.copy())
            self._y_list.append(y_values.copy())
        self._x = None
        self._y = None

    def add_sample(self, x, y):
        """
        Adds a single sample to the table.

        Parameters
        ----------
        x : float or array-like, shape (D,)
            The sample coordinates.
        y : float or array-like, shape (K,)
            The sample value(s).

        Raises
        ------
        DataError
            Raised if the sample's dimensions do not match the table, if it contains
            non-finite values, or if its x-values already exist and `allow_duplicates`
            is False.

        """
        self._extend([(x, y)])

    def add_samples(self, x, y):
        """
        Adds multiple samples to the table.

        Parameters
        ----------
        x : array-like, shape (N, D) or (N,)
            The sample coordinates. One dimensional input is treated as `N` samples
            with one input dimension.
        y : array-like, shape (N, K) or (N,)
            The sample values. One dimensional input is treated as `N` samples
            with one output dimension.

        Raises
        ------
        DataError
            Raised if `x` and `y` have a different number of samples or if any sample
            is invalid; see :meth:`~DataTable.add_sample`. No samples are added if
            an error is raised.

        """
        x = _check_array(x, dtype=float, ensure_1d=False, ensure_2d=True, name='x')
        y = _check_array(y, dtype=float, ensure_1d=False, ensure_2d=True, name='y')
        if x.shape[0] != y.shape[0]:
            raise DataError(
                f'number of sample coordinates ({x.shape[0]}) and values ({y.shape[0]}) differ'
            )
        self._extend(zip(x, y))

    @property
    def dim_x(self):
        """The number of input dimensions, or None if the table is empty."""
        return self._dim_x

    @property
    def dim_y(self):
        """The number of output dimensions, or None if the table is empty."""
        return self._dim_y

    @property
    def num_samples(self):
        """The number of samples in the table."""
        return len(self._x_list)

    def __len__(self):
        return self.num_samples

    def __iter__(self):
        for x_values, y_values in zip(self._x_list, self._y_list):
            yield x_values.copy(), y_values.copy()

    @property
    def x(self):
        """
        The sample coordinates as an array with shape (`num_samples`, `dim_x`).

        A new array is returned each time, so modifying it does not change the table.

        """
        if self._x is None:
            self._x = np.array(self._x_list, dtype=float).reshape(self.num_samples, -1)
        return self._x.copy()

    @property
    def y(self):
        """
        The sample values as an array with shape (`num_samples`, `dim_y`).

        A new array is returned each time, so modifying it does not change the table.

        """
        if self._y is None:
            self._y = np.array(self._y_list, dtype=float).reshape(self.num_samples, -1)
        return self._y.copy()

    @property
    def grid(self):
        """
        The sorted, distinct sample coordinates along each input dimension.

        Returns
        -------
        tuple[numpy.ndarray, ...]
            One array for each of the `dim_x` input dimensions.

        """
        if not self.num_samples:
            return ()
        x = self.x
        return tuple(np.unique(x[:, i]) for i in range(self._dim_x))

    def is_grid_complete(self):
        """
        Checks whether the samples cover every point of the grid of distinct coordinates.

        Returns
        -------
        bool
            True if every combination of the distinct coordinates of each input
            dimension has a sample; False otherwise or if the table is empty.

        """
        if not self.num_samples:
            return False
        num_grid_points = int(np.prod([len(values) for values in self.grid]))
        return len(self._keys) == num_grid_points
