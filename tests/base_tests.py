# -*- coding: utf-8 -*-
"""Base functions for testing pybsplines.

@author: Donald Erb
Created on September 8, 2026

"""

import numpy as np

from pybsplines import DataTable


def gaussian(x, height=1.0, center=0.0, sigma=1.0):
    """
    Generates a gaussian distribution based on height, center, and sigma.

    Parameters
    ----------
    x : numpy.ndarray
        The x-values at which to evaluate the distribution.
    height : float, optional
        The maximum height of the distribution. Default is 1.0.
    center : float, optional
        The center of the distribution. Default is 0.0.
    sigma : float, optional
        The standard deviation of the distribution. Default is 1.0.

    Returns
    -------
    numpy.ndarray
        The gaussian distribution evaluated with x.

    """
    return height * np.exp(-0.5 * ((x - center)**2) / sigma**2)


def get_data(include_noise=True, num_points=200):
    """Creates x- and y-data for testing.

    Parameters
    ----------
    include_noise : bool, optional
        If True (default), will include noise with the y-data.
    num_points : int, optional
        The number of data points to use. Default is 200.

    Returns
    -------
    x_data : numpy.ndarray, shape (`num_points`,)
        The x-values.
    y_data : numpy.ndarray, shape (`num_points`,)
        The y-values.

    """
    x_data = np.linspace(0, 10, num_points)
    y_data = (
        2 + 0.5 * x_data
        + gaussian(x_data, 5, 3, 0.8)
        + gaussian(x_data, 3, 7, 1.2)
    )
    if include_noise:
        y_data += np.random.default_rng(0).normal(0, 0.2, x_data.size)

    return x_data, y_data


def get_grid_data(num_points=(7, 9), dim_y=1):
    """Creates samples on a full two dimensional grid for testing.

    Parameters
    ----------
    num_points : Sequence[int, int], optional
        The number of grid values along each input dimension. Default is (7, 9).
    dim_y : int, optional
        The number of output dimensions. Default is 1.

    Returns
    -------
    x_data : numpy.ndarray, shape (``num_points[0] * num_points[1]``, 2)
        The grid points, with the first dimension varying slowest.
    y_data : numpy.ndarray, shape (``num_points[0] * num_points[1]``, `dim_y`)
        The values at each grid point.

    """
    x_values = np.linspace(-1, 2, num_points[0])
    z_values = np.linspace(0, 3, num_points[1])
    x_grid, z_grid = np.meshgrid(x_values, z_values, indexing='ij')
    x_data = np.column_stack((x_grid.ravel(), z_grid.ravel()))
    base = np.sin(x_data[:, 0]) * np.cos(x_data[:, 1]) + 0.5 * x_data[:, 0]
    y_data = np.column_stack([base + i for i in range(dim_y)])

    return x_data, y_data


def make_table(x, y, allow_duplicates=False):
    """Creates a DataTable from x- and y-values."""
    return DataTable.from_arrays(x, y, allow_duplicates=allow_duplicates)


def second_differences(coef, num_bases):
    """
    The norm of the second differences of the coefficient lattice along each dimension.

    Parameters
    ----------
    coef : numpy.ndarray, shape (M, K)
        The spline coefficients.
    num_bases : Sequence[int]
        The number of basis functions along each dimension.

    Returns
    -------
    float
        The summed squared second differences.

    """
    lattice = coef.reshape(*num_bases, -1)
    total = 0.
    for axis, size in enumerate(num_bases):
        if size > 2:
            total += (np.diff(lattice, 2, axis=axis)**2).sum()
    return total
