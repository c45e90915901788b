#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""The setup script.

All metadata exists in setup.cfg. setup.py is only needed to allow
for editable installs when using older versions of pip.


Notes on minimum required versions for dependencies:

numpy: >= 1.20 in order to use numpy.lib.stride_tricks.sliding_window_view
scipy: >= 1.8 to use scipy.interpolate.BSpline.design_matrix
numba: >= 0.49 in order to cache jit-ed functions

"""

from setuptools import setup


if __name__ == '__main__':

    setup()
