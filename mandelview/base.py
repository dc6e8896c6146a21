# -*- coding: utf-8 -*-
"""
Provides constants and helpers shared by the viewer.
"""

__all__ = ["MAX_ITERATIONS", "RADIUS", "BLACK", "LAYOUTS", "column_bands",
           "home_layout"]

import os, sys
import numpy as np

# Suppress subnormal UserWarnings: since numpy 1.22.
# The value of the smallest subnormal for <class 'numpy.float64'> type is zero.
# Refer to: https://github.com/numpy/numpy/issues/20895

class _suppress_stderr:
    def __init__(self):
        self._stderr = None
    def __enter__(self):
        self._stderr = sys.stderr
        sys.stderr = open(os.devnull, "w")
    def __exit__(self, *args):
        sys.stderr.close()
        sys.stderr = self._stderr

with _suppress_stderr():
    np.finfo(np.dtype("float64"))

MAX_ITERATIONS = 1000
RADIUS = 2.0
BLACK = 0x000000

# Home locations (origin_x, origin_y, extent_x, extent_y).
# Layout 2 is centered on 0+0i and scaled by the window aspect ratio.
LAYOUTS = {
    1: lambda w, h: (-2.3, -0.4375, 3.5, 2.45),
    2: lambda w, h: (-2.0, -2.0 * h / w, 4.0, 4.0 * h / w),
}


def home_layout(layout, width, height):
    """
    Returns the home (origin_x, origin_y, extent_x, extent_y) for a layout.
    """
    return LAYOUTS.get(layout, LAYOUTS[1])(width, height)


def column_bands(width, num_partitions):
    """
    Split [0, width) into contiguous column bands of near-equal size.
    Band i covers [i*width//p, (i+1)*width//p). Bands may be empty when
    there are more partitions than columns.
    """
    p = max(1, num_partitions)

    return [(i * width // p, (i + 1) * width // p) for i in range(p)]

