# -*- coding: utf-8 -*-
"""
Common functions for the band kernel: coordinate mapping, escape-time
iteration, and the grayscale palette.
"""

__all__ = ["to_complex", "iterate", "color_of"]

import os

from .base import BLACK, RADIUS

ESCAPE_RADIUS_2 = RADIUS * RADIUS

os.environ['NUMBA_DISABLE_INTEL_SVML'] = str(1)

from numba import njit

def _to_complex(pixel, size, origin, extent):

    scale = pixel / size

    return origin + extent * scale

to_complex = \
    njit('f8(f8, i8, f8, f8)', nogil=True)(_to_complex)


def _iterate(x0, y0, max_iters):

    xx = 0.0
    yy = 0.0
    n = 0

    # Compute z = z^2 + c until the orbit leaves the escape radius.
    while xx * xx + yy * yy < ESCAPE_RADIUS_2 and n < max_iters:
        xtemp = xx * xx - yy * yy + x0
        yy = 2.0 * xx * yy + y0
        xx = xtemp
        n += 1

    return n

iterate = \
    njit('i8(f8, f8, i8)', nogil=True)(_iterate)


def _color_of(n, max_iters):

    # Points presumed inside the set.
    if n == max_iters:
        return BLACK

    # Mid-gray for fast escape up to near-white for slow escape.
    scale = n / max_iters
    grey = 0x7F + int(0.5 * scale * 0xFF)

    return grey * 0x10000 + grey * 0x100 + grey

color_of = \
    njit('u4(i8, i8)', nogil=True)(_color_of)
