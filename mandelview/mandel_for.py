# -*- coding: utf-8 -*-
"""
Mandelbrot band kernel. One call renders a contiguous range of columns.
"""

from .mandel_common import to_complex, iterate, color_of

from numba import njit

@njit('void(u4[:,:], i8, i8, f8, f8, f8, f8, i8)', nogil=True)
def mandelbrot_band(pixels, start, stop, origin_x, origin_y, extent_x, extent_y, max_iters):

    height, width = pixels.shape

    for x in range(start, stop):
        creal = to_complex(float(x), width, origin_x, extent_x)

        for y in range(height):
            cimag = to_complex(float(y), height, origin_y, extent_y)
            n = iterate(creal, cimag, max_iters)

            # Row 0 is the top of the screen; the plane grows upward.
            pixels[height - y - 1, x] = color_of(n, max_iters)
