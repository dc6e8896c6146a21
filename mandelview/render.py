# -*- coding: utf-8 -*-
"""
Provides the render orchestrator and pixel buffer helpers.
"""

__all__ = ["Renderer", "allocate_pixels", "to_rgb", "save_image"]

import numpy as np

from multiprocessing import RawArray
from timeit import default_timer as timer
from PIL import Image

def allocate_pixels(height, width):
    """
    Returns a (height, width) array of packed 0xRRGGBB colors backed by
    shared memory, so forked workers write into the same buffer.
    """
    shm_pixels = RawArray(np.ctypeslib.ctypes.c_uint32, int(height*width))
    pixels = np.ctypeslib.as_array(shm_pixels)

    return pixels.reshape((height, width))


def to_rgb(pixels):
    """
    Unpack 0xRRGGBB colors into a contiguous (height, width, 3) uint8 array.
    """
    rgb = np.empty(pixels.shape + (3,), dtype=np.uint8)
    rgb[..., 0] = (pixels >> 16) & 0xFF
    rgb[..., 1] = (pixels >> 8) & 0xFF
    rgb[..., 2] = pixels & 0xFF

    return rgb


def save_image(pixels, filename):

    rgb = to_rgb(pixels)
    height, width, dim = rgb.shape

    img = Image.frombuffer("RGB", (width, height), rgb.reshape((height * width * dim,)), "raw", "RGB", 0, 1)
    img.save(filename)
    print(f"image saved as {filename}")


class Renderer(object):

    def __init__(self, controller, scheduler, max_iters):

        self.controller = controller
        self.scheduler = scheduler
        self.max_iters = max_iters

    @property
    def pixels(self):
        return self.scheduler.pixels

    def render_frame(self):
        """
        Render the full frame for the current viewport.
        Returns the elapsed wall-clock time in seconds.
        """
        start = timer()
        self.scheduler.render_all(self.controller.viewport, self.max_iters)

        return timer() - start
