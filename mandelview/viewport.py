# -*- coding: utf-8 -*-
"""
Provides the viewport and the controller that owns it. All pan, zoom,
and reset operations go through the controller, which triggers a
re-render through its on_change callback.
"""

__all__ = ["Viewport", "ViewportController"]

from dataclasses import dataclass, replace

from .mandel_common import to_complex

@dataclass
class Viewport:
    """
    Rectangle of the complex plane mapped onto the pixel grid.
    The origin is the bottom-left corner of the plot.
    """

    origin_x: float
    origin_y: float
    extent_x: float
    extent_y: float

    def to_complex_x(self, x, width):
        return to_complex(x, width, self.origin_x, self.extent_x)

    def to_complex_y(self, y, height):
        return to_complex(y, height, self.origin_y, self.extent_y)

    def copy(self):
        return replace(self)


class ViewportController(object):

    def __init__(self, home, width, height, move_factor=0.1, on_change=None):

        self.home = home.copy()
        self.viewport = home.copy()
        self.width = width
        self.height = height
        self.move_factor = move_factor
        self.on_change = on_change

    def __changed(self):

        if self.on_change is not None:
            self.on_change()

    def pan(self, dx, dy):
        """
        Translate the origin by dx, dy in plane units.
        """
        vp = self.viewport
        vp.origin_x += dx
        vp.origin_y += dy

        self.__changed()

    def zoom_at(self, factor, x, y):
        """
        Zoom by factor keeping the plane point under pixel x, y fixed.
        A factor above 1 zooms in. The anchor is measured from the top
        of the window, the plane from the bottom.
        """
        vp = self.viewport
        size_multiple = 1.0 / factor
        left_side_perc = x / self.width
        bot_side_perc = 1.0 - y / self.height

        vp.origin_x -= (size_multiple - 1.0) * vp.extent_x * left_side_perc
        vp.origin_y -= (size_multiple - 1.0) * vp.extent_y * bot_side_perc
        vp.extent_x *= size_multiple
        vp.extent_y *= size_multiple

        self.__changed()

    def reset(self):
        """
        Restore the home viewport.
        """
        vp, home = self.viewport, self.home
        vp.origin_x, vp.origin_y = home.origin_x, home.origin_y
        vp.extent_x, vp.extent_y = home.extent_x, home.extent_y

        self.__changed()

    def drag(self, dx, dy):
        """
        Convert a mouse drag of dx, dy pixels into a pan. Dragging right
        moves the view left; dragging down moves the view up.
        """
        vp = self.viewport
        x_move = -float(dx) / self.width * vp.extent_x
        y_move = float(dy) / self.height * vp.extent_y

        self.pan(x_move, y_move)

    def move(self, dir_x, dir_y):
        """
        Keyboard scroll by move_factor of the current extent.
        """
        vp = self.viewport
        self.pan(dir_x * vp.extent_x * self.move_factor,
                 dir_y * vp.extent_y * self.move_factor)
