# -*- coding: utf-8 -*-
"""
Provides the Pygame-based window interface.
"""

__all__ = ["WindowPygame"]

import os, sys
os.environ['SDL_VIDEO_ALLOW_SCREENSAVER'] = '1'
os.environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', '1')

import pygame as pg

from timeit import default_timer as timer

from .render import to_rgb
from .viewport import Viewport, ViewportController

TITLE = "Mandelbrot"

class WindowPygame(object):

    def __init__(self, opt):

        self.width = opt.width
        self.height = opt.height
        self.max_iters = opt.max_iters
        self.zoom_factor = opt.zoom_factor
        self.big_zoom = opt.big_zoom
        self.pan_on_release = opt.pan_on_release
        self.level = 0
        self.window = None
        self.pixels = None
        self.drag_from = None
        self.progress_time = timer()

        home = Viewport(opt.origin_x, opt.origin_y, opt.extent_x, opt.extent_y)
        self.controller = ViewportController(
            home, self.width, self.height, move_factor=opt.move_factor,
            on_change=self.display )


    def init(self):

        # There's no sound or anything like that. Thus initializing display only.
        pg.display.init()

        self.window = pg.display.set_mode((self.width, self.height), flags=pg.DOUBLEBUF|pg.HIDDEN)
        self.window.set_alpha(None)
        self.window.fill(pg.Color('#000000'))

        pg.display.set_caption(TITLE)
        pg.key.set_repeat(210, 15)
        pg.display.flip()

        self.window = pg.display.set_mode((self.width, self.height), flags=pg.DOUBLEBUF|pg.SHOWN)


    def print_info(self, elapsed):

        vp = self.controller.viewport

        print("[{:>3}] origin x, y  : {:.16f}, {:.16f}".format(
            self.level, vp.origin_x, vp.origin_y))
        print("[{:>3}] extent x, y  : {:.16f}, {:.16f}".format(
            self.level, vp.extent_x, vp.extent_y))
        print("      compute time : {:.3f} seconds".format(elapsed))


    def run(self):

        self.display()

        # Wait for an event so minimum CPU utilization when idled.
        while True:
            e = pg.event.wait()
            rendered = False
            if e.type == pg.KEYDOWN:
                if e.key in (pg.K_q, pg.K_ESCAPE):
                    break
                rendered = self.__on_key_press(e)
                sys.stdout.flush()
            elif e.type == pg.MOUSEWHEEL:
                rendered = self.__on_mouse_wheel(e.y)
            elif e.type == pg.MOUSEBUTTONDOWN:
                if e.button == 1:
                    self.drag_from = e.pos
            elif e.type == pg.MOUSEMOTION:
                rendered = self.__on_mouse_motion(e.pos)
            elif e.type == pg.MOUSEBUTTONUP:
                if e.button == 1:
                    rendered = self.__on_mouse_release(e.pos)
            elif e.type == pg.VIDEOEXPOSE:
                self.present()
            elif e.type == pg.QUIT:
                break

            if rendered:
                self.drop_stale_input()

        pg.quit()


    def drop_stale_input(self):
        """
        Renders are serialized on the event loop. Drop the key, wheel, and
        motion events that piled up during a render. Button events are kept
        so a drag never sticks, and a pending q or Escape becomes a QUIT.
        """
        for e in pg.event.get((pg.KEYDOWN, pg.MOUSEWHEEL, pg.MOUSEMOTION)):
            if e.type == pg.KEYDOWN and e.key in (pg.K_q, pg.K_ESCAPE):
                pg.event.post(pg.event.Event(pg.QUIT))
                break


    def report_progress(self, done, total):

        # At most one line per second, while a long render is in flight.
        if timer() - self.progress_time > 1.0:
            print("      {:.1f}% done".format(done * 100.0 / total))
            self.progress_time += 1.0


    # Display surface.

    def set_pixel(self, x, y, color):
        """
        Write one packed color, row 0 at the top. Workers write the shared
        buffer directly; this is for single pixels from the loop thread.
        """
        self.pixels[y, x] = color


    def set_title(self, text):

        pg.display.set_caption(text)


    def frame_image(self):

        rgb = to_rgb(self.pixels)

        return pg.image.frombuffer(rgb.tobytes(), (self.width, self.height), "RGB")


    def present(self):

        self.window.blit(self.frame_image(), (0,0))
        pg.display.flip()


    def query_cursor_position(self):

        return pg.mouse.get_pos()


    def is_button_down(self, button):

        return pg.mouse.get_pressed()[button - 1]


    def update_window(self, elapsed):

        vp = self.controller.viewport
        self.set_title("{} x: {:.15f}, y: {:.15f} ({:.3f}s)".format(
            TITLE, vp.extent_x, vp.extent_y, elapsed))
        self.present()


    # Input handlers. Each returns True when it triggered a render.

    def __on_key_press(self, e):

        symbol = e.key
        unicode = getattr(e, 'unicode', '')
        controller = self.controller

        if symbol in (pg.K_a, pg.K_LEFT):
            controller.move(-1.0, 0.0)
        elif symbol in (pg.K_s, pg.K_DOWN):
            controller.move(0.0, -1.0)
        elif symbol in (pg.K_d, pg.K_RIGHT):
            controller.move(1.0, 0.0)
        elif symbol in (pg.K_w, pg.K_UP):
            controller.move(0.0, 1.0)

        elif unicode == '+' or symbol == pg.K_KP_PLUS:
            x, y = self.query_cursor_position()
            controller.zoom_at(self.big_zoom, x, y)

        elif unicode == '-' or symbol == pg.K_KP_MINUS:
            x, y = self.query_cursor_position()
            controller.zoom_at(1.0 / self.big_zoom, x, y)

        elif symbol in (pg.K_LEFTBRACKET, pg.K_PAGEDOWN):  # zoom in
            controller.zoom_at(self.zoom_factor, self.width / 2, self.height / 2)

        elif symbol in (pg.K_RIGHTBRACKET, pg.K_PAGEUP):  # zoom out
            controller.zoom_at(1.0 / self.zoom_factor, self.width / 2, self.height / 2)

        elif symbol in (pg.K_r, pg.K_HOME):  # reset display to initial view
            controller.reset()

        elif symbol == pg.K_e:
            pg.image.save(self.frame_image(), "image.png")
            print("Image saved as image.png.")
            return False

        else:
            return False

        return True


    def __on_mouse_wheel(self, notches):

        x, y = self.query_cursor_position()
        factor = self.zoom_factor if notches > 0 else 1.0 / self.zoom_factor

        # One zoom step per notch.
        for _ in range(abs(notches)):
            self.controller.zoom_at(factor, x, y)

        return notches != 0


    def __on_mouse_motion(self, pos):

        if self.drag_from is None or self.pan_on_release:
            return False

        if not self.is_button_down(1):
            self.drag_from = None
            return False

        dx, dy = pos[0] - self.drag_from[0], pos[1] - self.drag_from[1]
        self.drag_from = pos
        if dx or dy:
            self.controller.drag(dx, dy)
            return True

        return False


    def __on_mouse_release(self, pos):

        if self.drag_from is None:
            return False

        dx, dy = pos[0] - self.drag_from[0], pos[1] - self.drag_from[1]
        self.drag_from = None

        # The whole drag when panning on release, else the last tick.
        if dx or dy:
            self.controller.drag(dx, dy)
            return True

        return False
