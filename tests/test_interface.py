# -*- coding: utf-8 -*-

import os
os.environ["SDL_VIDEODRIVER"] = "dummy"

import numpy as np
import pygame as pg
import pytest

from mandelview.interface import WindowPygame
from mandelview.option import Option

WIDTH, HEIGHT = 200, 140
CURSOR = (100, 70)

class Window(WindowPygame):
    """
    Counts renders instead of computing them. The dummy video driver has
    no pointer, so the cursor and button state are fixed.
    """

    def __init__(self, opt):
        super().__init__(opt)
        self.pixels = np.zeros((self.height, self.width), dtype=np.uint32)
        self.renders = 0

    def display(self):
        self.renders += 1

    def query_cursor_position(self):
        return CURSOR

    def is_button_down(self, button):
        return button == 1


def make_window(*args):
    opt = Option(["--width={}".format(WIDTH), "--height={}".format(HEIGHT)] + list(args))
    window = Window(opt)
    window.init()
    return window


@pytest.fixture(autouse=True)
def quit_pygame():
    yield
    pg.quit()


def key(symbol, unicode=""):
    return pg.event.Event(pg.KEYDOWN, key=symbol, mod=0, unicode=unicode)


def button(kind, pos):
    return pg.event.Event(kind, button=1, pos=pos)


def motion(pos):
    return pg.event.Event(pg.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(1, 0, 0))


def wheel(y):
    return pg.event.Event(pg.MOUSEWHEEL, x=0, y=y, flipped=False)


def run(window, *events):
    pg.event.clear()
    for e in events:
        pg.event.post(e)
    pg.event.post(pg.event.Event(pg.QUIT))
    window.run()
    return window.controller.viewport


def test_pan_once_on_release():
    window = make_window()
    vp = run(window, button(pg.MOUSEBUTTONDOWN, (100, 100)), motion((150, 100)),
             motion((170, 90)), button(pg.MOUSEBUTTONUP, (200, 100)))

    assert window.renders == 2
    assert vp.origin_x == pytest.approx(-2.3 - 100 / WIDTH * 3.5)
    assert vp.origin_y == pytest.approx(-0.4375)


def test_pan_on_every_drag_tick():
    window = make_window("--pan-on-release=0")
    vp = run(window, button(pg.MOUSEBUTTONDOWN, (100, 100)), motion((150, 100)),
             motion((170, 100)), button(pg.MOUSEBUTTONUP, (200, 100)))

    # the second motion piled up during the first tick's render
    assert window.renders == 3
    assert vp.origin_x == pytest.approx(-2.3 - 100 / WIDTH * 3.5)


def test_one_zoom_step_per_notch():
    window = make_window()
    vp = run(window, wheel(2))

    assert window.renders == 3
    assert vp.extent_x == pytest.approx(3.5 / 1.5 ** 2)

    window = make_window()
    vp = run(window, wheel(-1))

    assert window.renders == 2
    assert vp.extent_x == pytest.approx(3.5 * 1.5)


def test_input_queued_during_render_is_dropped():
    window = make_window()
    vp = run(window, wheel(1), wheel(-1), key(pg.K_r, "r"))

    assert window.renders == 2
    assert vp.extent_x == pytest.approx(3.5 / 1.5)


def test_button_events_survive_the_drop():
    window = make_window()
    vp = run(window, wheel(1), button(pg.MOUSEBUTTONDOWN, (100, 100)),
             key(pg.K_w, "w"), button(pg.MOUSEBUTTONUP, (160, 100)))

    assert window.renders == 3
    assert vp.extent_x == pytest.approx(3.5 / 1.5)
    origin_x = -2.3 + (1 - 1 / 1.5) * 3.5 * CURSOR[0] / WIDTH
    assert vp.origin_x == pytest.approx(origin_x - 60 / WIDTH * vp.extent_x)


@pytest.mark.parametrize("symbol, dx, dy", [
    (pg.K_w, 0, 1), (pg.K_a, -1, 0), (pg.K_s, 0, -1), (pg.K_d, 1, 0),
    (pg.K_UP, 0, 1), (pg.K_LEFT, -1, 0)])
def test_scroll_keys(symbol, dx, dy):
    window = make_window()
    vp = run(window, key(symbol))

    assert window.renders == 2
    assert vp.origin_x == pytest.approx(-2.3 + dx * 0.35)
    assert vp.origin_y == pytest.approx(-0.4375 + dy * 0.245)


@pytest.mark.parametrize("event, factor", [
    (key(pg.K_PLUS, "+"), 10.0), (key(pg.K_MINUS, "-"), 0.1),
    (key(pg.K_KP_PLUS), 10.0), (key(pg.K_KP_MINUS), 0.1)])
def test_big_zoom_at_cursor(event, factor):
    window = make_window()
    vp = run(window, event)

    assert window.renders == 2
    assert vp.extent_x == pytest.approx(3.5 / factor)
    assert vp.origin_x + vp.extent_x * CURSOR[0] / WIDTH == pytest.approx(-2.3 + 3.5 / 2)


@pytest.mark.parametrize("symbol, factor", [
    (pg.K_LEFTBRACKET, 1.5), (pg.K_RIGHTBRACKET, 1 / 1.5)])
def test_zoom_at_window_center(symbol, factor):
    window = make_window()
    vp = run(window, key(symbol))

    assert vp.extent_y == pytest.approx(2.45 / factor)
    assert vp.origin_y + vp.extent_y / 2 == pytest.approx(-0.4375 + 2.45 / 2)


def test_reset_key():
    window = make_window()
    window.controller.viewport.origin_x = 5.0
    window.controller.viewport.extent_y = 0.01
    vp = run(window, key(pg.K_r, "r"))

    assert window.renders == 2
    assert (vp.origin_x, vp.origin_y, vp.extent_x, vp.extent_y) == (-2.3, -0.4375, 3.5, 2.45)


def test_unbound_key_does_not_render():
    window = make_window()
    run(window, key(pg.K_x, "x"), key(pg.K_w, "w"))

    # nothing rendered, so the second key was not dropped
    assert window.renders == 2


@pytest.mark.parametrize("symbol", [pg.K_ESCAPE, pg.K_q])
def test_exit_keys(symbol):
    window = make_window()
    vp = run(window, key(symbol), key(pg.K_w, "w"))

    assert window.renders == 1
    assert vp.origin_y == -0.4375


def test_exit_key_queued_during_render_still_quits():
    window = make_window()
    # no trailing QUIT, the queued Escape has to end the loop
    pg.event.clear()
    pg.event.post(key(pg.K_d, "d"))
    pg.event.post(key(pg.K_ESCAPE))
    pg.event.post(key(pg.K_w, "w"))
    window.run()

    assert window.renders == 2
    assert window.controller.viewport.origin_x == pytest.approx(-2.3 + 0.35)
    assert window.controller.viewport.origin_y == -0.4375


def test_set_pixel_reaches_the_frame():
    window = make_window()
    window.set_pixel(3, 0, 0x7F7F7F)
    window.set_pixel(WIDTH - 1, HEIGHT - 1, 0x102030)

    img = window.frame_image()
    assert tuple(img.get_at((3, 0)))[:3] == (0x7F, 0x7F, 0x7F)
    assert tuple(img.get_at((WIDTH - 1, HEIGHT - 1)))[:3] == (0x10, 0x20, 0x30)
    assert tuple(img.get_at((0, 0)))[:3] == (0, 0, 0)


def test_report_progress_once_per_second(capsys):
    window = make_window()

    window.progress_time -= 2.5
    window.report_progress(8, 32)
    window.report_progress(9, 32)
    window.report_progress(10, 32)
    window.report_progress(11, 32)

    out = capsys.readouterr().out.splitlines()
    assert [line.strip() for line in out] == ["25.0% done", "28.1% done"]
