#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Explore the Mandelbrot Set on the CPU using a pool of workers rendering
column bands into a shared pixel buffer.

Set USE_FORK=1 to run the workers as forked processes. See
mandelview/tiles.py.
"""

from timeit import default_timer as timer

from mandelview.option import Option
from mandelview.interface import WindowPygame
from mandelview.render import Renderer, allocate_pixels, save_image
from mandelview.tiles import USE_FORK, TileScheduler

class App(WindowPygame):

    def __init__(self, opt):
        super().__init__(opt)

        self.num_threads = opt.num_threads
        print("[CPU] number of {} {}, bands {}".format(
            "processes" if USE_FORK else "threads", self.num_threads,
            opt.num_partitions))

        # Construct the shared pixel buffer and spawn workers.
        self.pixels = allocate_pixels(self.height, self.width)
        self.scheduler = TileScheduler(
            self.pixels, self.num_threads, opt.num_partitions,
            on_progress=self.report_progress )
        self.renderer = Renderer(self.controller, self.scheduler, self.max_iters)

    def display(self):

        self.level += 1
        self.progress_time = timer()
        elapsed = self.renderer.render_frame()
        self.print_info(elapsed)

        if self.window is not None:
            self.update_window(elapsed)

    def exit(self):

        self.scheduler.exit()
        del self.pixels


def main(opt):

    mandel = App(opt)
    try:
        if opt.output:
            mandel.display()
            save_image(mandel.pixels, opt.output)
        else:
            # Instantiate the Window interface.
            mandel.init()
            mandel.run()
    finally:
        mandel.exit()


if __name__ == '__main__':

    try:
        main(Option())
    except KeyboardInterrupt:
        pass
