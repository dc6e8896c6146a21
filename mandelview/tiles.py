# -*- coding: utf-8 -*-
"""
Provides the tile scheduler. The pixel grid is split into column bands,
dispatched to a long-lived pool of workers using queues for IPC, and
joined with a barrier before returning to the caller.
"""

__all__ = ["USE_FORK", "RenderError", "TileScheduler", "worker_classes"]

import os, sys, traceback

from threading import BrokenBarrierError

from .base import column_bands
from .mandel_for import mandelbrot_band

# Workers are threads unless USE_FORK=1; the band kernel releases the GIL.
# Forked workers share the RawArray pixel buffer. No fork on Windows.
USE_FORK = 0 if sys.platform == "win32" else int(os.getenv("USE_FORK") or 0)

def worker_classes(use_fork):
    """
    Returns the (Barrier, Queue, Thread) classes for the worker pool.
    """
    if use_fork:
        import multiprocessing
        ctx = multiprocessing.get_context("fork")
        return ctx.Barrier, ctx.SimpleQueue, ctx.Process

    import threading, queue
    return threading.Barrier, queue.SimpleQueue, threading.Thread


class RenderError(RuntimeError):
    """
    Raised when one or more bands failed during a render.
    """


class TileScheduler(object):

    def __init__(self, pixels, num_threads=8, num_partitions=32,
                 kernel=mandelbrot_band, on_progress=None, use_fork=USE_FORK):

        self.pixels = pixels
        self.height, self.width = pixels.shape
        self.num_threads = max(1, num_threads)
        self.num_partitions = max(1, min(self.width, num_partitions))
        self.kernel = kernel
        self.on_progress = on_progress

        Barrier, Queue, Thread = worker_classes(use_fork)

        self.barrier_band = Barrier(self.num_threads + 1)

        self.queue_job = Queue()
        self.queue_data = Queue()
        self.queue_fault = Queue()
        self.queue_done = Queue()

        # Spawn workers.
        self.consumers = list()
        for wid in range(1, self.num_threads + 1):
            self.consumers.append(Thread(target=self.cpu_task, args=(wid,), daemon=True))
            self.consumers[-1].start()

    def __cpu_task(self, wid):

        # Receive job parameters.
        while True:
            args = self.queue_job.get()
            if args is None: break

            num_bands, origin_x, origin_y, extent_x, extent_y, max_iters = args

            # Process band data.
            while True:
                band_id, seq = self.queue_data.get()
                if seq:
                    try:
                        self.kernel(
                            self.pixels, seq[0], seq[1], origin_x, origin_y,
                            extent_x, extent_y, max_iters )
                    except Exception as exc:
                        self.queue_fault.put(
                            (band_id, seq, repr(exc), traceback.format_exc()) )
                    self.queue_done.put(band_id)

                # Wait for any remaining bands to finish.
                if band_id + self.num_threads > num_bands:
                    self.barrier_band.wait()  # sync including manager
                    break

    def cpu_task(self, wid):

        try:
            self.__cpu_task(wid)
        except (BrokenBarrierError, KeyboardInterrupt):
            pass

    def render_all(self, viewport, max_iters):
        """
        Render every band for the given viewport. Blocks until all bands
        have written their pixels. Raises RenderError if any band failed.
        """
        bands = column_bands(self.width, self.num_partitions)
        num_bands = len(bands)

        # Submit job parameters followed by band data.
        args = ( num_bands, viewport.origin_x, viewport.origin_y,
                 viewport.extent_x, viewport.extent_y, max_iters )

        for _ in range(self.num_threads):
            self.queue_job.put(args)

        for i, seq in enumerate(bands):
            self.queue_data.put((i+1, seq))

        # Notify available threads to wait.
        if num_bands < self.num_threads:
            for _ in range(self.num_threads - num_bands):
                self.queue_data.put((num_bands, None))

        # Count finished bands, then join.
        for done in range(1, num_bands + 1):
            self.queue_done.get()
            if self.on_progress is not None:
                self.on_progress(done, num_bands)

        self.barrier_band.wait()

        faults = list()
        while not self.queue_fault.empty():
            faults.append(self.queue_fault.get())

        if faults:
            faults.sort()
            band_id, seq, mesg, trace = faults[0]
            raise RenderError(
                "{} of {} bands failed; band {} columns [{}, {}): {}\n{}".format(
                    len(faults), num_bands, band_id, seq[0], seq[1], mesg, trace))

    def exit(self):

        # Release workers waiting on an interrupted render.
        self.barrier_band.abort()

        for _ in range(len(self.consumers)):
            self.queue_job.put(None)

        for c in self.consumers:
            c.join()

        self.consumers = list()
