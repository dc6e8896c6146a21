# -*- coding: utf-8 -*-

import pytest

from mandelview.tiles import TileScheduler

@pytest.fixture
def make_scheduler():
    schedulers = list()

    def _make(*args, **kwargs):
        schedulers.append(TileScheduler(*args, **kwargs))
        return schedulers[-1]

    yield _make

    for s in schedulers:
        s.exit()
