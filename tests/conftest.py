"""Shared test fixtures: real OS pipes standing in for stdin/stdout."""

from __future__ import annotations

import contextlib
import os
from dataclasses import dataclass

import pytest


@dataclass
class PipePair:
    """Descriptors for one transport under test.

    The transport reads ``in_r`` and writes ``out_w``; the test plays the
    peer by writing ``in_w`` and reading ``out_r``.
    """

    in_r: int
    in_w: int
    out_r: int
    out_w: int

    def close_end(self, name: str) -> None:
        """Close one end early, e.g. to make the peer see EOF."""
        fd = getattr(self, name)
        if fd >= 0:
            os.close(fd)
            setattr(self, name, -1)

    def close(self) -> None:
        for name in ("in_r", "in_w", "out_r", "out_w"):
            with contextlib.suppress(OSError):
                self.close_end(name)


@pytest.fixture
def pipes():
    in_r, in_w = os.pipe()
    out_r, out_w = os.pipe()
    pair = PipePair(in_r=in_r, in_w=in_w, out_r=out_r, out_w=out_w)
    yield pair
    pair.close()

