"""Time helpers."""

from __future__ import annotations

import time


def unix_now() -> float:
    return time.time()
