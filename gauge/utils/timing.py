"""Timing helpers."""

import time


def busy_wait(seconds: float) -> float:
    """Keep one CPU core busy for the given wall-clock time.

    Repeatedly compares the current time against the start time instead of
    sleeping, so the core is fully loaded and leaves power-saving states
    before the first benchmark runs.

    Args:
        seconds: Duration of the busy wait. Zero or less returns immediately.

    Returns:
        The time actually spent in seconds.
    """
    start = time.time()
    while time.time() - start < seconds:
        pass
    return time.time() - start
