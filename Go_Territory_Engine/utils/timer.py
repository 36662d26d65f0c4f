"""Helpers for the display lifetime of transient territory highlights."""

import time


def deadline_after(seconds, now=None):
    return (time.time() if now is None else now) + seconds


def time_remaining(deadline, now=None):
    return deadline - (time.time() if now is None else now)
