"""Helpers for per-move deadlines and search time budgets."""

import time


def deadline_after(seconds):
    return time.time() + seconds


def elapsed_ms(start_time):
    return (time.time() - start_time) * 1000.0
