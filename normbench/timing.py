"""
Wall-clock timing without global state.

A session is an immutable value returned by :py:func:`start_clock`;
any number of sessions can be active at the same time.
"""

import time
from typing import Any, Callable, NamedTuple, Tuple


class TimingSession(NamedTuple):
    start: float


def start_clock() -> TimingSession:
    return TimingSession(start=time.perf_counter())


def elapsed(session: TimingSession) -> float:
    """
    Returns the number of seconds since ``session`` was started.
    """
    return time.perf_counter() - session.start


def timed(func: Callable[..., Any], *args: Any, **kwds: Any) -> Tuple[Any, float]:
    """
    Calls ``func(*args, **kwds)`` and returns a tuple ``(result, seconds)``.
    """
    session = start_clock()
    result = func(*args, **kwds)
    return result, elapsed(session)
