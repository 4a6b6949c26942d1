"""
Benchmark harness comparing the sequential and the parallel norm engines.
"""

import logging
import time
from dataclasses import dataclass
from typing import List

import numpy

from normbench import parallel, sequential
from normbench.timing import timed

logger = logging.getLogger(__name__)


# (report name, function name in both engine modules)
NORMS = [
    ("Max", "max_norm"),
    ("Frobenius", "frobenius_norm"),
    ("One-Induced", "one_induced_norm"),
    ("Infinity-Induced", "inf_induced_norm"),
]


@dataclass
class NormResult:
    name: str
    sequential_value: float
    sequential_time: float
    parallel_value: float
    parallel_time: float


def time_seed() -> int:
    """
    Returns the number of milliseconds since the epoch.
    """
    return int(round(time.time() * 1000))


def populate_random(matrix, seed) -> None:
    """
    Fills ``matrix`` with uniformly distributed values from ``[0, 1)``.
    """
    rng = numpy.random.default_rng(seed)
    matrix.entries[:] = rng.uniform(0.0, 1.0, matrix.rows * matrix.cols)


def run_benchmark(matrix, parallelism: int, engine) -> List[NormResult]:
    """
    Calculates every norm with the sequential engine, then with the parallel one,
    timing each call separately.
    """
    sequential_runs = []
    for name, func_name in NORMS:
        value, seconds = timed(getattr(sequential, func_name), matrix)
        logger.info("%s norm (sequential): %f in %f s", name, value, seconds)
        sequential_runs.append((value, seconds))

    parallel_runs = []
    for name, func_name in NORMS:
        value, seconds = timed(getattr(parallel, func_name), matrix, parallelism, engine)
        logger.info("%s norm (%s): %f in %f s", name, engine, value, seconds)
        parallel_runs.append((value, seconds))

    return [
        NormResult(name, seq_value, seq_time, par_value, par_time)
        for (name, _), (seq_value, seq_time), (par_value, par_time)
        in zip(NORMS, sequential_runs, parallel_runs)]


def format_report(results: List[NormResult], backend_label: str, show_times: bool) -> str:
    lines = []
    for result in results:
        lines.append("%s Norm : %f" % (result.name, result.sequential_value))
        if show_times:
            lines.append("Time : %f" % result.sequential_time)
        lines.append("%s Norm %s : %f" % (result.name, backend_label, result.parallel_value))
        if show_times:
            lines.append("Time : %f" % result.parallel_time)
    return "\n".join(lines) + "\n\n"
