"""
Parallel engine based on a pool of native threads.

Each norm call launches a ``ThreadPoolExecutor`` with ``parallelism`` workers.
Every worker reduces its own contiguous chunk of the index range with numpy
(which releases the GIL for the bulk of the work) and returns the partial result;
the calling thread waits for all of them and combines the partials.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor

import numpy

import normbench.backends as backends
from normbench.helpers import positive_count
from normbench.predicates import predicate_max, predicate_sum

logger = logging.getLogger(__name__)


def get_id():
    return backends.thread_id()


def partition(units, parallelism):
    """
    Splits the range ``[0, units)`` into ``min(parallelism, units)`` contiguous chunks
    of ``units // parallelism`` elements each, with the last chunk absorbing the remainder.
    Returns a list of ``(start, stop)`` pairs.
    """
    parallelism = positive_count(parallelism, "Parallelism")
    if units == 0:
        return []

    parallelism = min(parallelism, units)
    chunk = units // parallelism

    bounds = [(i * chunk, (i + 1) * chunk) for i in range(parallelism - 1)]
    bounds.append(((parallelism - 1) * chunk, units))
    return bounds


class Engine:
    """
    Thread pool parallel engine.

    :param max_workers: an upper limit for the number of threads launched per call.
        If ``None``, ``parallelism`` threads are launched.
    """

    def __init__(self, max_workers=None):
        if max_workers is not None:
            max_workers = positive_count(max_workers, "max_workers")
        self.max_workers = max_workers

    def __str__(self):
        return get_id()

    def _run(self, units, parallelism, local_reduce):
        bounds = partition(units, parallelism)
        workers = len(bounds)
        if self.max_workers is not None:
            workers = min(workers, self.max_workers)

        logger.debug(
            "reducing %d units in %d chunks on %d threads", units, len(bounds), workers)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            # Consuming the iterator blocks until every worker has finished.
            return list(executor.map(lambda bound: local_reduce(*bound), bounds))

    def max_norm(self, matrix, parallelism):
        matrix.require_nondegenerate()
        entries = matrix.entries
        predicate = predicate_max(numpy.float64)

        def local_reduce(start, stop):
            return numpy.abs(entries[start:stop]).max(initial=float(predicate.empty))

        partials = self._run(entries.size, parallelism, local_reduce)
        return float(predicate.combine(partials))

    def frobenius_norm(self, matrix, parallelism):
        matrix.require_nondegenerate()
        entries = matrix.entries
        predicate = predicate_sum(numpy.float64)

        def local_reduce(start, stop):
            chunk = entries[start:stop].astype(numpy.float64)
            return numpy.dot(chunk, chunk)

        partials = self._run(entries.size, parallelism, local_reduce)
        return math.sqrt(predicate.combine(partials))

    def one_induced_norm(self, matrix, parallelism):
        matrix.require_nondegenerate()
        arr = matrix.as_array()

        # Each worker owns a group of columns, so no column sum is shared between workers.
        def local_reduce(start, stop):
            return numpy.abs(arr[:, start:stop]).sum(axis=0, dtype=numpy.float64)

        partials = self._run(matrix.cols, parallelism, local_reduce)
        return float(numpy.concatenate(partials).max())

    def inf_induced_norm(self, matrix, parallelism):
        matrix.require_nondegenerate()
        arr = matrix.as_array()

        def local_reduce(start, stop):
            return numpy.abs(arr[start:stop, :]).sum(axis=1, dtype=numpy.float64)

        partials = self._run(matrix.rows, parallelism, local_reduce)
        return float(numpy.concatenate(partials).max())
