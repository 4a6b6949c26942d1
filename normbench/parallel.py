"""
Parallel norm calculations.

Each function splits the work between ``parallelism`` concurrent workers,
lets every worker reduce its own part of the matrix independently,
and combines the partial results after all of them have finished.
The results agree with those of :py:mod:`normbench.sequential`
up to the floating-point rounding introduced by the different summation order.

The work is executed by an engine object from one of the backends
(see :py:mod:`normbench.backends`); by default a thread pool engine is created for the call.
"""

from normbench.backends import threads


def _engine(engine):
    return threads.Engine() if engine is None else engine


def max_norm(matrix, parallelism, engine=None):
    return _engine(engine).max_norm(matrix, parallelism)


def frobenius_norm(matrix, parallelism, engine=None):
    return _engine(engine).frobenius_norm(matrix, parallelism)


def one_induced_norm(matrix, parallelism, engine=None):
    return _engine(engine).one_induced_norm(matrix, parallelism)


def inf_induced_norm(matrix, parallelism, engine=None):
    return _engine(engine).inf_induced_norm(matrix, parallelism)
