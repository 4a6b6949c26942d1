"""
Binary operations used to combine partial reductions.
"""

import functools

import numpy


class Predicate:
    """
    A predicate used to combine partial results of the parallel engines.

    :param operation: a Python callable with two arguments returning their combination.
    :param empty: the empty value of the argument
        (the one which, being joined by another argument, does not change it).
    :param snippet: the body of an OpenCL function of two arguments ``v1`` and ``v2``
        performing the same operation.
    """

    def __init__(self, operation, empty, snippet):
        self.operation = operation
        self.empty = empty
        self.snippet = snippet

    def combine(self, partials):
        """
        Folds an iterable of partial results, starting from the empty value.
        """
        return functools.reduce(self.operation, partials, self.empty)


def predicate_sum(dtype):
    """
    Returns a :py:class:`Predicate` object which sums its arguments.
    """
    return Predicate(
        lambda v1, v2: v1 + v2,
        numpy.zeros(1, dtype)[0],
        "return v1 + v2;")


def predicate_max(dtype):
    """
    Returns a :py:class:`Predicate` object which picks the greater of its arguments.
    Since it is only used for absolute values, its empty value is zero.
    """
    return Predicate(
        max,
        numpy.zeros(1, dtype)[0],
        "return fmax(v1, v2);")
