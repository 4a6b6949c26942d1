"""
Single-threaded norm calculations.

Every function visits the entries one at a time in row-major order,
so repeated calls on an unmodified matrix give bit-identical results.
All accumulation is performed in double precision.
"""

import math


def _entries(matrix):
    matrix.require_nondegenerate()
    return matrix.entries.tolist()


def max_norm(matrix):
    """
    Returns the maximum absolute value over all entries of ``matrix``.
    """
    result = 0.0
    for value in _entries(matrix):
        result = max(result, abs(value))
    return result


def frobenius_norm(matrix):
    """
    Returns the square root of the sum of squares of all entries of ``matrix``.
    """
    result = 0.0
    for value in _entries(matrix):
        result += value * value
    return math.sqrt(result)


def one_induced_norm(matrix):
    """
    Returns the maximum over columns of the sum of absolute values in the column.
    """
    entries = _entries(matrix)
    cols = matrix.cols

    sums = [0.0] * cols
    for idx, value in enumerate(entries):
        sums[idx % cols] += abs(value)

    return max(sums)


def inf_induced_norm(matrix):
    """
    Returns the maximum over rows of the sum of absolute values in the row.
    """
    entries = _entries(matrix)
    cols = matrix.cols

    sums = [0.0] * matrix.rows
    for idx, value in enumerate(entries):
        sums[idx // cols] += abs(value)

    return max(sums)
