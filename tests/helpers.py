import numpy

from normbench.matrix import DenseMatrix

# Default tolerances for numpy.allclose().
# Should be enough to detect a error, but not enough to trigger a fail
# in case of a different summation order in a parallel reduction.
SINGLE_RTOL = 1e-5
SINGLE_ATOL = 1e-8

DOUBLE_RTOL = 1e-11
DOUBLE_ATOL = 1e-11

# Tolerance for comparing parallel results with the sequential ones.
# Device-side accumulation is performed in the precision of the matrix entries.
PARALLEL_RTOL = 1e-4


def get_test_array(shape, dtype=numpy.float32, low=-1.0, high=1.0, *, no_zeros=False):
    rng = numpy.random.default_rng()
    result = rng.uniform(low, high, shape).astype(dtype)
    if no_zeros:
        result[result == 0] = high
    return result


def get_test_matrix(shape, dtype=numpy.float32, **kwds):
    return DenseMatrix.from_array(get_test_array(shape, dtype, **kwds), dtype=dtype)


def reference_norms(arr):
    arr = numpy.asarray(arr, numpy.float64)
    return dict(
        max_norm=numpy.abs(arr).max(),
        frobenius_norm=numpy.linalg.norm(arr, 'fro'),
        one_induced_norm=numpy.linalg.norm(arr, 1),
        inf_induced_norm=numpy.linalg.norm(arr, numpy.inf))


def diff_is_negligible(m, m_ref, atol=None, rtol=None, *, double=False, verbose=True):
    m = numpy.asarray(m)
    m_ref = numpy.asarray(m_ref)

    if atol is None:
        atol = DOUBLE_ATOL if double else SINGLE_ATOL
    if rtol is None:
        rtol = DOUBLE_RTOL if double else SINGLE_RTOL

    close = numpy.isclose(m, m_ref, atol=atol, rtol=rtol)

    if close.all():
        return True

    if verbose:
        print(
            f"diff_is_negligible() with atol={atol} and rtol={rtol} "
            f"found differences: test: {m}, ref: {m_ref}")

    return False
