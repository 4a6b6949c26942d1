"""
Exceptions raised by ``normbench``.
"""


class NormBenchError(Exception):
    """
    Base class for all errors raised by this package.
    """
    pass


class AllocationError(NormBenchError, MemoryError):
    """
    Thrown by :py:func:`~normbench.matrix.allocate`
    if the storage for the matrix entries cannot be obtained.
    """
    pass


class OutOfBoundsError(NormBenchError, IndexError):
    """
    Thrown by the element accessors of :py:class:`~normbench.matrix.DenseMatrix`
    if the indices fall outside of the matrix extents.
    """
    pass


class DegenerateInputError(NormBenchError, ValueError):
    """
    Thrown by the norm functions if the matrix has zero rows or zero columns.
    """
    pass


class ReleasedMatrixError(NormBenchError, RuntimeError):
    """
    Thrown on any access to a matrix after :py:meth:`~normbench.matrix.DenseMatrix.release`.
    """
    pass


class OutOfResourcesError(NormBenchError):
    """
    Thrown by the OpenCL engine if the requested work group size
    is too big for a compiled kernel.
    """
    pass
