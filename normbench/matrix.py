"""
Dense row-major matrix used as the input of all norm engines.
"""

import logging
import operator

import numpy

from normbench.errors import (
    AllocationError, OutOfBoundsError, DegenerateInputError, ReleasedMatrixError)
from normbench.helpers import product

logger = logging.getLogger(__name__)


class DenseMatrix:
    """
    A matrix with fixed extents, owning a contiguous buffer of ``rows * cols`` entries.
    The entry ``(i, j)`` lives at the offset ``i * cols + j`` of the buffer.

    The matrix is a context manager; leaving the ``with`` block releases it
    regardless of how the block was exited.

    :param rows: number of rows (non-negative).
    :param cols: number of columns (non-negative).
    :param dtype: the type of entries (``float32`` or ``float64``).

    .. py:attribute:: rows

    .. py:attribute:: cols

    .. py:attribute:: dtype
    """

    def __init__(self, rows, cols, dtype=numpy.float32):
        rows = int(rows)
        cols = int(cols)
        if rows < 0 or cols < 0:
            raise ValueError(
                "Matrix extents must be non-negative, got " + str((rows, cols)))

        dtype = numpy.dtype(dtype)
        if dtype.kind != 'f':
            raise ValueError("Only real floating-point matrices are supported, got " + str(dtype))

        try:
            entries = numpy.empty(product((rows, cols)), dtype)
        except (MemoryError, OverflowError, ValueError) as e:
            raise AllocationError(
                "Could not allocate a " + str(rows) + "x" + str(cols) + " matrix") from e

        self._rows = rows
        self._cols = cols
        self._entries = entries
        logger.debug("allocated %dx%d matrix of %s", rows, cols, dtype)

    @classmethod
    def from_array(cls, arr, dtype=None):
        """
        Creates a matrix holding a copy of the 2-dimensional array-like ``arr``.
        """
        arr = numpy.asarray(arr)
        if arr.ndim != 2:
            raise ValueError("Expected a 2-dimensional array, got shape " + str(arr.shape))
        if dtype is None:
            dtype = arr.dtype if arr.dtype.kind == 'f' else numpy.float32
        matrix = cls(arr.shape[0], arr.shape[1], dtype=dtype)
        matrix._entries[:] = arr.ravel()
        return matrix

    @property
    def rows(self):
        return self._rows

    @property
    def cols(self):
        return self._cols

    @property
    def shape(self):
        return (self._rows, self._cols)

    @property
    def dtype(self):
        return self._buffer().dtype

    @property
    def entries(self):
        """
        The one-dimensional row-major buffer of entries.
        """
        return self._buffer()

    @property
    def released(self):
        return self._entries is None

    def _buffer(self):
        if self._entries is None:
            raise ReleasedMatrixError("The matrix has been released")
        return self._entries

    def _offset(self, i, j):
        try:
            i = operator.index(i)
            j = operator.index(j)
        except TypeError as e:
            raise OutOfBoundsError(
                "Matrix indices must be integers, got " + repr((i, j))) from e
        if not (0 <= i < self._rows and 0 <= j < self._cols):
            raise OutOfBoundsError(
                "Index " + str((i, j)) + " is out of bounds for a matrix of shape "
                + str(self.shape))
        return i * self._cols + j

    def get(self, i, j):
        """
        Returns the entry at ``(i, j)``.
        """
        entries = self._buffer()
        return float(entries[self._offset(i, j)])

    def set(self, i, j, value):
        """
        Overwrites the entry at ``(i, j)`` with ``value``.
        """
        entries = self._buffer()
        entries[self._offset(i, j)] = value

    def __getitem__(self, index):
        i, j = index
        return self.get(i, j)

    def __setitem__(self, index, value):
        i, j = index
        self.set(i, j, value)

    def as_array(self):
        """
        Returns a read-only ``(rows, cols)`` view of the entries.
        """
        view = self._buffer().reshape(self.shape)
        view.flags.writeable = False
        return view

    def require_nondegenerate(self):
        """
        Raises :py:class:`~normbench.errors.DegenerateInputError`
        if the matrix has no rows or no columns.
        """
        self._buffer()
        if self._rows == 0 or self._cols == 0:
            raise DegenerateInputError(
                "Norms are not defined for a matrix of shape " + str(self.shape))

    def release(self):
        """
        Drops the entries buffer. The matrix cannot be used afterwards.
        Releasing an already released matrix does nothing.
        """
        if self._entries is not None:
            self._entries = None
            logger.debug("released %dx%d matrix", self._rows, self._cols)

    def __enter__(self):
        self._buffer()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()

    def __repr__(self):
        state = "released" if self.released else str(self.dtype)
        return "DenseMatrix(" + str(self._rows) + ", " + str(self._cols) + ", " + state + ")"


def allocate(rows, cols, dtype=numpy.float32):
    """
    Creates a new :py:class:`DenseMatrix` with uninitialized entries.
    """
    return DenseMatrix(rows, cols, dtype=dtype)


def get(matrix, i, j):
    return matrix.get(i, j)


def set(matrix, i, j, value):
    matrix.set(i, j, value)


def release(matrix):
    matrix.release()


def format_matrix(matrix):
    """
    Returns the text rendering of the matrix: one row per line,
    entries formatted with ``%f`` and separated by spaces,
    with an empty line before and after.
    """
    lines = [""]
    for row in matrix.as_array():
        lines.append("".join("%f " % value for value in row))
    lines.append("")
    return "\n".join(lines) + "\n"
