"""
Parallel engine offloading the reductions to an OpenCL device with ``PyOpenCL``.

The ``parallelism`` argument of the norm methods is the work group size
(the number of threads per block). Kernels are rendered from ``ocl.mako``
and compiled once per combination of the data type and the work group size;
the kernel objects retrieved from a program are cached as well.
"""

import logging
import math

import numpy
import pyopencl as cl
import pyopencl.array as cl_array

import normbench.backends as backends
from normbench.errors import OutOfResourcesError
from normbench.helpers import min_blocks, positive_count, template_for, wrap_in_tuple
from normbench.predicates import predicate_max, predicate_sum

logger = logging.getLogger(__name__)

TEMPLATE = template_for(__file__)

# The local phase uses a grid-stride loop, so the number of work groups can be limited
# without affecting the result.
MAX_WORK_GROUPS = 1024

# Device-side indices are 32-bit.
MAX_ENTRIES = 2 ** 32 - 1


def get_id():
    return backends.ocl_id()


def get_platforms():
    """
    Returns the list of available OpenCL platforms
    (empty if the ICD loader does not find any).
    """
    try:
        return cl.get_platforms()
    except cl.Error as e:
        logger.debug("no OpenCL platforms: %s", e)
        return []


def find_devices():
    """
    Returns the list of all devices of all available OpenCL platforms.
    """
    devices = []
    for platform in get_platforms():
        devices.extend(platform.get_devices())
    return devices


def ctype(dtype):
    dtype = numpy.dtype(dtype)
    if dtype == numpy.float32:
        return 'float'
    elif dtype == numpy.float64:
        return 'double'
    else:
        raise ValueError("Unsupported data type: " + str(dtype))


def literal(value, dtype):
    """
    Returns the OpenCL literal of the given ``dtype`` for a real ``value``.
    """
    suffix = 'f' if numpy.dtype(dtype) == numpy.float32 else ''
    return repr(float(value)) + suffix


class DeviceParameters:

    def __init__(self, device):

        self._device = device

        # Apple reports the maximum block size for CPU as 1024, when it is really 128,
        # and if barrier() is used in the kernel, it becomes 1.
        if device.platform.name == 'Apple' and device.type == cl.device_type.CPU:
            self.max_work_group_size = 1
        else:
            self.max_work_group_size = device.max_work_group_size

        self.local_mem_size = device.local_mem_size

    def supports_dtype(self, dtype):
        if numpy.dtype(dtype) == numpy.float64:
            extensions = self._device.extensions
            return "cl_khr_fp64" in extensions or "cl_amd_fp64" in extensions
        else:
            return True


class Engine:
    """
    OpenCL parallel engine.

    :param device: a ``pyopencl.Device`` object.
        If ``None``, the first device of the first available platform is used.
    """

    def __init__(self, device=None):
        if device is None:
            devices = find_devices()
            if len(devices) == 0:
                raise RuntimeError("No OpenCL devices found")
            device = devices[0]

        logger.debug("using OpenCL device %s (%s)", device.name, device.platform.name)

        self.device = device
        self.device_params = DeviceParameters(device)
        self._context = cl.Context(devices=[device])
        self._queue = cl.CommandQueue(self._context)
        self._programs = {}
        self._kernels = {}

    def __str__(self):
        return get_id()

    def _program(self, dtype, block_size):
        key = (numpy.dtype(dtype), block_size)
        if key not in self._programs:
            src = TEMPLATE.render(
                block_size=block_size,
                ctype=ctype(dtype),
                double=numpy.dtype(dtype) == numpy.float64,
                empty=literal(0, dtype),
                max_snippet=predicate_max(dtype).snippet,
                sum_snippet=predicate_sum(dtype).snippet)
            logger.debug("building program for %s with work group size %d", dtype, block_size)
            self._programs[key] = cl.Program(self._context, src).build()
        return self._programs[key]

    def _prepare_for_block_size(self, name, dtype, block_size):
        if block_size * numpy.dtype(dtype).itemsize > self.device_params.local_mem_size:
            raise OutOfResourcesError(
                "Not enough local memory for work group size " + str(block_size))

        key = (numpy.dtype(dtype), block_size, name)
        if key not in self._kernels:
            self._kernels[key] = getattr(self._program(dtype, block_size), name)
        kernel = self._kernels[key]

        max_wg_size = kernel.get_work_group_info(
            cl.kernel_work_group_info.WORK_GROUP_SIZE, self.device)
        if block_size > max_wg_size:
            raise OutOfResourcesError(
                "Kernel " + name + " supports work groups of up to " + str(max_wg_size) +
                " items, requested " + str(block_size))

        return kernel

    def _prepare(self, name, dtype, parallelism, units):
        """
        Returns the kernel and the work group size it can be called with,
        clamping ``parallelism`` to the number of reducible units and the device limits.
        """
        parallelism = positive_count(parallelism, "Parallelism")
        if not self.device_params.supports_dtype(dtype):
            raise ValueError("The device does not support " + str(numpy.dtype(dtype)))

        block_size = min(parallelism, units, self.device_params.max_work_group_size)

        while block_size >= 1:
            try:
                kernel = self._prepare_for_block_size(name, dtype, block_size)
            except OutOfResourcesError:
                block_size //= 2
                continue

            return kernel, block_size

        raise ValueError("Could not find a suitable work group size for kernel " + name)

    def _to_device(self, matrix):
        matrix.require_nondegenerate()
        entries = matrix.entries
        if entries.size > MAX_ENTRIES:
            raise ValueError(
                "Matrices with more than " + str(MAX_ENTRIES) + " entries are not supported")
        return cl_array.to_device(self._queue, entries)

    def _call(self, kernel, global_size, local_size, *args):
        args = [x.data if isinstance(x, cl_array.Array) else x for x in args]
        kernel(self._queue, wrap_in_tuple(global_size), wrap_in_tuple(local_size), *args)

    def _reduce_entries(self, name, matrix, parallelism):
        entries_dev = self._to_device(matrix)
        size = entries_dev.size
        kernel, block_size = self._prepare(name, matrix.dtype, parallelism, size)

        num_groups = min(min_blocks(size, block_size), MAX_WORK_GROUPS)
        partials_dev = cl_array.empty(self._queue, num_groups, matrix.dtype)

        logger.debug(
            "%s: %d entries, %d work groups of %d items", name, size, num_groups, block_size)

        self._call(
            kernel, num_groups * block_size, block_size,
            partials_dev, entries_dev, numpy.uint32(size))

        # Blocks until the kernel is finished.
        return partials_dev.get().astype(numpy.float64)

    def _line_sums(self, name, matrix, parallelism, units):
        entries_dev = self._to_device(matrix)
        kernel, block_size = self._prepare(name, matrix.dtype, parallelism, units)

        sums_dev = cl_array.empty(self._queue, units, matrix.dtype)

        logger.debug("%s: %d units, work groups of %d items", name, units, block_size)

        self._call(
            kernel, min_blocks(units, block_size) * block_size, block_size,
            sums_dev, entries_dev, numpy.uint32(matrix.rows), numpy.uint32(matrix.cols))

        return sums_dev.get()

    def max_norm(self, matrix, parallelism):
        partials = self._reduce_entries('max_entries', matrix, parallelism)
        return float(predicate_max(numpy.float64).combine(partials))

    def frobenius_norm(self, matrix, parallelism):
        partials = self._reduce_entries('sum_squares', matrix, parallelism)
        return math.sqrt(predicate_sum(numpy.float64).combine(partials))

    def one_induced_norm(self, matrix, parallelism):
        sums = self._line_sums('column_sums', matrix, parallelism, matrix.cols)
        return float(sums.max())

    def inf_induced_norm(self, matrix, parallelism):
        sums = self._line_sums('row_sums', matrix, parallelism, matrix.rows)
        return float(sums.max())
