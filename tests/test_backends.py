import numpy
import pytest

from normbench import backends
from normbench.backends import threads
from normbench.matrix import DenseMatrix


def test_ids():
    assert backends.backend_ids() == ['threads', 'ocl']
    assert backends.thread_id() in backends.supported_backend_ids()


def test_get_backend():
    backend = backends.get_backend('threads')
    assert backend is threads
    assert backend.get_id() == 'threads'
    assert str(backend.Engine()) == 'threads'


def test_unknown_backend():
    with pytest.raises(ValueError):
        backends.get_backend('cuda')
    with pytest.raises(ValueError):
        backends.supports_backend('cuda')


class TestOcl:

    @pytest.fixture(autouse=True)
    def ocl(self):
        pytest.importorskip("pyopencl")
        return backends.get_backend(backends.ocl_id())

    def test_id(self, ocl):
        assert ocl.get_id() == 'ocl'

    def test_ctype(self, ocl):
        assert ocl.ctype(numpy.float32) == 'float'
        assert ocl.ctype(numpy.float64) == 'double'
        with pytest.raises(ValueError):
            ocl.ctype(numpy.int32)

    def test_literal(self, ocl):
        assert ocl.literal(0, numpy.float32) == '0.0f'
        assert ocl.literal(0, numpy.float64) == '0.0'

    @pytest.mark.parametrize("dtype", [numpy.float32, numpy.float64], ids=["float32", "float64"])
    def test_template(self, ocl, dtype):
        src = ocl.TEMPLATE.render(
            block_size=64,
            ctype=ocl.ctype(dtype),
            double=numpy.dtype(dtype) == numpy.float64,
            empty=ocl.literal(0, dtype),
            max_snippet="return fmax(v1, v2);",
            sum_snippet="return v1 + v2;")

        assert "#define BLOCK_SIZE 64" in src
        assert ("cl_khr_fp64" in src) == (numpy.dtype(dtype) == numpy.float64)
        for name in ['max_entries', 'sum_squares', 'column_sums', 'row_sums']:
            assert "__kernel void " + name + "(" in src

    def test_find_devices(self, ocl):
        # Depends on the system, but must not raise
        assert isinstance(ocl.find_devices(), list)

    @pytest.fixture
    def devices(self, ocl):
        devices = ocl.find_devices()
        if len(devices) == 0:
            pytest.skip("No OpenCL devices found")
        return devices

    @pytest.mark.parametrize("dtype", [numpy.float32, numpy.float64], ids=["float32", "float64"])
    @pytest.mark.parametrize("block_size", [1, 37, 64])
    def test_build(self, ocl, devices, dtype, block_size):
        for device in devices:
            engine = ocl.Engine(device=device)
            if not engine.device_params.supports_dtype(dtype):
                continue
            program = engine._program(dtype, block_size)
            for name in ['max_entries', 'sum_squares', 'column_sums', 'row_sums']:
                assert isinstance(getattr(program, name), ocl.cl.Kernel)

    def test_kernel_cache(self, ocl, devices):
        engine = ocl.Engine(device=devices[0])
        m = DenseMatrix.from_array([[1, -2], [3, 4]])

        kernel, block_size = engine._prepare('max_entries', m.dtype, 2, m.rows * m.cols)
        assert block_size in (1, 2)
        for _ in range(3):
            assert engine.max_norm(m, 2) == 4
            assert engine._prepare('max_entries', m.dtype, 2, m.rows * m.cols)[0] is kernel

        assert len(engine._programs) == 1
        assert list(engine._kernels) == [(numpy.dtype(numpy.float32), block_size, 'max_entries')]
