"""
This example compares the norms calculated by the sequential engine
with those calculated by every available parallel engine.
"""

import numpy

from normbench import backends, parallel, sequential
from normbench.matrix import DenseMatrix


def engines():
    yield backends.get_backend(backends.thread_id()).Engine()

    if backends.supports_backend(backends.ocl_id()):
        ocl = backends.get_backend(backends.ocl_id())
        for device in ocl.find_devices():
            yield ocl.Engine(device=device)


def demo_norms():

    rng = numpy.random.default_rng(123456)
    arr = rng.uniform(-1, 1, size=(500, 300)).astype(numpy.float32)

    available = list(engines())

    with DenseMatrix.from_array(arr) as matrix:
        for name in ['max_norm', 'frobenius_norm', 'one_induced_norm', 'inf_induced_norm']:
            print(name)
            print("  sequential:", getattr(sequential, name)(matrix))
            for engine in available:
                # for the OpenCL engine the parallelism is the work group size
                print("  " + str(engine) + ":", getattr(parallel, name)(matrix, 64, engine))


if __name__ == '__main__':
    demo_norms()
