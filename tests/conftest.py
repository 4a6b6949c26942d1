import re

import pytest

from normbench import backends


def pytest_addoption(parser):
    parser.addoption("--backend", dest="backend", action="store",
        help="Parallel backend to test",
        default="supported", choices=["supported"] + backends.backend_ids())
    parser.addoption("--device-include-mask", dest="device_include_mask", action="append",
        help="Run tests on matching OpenCL devices only",
        default=[])
    parser.addoption("--device-exclude-mask", dest="device_exclude_mask", action="append",
        help="Skip matching OpenCL devices",
        default=[])


def name_matches_masks(name, includes, excludes):
    if len(includes) > 0:
        for include in includes:
            if re.search(include, name):
                break
        else:
            return False

    if len(excludes) > 0:
        for exclude in excludes:
            if re.search(exclude, name):
                return False

    return True


class EngineCreator:

    def __init__(self, backend_id, dnum=None, device=None):
        self.backend_id = backend_id
        self.device = device
        self.id = backend_id if dnum is None else backend_id + "," + str(dnum)
        self._engine = None

    def __call__(self):
        # Engines are reused between tests to avoid recompiling the kernels.
        if self._engine is None:
            backend = backends.get_backend(self.backend_id)
            if self.device is None:
                self._engine = backend.Engine()
            else:
                self._engine = backend.Engine(device=self.device)
        return self._engine

    def __str__(self):
        return self.id


def get_backend_ids(config):
    conf_backend_id = config.option.backend

    if conf_backend_id == "supported":
        return backends.supported_backend_ids()

    if not backends.supports_backend(conf_backend_id):
        raise Exception("Requested backend " + conf_backend_id + " is not supported.")
    return [conf_backend_id]


def get_engine_creators(config):
    """
    Create a list of engine creators, based on command line options
    and the availability of backends and devices.
    """
    includes = config.option.device_include_mask
    excludes = config.option.device_exclude_mask

    ecs = []
    for backend_id in get_backend_ids(config):
        if backend_id == backends.ocl_id():
            backend = backends.get_backend(backend_id)
            for dnum, device in enumerate(backend.find_devices()):
                if name_matches_masks(device.name, includes, excludes):
                    ecs.append(EngineCreator(backend_id, dnum=dnum, device=device))
        else:
            ecs.append(EngineCreator(backend_id))

    return ecs


_engine_creators = {}


def pytest_generate_tests(metafunc):
    if 'engine' in metafunc.fixturenames:
        config = metafunc.config
        if id(config) not in _engine_creators:
            _engine_creators[id(config)] = get_engine_creators(config)
        ecs = _engine_creators[id(config)]
        metafunc.parametrize('engine', ecs, ids=[str(ec) for ec in ecs], indirect=True)


@pytest.fixture
def engine(request):
    return request.param()
