import logging

import pytest

from normbench.config import DEFAULT_SEED, BenchmarkConfig
from normbench.logging_config import setup_logging


def test_defaults():
    config = BenchmarkConfig()
    assert (config.rows, config.cols) == (10, 10)
    assert config.seed == DEFAULT_SEED
    assert config.parallelism == 32
    assert config.backend == 'threads'
    assert config.print_limit == 20
    assert config.logging_level == logging.WARNING


def test_logging_level():
    assert BenchmarkConfig(log_level="debug").logging_level == logging.DEBUG


@pytest.mark.parametrize("kwds", [
    dict(rows=0),
    dict(cols=-1),
    dict(parallelism=0),
    dict(backend='cuda'),
    dict(log_level='LOUD'),
    ])
def test_invalid(kwds):
    with pytest.raises(ValueError):
        BenchmarkConfig(**kwds)


def test_setup_logging(tmp_path):
    log_file = tmp_path / "log.txt"
    logger = logging.getLogger("normbench")
    try:
        setup_logging(logging.DEBUG, str(log_file))
        setup_logging(logging.DEBUG, str(log_file))
        assert len(logger.handlers) == 2
        assert logger.level == logging.DEBUG

        logging.getLogger("normbench.test").debug("message")
        for handler in logger.handlers:
            handler.flush()
        assert "normbench.test - DEBUG - message" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
