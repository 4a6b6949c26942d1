"""
Configuration of the benchmark harness.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from normbench.backends import backend_ids

DEFAULT_SEED = 123456


@dataclass
class BenchmarkConfig:
    """
    Configuration of a benchmark run.

    Attributes:
        rows: Number of rows of the random matrix
        cols: Number of columns of the random matrix
        seed: Seed of the random number generator
        time_seed: If True, ``seed`` is ignored and the number of milliseconds
            since the epoch is used instead
        show_times: Report the time taken by every norm call
        parallelism: Number of workers (threads per block for the OpenCL backend)
        backend: Identifier of the parallel backend
        print_limit: The matrix is printed if both its extents are below this value
        log_level: Name of the logging level of the ``normbench`` logger
        log_file: Optional path to save logs to
    """

    rows: int = 10
    cols: int = 10
    seed: int = DEFAULT_SEED
    time_seed: bool = False
    show_times: bool = False
    parallelism: int = 32
    backend: str = "threads"
    print_limit: int = 20
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ValueError(
                f"Matrix extents must be positive, got {self.rows}x{self.cols}")
        if self.parallelism < 1:
            raise ValueError(f"parallelism must be positive, got {self.parallelism}")
        if self.backend not in backend_ids():
            raise ValueError(
                f"Unknown backend {self.backend!r}, expected one of {backend_ids()}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level {self.log_level!r}")

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())
