"""Command-line interface.

Computes the norms of a random matrix with both engines and reports the results.

Run with: python -m normbench -n 100 -m 200 -t
"""

import argparse
import sys

from normbench import backends
from normbench.benchmark import format_report, populate_random, run_benchmark, time_seed
from normbench.config import DEFAULT_SEED, BenchmarkConfig
from normbench.logging_config import setup_logging
from normbench.matrix import allocate, format_matrix


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="normbench",
        description="Benchmark sequential and parallel matrix norm calculations")
    parser.add_argument("-n", dest="rows", type=int, default=10, help="number of rows")
    parser.add_argument("-m", dest="cols", type=int, default=10, help="number of columns")
    parser.add_argument(
        "-s", dest="time_seed", action="store_true",
        help="seed the random number generator with the current time")
    parser.add_argument(
        "--seed", type=int, default=DEFAULT_SEED,
        help="seed of the random number generator (ignored with -s)")
    parser.add_argument(
        "-t", dest="show_times", action="store_true", help="report the time of every call")
    parser.add_argument(
        "-p", dest="parallelism", type=int, default=32,
        help="number of parallel workers (threads per block for the OpenCL backend)")
    parser.add_argument(
        "-b", "--backend", default=backends.thread_id(), choices=backends.backend_ids(),
        help="parallel backend")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--log-file", default=None, help="save log records to this file")

    args = parser.parse_args(argv)

    try:
        config = BenchmarkConfig(
            rows=args.rows,
            cols=args.cols,
            seed=args.seed,
            time_seed=args.time_seed,
            show_times=args.show_times,
            parallelism=args.parallelism,
            backend=args.backend,
            log_level="DEBUG" if args.verbose else "WARNING",
            log_file=args.log_file)
    except ValueError as e:
        parser.error(str(e))

    return config


def main(argv=None) -> int:
    config = parse_args(argv)
    setup_logging(config.logging_level, config.log_file)

    seed = time_seed() if config.time_seed else config.seed
    engine = backends.get_backend(config.backend).Engine()

    with allocate(config.rows, config.cols) as matrix:
        populate_random(matrix, seed)
        results = run_benchmark(matrix, config.parallelism, engine)

        if config.rows < config.print_limit and config.cols < config.print_limit:
            sys.stdout.write(format_matrix(matrix))

    sys.stdout.write(format_report(results, str(engine).upper(), config.show_times))
    return 0


if __name__ == "__main__":
    sys.exit(main())
