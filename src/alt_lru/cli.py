"""CLI command handling.

Provides the bench and validate commands.
"""

from __future__ import annotations

import argparse
import logging
import sys

import structlog
from pydantic import ValidationError

from alt_lru.benchmark import run_promote_benchmark, run_validation
from alt_lru.config import Settings, get_settings
from alt_lru.exceptions import CacheError

logger = structlog.get_logger()


def configure_logging(verbose: bool = False, level: str = "INFO") -> None:
    """Configure structlog for CLI output.

    Log lines go to stderr so stdout carries only command output.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else getattr(logging, level, logging.INFO))
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer() if verbose else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else getattr(logging, level, logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # Each command reconfigures; cached loggers would keep a stale stream.
        cache_logger_on_first_use=False,
    )


def _load_settings() -> Settings | None:
    try:
        return get_settings()
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return None


def cmd_bench(args: argparse.Namespace) -> int:
    """Run the bench command."""
    settings = _load_settings()
    if settings is None:
        return 1
    configure_logging(args.verbose, settings.log_level)

    capacity = args.capacity or settings.capacity
    iterations = args.iterations or settings.iterations
    threads = args.threads or settings.threads

    try:
        result = run_promote_benchmark(capacity, iterations, threads)
    except CacheError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(result.model_dump_json())
        return 0

    print(f"Promote benchmark: capacity={result.capacity} keys={result.iterations} threads={result.threads}")
    print(f"  puts:        {result.puts:,}")
    print(f"  gets:        {result.gets:,} (hits {result.hits:,}, misses {result.misses:,})")
    print(f"  final count: {result.final_count:,}")
    print(f"  elapsed:     {result.elapsed_seconds:.4f}s")
    print(f"  throughput:  {result.ops_per_second:,.0f} ops/s")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Run the validate command (random workload against a reference model)."""
    settings = _load_settings()
    if settings is None:
        return 1
    configure_logging(args.verbose, settings.log_level)

    capacity = args.capacity or settings.capacity
    operations = args.operations or settings.operations
    seed = args.seed if args.seed is not None else settings.seed

    print(f"Validating LRU cache: capacity={capacity} operations={operations} seed={seed}")
    try:
        result = run_validation(capacity, operations, seed)
    except CacheError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for op, count in sorted(result.op_counts.items()):
        print(f"  {op}: {count:,}")

    if not result.ok:
        print(f"FAILED after {result.operations_run:,} operations: {result.mismatch}")
        return 1

    print(f"OK: {result.operations_run:,} operations matched the reference model")
    return 0


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="alt-lru",
        description="Thread-safe LRU cache - benchmark and validation tools",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # bench
    bench_parser = subparsers.add_parser(
        "bench",
        help="Put a key range into the cache and read it back",
    )
    bench_parser.add_argument("--capacity", type=_positive_int, default=None, help="Cache capacity (default: ALT_LRU_CAPACITY or 30)")
    bench_parser.add_argument("--iterations", type=_positive_int, default=None, help="Number of keys (default: ALT_LRU_ITERATIONS or 10000)")
    bench_parser.add_argument("--threads", type=_positive_int, default=None, help="Worker threads (default: ALT_LRU_THREADS or 1)")
    bench_parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    bench_parser.add_argument("--verbose", action="store_true", help="Enable verbose output")

    # validate
    validate_parser = subparsers.add_parser(
        "validate",
        help="Check the cache against a reference model with a random workload",
    )
    validate_parser.add_argument("--capacity", type=_positive_int, default=None, help="Cache capacity (default: ALT_LRU_CAPACITY or 30)")
    validate_parser.add_argument("--operations", type=_positive_int, default=None, help="Operations to replay (default: ALT_LRU_OPERATIONS or 5000)")
    validate_parser.add_argument("--seed", type=int, default=None, help="Random seed (default: ALT_LRU_SEED or 0)")
    validate_parser.add_argument("--verbose", action="store_true", help="Enable verbose output")

    return parser
