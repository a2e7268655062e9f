"""Benchmark and validation workloads driven through the public cache API."""

from __future__ import annotations

import random
import time
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import structlog

from alt_lru.cache import LRUCache
from alt_lru.exceptions import InvariantViolationError
from alt_lru.models import BenchmarkResult, ValidationResult

logger = structlog.get_logger()

_MISSING = object()


def _promote_worker(cache: LRUCache[int, int], keys: Sequence[int]) -> int:
    """Put every key, then read every key back. Returns the hit count."""
    for key in keys:
        cache.put(key, 1)
    hits = 0
    for key in keys:
        found, _ = cache.try_get(key)
        if found:
            hits += 1
    return hits


def run_promote_benchmark(capacity: int, iterations: int, threads: int = 1) -> BenchmarkResult:
    """Put keys ``1..iterations`` into a fresh cache and read them back.

    With ``threads > 1`` the key range is split into contiguous chunks,
    one per worker thread.

    Raises:
        InvalidCapacityError: If capacity is not positive
    """
    cache: LRUCache[int, int] = LRUCache(capacity)
    keys = list(range(1, iterations + 1))
    log = logger.bind(capacity=capacity, iterations=iterations, threads=threads)
    log.debug("promote benchmark starting")

    start = time.perf_counter()
    if threads <= 1:
        hits = _promote_worker(cache, keys)
    else:
        chunk = -(-len(keys) // threads)
        chunks = [keys[i : i + chunk] for i in range(0, len(keys), chunk)]
        with ThreadPoolExecutor(max_workers=threads) as pool:
            hits = sum(pool.map(lambda part: _promote_worker(cache, part), chunks))
    elapsed = time.perf_counter() - start

    result = BenchmarkResult(
        capacity=capacity,
        iterations=iterations,
        threads=threads,
        puts=len(keys),
        gets=len(keys),
        hits=hits,
        misses=len(keys) - hits,
        elapsed_seconds=elapsed,
        final_count=cache.count,
    )
    log.info(
        "promote benchmark finished",
        hits=result.hits,
        misses=result.misses,
        elapsed_seconds=round(elapsed, 6),
        ops_per_second=round(result.ops_per_second, 1),
    )
    return result


def _check_step(
    cache: LRUCache[int, int], model: OrderedDict[int, int], step: int, op: str
) -> str | None:
    """Compare the cache against the reference model after one operation."""
    try:
        cache.check_invariants()
    except InvariantViolationError as e:
        return f"step {step} ({op}): {e}"

    expected = list(reversed(model))
    actual = cache.recency_keys()
    if actual != expected:
        return f"step {step} ({op}): recency order {actual} != expected {expected}"
    return None


def run_validation(capacity: int, operations: int, seed: int = 0) -> ValidationResult:
    """Replay a random workload against the cache and an OrderedDict model.

    The model keeps its most recently used key last. Stops at the first
    divergence and records it in ``mismatch``.
    """
    cache: LRUCache[int, int] = LRUCache(capacity)
    model: OrderedDict[int, int] = OrderedDict()
    rng = random.Random(seed)
    key_space = capacity * 2
    result = ValidationResult(capacity=capacity, seed=seed, operations_requested=operations)
    log = logger.bind(capacity=capacity, seed=seed)

    ops = ["put", "get", "remove", "clear"]
    weights = [50, 35, 14, 1]

    for step in range(operations):
        op = rng.choices(ops, weights)[0]
        key = rng.randrange(key_space)
        result.op_counts[op] = result.op_counts.get(op, 0) + 1

        if op == "put":
            value = rng.randrange(1_000_000)
            cache.put(key, value)
            if key in model:
                model.move_to_end(key)
            elif len(model) >= capacity:
                model.popitem(last=False)
            model[key] = value
        elif op == "get":
            found, value = cache.try_get(key)
            expected = model.get(key, _MISSING)
            if expected is not _MISSING:
                model.move_to_end(key)
            if found != (expected is not _MISSING) or (found and value != expected):
                result.mismatch = (
                    f"step {step} (get {key}): got {(found, value)}, "
                    f"expected {expected if expected is not _MISSING else 'miss'}"
                )
        elif op == "remove":
            removed = cache.remove(key)
            if removed != (model.pop(key, _MISSING) is not _MISSING):
                result.mismatch = f"step {step} (remove {key}): returned {removed}"
        else:
            cache.clear()
            model.clear()

        result.operations_run = step + 1
        if result.mismatch is None:
            result.mismatch = _check_step(cache, model, step, op)
        if result.mismatch is not None:
            log.warning("validation mismatch", mismatch=result.mismatch)
            break

    log.info("validation finished", operations_run=result.operations_run, ok=result.ok)
    return result
