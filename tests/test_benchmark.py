"""Tests for benchmark.py"""

from __future__ import annotations

import pytest

from alt_lru.benchmark import run_promote_benchmark, run_validation
from alt_lru.exceptions import InvalidCapacityError
from alt_lru.models import BenchmarkResult, ValidationResult


class TestPromoteBenchmark:
    """run_promote_benchmark"""

    def test_single_thread_counts(self) -> None:
        """Only the last `capacity` keys survive to be read back"""
        result = run_promote_benchmark(capacity=30, iterations=100)

        assert result.puts == 100
        assert result.gets == 100
        assert result.hits == 30
        assert result.misses == 70
        assert result.final_count == 30
        assert result.elapsed_seconds > 0
        assert result.ops_per_second > 0

    def test_all_hits_when_capacity_covers_keys(self) -> None:
        """Nothing is evicted when every key fits"""
        result = run_promote_benchmark(capacity=50, iterations=50)
        assert result.hits == 50
        assert result.misses == 0

    def test_multi_thread(self) -> None:
        """Threaded runs account for every key and respect capacity"""
        result = run_promote_benchmark(capacity=30, iterations=1000, threads=4)

        assert result.threads == 4
        assert result.hits + result.misses == 1000
        assert result.final_count == 30

    def test_invalid_capacity(self) -> None:
        """Capacity validation propagates from the cache"""
        with pytest.raises(InvalidCapacityError):
            run_promote_benchmark(capacity=0, iterations=10)


class TestValidation:
    """run_validation"""

    @pytest.mark.parametrize("capacity", [1, 3, 16])
    def test_matches_reference_model(self, capacity: int) -> None:
        """The cache agrees with an OrderedDict model step by step"""
        result = run_validation(capacity=capacity, operations=1500, seed=capacity)

        assert result.ok, result.mismatch
        assert result.operations_run == 1500
        assert sum(result.op_counts.values()) == 1500

    def test_same_seed_same_workload(self) -> None:
        """The workload is reproducible from the seed"""
        a = run_validation(capacity=4, operations=300, seed=9)
        b = run_validation(capacity=4, operations=300, seed=9)
        assert a.op_counts == b.op_counts


class TestModels:
    """Result models"""

    def test_ops_per_second_without_elapsed_time(self) -> None:
        """Zero elapsed time reports zero throughput"""
        result = BenchmarkResult(capacity=1, iterations=1, puts=1, gets=1)
        assert result.ops_per_second == 0.0

    def test_json_includes_computed_fields(self) -> None:
        """Serialized results carry ok and ops_per_second"""
        assert '"ok":true' in ValidationResult(capacity=1, seed=0, operations_requested=0).model_dump_json()
        assert '"ops_per_second"' in BenchmarkResult(capacity=1, iterations=1).model_dump_json()
