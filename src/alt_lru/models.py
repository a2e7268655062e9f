"""Result models for the benchmark and validation tools."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


class BenchmarkResult(BaseModel):
    """Outcome of one promote benchmark run."""

    capacity: int
    iterations: int
    threads: int = 1
    puts: int = 0
    gets: int = 0
    hits: int = 0
    misses: int = 0
    elapsed_seconds: float = 0.0
    final_count: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ops_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return (self.puts + self.gets) / self.elapsed_seconds


class ValidationResult(BaseModel):
    """Outcome of replaying a random workload against a reference model."""

    capacity: int
    seed: int
    operations_requested: int
    operations_run: int = 0
    op_counts: dict[str, int] = Field(default_factory=dict)
    mismatch: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ok(self) -> bool:
        return self.mismatch is None
