"""
pso_password/trace.py

Per-iteration trace of a swarm run.

The engine never prints. It hands a TraceRecord to whatever sink the
caller injected: a list collector, a logger, or any callable.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 30


@dataclass(frozen=True)
class ParticleSnapshot:
    """A particle's current string and fitness at the end of an iteration."""
    current: str
    fitness: float

    def to_dict(self) -> Dict[str, Any]:
        return {"current": self.current, "fitness": self.fitness}


@dataclass(frozen=True)
class TraceRecord:
    """
    State of the swarm after one iteration.

    iteration is 0-based. best_fitness is the current fitness of the
    particle chosen as global best this iteration.
    """
    iteration: int
    best_fitness: float
    global_best: str
    particles: List[ParticleSnapshot] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "iteration": self.iteration,
            "best_fitness": self.best_fitness,
            "global_best": self.global_best,
            "particles": [p.to_dict() for p in self.particles],
        }


TraceSink = Callable[[TraceRecord], None]


def format_trace_record(record: TraceRecord) -> str:
    """Render a record as the verbose console block."""
    lines = [
        f"Iteration {record.iteration + 1} - Best Fitness = {record.best_fitness:.1f}",
        f"globalBest: {record.global_best}",
        SEPARATOR,
    ]
    for i, snapshot in enumerate(record.particles):
        lines.append(
            f"Particle {i + 1:02d}: {snapshot.current} \t(fitness: {snapshot.fitness:.1f})"
        )
    return "\n".join(lines) + "\n"


class TraceRecorder:
    """Sink that keeps every record it receives."""

    def __init__(self):
        self.records: List[TraceRecord] = []

    def __call__(self, record: TraceRecord) -> None:
        self.records.append(record)

    def __len__(self) -> int:
        return len(self.records)

    def best_fitness_curve(self) -> List[float]:
        return [r.best_fitness for r in self.records]

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self.records]


class LoggingTraceSink:
    """Sink that writes formatted records to a logger."""

    def __init__(self, target: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = target or logger
        self.level = level

    def __call__(self, record: TraceRecord) -> None:
        self.logger.log(self.level, format_trace_record(record))
