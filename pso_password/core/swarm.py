"""
core/swarm.py

The swarm engine.

Each iteration has two phases separated by a barrier:
1. Move and rescore every particle against last iteration's global best
2. Reselect the global best from the freshly scored swarm

Selection looks at each particle's *current* fitness, but what gets
propagated is the winner's *personal best* string. The two can differ
when a particle has just regressed. propagate_current switches to the
conventional variant that propagates the current string.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
import logging

import numpy as np

from ..config import SwarmConfig
from ..trace import ParticleSnapshot, TraceRecord, TraceSink
from .fitness import fitness
from .particle import Particle

logger = logging.getLogger(__name__)


class ParticleSwarm:
    """
    Particle Swarm Optimization over fixed-length printable strings.

    Lifecycle: initialize() -> step()/select_global_best() per iteration.
    run() does all of it and returns the final global best.
    """

    def __init__(self, config: Optional[SwarmConfig] = None):
        self.config = (config or SwarmConfig()).validate()
        self.rng = np.random.default_rng(self.config.seed)

        self.particles: List[Particle] = []
        self.global_best = ""
        self.best_index = 0
        self.iteration = 0
        self.history: List[Dict[str, Any]] = []

    def score(self, password: str) -> float:
        return fitness(password, classify_last_char=self.config.classify_last_char)

    # ==================== Phases ====================

    def initialize(self) -> List[Particle]:
        """Create the swarm at random positions and pick the first global best."""
        self.particles = [
            Particle.random(self.config.length, self.rng, self.score)
            for _ in range(self.config.num_particles)
        ]
        self.iteration = 0
        self.history = []
        self.global_best = self.select_global_best()
        return self.particles

    def inertia_at(self, iteration: int) -> float:
        """Inertia decays linearly from inertia_weight toward 0."""
        w = self.config.inertia_weight
        if self.config.max_iterations <= 0:
            return w
        return w - (w / self.config.max_iterations) * iteration

    def step(self, inertia_weight: float) -> int:
        """
        Move and rescore every particle. Returns how many personal bests improved.

        Every particle reads the same global best, fixed before the step.
        """
        global_best = self.global_best
        improved = 0
        for particle in self.particles:
            particle.move(
                global_best,
                inertia_weight,
                self.config.personal_best_weight,
                self.config.global_best_weight,
                self.rng,
            )
            if particle.evaluate(self.score):
                improved += 1
        return improved

    def select_global_best(self) -> str:
        """Pick the particle with the highest current fitness (first wins ties)."""
        best_index = 0
        for i in range(1, len(self.particles)):
            if self.particles[i].current_fitness > self.particles[best_index].current_fitness:
                best_index = i
        self.best_index = best_index

        winner = self.particles[best_index]
        return winner.current if self.config.propagate_current else winner.personal_best

    # ==================== Run ====================

    def run(self, trace_sink: Optional[TraceSink] = None) -> str:
        """Initialize, iterate max_iterations times, return the global best."""
        self.rng = np.random.default_rng(self.config.seed)
        self.initialize()

        logger.info(
            f"Starting swarm: length={self.config.length}, "
            f"particles={self.config.num_particles}, "
            f"iterations={self.config.max_iterations}"
        )

        for iteration in range(self.config.max_iterations):
            inertia_weight = self.inertia_at(iteration)
            improved = self.step(inertia_weight)
            self.global_best = self.select_global_best()
            self.iteration = iteration + 1

            best_fitness = self.particles[self.best_index].current_fitness
            self._record(iteration, inertia_weight, best_fitness, improved)

            if trace_sink is not None:
                trace_sink(self._trace_record(iteration, best_fitness))

        _, best_fitness = self.get_best()
        logger.info(f"Swarm finished after {self.iteration} iterations, fitness={best_fitness:.1f}")
        return self.global_best

    def _record(
        self,
        iteration: int,
        inertia_weight: float,
        best_fitness: float,
        improved: int,
    ) -> None:
        current = [p.current_fitness for p in self.particles]
        entry = {
            "iteration": iteration,
            "inertia_weight": inertia_weight,
            "best_fitness": best_fitness,
            "mean_fitness": float(np.mean(current)),
            "max_personal_best_fitness": self.max_personal_best_fitness(),
            "improvements": improved,
        }
        self.history.append(entry)
        logger.debug(f"Iteration {iteration + 1}: best={best_fitness:.1f} global_best={self.global_best}")

    def _trace_record(self, iteration: int, best_fitness: float) -> TraceRecord:
        return TraceRecord(
            iteration=iteration,
            best_fitness=best_fitness,
            global_best=self.global_best,
            particles=[ParticleSnapshot(p.current, p.current_fitness) for p in self.particles],
        )

    # ==================== Inspection ====================

    def max_personal_best_fitness(self) -> float:
        return max(p.personal_best_fitness for p in self.particles)

    def get_best(self) -> Tuple[str, float]:
        """Return the global best string and its fitness."""
        return self.global_best, self.score(self.global_best)

    def get_statistics(self) -> Dict[str, Any]:
        global_best, best_fitness = self.get_best()
        return {
            "iteration": self.iteration,
            "num_particles": len(self.particles),
            "global_best": global_best,
            "global_best_fitness": best_fitness,
            "max_personal_best_fitness": self.max_personal_best_fitness() if self.particles else 0.0,
            "algorithm": self.__class__.__name__,
        }


def generate(
    length: int = 16,
    num_particles: int = 10,
    max_iterations: int = 100,
    trace_sink: Optional[TraceSink] = None,
    **options: Any,
) -> str:
    """
    Run one swarm and return the best string it found.

    Extra keyword options are SwarmConfig fields (seed, weights, toggles).
    Raises ConfigurationError before any work if the parameters are invalid.
    """
    config = SwarmConfig.from_dict(dict(
        length=length,
        num_particles=num_particles,
        max_iterations=max_iterations,
        **options,
    ))
    return ParticleSwarm(config).run(trace_sink=trace_sink)
