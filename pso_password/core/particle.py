"""
core/particle.py

A particle is one candidate string plus its search state.

Strings are immutable snapshots: moving a particle builds a new string,
and remembering a personal best is plain reassignment.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import math

import numpy as np

# Printable, non-space ASCII
MIN_CODE = 33
MAX_CODE = 126


def clamp_code(code: int) -> int:
    return min(max(code, MIN_CODE), MAX_CODE)


def round_half_away(value: float) -> int:
    """Round to nearest integer, halves away from zero (C round semantics)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def random_string(length: int, rng: np.random.Generator) -> str:
    """Draw `length` uniform printable characters."""
    codes = rng.integers(MIN_CODE, MAX_CODE + 1, size=length)
    return "".join(chr(int(c)) for c in codes)


@dataclass
class Particle:
    """
    What a particle IS during a run.

    velocity is one scalar shared by every character position.
    """
    current: str
    current_fitness: float
    personal_best: str
    personal_best_fitness: float
    velocity: float = 0.0

    @classmethod
    def random(
        cls,
        length: int,
        rng: np.random.Generator,
        score: Callable[[str], float],
    ) -> "Particle":
        """Fresh particle at a random position with zero velocity."""
        current = random_string(length, rng)
        current_fitness = score(current)
        return cls(
            current=current,
            current_fitness=current_fitness,
            personal_best=current,
            personal_best_fitness=current_fitness,
        )

    def move(
        self,
        global_best: str,
        inertia_weight: float,
        personal_best_weight: float,
        global_best_weight: float,
        rng: np.random.Generator,
    ) -> None:
        """
        Move every character toward the personal and global bests.

        Positions are updated left to right and the velocity carries over
        from one position to the next within the same move.
        """
        codes = []
        for i, char in enumerate(self.current):
            code = ord(char)
            r1, r2 = rng.random(2)
            cognitive = personal_best_weight * r1 * (ord(self.personal_best[i]) - code)
            social = global_best_weight * r2 * (ord(global_best[i]) - code)

            self.velocity = inertia_weight * self.velocity + cognitive + social
            codes.append(clamp_code(code + round_half_away(self.velocity)))

        self.current = "".join(chr(int(c)) for c in codes)

    def evaluate(self, score: Callable[[str], float]) -> bool:
        """
        Rescore the current string and keep it if it strictly beats the
        personal best. Returns True when the personal best improved.
        """
        self.current_fitness = score(self.current)
        if self.current_fitness > self.personal_best_fitness:
            self.personal_best = self.current
            self.personal_best_fitness = self.current_fitness
            return True
        return False

    def __repr__(self) -> str:
        return (
            f"Particle(current={self.current!r}, "
            f"fitness={self.current_fitness:.1f}, "
            f"best={self.personal_best_fitness:.1f}, "
            f"velocity={self.velocity:.2f})"
        )
