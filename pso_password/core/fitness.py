"""
core/fitness.py

Heuristic "complexity" score for a candidate string.

Rewards large jumps between neighbouring character codes and a mix of
character classes. Punishes repeated characters. Higher is better.
The score is a proxy only: it says nothing about real password strength.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict
import string

import numpy as np

CLASS_BONUS = 0.25               # Per character class present
ADJACENT_REPEAT_PENALTY = 0.2    # s[i] == s[i + 1]
ANY_REPEAT_PENALTY = 0.05        # s[i] == s[j] for any j > i


def classify(char: str) -> str:
    """Character class of a single ASCII character, in priority order."""
    if char in string.ascii_uppercase:
        return "uppercase"
    if char in string.ascii_lowercase:
        return "lowercase"
    if char in string.digits:
        return "number"
    return "symbol"


@dataclass(frozen=True)
class FitnessBreakdown:
    """
    The terms that make up a fitness score.

    score = (length + randomness) * variety_bonus * repetition_penalty
    """

    length: int
    randomness: float
    variety_bonus: float
    repetition_penalty: float

    @property
    def score(self) -> float:
        return (self.length + self.randomness) * self.variety_bonus * self.repetition_penalty

    def to_dict(self) -> Dict[str, Any]:
        return {
            "length": self.length,
            "randomness": self.randomness,
            "variety_bonus": self.variety_bonus,
            "repetition_penalty": self.repetition_penalty,
            "score": self.score,
        }


def evaluate(password: str, classify_last_char: bool = False) -> FitnessBreakdown:
    """
    Break a string's fitness down into its terms.

    Only characters 0..L-2 are classified unless classify_last_char is set,
    so a one-character string never earns a variety bonus by default.
    """
    length = len(password)
    codes = np.fromiter((ord(c) for c in password), dtype=np.int64, count=length)

    # Sum of absolute code jumps between neighbours
    steps = np.diff(codes)
    randomness = float(np.abs(steps).sum())

    classified = password if classify_last_char else password[:-1]
    present = {classify(c) for c in classified}
    variety_bonus = CLASS_BONUS * len(present)

    # Terms come off one at a time in string order.
    # Adjacent duplicates are also counted as "any later" duplicates.
    repetition_penalty = 1.0
    for i in range(length - 1):
        if steps[i] == 0:
            repetition_penalty -= ADJACENT_REPEAT_PENALTY
        for _ in range(int(np.count_nonzero(codes[i + 1:] == codes[i]))):
            repetition_penalty -= ANY_REPEAT_PENALTY
    repetition_penalty = max(repetition_penalty, 0.0)

    return FitnessBreakdown(
        length=length,
        randomness=randomness,
        variety_bonus=variety_bonus,
        repetition_penalty=repetition_penalty,
    )


def fitness(password: str, classify_last_char: bool = False) -> float:
    """Score a candidate string. Pure and never negative."""
    return evaluate(password, classify_last_char=classify_last_char).score
