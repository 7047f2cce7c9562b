"""
Core components of the password swarm.

- fitness: heuristic complexity score
- particle: candidate string plus search state
- swarm: the PSO engine
"""

from .fitness import FitnessBreakdown, evaluate, fitness
from .particle import Particle
from .swarm import ParticleSwarm, generate

__all__ = ["FitnessBreakdown", "evaluate", "fitness", "Particle", "ParticleSwarm", "generate"]
