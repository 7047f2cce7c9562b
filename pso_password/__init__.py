"""
PSO-Password: Particle Swarm Optimization over printable strings

A small search engine that evolves fixed-length strings toward a heuristic
"complexity" score. The output is NOT cryptographically secure.
"""

from .config import ConfigurationError, SwarmConfig, load_config
from .core import ParticleSwarm, Particle, fitness, generate
from .trace import TraceRecord, TraceRecorder

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "SwarmConfig",
    "load_config",
    "ParticleSwarm",
    "Particle",
    "fitness",
    "generate",
    "TraceRecord",
    "TraceRecorder",
]
