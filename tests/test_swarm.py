"""
Tests for core/swarm.py

Swarm initialization, iteration, global-best selection and generate().
"""

import pytest
import numpy as np

from pso_password.config import ConfigurationError, SwarmConfig
from pso_password.core.fitness import fitness
from pso_password.core.particle import MAX_CODE, MIN_CODE, Particle
from pso_password.core.swarm import ParticleSwarm, generate
from pso_password.trace import TraceRecorder


def make_particle(current: str, personal_best: str) -> Particle:
    return Particle(
        current=current,
        current_fitness=fitness(current),
        personal_best=personal_best,
        personal_best_fitness=fitness(personal_best),
    )


class TestInitialize:
    """Tests for swarm initialization."""

    def test_creates_requested_particles(self):
        swarm = ParticleSwarm(SwarmConfig(length=8, num_particles=6, seed=42))
        particles = swarm.initialize()

        assert len(particles) == 6
        for p in particles:
            assert len(p.current) == 8
            assert p.personal_best == p.current
            assert p.velocity == 0.0

    def test_initial_global_best_is_fittest(self):
        swarm = ParticleSwarm(SwarmConfig(length=8, num_particles=6, seed=42))
        swarm.initialize()

        best = max(swarm.particles, key=lambda p: p.current_fitness)
        assert fitness(swarm.global_best) == best.current_fitness

    def test_invalid_config_rejected_before_allocation(self):
        with pytest.raises(ConfigurationError):
            ParticleSwarm(SwarmConfig(num_particles=0))


class TestInertia:
    """Tests for the inertia schedule."""

    def test_linear_decay(self):
        swarm = ParticleSwarm(SwarmConfig(max_iterations=100))
        assert swarm.inertia_at(0) == pytest.approx(0.5)
        assert swarm.inertia_at(50) == pytest.approx(0.25)
        assert swarm.inertia_at(99) == pytest.approx(0.005)

    def test_zero_iterations(self):
        swarm = ParticleSwarm(SwarmConfig(max_iterations=0))
        assert swarm.inertia_at(0) == pytest.approx(0.5)


class TestSelectGlobalBest:
    """Selection uses current fitness, propagation uses personal best."""

    def test_propagates_personal_best_of_fittest_current(self):
        swarm = ParticleSwarm(SwarmConfig(length=4, num_particles=2))
        swarm.particles = [
            make_particle("abcd", "abcd"),   # current 1.75
            make_particle("abce", "aA1!"),   # current 2.0, personal best 51.0
        ]

        assert swarm.select_global_best() == "aA1!"
        assert swarm.best_index == 1

    def test_selection_ignores_personal_best_fitness(self):
        swarm = ParticleSwarm(SwarmConfig(length=4, num_particles=2))
        swarm.particles = [
            make_particle("aaaa", "aA1!"),   # weak current, strong personal best
            make_particle("abcd", "abcd"),
        ]

        assert swarm.select_global_best() == "abcd"

    def test_propagate_current_variant(self):
        swarm = ParticleSwarm(SwarmConfig(length=4, num_particles=2, propagate_current=True))
        swarm.particles = [
            make_particle("abcd", "abcd"),
            make_particle("abce", "aA1!"),
        ]

        assert swarm.select_global_best() == "abce"

    def test_ties_go_to_first(self):
        swarm = ParticleSwarm(SwarmConfig(length=4, num_particles=2))
        swarm.particles = [
            make_particle("abcd", "abcd"),
            make_particle("bcde", "bcde"),
        ]

        assert swarm.select_global_best() == "abcd"
        assert swarm.best_index == 0


class TestRun:
    """Tests for complete runs."""

    def test_zero_iterations_returns_initial_string(self):
        swarm = ParticleSwarm(SwarmConfig(length=4, num_particles=1, max_iterations=0, seed=5))
        result = swarm.run()

        initial = ParticleSwarm(SwarmConfig(length=4, num_particles=1, seed=5)).initialize()[0]
        assert result == initial.current
        assert swarm.history == []

    def test_zero_length_yields_empty_string(self):
        assert generate(length=0, num_particles=3, max_iterations=5, seed=1) == ""

    def test_returns_requested_length(self):
        result = generate(length=12, num_particles=5, max_iterations=20, seed=7)
        assert len(result) == 12
        assert all(MIN_CODE <= ord(c) <= MAX_CODE for c in result)

    def test_codes_stay_in_bounds(self):
        recorder = TraceRecorder()
        generate(length=10, num_particles=8, max_iterations=30, trace_sink=recorder, seed=11)

        for record in recorder.records:
            for snapshot in record.particles:
                assert all(MIN_CODE <= ord(c) <= MAX_CODE for c in snapshot.current)

    def test_personal_best_never_decreases(self):
        swarm = ParticleSwarm(SwarmConfig(length=8, num_particles=5, max_iterations=40, seed=3))
        swarm.initialize()
        previous = [p.personal_best_fitness for p in swarm.particles]

        for iteration in range(40):
            swarm.step(swarm.inertia_at(iteration))
            swarm.global_best = swarm.select_global_best()
            current = [p.personal_best_fitness for p in swarm.particles]
            for before, after in zip(previous, current):
                assert after >= before
            for p in swarm.particles:
                assert p.personal_best_fitness >= p.current_fitness
            previous = current

    def test_swarm_best_trend(self):
        swarm = ParticleSwarm(SwarmConfig(length=16, num_particles=10, max_iterations=100, seed=21))
        swarm.initialize()
        start = swarm.max_personal_best_fitness()

        swarm.run()
        assert swarm.history[-1]["max_personal_best_fitness"] >= start

    def test_single_particle_global_best_is_personal_best(self):
        swarm = ParticleSwarm(SwarmConfig(length=6, num_particles=1, max_iterations=25, seed=9))
        seen = []

        def check(record):
            seen.append(record.iteration)
            assert record.global_best == swarm.particles[0].personal_best

        swarm.run(trace_sink=check)
        assert seen == list(range(25))

    def test_deterministic_with_seed(self):
        first, second = TraceRecorder(), TraceRecorder()
        a = generate(length=8, num_particles=5, max_iterations=10, trace_sink=first, seed=1234)
        b = generate(length=8, num_particles=5, max_iterations=10, trace_sink=second, seed=1234)

        assert a == b
        assert first.to_dicts() == second.to_dicts()

    def test_rerun_is_reproducible(self):
        swarm = ParticleSwarm(SwarmConfig(length=8, num_particles=5, max_iterations=10, seed=99))
        assert swarm.run() == swarm.run()

    def test_trace_records_every_iteration(self):
        recorder = TraceRecorder()
        generate(length=6, num_particles=4, max_iterations=15, trace_sink=recorder, seed=2)

        assert len(recorder) == 15
        assert [r.iteration for r in recorder.records] == list(range(15))
        for record in recorder.records:
            assert len(record.particles) == 4
            assert record.best_fitness == max(s.fitness for s in record.particles)

    def test_history_and_statistics(self):
        swarm = ParticleSwarm(SwarmConfig(length=6, num_particles=4, max_iterations=12, seed=4))
        result = swarm.run()

        assert len(swarm.history) == 12
        assert swarm.history[0]["inertia_weight"] == pytest.approx(0.5)

        stats = swarm.get_statistics()
        assert stats["iteration"] == 12
        assert stats["global_best"] == result
        assert stats["global_best_fitness"] == pytest.approx(fitness(result))
        assert stats["algorithm"] == "ParticleSwarm"

    def test_get_best(self):
        swarm = ParticleSwarm(SwarmConfig(length=6, num_particles=3, max_iterations=5, seed=8))
        result = swarm.run()
        best, best_fitness = swarm.get_best()
        assert best == result
        assert best_fitness == pytest.approx(fitness(result))


class TestGenerate:
    """Tests for the generate() entry point."""

    def test_defaults(self):
        result = generate(seed=0)
        assert len(result) == 16

    def test_rejects_non_positive_particles(self):
        with pytest.raises(ConfigurationError):
            generate(length=8, num_particles=0, max_iterations=10)

    def test_rejects_negative_length(self):
        with pytest.raises(ConfigurationError):
            generate(length=-1, num_particles=3, max_iterations=10)

    def test_rejects_unknown_option(self):
        with pytest.raises(ConfigurationError):
            generate(length=8, num_particles=3, max_iterations=1, velocity_clamp=4)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            generate(num_particles=-3)
