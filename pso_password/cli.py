#!/usr/bin/env python3
"""
pso-password CLI

Thin caller around generate(): collects parameters, runs one swarm,
prints the result.

Usage:
    # Documented defaults (16 chars, 10 particles, 100 iterations)
    pso-password

    # Custom run with the per-iteration trace
    pso-password --length 24 --particles 20 --iterations 200 --verbose

    # Parameters from a YAML file, reproducible
    pso-password --config my_swarm.yaml --seed 7

    # Prompt for everything
    pso-password --interactive
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional

from pso_password.config import ConfigurationError, SwarmConfig, load_config
from pso_password.core.swarm import ParticleSwarm
from pso_password.trace import TraceRecord, format_trace_record

logger = logging.getLogger(__name__)


def _ask_choice(prompt: str, choices: List[str], input_fn: Callable[[str], str]) -> str:
    while True:
        answer = input_fn(prompt).strip().lower()
        if answer in choices:
            return answer


def _ask_int(prompt: str, default: int, input_fn: Callable[[str], str]) -> int:
    while True:
        answer = input_fn(prompt).strip()
        if not answer:
            return default
        try:
            return int(answer)
        except ValueError:
            continue


def prompt_parameters(
    config: SwarmConfig,
    input_fn: Callable[[str], str] = input,
) -> Dict[str, object]:
    """Ask for length, particles, iterations and verbosity on the terminal."""
    values: Dict[str, object] = {
        "length": config.length,
        "num_particles": config.num_particles,
        "max_iterations": config.max_iterations,
    }

    if _ask_choice("Use default parameters? (y/n) ", ["y", "n"], input_fn) == "n":
        values["length"] = _ask_int(
            f"Password length (default = {config.length}): ", config.length, input_fn
        )
        values["num_particles"] = _ask_int(
            f"Number of particles (default = {config.num_particles}): ",
            config.num_particles,
            input_fn,
        )
        values["max_iterations"] = _ask_int(
            f"Maximum iterations (default = {config.max_iterations}): ",
            config.max_iterations,
            input_fn,
        )

    values["verbose"] = _ask_choice("Verbose mode? (0/1) ", ["0", "1"], input_fn) == "1"
    return values


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a string by Particle Swarm Optimization (not cryptographically secure)"
    )
    parser.add_argument("--config", default=None, help="YAML file with swarm parameters")
    parser.add_argument("--length", type=int, default=None, help="String length (default 16)")
    parser.add_argument("--particles", type=int, default=None, help="Swarm size (default 10)")
    parser.add_argument("--iterations", type=int, default=None, help="Iterations (default 100)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Print every iteration")
    parser.add_argument("--interactive", action="store_true", help="Prompt for parameters")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: Optional[List[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(args.config)
        overrides = {
            "length": args.length,
            "num_particles": args.particles,
            "max_iterations": args.iterations,
            "seed": args.seed,
        }
        data = config.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        verbose = args.verbose

        if args.interactive:
            answers = prompt_parameters(SwarmConfig.from_dict(data), input_fn)
            verbose = bool(answers.pop("verbose"))
            data.update(answers)
            print()

        swarm = ParticleSwarm(SwarmConfig.from_dict(data))
    except (ConfigurationError, OSError) as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2

    def print_record(record: TraceRecord) -> None:
        print(format_trace_record(record))

    password = swarm.run(trace_sink=print_record if verbose else None)
    print(f"Generated Password: {password}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
