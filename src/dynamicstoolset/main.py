"""
Application Initialization
==========================
Command-line runner for the numerical core.

Why is this file needed?
------------------------
It acts as the composition root: it sets up logging, builds the model
registry, wires an experiment together and drives the integration loop the
3D shell would otherwise drive frame by frame.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

from dynamicstoolset.analysis.experiment import Experiment, TrajectoryCache
from dynamicstoolset.config import DEFAULT_MODEL, DEFAULT_STEP_SIZE, DEFAULT_TRAJECTORY_STEPS
from dynamicstoolset.errors import DynamicsError
from dynamicstoolset.logging_config import setup_logging
from dynamicstoolset.model.registry import create_default_registry

logger = logging.getLogger(__name__)


def _parse_assignment(text: str) -> tuple[str, float]:
    name, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{text}'")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dynamicstoolset",
        description="Integrate a dynamical system from the built-in model registry.",
    )
    parser.add_argument("--list", action="store_true", help="List available models and exit")
    parser.add_argument("--model", default=DEFAULT_MODEL, help=f"Model name (default: {DEFAULT_MODEL})")
    parser.add_argument("--steps", type=int, default=DEFAULT_TRAJECTORY_STEPS, help="Number of steps")
    parser.add_argument("--dt", type=float, default=DEFAULT_STEP_SIZE, help="Integrator step size")
    parser.add_argument("--param", action="append", type=_parse_assignment, default=[],
                        metavar="NAME=VALUE", help="Override a model parameter (repeatable)")
    parser.add_argument("--plot", action="store_true", help="Show the trajectory with matplotlib")
    parser.add_argument("--plugins", action="store_true", help="Also load models from installed plugins")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    registry = create_default_registry(load_plugins=args.plugins)

    if args.list:
        for name in registry.names():
            print(name)
        return 0

    try:
        experiment = Experiment.from_registry(registry, args.model, step_size=args.dt)
    except (DynamicsError, ValueError) as e:
        logger.error(str(e))
        return 2

    try:
        for name, value in args.param:
            if not experiment.model.set_parameter_value(name, value):
                logger.warning(f"Model '{experiment.name}' has no parameter '{name}'; ignored.")

        cache = TrajectoryCache(experiment, check_finite=True)
        cache.update(args.steps)
    except DynamicsError as e:
        logger.error(str(e))
        return 1
    except ValueError as e:
        logger.error(str(e))
        return 2

    final = np.array2string(cache.states[-1], precision=4)
    logger.info(f"{experiment.name}: {args.steps} steps of h={args.dt} from {cache.seed} -> {final}")

    if args.plot:
        cache.plot()
    return 0


if __name__ == "__main__":
    sys.exit(main())
