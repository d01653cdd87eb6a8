"""Entry point for ``python -m tissuesim``.

Runs a tissue command script, printing one statistics line per
infection, and optionally opens a Pygame window on one tissue.
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

import yaml

from tissuesim.errors import NotFound
from tissuesim.logging_config import setup_logging
from tissuesim.simulation.config import SimulationConfig
from tissuesim.simulation.simulation import Simulation

logger = logging.getLogger("tissuesim")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tissuesim",
        description="tissuesim - 3D tissue infection simulator",
    )
    parser.add_argument(
        "script",
        type=pathlib.Path,
        help="Command script to run",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=None,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more detail to stderr (-v info, -vv debug)",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs here")
    parser.add_argument(
        "--view",
        metavar="TISSUE",
        default=None,
        help="Open a Pygame viewer on TISSUE after the script has run",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=24,
        help="Pixel size per grid cell in the viewer (default: 24)",
    )
    return parser


def load_config(path: pathlib.Path | None) -> SimulationConfig:
    """Load ``path``, or the bundled defaults, or built-in defaults."""
    if path is not None:
        return SimulationConfig.from_yaml(path)
    if _DEFAULT_CONFIG.is_file():
        return SimulationConfig.from_yaml(_DEFAULT_CONFIG)
    return SimulationConfig()


def main(argv: list[str] | None = None) -> int:
    """Parse CLI args, run the script, optionally launch the viewer.

    Returns:
        Process exit code: 0 after running every line, 1 if the config
        is invalid or the script could not be read.
    """
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("invalid config: %s", exc)
        return 1

    if args.verbose >= 2:
        level: int | str = logging.DEBUG
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = config.log_level
    setup_logging(level, args.log_file)

    simulation = Simulation(config=config)
    try:
        with args.script.open("r") as script:
            failures = simulation.run_lines(script)
    except OSError as exc:
        logger.error("error reading file %s: %s", args.script, exc)
        return 1

    if failures:
        logger.info("%d line(s) skipped", failures)

    if args.view is not None:
        from tissuesim.ui.pygame_client import TissueRenderer

        try:
            renderer = TissueRenderer(
                simulation=simulation,
                tissue_name=args.view,
                cell_size=args.cell_size,
            )
        except NotFound as exc:
            logger.error("cannot view: %s", exc)
            return 1
        renderer.run()

    return 0


if __name__ == "__main__":
    sys.exit(main())
