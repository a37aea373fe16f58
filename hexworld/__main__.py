"""Entry point for ``python -m hexworld``.

Loads the default YAML config, builds a world session, and opens a
Pygame window to hover, build on, and advance the grid.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from hexworld.simulation.config import WorldConfig
from hexworld.simulation.engine import WorldSession
from hexworld.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main() -> None:
    """Parse CLI args, create the session, launch the renderer."""
    parser = argparse.ArgumentParser(
        prog="hexworld",
        description="Hexworld - hex grid building and production prototype",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = WorldConfig.from_yaml(args.config)
    session = WorldSession.from_config(config)

    renderer = PygameRenderer(session=session, config=config)
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
