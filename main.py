# main.py
import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog
import yaml

from tileray.config import load_scene_config
from tileray.scene import Scene
from tileray.utils.logging_utils import setup_logging
from tileray.world.tracer import InvalidRayError, Point

# --- Paths relative to this script's location ---
SCRIPT_DIR = Path(__file__).parent.resolve()
CONFIG_DIR = SCRIPT_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "scene.yaml"
# --- End Paths ---

log = structlog.get_logger()  # module-level logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Trace a ray across a tile grid and print the visited tiles."
    )
    parser.add_argument(
        "--config", type=Path, default=CONFIG_FILE, help="Scene YAML file."
    )
    parser.add_argument(
        "--start", type=float, nargs=2, metavar=("X", "Y"), help="Start point in tiles."
    )
    parser.add_argument(
        "--end", type=float, nargs=2, metavar=("X", "Y"), help="End point in tiles."
    )
    parser.add_argument(
        "--radius", type=int, default=2, help="Tiles shown around the segment."
    )
    parser.add_argument("--log-level", default="info", help="Logging level.")
    parser.add_argument(
        "--no-color", action="store_true", help="Disable coloured log output."
    )
    return parser


def init_scene(args: argparse.Namespace) -> Scene:
    config = load_scene_config(args.config)
    if args.start is not None:
        config.start = Point(*args.start)
    if args.end is not None:
        config.end = Point(*args.end)
    return Scene(config)


# --- Debug Map Printing Function ---
def print_map_section(scene: Scene, radius: int = 2) -> None:
    """Prints the part of the grid around the traced segment to the console."""
    print(f"\n--- Trace {tuple(scene.start)} -> {tuple(scene.end)} ---")
    print(scene.render_text(scene.segment_bounds(margin=radius)))
    print("------------------------------------\n")
# --- End Debug Map Printing ---


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the demo."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        setup_logging(args.log_level, colors=not args.no_color)
    except ValueError as e:
        parser.error(str(e))
    log.info("Config file", path=str(args.config))

    try:
        scene = init_scene(args)
        result = scene.update()
    except FileNotFoundError as e:
        log.critical("Required file not found during init", error=str(e))
        sys.exit(f"Initialization failed: File not found - {e}")
    except yaml.YAMLError as e:
        log.critical("Scene file is not valid YAML", error=str(e), exc_info=True)
        sys.exit(f"Configuration failed: {e}")
    except InvalidRayError as e:
        log.critical("Invalid ray endpoints", error=str(e))
        sys.exit(f"Trace failed: {e}")
    except ValueError as e:
        log.critical("Invalid scene configuration", error=str(e))
        sys.exit(f"Configuration failed: {e}")

    log.info(
        "Trace finished",
        outcome=result.outcome.value,
        steps=result.steps,
        hit=result.hit,
        last_tile=result.last_tile,
    )
    print_map_section(scene, radius=args.radius)
    return 0


if __name__ == "__main__":
    sys.exit(main())
