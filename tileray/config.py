# tileray/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from tileray.constants import DEFAULT_GRID_SIZE, DEFAULT_TILE_SIZE
from tileray.world.tracer import Point

log = structlog.get_logger()

# Bundled scene next to the package, as laid out in the repository
DEFAULT_SCENE_FILE = Path(__file__).resolve().parents[1] / "config" / "scene.yaml"


@dataclass
class SceneConfig:
    """Initial state of a scene, in tile units except ``tile_size``."""

    tile_size: float = DEFAULT_TILE_SIZE
    grid_size: int = DEFAULT_GRID_SIZE
    start: Point = Point(-3.7, -0.7)
    end: Point = Point(3.5, 2.1)
    walls: list[tuple[int, int]] = field(default_factory=list)


def load_yaml_config(config_path: Path, config_name: str) -> dict[str, Any]:
    """Loads a YAML configuration file."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        raise FileNotFoundError(
            f"{config_name} configuration file not found: {config_path}"
        )
    try:
        with config_path.open("r") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error(
            f"Error parsing YAML for {config_name}",
            path=str(config_path),
            error=str(e),
            exc_info=True,
        )
        raise
    if config_data is None:
        log.warning(f"{config_name} config file is empty.", path=str(config_path))
        return {}
    if not isinstance(config_data, dict):
        log.error(f"{config_name} config must be a mapping", path=str(config_path))
        raise ValueError(f"{config_name} configuration must be a mapping: {config_path}")
    log.info(f"{config_name} config loaded", path=str(config_path))
    return config_data


def _parse_pair(value: Any, key: str, cast: type) -> tuple:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"Scene '{key}' must be a pair, got {value!r}")
    try:
        return cast(value[0]), cast(value[1])
    except (TypeError, ValueError) as e:
        raise ValueError(f"Scene '{key}' has invalid coordinates {value!r}") from e


def scene_config_from_dict(data: dict[str, Any]) -> SceneConfig:
    """Build a :class:`SceneConfig`, keeping defaults for missing keys."""
    defaults = SceneConfig()
    try:
        tile_size = float(data.get("tile_size", defaults.tile_size))
        grid_size = int(data.get("grid_size", defaults.grid_size))
        start = Point(*_parse_pair(data.get("start", defaults.start), "start", float))
        end = Point(*_parse_pair(data.get("end", defaults.end), "end", float))
        walls = [_parse_pair(w, "walls", int) for w in data.get("walls") or []]
    except (TypeError, ValueError) as e:
        log.error("Invalid scene configuration", error=str(e))
        raise ValueError(f"Invalid scene configuration: {e}") from e
    if tile_size <= 0 or grid_size <= 0:
        log.error("Invalid scene dimensions", tile_size=tile_size, grid_size=grid_size)
        raise ValueError("Scene tile_size and grid_size must be positive.")
    return SceneConfig(
        tile_size=tile_size, grid_size=grid_size, start=start, end=end, walls=walls
    )


def load_scene_config(config_path: Optional[Path] = None) -> SceneConfig:
    """Load a scene file, defaulting to the bundled ``config/scene.yaml``."""
    if config_path is None:
        config_path = DEFAULT_SCENE_FILE
    config = scene_config_from_dict(load_yaml_config(config_path, "Scene"))
    log.info(
        "Scene configuration parsed",
        walls=len(config.walls),
        start=tuple(config.start),
        end=tuple(config.end),
    )
    return config


__all__ = [
    "DEFAULT_SCENE_FILE",
    "SceneConfig",
    "load_yaml_config",
    "load_scene_config",
    "scene_config_from_dict",
]
