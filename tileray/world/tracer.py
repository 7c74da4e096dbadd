"""tileray/world/tracer.py

DDA (Digital Differential Analyzer) walk over a :class:`TileGrid`.

A trace steps from the tile holding ``start`` toward the tile holding
``end`` one grid-line crossing at a time, stops at the first wall and
leaves every visited tile tagged on the grid for the caller to read back.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence

import structlog

from tileray.constants import TileKind, TraceOutcome
from tileray.world.tile_grid import TileGrid

log = structlog.get_logger()

# Extra steps allowed past the start/end Manhattan distance before the walk
# is cut short (float rounding near tile corners can add one crossing)
STEP_MARGIN = 2


class InvalidRayError(ValueError):
    """Raised for ray endpoints a walk cannot terminate on."""


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class TraceResult:
    outcome: TraceOutcome
    path: tuple[tuple[int, int], ...]
    hit: tuple[int, int] | None = None

    @property
    def connected(self) -> bool:
        return self.outcome is TraceOutcome.CONNECTED

    @property
    def blocked(self) -> bool:
        return not self.connected

    @property
    def last_tile(self) -> tuple[int, int]:
        return self.path[-1]

    @property
    def steps(self) -> int:
        """Number of grid-line crossings made after the start tile."""
        return len(self.path) - 1


def _sign(value: float) -> int:
    return -1 if value < 0 else 1


def _as_point(value: Point | Sequence[float], name: str) -> Point:
    try:
        x, y = value
        point = Point(float(x), float(y))
    except (TypeError, ValueError) as e:
        log.error("Malformed ray endpoint", endpoint=name, value=repr(value))
        raise InvalidRayError(f"{name} must be a pair of numbers, got {value!r}") from e
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        log.error("Non-finite ray endpoint", endpoint=name, x=point.x, y=point.y)
        raise InvalidRayError(f"{name} must have finite coordinates, got {point}")
    return point


def _initial_offset(coord: float, delta: float) -> float:
    """Tile-widths from ``coord`` to the next grid line in the travel direction.

    Uses the floor-based fraction so a coordinate of -0.25 sits 0.75 into
    tile -1, the same as 0.75 sits in tile 0.
    """
    frac = coord - math.floor(coord)
    return frac if delta < 0 else 1.0 - frac


def _crossing_distance(offset: float, scale: float | None) -> float:
    """Distance along the ray to the next grid line on one axis.

    ``scale`` is None for an axis the ray never crosses. It can be infinite
    when the axis delta is tiny next to the ray length; a start sitting on
    the grid line still crosses it at distance 0.
    """
    if scale is None:
        return math.inf
    if offset == 0:
        return 0.0
    return scale * offset


class GridRayTracer:
    """Stateless tracer; one call walks one segment over the given grid."""

    def trace(
        self,
        grid: TileGrid,
        start: Point | Sequence[float],
        end: Point | Sequence[float],
    ) -> TraceResult:
        start = _as_point(start, "start")
        end = _as_point(end, "end")

        dx = end.x - start.x
        dy = end.y - start.y
        cast_range = math.hypot(dx, dy)
        if not math.isfinite(cast_range):
            log.error("Ray length overflows", start=start, end=end)
            raise InvalidRayError(f"Segment {start} -> {end} is too long to trace")

        self._reset(grid)

        # Travel distance per full tile crossed on each axis; None disables
        # an axis the ray never crosses
        scale_x = cast_range / abs(dx) if dx != 0 else None
        scale_y = cast_range / abs(dy) if dy != 0 else None
        step_x = _sign(dx)
        step_y = _sign(dy)

        grid_x = math.floor(start.x)
        grid_y = math.floor(start.y)
        offset_x = _initial_offset(start.x, dx)
        offset_y = _initial_offset(start.y, dy)

        path = [(grid_x, grid_y)]
        if self._visit(grid, grid_x, grid_y) is TileKind.WALL_COLLIDE:
            log.debug("Trace blocked at start", tile=(grid_x, grid_y))
            return TraceResult(TraceOutcome.BLOCKED_AT_START, tuple(path), (grid_x, grid_y))

        budget = (
            abs(math.floor(end.x) - grid_x)
            + abs(math.floor(end.y) - grid_y)
            + STEP_MARGIN
        )
        prev_x, prev_y = grid_x, grid_y

        while True:
            dist_x = _crossing_distance(offset_x, scale_x)
            dist_y = _crossing_distance(offset_y, scale_y)
            if min(dist_x, dist_y) >= cast_range:
                break
            if len(path) > budget:
                log.warning(
                    "Trace step budget exhausted",
                    start=start,
                    end=end,
                    steps=len(path) - 1,
                )
                break

            prev_x, prev_y = grid_x, grid_y
            # Ties go to the y axis
            if dist_x < dist_y:
                offset_x += 1
                grid_x += step_x
            else:
                offset_y += 1
                grid_y += step_y

            path.append((grid_x, grid_y))
            if self._visit(grid, grid_x, grid_y) is TileKind.WALL_COLLIDE:
                grid.set(prev_x, prev_y, TileKind.EMPTY_LAST_COLLIDE)
                log.debug(
                    "Trace blocked", hit=(grid_x, grid_y), steps=len(path) - 1
                )
                return TraceResult(TraceOutcome.BLOCKED, tuple(path), (grid_x, grid_y))

        for x, y in path:
            grid.set(x, y, TileKind.CONNECT)
        grid.set(prev_x, prev_y, TileKind.CONNECT_LAST)
        grid.set(grid_x, grid_y, TileKind.CONNECT_END)
        log.debug("Trace connected", end_tile=(grid_x, grid_y), steps=len(path) - 1)
        return TraceResult(TraceOutcome.CONNECTED, tuple(path))

    @staticmethod
    def _reset(grid: TileGrid) -> None:
        """Drop the previous trace's tags, keeping walls."""
        for tile in grid.all():
            if tile.is_wall:
                grid.set(tile.x, tile.y, TileKind.WALL)
            else:
                grid.set(tile.x, tile.y, TileKind.EMPTY)

    @staticmethod
    def _visit(grid: TileGrid, x: int, y: int) -> TileKind:
        kind = (
            TileKind.WALL_COLLIDE if grid.is_wall(x, y) else TileKind.EMPTY_COLLIDE
        )
        grid.set(x, y, kind)
        return kind


_default_tracer = GridRayTracer()


def trace_ray(
    grid: TileGrid,
    start: Point | Sequence[float],
    end: Point | Sequence[float],
) -> TraceResult:
    """Trace with a shared :class:`GridRayTracer`."""
    return _default_tracer.trace(grid, start, end)


__all__ = [
    "GridRayTracer",
    "InvalidRayError",
    "Point",
    "TraceResult",
    "trace_ray",
]
