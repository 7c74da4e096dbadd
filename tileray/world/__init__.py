from tileray.world.tile_grid import Tile, TileGrid
from tileray.world.tracer import (
    GridRayTracer,
    InvalidRayError,
    Point,
    TraceResult,
    trace_ray,
)

__all__ = [
    "Tile",
    "TileGrid",
    "GridRayTracer",
    "InvalidRayError",
    "Point",
    "TraceResult",
    "trace_ray",
]
