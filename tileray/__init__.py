"""Tile-grid ray tracing with a DDA walk."""

from tileray.constants import TileKind, TraceOutcome, TraceTag
from tileray.world import (
    GridRayTracer,
    InvalidRayError,
    Point,
    Tile,
    TileGrid,
    TraceResult,
    trace_ray,
)

__all__ = [
    "TileKind",
    "TraceOutcome",
    "TraceTag",
    "GridRayTracer",
    "InvalidRayError",
    "Point",
    "Tile",
    "TileGrid",
    "TraceResult",
    "trace_ray",
]
