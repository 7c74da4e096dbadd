from enum import Enum, IntEnum
from typing import Final


class TileKind(IntEnum):
    """Classification of a tile as seen by callers."""

    EMPTY = 0
    WALL = 1  # Persistent obstacle, only set by the caller
    EMPTY_COLLIDE = 2  # Empty tile visited by the current trace
    EMPTY_LAST_COLLIDE = 3  # Empty tile right before the struck wall
    WALL_COLLIDE = 4  # Wall entered by the current trace
    CONNECT = 5  # Visited tile on a trace that reached its end
    CONNECT_LAST = 6
    CONNECT_END = 7


class TraceTag(IntEnum):
    """Transient per-trace annotation stored alongside the wall flag."""

    NONE = 0
    COLLIDE = 1
    LAST_COLLIDE = 2
    CONNECT = 3
    CONNECT_LAST = 4
    CONNECT_END = 5


class TraceOutcome(Enum):
    CONNECTED = "connected"
    BLOCKED = "blocked"
    BLOCKED_AT_START = "blocked_at_start"


# Pixels per tile and visible window edge (in tiles) of the demo scene
DEFAULT_TILE_SIZE: Final[float] = 40.0
DEFAULT_GRID_SIZE: Final[int] = 100

TILE_COLORS: Final[dict[TileKind, tuple[int, int, int]]] = {
    TileKind.EMPTY: (0x11, 0x11, 0x11),
    TileKind.EMPTY_COLLIDE: (0x3E, 0x02, 0x2B),
    TileKind.EMPTY_LAST_COLLIDE: (0x6A, 0x1B, 0x51),
    TileKind.CONNECT: (0x18, 0x48, 0x23),
    TileKind.CONNECT_LAST: (0x40, 0x83, 0x3E),
    TileKind.CONNECT_END: (0x37, 0xE3, 0x34),
    TileKind.WALL: (0x4D, 0x58, 0xF0),
    TileKind.WALL_COLLIDE: (0xBD, 0x31, 0x8E),
}

TILE_GLYPHS: Final[dict[TileKind, str]] = {
    TileKind.EMPTY: ".",
    TileKind.EMPTY_COLLIDE: "o",
    TileKind.EMPTY_LAST_COLLIDE: "x",
    TileKind.CONNECT: "+",
    TileKind.CONNECT_LAST: "=",
    TileKind.CONNECT_END: "E",
    TileKind.WALL: "#",
    TileKind.WALL_COLLIDE: "X",
}

__all__ = [
    "TileKind",
    "TraceTag",
    "TraceOutcome",
    "DEFAULT_TILE_SIZE",
    "DEFAULT_GRID_SIZE",
    "TILE_COLORS",
    "TILE_GLYPHS",
]
