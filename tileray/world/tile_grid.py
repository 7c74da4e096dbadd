# tileray/world/tile_grid.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, Iterator

import numpy as np
import structlog

from tileray.constants import TileKind, TraceTag

log = structlog.get_logger()

# (is_wall, tag) pair behind every public tile kind
KIND_STATE: Final[dict[TileKind, tuple[bool, TraceTag]]] = {
    TileKind.EMPTY: (False, TraceTag.NONE),
    TileKind.WALL: (True, TraceTag.NONE),
    TileKind.EMPTY_COLLIDE: (False, TraceTag.COLLIDE),
    TileKind.EMPTY_LAST_COLLIDE: (False, TraceTag.LAST_COLLIDE),
    TileKind.WALL_COLLIDE: (True, TraceTag.COLLIDE),
    TileKind.CONNECT: (False, TraceTag.CONNECT),
    TileKind.CONNECT_LAST: (False, TraceTag.CONNECT_LAST),
    TileKind.CONNECT_END: (False, TraceTag.CONNECT_END),
}
STATE_KIND: Final[dict[tuple[bool, TraceTag], TileKind]] = {
    state: kind for kind, state in KIND_STATE.items()
}


@dataclass
class Tile:
    """A single grid cell: persistent wall flag plus the last trace's tag."""

    x: int
    y: int
    is_wall: bool = False
    tag: TraceTag = TraceTag.NONE

    @property
    def kind(self) -> TileKind:
        return STATE_KIND[(self.is_wall, self.tag)]


class TileGrid:
    """Sparse, unbounded tile store keyed by integer coordinates.

    Coordinates without a record are implicitly ``EMPTY``. Records are
    created lazily on the first non-empty write and never removed; writing
    ``EMPTY`` over an existing record resets it in place.
    """

    def __init__(self, walls: Iterable[tuple[int, int]] = ()):
        self._tiles: dict[tuple[int, int], Tile] = {}
        for x, y in walls:
            self.set(x, y, TileKind.WALL)
        log.debug("TileGrid initialized", stored=len(self._tiles))

    def get(self, x: int, y: int) -> Tile:
        """Return the stored tile, or a detached ``EMPTY`` tile."""
        tile = self._tiles.get((x, y))
        if tile is None:
            return Tile(x, y)
        return tile

    def set(self, x: int, y: int, kind: TileKind | int) -> None:
        kind = TileKind(kind)
        tile = self._tiles.get((x, y))
        if tile is None:
            if kind is TileKind.EMPTY:
                return
            tile = self._tiles[(x, y)] = Tile(x, y)
        tile.is_wall, tile.tag = KIND_STATE[kind]

    def all(self) -> list[Tile]:
        return list(self._tiles.values())

    def is_wall(self, x: int, y: int) -> bool:
        tile = self._tiles.get((x, y))
        return tile is not None and tile.is_wall

    def walls(self) -> list[tuple[int, int]]:
        return [pos for pos, tile in self._tiles.items() if tile.is_wall]

    def to_array(self, x_min: int, y_min: int, width: int, height: int) -> np.ndarray:
        """Rasterize a window of the grid into a ``[y, x]`` array of kind codes."""
        if width <= 0 or height <= 0:
            log.error("Invalid grid window", width=width, height=height)
            raise ValueError("Grid window width and height must be positive.")
        kinds = np.full(
            (height, width), fill_value=TileKind.EMPTY, dtype=np.uint8, order="C"
        )
        for (x, y), tile in self._tiles.items():
            col = x - x_min
            row = y - y_min
            if 0 <= col < width and 0 <= row < height:
                kinds[row, col] = tile.kind
        return kinds

    def __len__(self) -> int:
        return len(self._tiles)

    def __contains__(self, pos: object) -> bool:
        return pos in self._tiles

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.all())


__all__ = ["Tile", "TileGrid", "KIND_STATE", "STATE_KIND"]
