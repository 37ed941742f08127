"""World grid — the spatial container for the farm.

The World owns cells arranged in a 2D grid, marks the two station tiles,
and provides the spatial queries (bounds, neighbours, nearest matching
cell) that drones use to pick their targets.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from growfield.world.cell import Cell, TileKind

_CARDINAL = ((1, 0), (-1, 0), (0, 1), (0, -1))
_DIAGONAL = ((1, 1), (1, -1), (-1, 1), (-1, -1))


@dataclass
class World:
    """A 2D grid of farm cells.

    Attributes:
        width: Number of columns in the grid.
        height: Number of rows in the grid.
        seeder_rest: ``(x, y)`` of the seeder refill station.
        storage: ``(x, y)`` of the harvester unload station.
        allow_diagonals: Whether searches use 8-neighbour adjacency.
        cells: 2D list of Cell objects indexed as ``cells[y][x]``.
    """

    width: int
    height: int
    seeder_rest: tuple[int, int]
    storage: tuple[int, int]
    allow_diagonals: bool = False
    cells: list[list[Cell]] = field(init=False, repr=False)
    _visited: NDArray[np.int64] = field(init=False, repr=False)
    _generation: int = field(init=False, default=0, repr=False)

    def __post_init__(self) -> None:
        """Build the grid and designate the station tiles.

        Raises:
            IndexError: If a station lies outside the grid.
            ValueError: If both stations share a cell.
        """
        if tuple(self.seeder_rest) == tuple(self.storage):
            msg = f"stations must be distinct, both at {tuple(self.storage)}"
            raise ValueError(msg)
        self.cells = [
            [Cell(x=x, y=y) for x in range(self.width)] for y in range(self.height)
        ]
        self.cell_at(*self.seeder_rest).kind = TileKind.SEEDER_REST
        self.cell_at(*self.storage).kind = TileKind.STORAGE
        self._visited = np.zeros((self.height, self.width), dtype=np.int64)

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Cell:
        """Return the cell at grid coordinates ``(x, y)``.

        Args:
            x: Column index.
            y: Row index.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        return self.cells[y][x]

    def get(self, x: int, y: int) -> Cell | None:
        """Return the cell at ``(x, y)``, or None when out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return self.cells[y][x]

    def iter_cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for row in self.cells:
            yield from row

    def offsets(self) -> tuple[tuple[int, int], ...]:
        """Return neighbour offsets in their fixed enumeration order."""
        if self.allow_diagonals:
            return _CARDINAL + _DIAGONAL
        return _CARDINAL

    def neighbours(self, x: int, y: int) -> list[Cell]:
        """Return in-bounds adjacent cells in enumeration order.

        Args:
            x: Column index.
            y: Row index.
        """
        result: list[Cell] = []
        for dx, dy in self.offsets():
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                result.append(self.cells[ny][nx])
        return result

    def nearest_cell(
        self,
        origin: Cell,
        predicate: Callable[[Cell], bool],
    ) -> Cell | None:
        """Breadth-first search for the closest cell matching ``predicate``.

        Cells are visited in non-decreasing grid distance from
        ``origin`` (which is tested first).  Among equally distant
        candidates the one discovered first through the fixed
        neighbour order wins, so the result is deterministic for a
        given grid state.

        The visited set is a scratch array reused across searches: each
        search stamps cells with a fresh generation number instead of
        clearing the whole array.

        Args:
            origin: Cell to search outward from.
            predicate: Test applied to each visited cell.

        Returns:
            The first matching cell, or None if nothing matches.
        """
        self._generation += 1
        stamp = self._generation
        visited = self._visited
        offsets = self.offsets()

        visited[origin.y, origin.x] = stamp
        queue: deque[Cell] = deque([origin])
        while queue:
            cell = queue.popleft()
            if predicate(cell):
                return cell
            for dx, dy in offsets:
                nx, ny = cell.x + dx, cell.y + dy
                if self.in_bounds(nx, ny) and visited[ny, nx] != stamp:
                    visited[ny, nx] = stamp
                    queue.append(self.cells[ny][nx])
        return None
