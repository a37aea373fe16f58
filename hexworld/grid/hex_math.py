"""Hex coordinate math — pure conversions for a row-staggered hex lattice.

Cells are pointy-top hexagons laid out in rows.  Every other row is
shifted right by half a cell width; ``HexLayout.stagger`` decides which
parity carries the shift.  World space has x growing right and y
growing *down*, matching screen pixels, and cell ``(0, 0)`` of an
odd-staggered layout is centred on the world origin.

Nothing in this module holds state: every function takes the layout it
works against.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray


class Stagger(Enum):
    """Which row parity is shifted right by half a cell."""

    ODD = "odd"
    EVEN = "even"


class HexDirection(IntEnum):
    """The six neighbour directions, counter-clockwise from east."""

    EAST = 0
    NORTH_EAST = 1
    NORTH_WEST = 2
    WEST = 3
    SOUTH_WEST = 4
    SOUTH_EAST = 5


class HexIndex(NamedTuple):
    """Discrete ``(row, col)`` identity of a grid cell."""

    row: int
    col: int


# (drow, dcol) per HexDirection.  North is row - 1 because y grows down.
_UNSHIFTED_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
    (1, 0),
)
_SHIFTED_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, 1),
    (-1, 1),
    (-1, 0),
    (0, -1),
    (1, 0),
    (1, 1),
)


@dataclass(frozen=True)
class HexLayout:
    """Immutable grid geometry.

    Attributes:
        rows: Number of cell rows.
        cols: Number of cell columns.
        cell_width: Width of one hexagon (flat side to flat side).
        cell_height: Height of one hexagon (point to point).
        stagger: Which row parity is shifted right by ``cell_width / 2``.
    """

    rows: int
    cols: int
    cell_width: float
    cell_height: float
    stagger: Stagger = Stagger.ODD

    def __post_init__(self) -> None:
        """Reject non-positive dimensions."""
        if self.rows <= 0 or self.cols <= 0:
            msg = f"grid must have positive rows and cols, got {self.rows}x{self.cols}"
            raise ValueError(msg)
        if self.cell_width <= 0 or self.cell_height <= 0:
            msg = (
                "cell size must be positive, got "
                f"{self.cell_width}x{self.cell_height}"
            )
            raise ValueError(msg)

    @property
    def row_spacing(self) -> float:
        """Vertical distance between the centres of adjacent rows."""
        return 0.75 * self.cell_height

    def is_shifted(self, row: int) -> bool:
        """Return True if ``row`` carries the half-cell offset."""
        if self.stagger is Stagger.ODD:
            return row % 2 == 1
        return row % 2 == 0

    def row_offset(self, row: int) -> float:
        """Horizontal shift applied to every cell in ``row``."""
        return self.cell_width / 2 if self.is_shifted(row) else 0.0


def is_valid(index: HexIndex, layout: HexLayout) -> bool:
    """Return True if ``index`` lies inside the grid."""
    return 0 <= index.row < layout.rows and 0 <= index.col < layout.cols


def world_to_hex(point: tuple[float, float], layout: HexLayout) -> HexIndex | None:
    """Resolve a world-space point to the cell covering it.

    The row is estimated from vertical spacing first, then the column
    from horizontal spacing corrected by that row's offset.  Both are
    shifted into a non-negative domain and truncated, so a point lying
    exactly on a boundary always lands in the higher-index cell.

    Args:
        point: ``(x, y)`` in world units.
        layout: Grid geometry.

    Returns:
        The covering index, or None if the point falls off the grid.
    """
    x, y = point
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    shifted_y = y + layout.cell_height / 2
    if shifted_y < 0:
        return None
    row = math.floor(shifted_y / layout.row_spacing)
    if row >= layout.rows:
        return None

    shifted_x = x - layout.row_offset(row) + layout.cell_width / 2
    if shifted_x < 0:
        return None
    col = math.floor(shifted_x / layout.cell_width)
    if col >= layout.cols:
        return None
    return HexIndex(row, col)


def hex_to_world_center(index: HexIndex, layout: HexLayout) -> tuple[float, float]:
    """Return the world-space centre of ``index`` (bounds are not checked)."""
    x = index.col * layout.cell_width + layout.row_offset(index.row)
    y = index.row * layout.row_spacing
    return (x, y)


def neighbor_in_direction(
    index: HexIndex,
    direction: HexDirection | int,
    layout: HexLayout,
) -> HexIndex:
    """Return the adjacent index in ``direction``.

    The result is NOT bounds-checked and may lie outside the grid;
    callers validate with :func:`is_valid` or a registry lookup.

    Raises:
        ValueError: If ``direction`` is not in ``0..5``.
    """
    direction = HexDirection(direction)
    table = _SHIFTED_OFFSETS if layout.is_shifted(index.row) else _UNSHIFTED_OFFSETS
    drow, dcol = table[direction]
    return HexIndex(index.row + drow, index.col + dcol)


def neighbors(index: HexIndex, layout: HexLayout) -> list[HexIndex]:
    """Return the in-bounds neighbours of ``index`` in direction order.

    An interior cell has six; edge and corner cells have fewer.
    """
    result: list[HexIndex] = []
    for direction in HexDirection:
        candidate = neighbor_in_direction(index, direction, layout)
        if is_valid(candidate, layout):
            result.append(candidate)
    return result


def world_bounds(layout: HexLayout) -> tuple[float, float, float, float]:
    """Return ``(min_x, min_y, max_x, max_y)`` enclosing every cell.

    Any point outside this envelope resolves to no cell.
    """
    min_x = -layout.cell_width / 2
    min_y = -layout.cell_height / 2
    max_x = layout.cols * layout.cell_width
    max_y = layout.rows * layout.row_spacing - layout.cell_height / 2
    return (min_x, min_y, max_x, max_y)


def cell_centers(layout: HexLayout) -> NDArray[np.float64]:
    """Return world centres of every cell as a ``(rows, cols, 2)`` array."""
    rows = np.arange(layout.rows, dtype=np.float64)
    cols = np.arange(layout.cols, dtype=np.float64)
    offsets = np.array(
        [layout.row_offset(r) for r in range(layout.rows)],
        dtype=np.float64,
    )
    centers = np.empty((layout.rows, layout.cols, 2), dtype=np.float64)
    centers[:, :, 0] = cols[np.newaxis, :] * layout.cell_width + offsets[:, np.newaxis]
    centers[:, :, 1] = (rows * layout.row_spacing)[:, np.newaxis]
    return centers


# Unit pointy-top hexagon, clockwise from the top vertex, scaled by
# (cell_width / 2, cell_height / 2).
_UNIT_CORNERS = np.array(
    [
        (0.0, -1.0),
        (1.0, -0.5),
        (1.0, 0.5),
        (0.0, 1.0),
        (-1.0, 0.5),
        (-1.0, -0.5),
    ],
    dtype=np.float64,
)


def hex_corners(
    center: tuple[float, float],
    layout: HexLayout,
) -> NDArray[np.float64]:
    """Return the six polygon vertices of a cell as a ``(6, 2)`` array."""
    half = np.array([layout.cell_width / 2, layout.cell_height / 2])
    return np.asarray(center, dtype=np.float64) + _UNIT_CORNERS * half
