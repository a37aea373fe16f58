"""TileRegistry — the grid's cell identities and static geometry.

The registry is built once per session from a ``HexLayout`` and never
changes afterwards.  Other components look cells up by ``HexIndex`` each
time they need one instead of keeping ``CellRef`` handles around.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hexworld.grid.hex_math import HexIndex, HexLayout, cell_centers

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True)
class CellRef:
    """Opaque handle to one cell's scene representation.

    Attributes:
        cell_id: Dense id in row-major enumeration order.
        index: Grid position of the cell.
        center: World-space centre, cached at build time.
    """

    cell_id: int
    index: HexIndex
    center: tuple[float, float]


@dataclass
class TileRegistry:
    """Read-only mapping from ``HexIndex`` to ``CellRef``.

    Attributes:
        layout: Grid geometry shared by every cell.
        cells: One entry per valid index, in row-major order.
    """

    layout: HexLayout
    cells: dict[HexIndex, CellRef] = field(repr=False)

    @classmethod
    def build(cls, layout: HexLayout) -> TileRegistry:
        """Create one cell per valid index, enumerating rows then columns.

        Args:
            layout: Grid geometry.

        Returns:
            A populated registry; ids are identical across runs.
        """
        centers = cell_centers(layout)
        cells: dict[HexIndex, CellRef] = {}
        for row in range(layout.rows):
            for col in range(layout.cols):
                index = HexIndex(row, col)
                cx, cy = centers[row, col]
                cells[index] = CellRef(
                    cell_id=len(cells),
                    index=index,
                    center=(float(cx), float(cy)),
                )
        return cls(layout=layout, cells=cells)

    def get(self, index: HexIndex | tuple[int, int]) -> CellRef | None:
        """Return the cell at ``index``, or None if it is not on the grid."""
        return self.cells.get(HexIndex(*index))

    def indices(self) -> list[HexIndex]:
        """Return every registered index in enumeration order."""
        return list(self.cells)

    def __contains__(self, index: object) -> bool:
        return index in self.cells

    def __iter__(self) -> Iterator[CellRef]:
        return iter(self.cells.values())

    def __len__(self) -> int:
        return len(self.cells)
