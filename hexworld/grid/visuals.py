"""Visual-state sink, where the core sends its mark and attach requests.

The core never draws anything.  It asks a ``VisualSink`` to recolour a
cell or to attach/detach a building sprite, and the renderer reads the
resulting ``SceneState`` each frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from hexworld.economy.buildings import BuildingKind
    from hexworld.grid.registry import CellRef


class VisualMark(Enum):
    """Highlight state a cell can be drawn in."""

    DEFAULT = auto()
    HOVERED = auto()
    HIGHLIGHTED = auto()
    DIRECTIONAL = auto()


class VisualSink(Protocol):
    """Receiver for visual-state requests."""

    def set_mark(self, cell: CellRef, mark: VisualMark) -> None: ...

    def attach_building(self, cell: CellRef, kind: BuildingKind) -> None: ...

    def detach_building(self, cell: CellRef) -> None: ...


@dataclass
class SceneState:
    """In-memory sink that remembers the latest visual state per cell.

    Attributes:
        marks: Non-default marks keyed by cell id.
        attachments: Building sprite kind attached to each cell id.
        mutations: Number of requests that changed something.
    """

    marks: dict[int, VisualMark] = field(default_factory=dict)
    attachments: dict[int, BuildingKind] = field(default_factory=dict)
    mutations: int = 0

    def set_mark(self, cell: CellRef, mark: VisualMark) -> None:
        """Record ``mark`` for ``cell``; DEFAULT removes any mark."""
        if self.mark_of(cell) is mark:
            return
        if mark is VisualMark.DEFAULT:
            del self.marks[cell.cell_id]
        else:
            self.marks[cell.cell_id] = mark
        self.mutations += 1

    def attach_building(self, cell: CellRef, kind: BuildingKind) -> None:
        """Attach a building sprite of ``kind`` to ``cell``."""
        self.attachments[cell.cell_id] = kind
        self.mutations += 1

    def detach_building(self, cell: CellRef) -> None:
        """Remove whatever building sprite is attached to ``cell``."""
        if self.attachments.pop(cell.cell_id, None) is not None:
            self.mutations += 1

    def mark_of(self, cell: CellRef) -> VisualMark:
        """Return the current mark of ``cell``."""
        return self.marks.get(cell.cell_id, VisualMark.DEFAULT)

    def attachment_of(self, cell: CellRef) -> BuildingKind | None:
        """Return the building kind attached to ``cell``, if any."""
        return self.attachments.get(cell.cell_id)
