"""Hover/highlight tracker.

Keeps track of which cell the pointer is over and which of its
neighbours are highlighted, and pushes the matching marks to a
``VisualSink``.  On every change the whole hover state is rebuilt from
the new index rather than patched, so a dropped or coalesced pointer
event can never leave a stale mark behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hexworld.grid.hex_math import HexDirection, HexIndex, neighbor_in_direction, neighbors
from hexworld.grid.visuals import VisualMark

if TYPE_CHECKING:
    from hexworld.grid.registry import TileRegistry
    from hexworld.grid.visuals import VisualSink

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HoverState:
    """Snapshot of the tracker's logical state.

    Attributes:
        hovered: Cell under the pointer, None while idle.
        highlighted: Registered neighbours of ``hovered``.
        directional: Neighbour picked with a direction key, if any.
    """

    hovered: HexIndex | None = None
    highlighted: frozenset[HexIndex] = field(default_factory=frozenset)
    directional: HexIndex | None = None

    @property
    def is_idle(self) -> bool:
        """Return True when no cell is hovered."""
        return self.hovered is None


class HoverTracker:
    """Drives hover, neighbour and directional marks for one grid."""

    def __init__(self, registry: TileRegistry, sink: VisualSink) -> None:
        self.registry = registry
        self.sink = sink
        self._state = HoverState()

    @property
    def state(self) -> HoverState:
        """The current hover state."""
        return self._state

    def update(self, index: HexIndex | None) -> bool:
        """Move the hover to ``index`` (None means the pointer left the grid).

        Args:
            index: Newly resolved cell, or None when off-grid.

        Returns:
            True if any visual state changed.
        """
        if index is not None and self.registry.get(index) is None:
            index = None
        if index == self._state.hovered:
            return False

        new_state = self._compute(index)
        self._transition(self._state, new_state)
        log.debug("hover %s -> %s", self._state.hovered, index)
        self._state = new_state
        return True

    def mark_direction(self, direction: HexDirection | int) -> HexIndex | None:
        """Mark the hovered cell's neighbour in ``direction``.

        Only one directional mark exists at a time; it is dropped the
        next time the hover moves.

        Returns:
            The marked index, or None if idle or the neighbour is off-grid.
        """
        hovered = self._state.hovered
        if hovered is None:
            return None
        target = neighbor_in_direction(hovered, direction, self.registry.layout)
        cell = self.registry.get(target)
        if cell is None:
            return None

        previous = self._state.directional
        if previous is not None and previous != target:
            self._restore(previous, self._state)
        self.sink.set_mark(cell, VisualMark.DIRECTIONAL)
        self._state = HoverState(
            hovered=hovered,
            highlighted=self._state.highlighted,
            directional=target,
        )
        return target

    def _compute(self, index: HexIndex | None) -> HoverState:
        if index is None:
            return HoverState()
        highlighted = frozenset(
            n for n in neighbors(index, self.registry.layout) if n in self.registry
        )
        return HoverState(hovered=index, highlighted=highlighted)

    def _transition(self, old: HoverState, new: HoverState) -> None:
        """Clear stale marks of ``old``, then apply every mark of ``new``."""
        old_marks = _marks_for(old)
        new_marks = _marks_for(new)
        for index in old_marks.keys() - new_marks.keys():
            cell = self.registry.get(index)
            if cell is not None:
                self.sink.set_mark(cell, VisualMark.DEFAULT)
        for index, mark in new_marks.items():
            if old_marks.get(index) is mark:
                continue
            cell = self.registry.get(index)
            if cell is not None:
                self.sink.set_mark(cell, mark)

    def _restore(self, index: HexIndex, state: HoverState) -> None:
        """Put ``index`` back to the mark it would have without a direction."""
        cell = self.registry.get(index)
        if cell is None:
            return
        if index == state.hovered:
            mark = VisualMark.HOVERED
        elif index in state.highlighted:
            mark = VisualMark.HIGHLIGHTED
        else:
            mark = VisualMark.DEFAULT
        self.sink.set_mark(cell, mark)


def _marks_for(state: HoverState) -> dict[HexIndex, VisualMark]:
    marks = {index: VisualMark.HIGHLIGHTED for index in state.highlighted}
    if state.hovered is not None:
        marks[state.hovered] = VisualMark.HOVERED
    if state.directional is not None:
        marks[state.directional] = VisualMark.DIRECTIONAL
    return marks
