"""Pointer picking: resolve a point to the registered cell beneath it."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hexworld.grid.hex_math import HexIndex, world_to_hex

if TYPE_CHECKING:
    from hexworld.grid.registry import CellRef, TileRegistry
    from hexworld.input.camera import ViewProvider


def pick(
    world_point: tuple[float, float],
    registry: TileRegistry,
) -> tuple[HexIndex, CellRef] | None:
    """Return the index and cell covering ``world_point``.

    Args:
        world_point: ``(x, y)`` in world units.
        registry: The session's tile registry.

    Returns:
        ``(index, cell)``, or None when the point is off the grid or
        the index has no registered cell.
    """
    index = world_to_hex(world_point, registry.layout)
    if index is None:
        return None
    cell = registry.get(index)
    if cell is None:
        return None
    return index, cell


def pick_screen(
    screen_pos: tuple[float, float],
    camera: ViewProvider,
    registry: TileRegistry,
) -> tuple[HexIndex, CellRef] | None:
    """Project a screen position through ``camera`` and pick the cell."""
    return pick(camera.screen_to_world(screen_pos), registry)
