"""Buildings and their placement on the grid.

``BuildingPlacement`` keeps an index-keyed side table of buildings and
enforces at most one building per cell.  The cell's building sprite is
handed to the visual sink on placement and taken back on removal; the
placement table never keeps the cell handle itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from hexworld.economy.items import ItemType
from hexworld.economy.production import Producer
from hexworld.grid.hex_math import HexIndex

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from hexworld.grid.registry import TileRegistry
    from hexworld.grid.visuals import VisualSink

log = logging.getLogger(__name__)


class BuildingKind(Enum):
    """Kinds of building that can be placed on a cell."""

    WOOD_CUTTER = "wood_cutter"
    QUARRY = "quarry"


@dataclass(frozen=True)
class BuildingSpec:
    """Production parameters for one building kind.

    Attributes:
        output_item: Item produced.
        batch_size: Units per completed cycle.
        cycle_length: Turns per cycle.
        initial_turns: Turns until the first batch; 0 means a full cycle.
    """

    output_item: ItemType
    batch_size: int = 1
    cycle_length: int = 1
    initial_turns: int = 0

    def new_producer(self) -> Producer:
        """Create a fresh producer for a newly placed building."""
        return Producer(
            output_item=self.output_item,
            batch_size=self.batch_size,
            cycle_length=self.cycle_length,
            turns_remaining=self.initial_turns,
        )


DEFAULT_SPECS: dict[BuildingKind, BuildingSpec] = {
    BuildingKind.WOOD_CUTTER: BuildingSpec(
        output_item=ItemType.WOOD,
        batch_size=1,
        cycle_length=1,
    ),
    BuildingKind.QUARRY: BuildingSpec(
        output_item=ItemType.STONE,
        batch_size=2,
        cycle_length=3,
    ),
}


@dataclass
class Building:
    """A building attached to a cell.

    Attributes:
        kind: What was built.
        index: Cell the building stands on.
        producer: The building's production counter.
    """

    kind: BuildingKind
    index: HexIndex
    producer: Producer


class PlacementError(Exception):
    """A placement or removal request was rejected; nothing changed."""

    def __init__(self, index: HexIndex, message: str) -> None:
        self.index = index
        super().__init__(message)


class AlreadyOccupied(PlacementError):
    """The target cell already holds a building."""

    def __init__(self, index: HexIndex, existing: Building) -> None:
        self.existing = existing
        super().__init__(
            index,
            f"cell {tuple(index)} already holds a {existing.kind.value}",
        )


class NotFound(PlacementError):
    """There is no building on the target cell."""

    def __init__(self, index: HexIndex) -> None:
        super().__init__(index, f"no building on cell {tuple(index)}")


class OutOfBounds(PlacementError):
    """The target index is not a registered cell."""

    def __init__(self, index: HexIndex) -> None:
        super().__init__(index, f"cell {tuple(index)} is not on the grid")


class BuildingPlacement:
    """Places and removes buildings, at most one per cell.

    Check-and-insert happens inside a single method call with no
    suspension point, so two requests for the same cell can never both
    succeed.
    """

    def __init__(
        self,
        registry: TileRegistry,
        sink: VisualSink,
        specs: Mapping[BuildingKind, BuildingSpec] | None = None,
    ) -> None:
        self.registry = registry
        self.sink = sink
        self.specs = dict(DEFAULT_SPECS if specs is None else specs)
        self._buildings: dict[HexIndex, Building] = {}

    def place(self, index: HexIndex | tuple[int, int], kind: BuildingKind) -> Building:
        """Build ``kind`` on ``index``.

        Args:
            index: Target cell.
            kind: Building kind; its spec seeds the producer.

        Returns:
            The new building.

        Raises:
            OutOfBounds: If ``index`` is not a registered cell.
            AlreadyOccupied: If the cell already has a building.
            KeyError: If ``kind`` has no configured spec.
        """
        index = HexIndex(*index)
        cell = self.registry.get(index)
        if cell is None:
            raise OutOfBounds(index)
        existing = self._buildings.get(index)
        if existing is not None:
            raise AlreadyOccupied(index, existing)

        building = Building(
            kind=kind,
            index=index,
            producer=self.specs[kind].new_producer(),
        )
        self._buildings[index] = building
        self.sink.attach_building(cell, kind)
        log.info("placed %s at %s", kind.value, tuple(index))
        return building

    def remove(self, index: HexIndex | tuple[int, int]) -> Building:
        """Demolish the building on ``index``.

        Returns:
            The removed building (its producer is no longer advanced).

        Raises:
            OutOfBounds: If ``index`` is not a registered cell.
            NotFound: If the cell has no building.
        """
        index = HexIndex(*index)
        cell = self.registry.get(index)
        if cell is None:
            raise OutOfBounds(index)
        building = self._buildings.pop(index, None)
        if building is None:
            raise NotFound(index)

        self.sink.detach_building(cell)
        log.info("removed %s at %s", building.kind.value, tuple(index))
        return building

    def building_at(self, index: HexIndex | tuple[int, int]) -> Building | None:
        """Return the building on ``index``, if any."""
        return self._buildings.get(HexIndex(*index))

    def is_occupied(self, index: HexIndex | tuple[int, int]) -> bool:
        """Return True if ``index`` holds a building."""
        return HexIndex(*index) in self._buildings

    def producers(self) -> list[Producer]:
        """Return the producers of every standing building."""
        return [building.producer for building in self._buildings.values()]

    def __iter__(self) -> Iterator[Building]:
        return iter(list(self._buildings.values()))

    def __len__(self) -> int:
        return len(self._buildings)
