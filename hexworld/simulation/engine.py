"""WorldSession — owns the session state and runs one frame of input.

A frame is processed in a fixed order:

1. Pointer: only the last pointer move of the frame counts.  It is
   projected through the camera once and the hover is updated.
2. Buttons, in arrival order:
   - build / demolish act on the cell hovered after step 1,
   - direction keys mark one neighbour of the hovered cell,
   - advance-turn steps every producer once.

Production never reads pointer state and the pointer path never
touches producers or the ledger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hexworld.economy.buildings import (
    Building,
    BuildingKind,
    BuildingPlacement,
    BuildingSpec,
    PlacementError,
)
from hexworld.economy.items import ItemType, ResourceLedger
from hexworld.economy.production import InvalidProducerState, advance_turn
from hexworld.grid.picking import pick_screen
from hexworld.grid.registry import TileRegistry
from hexworld.grid.visuals import SceneState
from hexworld.input.events import InputAction, button_presses, coalesce_pointer
from hexworld.input.hover import HoverTracker

if TYPE_CHECKING:
    from collections.abc import Iterable

    from hexworld.grid.hex_math import HexIndex
    from hexworld.input.camera import ViewProvider
    from hexworld.input.events import ButtonPressed, InputEvent
    from hexworld.simulation.config import WorldConfig

log = logging.getLogger(__name__)


@dataclass
class TurnReport:
    """Diagnostics for one turn advance.

    Attributes:
        turn: Turn counter after the advance.
        ledger: Ledger snapshot after the advance.
        produced: Units produced this turn per item type.
        invalid: Producers found broken and clamped.
    """

    turn: int
    ledger: dict[ItemType, int]
    produced: dict[ItemType, int] = field(default_factory=dict)
    invalid: list[InvalidProducerState] = field(default_factory=list)


@dataclass
class FrameReport:
    """What one ``process_frame`` call did.

    Attributes:
        hover_changed: Whether the hover marks changed.
        placed: Buildings placed this frame.
        removed: Buildings removed this frame.
        rejected: Placement/removal requests that were refused.
        marked: Indices marked with a direction key.
        turns: One report per turn advanced.
    """

    hover_changed: bool = False
    placed: list[Building] = field(default_factory=list)
    removed: list[Building] = field(default_factory=list)
    rejected: list[PlacementError] = field(default_factory=list)
    marked: list[HexIndex] = field(default_factory=list)
    turns: list[TurnReport] = field(default_factory=list)


@dataclass
class WorldSession:
    """All state for one play session.

    Attributes:
        registry: Tile registry built from the config layout.
        scene: Visual state the renderer draws.
        hover: Hover/highlight tracker.
        placement: Building side table.
        ledger: Resource counts.
        build_kind: Kind placed by the build action.
        specs: Production parameters per kind; None uses the defaults.
        turn: Number of turns advanced so far.
    """

    registry: TileRegistry
    scene: SceneState = field(default_factory=SceneState)
    build_kind: BuildingKind = BuildingKind.WOOD_CUTTER
    specs: dict[BuildingKind, BuildingSpec] | None = None
    hover: HoverTracker = field(init=False)
    placement: BuildingPlacement = field(init=False)
    ledger: ResourceLedger = field(default_factory=ResourceLedger)
    turn: int = 0

    def __post_init__(self) -> None:
        """Wire the tracker and placement table to the shared scene."""
        self.hover = HoverTracker(self.registry, self.scene)
        self.placement = BuildingPlacement(self.registry, self.scene, self.specs)

    @classmethod
    def from_config(cls, config: WorldConfig) -> WorldSession:
        """Build a fresh session from a config.

        Args:
            config: Loaded world configuration.
        """
        return cls(
            registry=TileRegistry.build(config.layout()),
            build_kind=config.default_kind,
            specs=config.building_specs(),
        )

    def process_frame(
        self,
        events: Iterable[InputEvent],
        camera: ViewProvider,
    ) -> FrameReport:
        """Consume one frame's batch of input events.

        Args:
            events: Events gathered since the previous frame.
            camera: Projection used for this frame's pointer position.

        Returns:
            A summary of everything the frame changed.
        """
        events = list(events)
        report = FrameReport()

        pointer = coalesce_pointer(events)
        if pointer is not None:
            picked = pick_screen(pointer.screen_pos, camera, self.registry)
            report.hover_changed = self.hover.update(
                picked[0] if picked is not None else None,
            )

        for press in button_presses(events):
            self._handle_press(press, report)
        return report

    def advance_turn(self) -> TurnReport:
        """Advance every producer by one turn and log the ledger."""
        outcome = advance_turn(self.ledger, self.placement.producers())
        self.turn += 1
        report = TurnReport(
            turn=self.turn,
            ledger=self.ledger.snapshot(),
            produced=outcome.produced,
            invalid=outcome.invalid,
        )
        log.info("turn %d: %s", self.turn, self.ledger)
        return report

    def build_hovered(self, kind: BuildingKind | None = None) -> Building | None:
        """Place a building on the hovered cell.

        Returns:
            The new building, or None when nothing is hovered.

        Raises:
            AlreadyOccupied: If the hovered cell already has a building.
        """
        hovered = self.hover.state.hovered
        if hovered is None:
            return None
        return self.placement.place(hovered, kind or self.build_kind)

    def demolish_hovered(self) -> Building | None:
        """Remove the building on the hovered cell.

        Returns:
            The removed building, or None when nothing is hovered.

        Raises:
            NotFound: If the hovered cell has no building.
        """
        hovered = self.hover.state.hovered
        if hovered is None:
            return None
        return self.placement.remove(hovered)

    def _handle_press(self, press: ButtonPressed, report: FrameReport) -> None:
        if press.action is InputAction.ADVANCE_TURN:
            report.turns.append(self.advance_turn())
        elif press.action is InputAction.MARK_DIRECTION:
            marked = self.hover.mark_direction(press.direction)
            if marked is not None:
                report.marked.append(marked)
        elif press.action is InputAction.BUILD:
            try:
                building = self.build_hovered()
            except PlacementError as exc:
                log.warning("build rejected: %s", exc)
                report.rejected.append(exc)
            else:
                if building is not None:
                    report.placed.append(building)
        elif press.action is InputAction.DEMOLISH:
            try:
                building = self.demolish_hovered()
            except PlacementError as exc:
                log.warning("demolish rejected: %s", exc)
                report.rejected.append(exc)
            else:
                if building is not None:
                    report.removed.append(building)
