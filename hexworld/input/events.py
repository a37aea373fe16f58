"""Input events consumed by the session once per frame.

The window layer translates raw device events into these; the core
never talks to the device itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Iterable

    from hexworld.grid.hex_math import HexDirection


class InputAction(Enum):
    """Discrete commands a button or key can issue."""

    BUILD = auto()
    DEMOLISH = auto()
    ADVANCE_TURN = auto()
    MARK_DIRECTION = auto()


@dataclass(frozen=True)
class PointerMoved:
    """The pointer moved to ``screen_pos`` (window pixels)."""

    screen_pos: tuple[float, float]


@dataclass(frozen=True)
class ButtonPressed:
    """A button or key was pressed.

    Attributes:
        action: What the press asks for.
        direction: Neighbour direction, only for ``MARK_DIRECTION``.
    """

    action: InputAction
    direction: HexDirection | None = None

    def __post_init__(self) -> None:
        """Require a direction exactly when marking a direction."""
        wants_direction = self.action is InputAction.MARK_DIRECTION
        if wants_direction != (self.direction is not None):
            msg = f"{self.action.name} press with direction={self.direction!r}"
            raise ValueError(msg)


InputEvent = Union[PointerMoved, ButtonPressed]


def coalesce_pointer(events: Iterable[InputEvent]) -> PointerMoved | None:
    """Return the most recent pointer move in ``events``, if any."""
    latest: PointerMoved | None = None
    for event in events:
        if isinstance(event, PointerMoved):
            latest = event
    return latest


def button_presses(events: Iterable[InputEvent]) -> list[ButtonPressed]:
    """Return the button presses in ``events`` in arrival order."""
    return [event for event in events if isinstance(event, ButtonPressed)]
