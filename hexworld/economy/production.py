"""Production — per-building turn counters that feed the resource ledger.

Each ``Producer`` counts down the turns until its next batch.  When a
turn is triggered, ``advance_turn`` steps every producer once:

- ``turns_remaining == 1``: the batch is added to the ledger and the
  counter resets to ``cycle_length``.
- otherwise the counter drops by one.

A counter can therefore never reach zero by itself.  A producer found
at zero means some other code broke it; that producer is clamped back
to one, yields nothing this turn, and is reported, while every other
producer advances normally.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hexworld.economy.items import ItemType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from hexworld.economy.items import ResourceLedger

log = logging.getLogger(__name__)


class InvalidProducerState(ValueError):
    """A producer was found with ``turns_remaining == 0``."""

    def __init__(self, producer: Producer) -> None:
        self.producer = producer
        super().__init__(
            f"producer of {producer.output_item.value} has turns_remaining=0",
        )


@dataclass
class Producer:
    """Turn counter that emits ``batch_size`` items every ``cycle_length`` turns.

    Attributes:
        output_item: What the producer makes.
        batch_size: Units added per completed cycle.
        cycle_length: Turns per cycle.
        turns_remaining: Turns until the next batch (1 = next turn).  Left
            at 0, it starts a full cycle.
    """

    output_item: ItemType
    batch_size: int = 1
    cycle_length: int = 1
    turns_remaining: int = 0

    def __post_init__(self) -> None:
        """Validate parameters; an unset counter starts a full cycle."""
        if self.batch_size < 1 or self.cycle_length < 1:
            msg = (
                "batch_size and cycle_length must be >= 1, got "
                f"{self.batch_size} and {self.cycle_length}"
            )
            raise ValueError(msg)
        if self.turns_remaining == 0:
            self.turns_remaining = self.cycle_length
        elif self.turns_remaining < 0:
            msg = f"turns_remaining must be >= 1, got {self.turns_remaining}"
            raise ValueError(msg)

    def advance(self) -> int:
        """Step one turn.

        Returns:
            Units produced this turn (``batch_size`` or 0).

        Raises:
            InvalidProducerState: If the counter is already at zero.
        """
        if self.turns_remaining <= 0:
            raise InvalidProducerState(self)
        if self.turns_remaining == 1:
            self.turns_remaining = self.cycle_length
            return self.batch_size
        self.turns_remaining -= 1
        return 0


@dataclass
class TurnOutcome:
    """What one ``advance_turn`` call did.

    Attributes:
        produced: Units added to the ledger per item type.
        invalid: Producers that were found broken and clamped.
    """

    produced: dict[ItemType, int] = field(default_factory=dict)
    invalid: list[InvalidProducerState] = field(default_factory=list)


def advance_turn(
    ledger: ResourceLedger,
    producers: Iterable[Producer],
) -> TurnOutcome:
    """Advance every producer by one turn and credit finished batches.

    Args:
        ledger: The session's resource ledger.
        producers: All live producers; order does not matter.

    Returns:
        Per-item production and any invalid producers encountered.
    """
    produced: Counter[ItemType] = Counter()
    invalid: list[InvalidProducerState] = []
    for producer in producers:
        try:
            amount = producer.advance()
        except InvalidProducerState as exc:
            log.error("%s; clamping to 1", exc)
            producer.turns_remaining = 1
            invalid.append(exc)
            continue
        if amount:
            produced[producer.output_item] += amount

    for item, amount in produced.items():
        ledger.add(item, amount)
    return TurnOutcome(produced=dict(produced), invalid=invalid)
