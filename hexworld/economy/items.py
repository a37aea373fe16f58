"""Items and the session-wide resource ledger."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ItemType(Enum):
    """Resources buildings can produce."""

    WOOD = "wood"
    STONE = "stone"


def _zeroed() -> dict[ItemType, int]:
    return {item: 0 for item in ItemType}


@dataclass
class ResourceLedger:
    """Running count of every item type, starting at zero.

    Only the production step adds to the ledger; everything else reads
    it through ``snapshot`` or indexing.

    Attributes:
        counts: Current count per item type (always ≥ 0).
    """

    counts: dict[ItemType, int] = field(default_factory=_zeroed)

    def add(self, item: ItemType, count: int) -> None:
        """Add ``count`` units of ``item``.

        Raises:
            ValueError: If ``count`` is negative.
        """
        if count < 0:
            msg = f"cannot add a negative amount ({count}) of {item.value}"
            raise ValueError(msg)
        self.counts[item] = self.counts.get(item, 0) + count

    def snapshot(self) -> dict[ItemType, int]:
        """Return a copy of the current counts."""
        return dict(self.counts)

    def total(self) -> int:
        """Return the number of units across all item types."""
        return sum(self.counts.values())

    def __getitem__(self, item: ItemType) -> int:
        return self.counts.get(item, 0)

    def __str__(self) -> str:
        return ", ".join(f"{item.value}={n}" for item, n in self.counts.items())
