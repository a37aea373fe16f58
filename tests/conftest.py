"""Shared fixtures for the hexworld test suite."""

from __future__ import annotations

import pytest

from hexworld.grid.hex_math import HexLayout
from hexworld.grid.registry import TileRegistry
from hexworld.grid.visuals import SceneState
from hexworld.simulation.config import WorldConfig


class IdentityView:
    """View provider whose screen space is world space; counts projections."""

    def __init__(self) -> None:
        self.calls = 0

    def screen_to_world(self, screen_pos: tuple[float, float]) -> tuple[float, float]:
        self.calls += 1
        return screen_pos


@pytest.fixture
def layout() -> HexLayout:
    """The 5x5 grid of 50x58 cells, odd rows shifted."""
    return HexLayout(rows=5, cols=5, cell_width=50.0, cell_height=58.0)


@pytest.fixture
def registry(layout: HexLayout) -> TileRegistry:
    """A registry built from the 5x5 layout."""
    return TileRegistry.build(layout)


@pytest.fixture
def scene() -> SceneState:
    """An empty visual scene."""
    return SceneState()


@pytest.fixture
def default_config() -> WorldConfig:
    """Default world config (no YAML file needed)."""
    return WorldConfig()


@pytest.fixture
def view() -> IdentityView:
    """A pass-through camera."""
    return IdentityView()
