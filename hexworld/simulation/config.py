"""Config — load world parameters from YAML files.

Grid geometry, building production parameters, and camera limits live
in YAML and are parsed into typed dataclasses here.  Every key is
optional; missing keys fall back to the dataclass defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from hexworld.economy.buildings import DEFAULT_SPECS, BuildingKind, BuildingSpec
from hexworld.economy.items import ItemType
from hexworld.grid.hex_math import HexLayout, Stagger


def _default_buildings() -> dict[str, dict[str, Any]]:
    return {
        kind.value: {
            "output_item": spec.output_item.value,
            "batch_size": spec.batch_size,
            "cycle_length": spec.cycle_length,
            "initial_turns": spec.initial_turns,
        }
        for kind, spec in DEFAULT_SPECS.items()
    }


@dataclass
class WorldConfig:
    """Top-level world configuration.

    Attributes:
        rows: Number of hex rows.
        cols: Number of hex columns.
        cell_width: Hex width in world units.
        cell_height: Hex height in world units.
        stagger: Which row parity is shifted ("odd" or "even").
        build_kind: Building placed by the build action.
        buildings: Per-kind production parameters, keyed by kind name.
        window_width: Initial window width in pixels.
        window_height: Initial window height in pixels.
        min_zoom: Smallest camera zoom.
        max_zoom: Largest camera zoom.
        pan_speed: Camera pan speed in pixels per second.
        zoom_speed: Camera zoom factor change per second.
    """

    rows: int = 5
    cols: int = 5
    cell_width: float = 50.0
    cell_height: float = 58.0
    stagger: str = "odd"
    build_kind: str = BuildingKind.WOOD_CUTTER.value

    buildings: dict[str, dict[str, Any]] = field(default_factory=_default_buildings)

    # Window and camera
    window_width: int = 800
    window_height: int = 600
    min_zoom: float = 0.25
    max_zoom: float = 4.0
    pan_speed: float = 300.0
    zoom_speed: float = 1.5

    def layout(self) -> HexLayout:
        """Build the grid geometry described by this config."""
        return HexLayout(
            rows=self.rows,
            cols=self.cols,
            cell_width=self.cell_width,
            cell_height=self.cell_height,
            stagger=Stagger(self.stagger),
        )

    def building_specs(self) -> dict[BuildingKind, BuildingSpec]:
        """Parse the ``buildings`` table into typed specs.

        Kinds missing from the table keep their built-in defaults.

        Raises:
            ValueError: If a kind or item name is unknown.
        """
        specs = dict(DEFAULT_SPECS)
        for name, params in self.buildings.items():
            params = params or {}
            kind = BuildingKind(name)
            default = DEFAULT_SPECS[kind]
            specs[kind] = BuildingSpec(
                output_item=ItemType(
                    params.get("output_item", default.output_item.value),
                ),
                batch_size=params.get("batch_size", default.batch_size),
                cycle_length=params.get("cycle_length", default.cycle_length),
                initial_turns=params.get("initial_turns", default.initial_turns),
            )
        return specs

    @property
    def default_kind(self) -> BuildingKind:
        """The building kind placed by the build action."""
        return BuildingKind(self.build_kind)

    @classmethod
    def from_yaml(cls, path: str | Path) -> WorldConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated WorldConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        grid = data.get("grid") or {}
        camera = data.get("camera") or {}
        window = data.get("window") or {}
        return cls(
            rows=grid.get("rows", cls.rows),
            cols=grid.get("cols", cls.cols),
            cell_width=grid.get("cell_width", cls.cell_width),
            cell_height=grid.get("cell_height", cls.cell_height),
            stagger=grid.get("stagger", cls.stagger),
            build_kind=data.get("build_kind", cls.build_kind),
            buildings=data.get("buildings") or _default_buildings(),
            window_width=window.get("width", cls.window_width),
            window_height=window.get("height", cls.window_height),
            min_zoom=camera.get("min_zoom", cls.min_zoom),
            max_zoom=camera.get("max_zoom", cls.max_zoom),
            pan_speed=camera.get("pan_speed", cls.pan_speed),
            zoom_speed=camera.get("zoom_speed", cls.zoom_speed),
        )
