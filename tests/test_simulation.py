"""Tests for hexworld.simulation — config loading and the frame loop."""

import logging
from pathlib import Path

import pytest
from conftest import IdentityView

from hexworld.economy.buildings import AlreadyOccupied, BuildingKind, NotFound
from hexworld.economy.items import ItemType
from hexworld.grid.hex_math import HexDirection, HexIndex, Stagger, hex_to_world_center
from hexworld.grid.visuals import VisualMark
from hexworld.input.camera import Camera
from hexworld.input.events import ButtonPressed, InputAction, PointerMoved, coalesce_pointer
from hexworld.simulation.config import WorldConfig
from hexworld.simulation.engine import WorldSession

BUILD = ButtonPressed(InputAction.BUILD)
DEMOLISH = ButtonPressed(InputAction.DEMOLISH)
TURN = ButtonPressed(InputAction.ADVANCE_TURN)


def _center(session: WorldSession, row: int, col: int) -> PointerMoved:
    return PointerMoved(hex_to_world_center(HexIndex(row, col), session.registry.layout))


@pytest.fixture
def session(default_config: WorldConfig) -> WorldSession:
    """A fresh 5x5 session."""
    return WorldSession.from_config(default_config)


class TestWorldConfig:
    """Tests for YAML config loading."""

    def test_defaults(self) -> None:
        cfg = WorldConfig()
        assert cfg.rows == 5
        assert cfg.cols == 5
        assert (cfg.cell_width, cfg.cell_height) == (50.0, 58.0)
        assert cfg.default_kind is BuildingKind.WOOD_CUTTER

    def test_layout(self, default_config: WorldConfig) -> None:
        layout = default_config.layout()
        assert layout.rows == 5
        assert layout.stagger is Stagger.ODD

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text(
            "grid:\n"
            "  rows: 8\n"
            "  cols: 6\n"
            "  stagger: even\n"
            "buildings:\n"
            "  quarry:\n"
            "    batch_size: 7\n"
            "camera:\n"
            "  max_zoom: 2.0\n",
        )
        cfg = WorldConfig.from_yaml(yaml_file)
        assert cfg.rows == 8
        assert cfg.cols == 6
        assert cfg.cell_width == 50.0
        assert cfg.layout().stagger is Stagger.EVEN
        assert cfg.max_zoom == 2.0

        specs = cfg.building_specs()
        assert specs[BuildingKind.QUARRY].batch_size == 7
        assert specs[BuildingKind.QUARRY].output_item is ItemType.STONE
        assert specs[BuildingKind.WOOD_CUTTER].cycle_length == 1

    def test_empty_yaml_uses_defaults(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert WorldConfig.from_yaml(yaml_file) == WorldConfig()

    def test_empty_sections_use_defaults(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "sparse.yaml"
        yaml_file.write_text(
            "grid:\n"
            "camera:\n"
            "window:\n"
            "buildings:\n"
            "  quarry:\n",
        )
        cfg = WorldConfig.from_yaml(yaml_file)
        assert cfg.rows == 5
        assert cfg.max_zoom == 4.0
        assert cfg.window_width == 800
        assert cfg.building_specs()[BuildingKind.QUARRY] == WorldConfig().building_specs()[
            BuildingKind.QUARRY
        ]

    def test_shipped_default_config_loads(self) -> None:
        path = Path(__file__).resolve().parent.parent / "config" / "default.yaml"
        cfg = WorldConfig.from_yaml(path)
        assert cfg.layout().rows == 5
        assert set(cfg.building_specs()) == set(BuildingKind)

    def test_unknown_stagger_rejected(self) -> None:
        with pytest.raises(ValueError):
            WorldConfig(stagger="sideways").layout()

    def test_unknown_building_rejected(self) -> None:
        with pytest.raises(ValueError):
            WorldConfig(buildings={"castle": {}}).building_specs()


class TestCamera:
    """Tests for the pan/zoom camera."""

    def test_projection_round_trip(self) -> None:
        camera = Camera(viewport_width=800, viewport_height=600, zoom=2.0)
        camera.look_at((40.0, -10.0))
        world = camera.screen_to_world((123.0, 456.0))
        assert camera.world_to_screen(world) == pytest.approx((123.0, 456.0))

    def test_viewport_centre_shows_position(self) -> None:
        camera = Camera(viewport_width=800, viewport_height=600, position=(5.0, 7.0))
        assert camera.screen_to_world((400.0, 300.0)) == (5.0, 7.0)

    def test_pan_is_in_screen_pixels(self) -> None:
        camera = Camera(viewport_width=100, viewport_height=100, zoom=2.0)
        camera.pan(10.0, -20.0)
        assert camera.position == (5.0, -10.0)

    def test_zoom_is_clamped(self) -> None:
        camera = Camera(viewport_width=100, viewport_height=100, max_zoom=2.0)
        camera.zoom_by(10.0)
        assert camera.zoom == 2.0
        camera.zoom_by(0.001)
        assert camera.zoom == camera.min_zoom

    def test_bad_zoom_factor(self) -> None:
        camera = Camera(viewport_width=100, viewport_height=100)
        with pytest.raises(ValueError):
            camera.zoom_by(0.0)


class TestInputEvents:
    """Tests for event types and coalescing."""

    def test_coalesce_keeps_last_move(self) -> None:
        events = [PointerMoved((1.0, 1.0)), TURN, PointerMoved((2.0, 2.0))]
        assert coalesce_pointer(events) == PointerMoved((2.0, 2.0))

    def test_coalesce_without_moves(self) -> None:
        assert coalesce_pointer([TURN, BUILD]) is None

    def test_direction_required_for_marking(self) -> None:
        with pytest.raises(ValueError):
            ButtonPressed(InputAction.MARK_DIRECTION)
        with pytest.raises(ValueError):
            ButtonPressed(InputAction.BUILD, direction=HexDirection.EAST)


class TestWorldSession:
    """Tests for frame processing."""

    def test_session_initialises(self, session: WorldSession) -> None:
        assert session.turn == 0
        assert len(session.registry) == 25
        assert session.ledger.total() == 0
        assert session.hover.state.is_idle

    def test_only_last_pointer_move_is_projected(
        self,
        session: WorldSession,
        view: IdentityView,
    ) -> None:
        events = [PointerMoved((-1000.0, -1000.0)), PointerMoved((0.0, 0.0))]
        report = session.process_frame(events, view)
        assert view.calls == 1
        assert report.hover_changed
        assert session.hover.state.hovered == HexIndex(0, 0)

    def test_pointer_off_grid_goes_idle(
        self,
        session: WorldSession,
        view: IdentityView,
    ) -> None:
        session.process_frame([PointerMoved((0.0, 0.0))], view)
        session.process_frame([PointerMoved((-1000.0, -1000.0))], view)
        assert session.hover.state.is_idle
        assert session.scene.marks == {}

    def test_no_pointer_keeps_hover(self, session: WorldSession, view: IdentityView) -> None:
        session.process_frame([_center(session, 1, 1)], view)
        report = session.process_frame([], view)
        assert not report.hover_changed
        assert session.hover.state.hovered == HexIndex(1, 1)

    def test_build_reads_hover_resolved_this_frame(
        self,
        session: WorldSession,
        view: IdentityView,
    ) -> None:
        report = session.process_frame([BUILD, _center(session, 2, 2)], view)
        assert [b.index for b in report.placed] == [HexIndex(2, 2)]
        assert session.placement.building_at(HexIndex(2, 2)).kind is BuildingKind.WOOD_CUTTER
        cell = session.registry.get(HexIndex(2, 2))
        assert session.scene.attachment_of(cell) is BuildingKind.WOOD_CUTTER

    def test_double_build_is_rejected_once(
        self,
        session: WorldSession,
        view: IdentityView,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING):
            report = session.process_frame([_center(session, 3, 3), BUILD, BUILD], view)
        assert len(report.placed) == 1
        assert len(report.rejected) == 1
        assert isinstance(report.rejected[0], AlreadyOccupied)
        assert "build rejected" in caplog.text

    def test_demolish_empty_cell_is_rejected(
        self,
        session: WorldSession,
        view: IdentityView,
    ) -> None:
        report = session.process_frame([_center(session, 0, 0), DEMOLISH], view)
        assert report.removed == []
        assert isinstance(report.rejected[0], NotFound)

    def test_build_then_demolish(self, session: WorldSession, view: IdentityView) -> None:
        session.process_frame([_center(session, 4, 0), BUILD], view)
        report = session.process_frame([DEMOLISH], view)
        assert [b.index for b in report.removed] == [HexIndex(4, 0)]
        assert len(session.placement) == 0

    def test_click_while_idle_does_nothing(
        self,
        session: WorldSession,
        view: IdentityView,
    ) -> None:
        report = session.process_frame([BUILD, DEMOLISH], view)
        assert report.placed == []
        assert report.removed == []
        assert report.rejected == []

    def test_turns_produce_wood(
        self,
        session: WorldSession,
        view: IdentityView,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        session.process_frame([_center(session, 2, 2), BUILD], view)
        with caplog.at_level(logging.INFO):
            report = session.process_frame([TURN, TURN, TURN], view)
        assert session.turn == 3
        assert [t.turn for t in report.turns] == [1, 2, 3]
        assert report.turns[-1].ledger[ItemType.WOOD] == 3
        assert report.turns[0].produced == {ItemType.WOOD: 1}
        assert "turn 3" in caplog.text

    def test_turn_snapshot_is_not_live(self, session: WorldSession) -> None:
        session.placement.place(HexIndex(0, 0), BuildingKind.WOOD_CUTTER)
        first = session.advance_turn()
        session.advance_turn()
        assert first.ledger[ItemType.WOOD] == 1
        assert session.ledger[ItemType.WOOD] == 2

    def test_invalid_producer_surfaces_in_turn_report(
        self,
        session: WorldSession,
    ) -> None:
        building = session.placement.place(HexIndex(1, 1), BuildingKind.QUARRY)
        building.producer.turns_remaining = 0
        report = session.advance_turn()
        assert len(report.invalid) == 1
        assert report.turn == 1

    def test_direction_key_marks_neighbour(
        self,
        session: WorldSession,
        view: IdentityView,
    ) -> None:
        press = ButtonPressed(InputAction.MARK_DIRECTION, direction=HexDirection.EAST)
        report = session.process_frame([_center(session, 2, 2), press], view)
        assert report.marked == [HexIndex(2, 3)]
        cell = session.registry.get(HexIndex(2, 3))
        assert session.scene.mark_of(cell) is VisualMark.DIRECTIONAL

    def test_build_at_centre_then_neighbours(
        self,
        session: WorldSession,
        view: IdentityView,
    ) -> None:
        session.process_frame([_center(session, 2, 2), BUILD], view)
        highlighted = session.hover.state.highlighted
        assert HexIndex(2, 2) not in highlighted
        assert len(highlighted) == 6
        assert all(0 <= i.row < 5 and 0 <= i.col < 5 for i in highlighted)
