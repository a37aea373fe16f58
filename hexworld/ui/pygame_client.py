"""Pygame 2D window for a hex world session.

Collects mouse and keyboard input into per-frame event batches, feeds
them to the session, and draws the grid from the session's scene
state.  Held arrow keys pan the camera and Z/X zoom it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

from hexworld.economy.buildings import BuildingKind
from hexworld.grid.hex_math import HexDirection, hex_corners
from hexworld.grid.visuals import VisualMark
from hexworld.input.camera import Camera
from hexworld.input.events import ButtonPressed, InputAction, InputEvent, PointerMoved

if TYPE_CHECKING:
    from hexworld.simulation.config import WorldConfig
    from hexworld.simulation.engine import WorldSession

# Colour palette
_BG = (25, 30, 35)
_OUTLINE = (15, 15, 15)
_LABEL = (20, 20, 20)
_TEXT = (200, 200, 200)

_MARK_COLOURS: dict[VisualMark, tuple[int, int, int]] = {
    VisualMark.DEFAULT: (150, 170, 120),
    VisualMark.HOVERED: (220, 90, 80),
    VisualMark.HIGHLIGHTED: (100, 140, 220),
    VisualMark.DIRECTIONAL: (90, 200, 110),
}

_BUILDING_COLOURS: dict[BuildingKind, tuple[int, int, int]] = {
    BuildingKind.WOOD_CUTTER: (120, 80, 40),
    BuildingKind.QUARRY: (130, 130, 140),
}

_DIRECTION_KEYS: dict[int, HexDirection] = {
    pygame.K_0: HexDirection.EAST,
    pygame.K_1: HexDirection.NORTH_EAST,
    pygame.K_2: HexDirection.NORTH_WEST,
    pygame.K_3: HexDirection.WEST,
    pygame.K_4: HexDirection.SOUTH_WEST,
    pygame.K_5: HexDirection.SOUTH_EAST,
}


def translate_event(event: pygame.event.Event) -> InputEvent | None:
    """Map one pygame event to a session input event, if it is one."""
    if event.type == pygame.MOUSEMOTION:
        return PointerMoved(screen_pos=(float(event.pos[0]), float(event.pos[1])))
    if event.type == pygame.MOUSEBUTTONDOWN:
        if event.button == 1:
            return ButtonPressed(InputAction.BUILD)
        if event.button == 3:
            return ButtonPressed(InputAction.DEMOLISH)
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_SPACE:
            return ButtonPressed(InputAction.ADVANCE_TURN)
        if event.key in _DIRECTION_KEYS:
            return ButtonPressed(
                InputAction.MARK_DIRECTION,
                direction=_DIRECTION_KEYS[event.key],
            )
    return None


class PygameRenderer:
    """Runs a WorldSession inside a Pygame window.

    Attributes:
        session: The session to drive and draw.
        camera: Pan/zoom camera used for picking and drawing.
        screen: The Pygame display surface.
    """

    def __init__(self, session: WorldSession, config: WorldConfig) -> None:
        """Initialise the window and centre the camera on the grid.

        Args:
            session: The session to render.
            config: Window size and camera limits.
        """
        self.session = session
        self.pan_speed = config.pan_speed
        self.zoom_speed = config.zoom_speed
        self._panel_width = 200
        self._win_w = config.window_width + self._panel_width
        self._win_h = config.window_height

        self.camera = Camera(
            viewport_width=config.window_width,
            viewport_height=config.window_height,
            min_zoom=config.min_zoom,
            max_zoom=config.max_zoom,
        )
        registry = session.registry
        xs = [cell.center[0] for cell in registry]
        ys = [cell.center[1] for cell in registry]
        self.camera.look_at(((min(xs) + max(xs)) / 2, (min(ys) + max(ys)) / 2))

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption(
            "Hex world - hover a tile, press 0-5 to mark neighbours",
        )
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.label_font = pygame.font.SysFont("monospace", 11)
        self.running = True
        self._last_turn_line = "Turn 0"

    def run(self, fps: int = 30) -> None:
        """Main loop: gather input, process the frame, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0
            events = self._frame_events(dt)
            report = self.session.process_frame(events, self.camera)
            for turn in report.turns:
                self._last_turn_line = f"Turn {turn.turn}"
            self._draw()

        pygame.quit()

    def _frame_events(self, dt: float) -> list[InputEvent]:
        """Move the camera, then collect this frame's input batch.

        When the camera moved, the pointer is re-picked at its current
        position so clicks in the same frame read the new view.
        """
        camera_moved = self._move_camera(dt)
        events = self._gather_events()
        if camera_moved:
            x, y = pygame.mouse.get_pos()
            events.append(PointerMoved(screen_pos=(float(x), float(y))))
        return events

    def _gather_events(self) -> list[InputEvent]:
        """Drain the Pygame queue into session events."""
        events: list[InputEvent] = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False
            else:
                translated = translate_event(event)
                if translated is not None:
                    events.append(translated)
        return events

    def _move_camera(self, dt: float) -> bool:
        """Pan with the arrow keys and zoom with Z/X while held.

        Returns:
            True if the view changed.
        """
        before = (self.camera.position, self.camera.zoom)
        keys = pygame.key.get_pressed()
        step = self.pan_speed * dt
        dx = (keys[pygame.K_RIGHT] - keys[pygame.K_LEFT]) * step
        dy = (keys[pygame.K_DOWN] - keys[pygame.K_UP]) * step
        if dx or dy:
            self.camera.pan(dx, dy)
        if keys[pygame.K_z]:
            self.camera.zoom_by(self.zoom_speed**dt)
        if keys[pygame.K_x]:
            self.camera.zoom_by(self.zoom_speed**-dt)
        return (self.camera.position, self.camera.zoom) != before

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_cells()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_cells(self) -> None:
        """Draw every hex in its mark colour, its building, and its label."""
        layout = self.session.registry.layout
        scene = self.session.scene
        zoom = self.camera.zoom
        for cell in self.session.registry:
            corners = [
                self.camera.world_to_screen((float(x), float(y)))
                for x, y in hex_corners(cell.center, layout)
            ]
            pygame.draw.polygon(self.screen, _MARK_COLOURS[scene.mark_of(cell)], corners)
            pygame.draw.polygon(self.screen, _OUTLINE, corners, width=1)

            cx, cy = self.camera.world_to_screen(cell.center)
            kind = scene.attachment_of(cell)
            if kind is not None:
                radius = max(3, int(layout.cell_width * zoom * 0.25))
                pygame.draw.circle(
                    self.screen,
                    _BUILDING_COLOURS[kind],
                    (int(cx), int(cy)),
                    radius,
                )

            label = self.label_font.render(
                f"{cell.index.row}, {cell.index.col}",
                True,
                _LABEL,
            )
            self.screen.blit(
                label,
                (cx - label.get_width() / 2, cy + layout.cell_height * zoom * 0.2),
            )

    def _draw_info_panel(self) -> None:
        """Draw the ledger and controls on the right side of the window."""
        panel_x = self._win_w - self._panel_width + 10
        pygame.draw.rect(
            self.screen,
            (35, 40, 45),
            (self._win_w - self._panel_width, 0, self._panel_width, self._win_h),
        )
        y = 10

        hovered = self.session.hover.state.hovered
        lines = [
            self._last_turn_line,
            f"Hover: {tuple(hovered) if hovered is not None else '-'}",
            f"Buildings: {len(self.session.placement)}",
            "",
            "--- Resources ---",
        ]
        lines += [
            f"{item.value}: {count}"
            for item, count in self.session.ledger.snapshot().items()
        ]
        lines += [
            "",
            "--- Controls ---",
            "LMB: build",
            "RMB: demolish",
            "SPACE: next turn",
            "0-5: mark neighbour",
            "arrows: pan",
            "Z/X: zoom",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18
