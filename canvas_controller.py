# Pointer interaction: click-to-select and drag-to-pan.

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from hit_tester import HitTester
from viewport import ViewportState

Point = Tuple[float, float]

logger = logging.getLogger(__name__)

DOWN = "down"
MOVE = "move"
UP = "up"
LEAVE = "leave"
CLICK = "click"


class Mode(Enum):
    IDLE = "idle"
    PANNING = "panning"


@dataclass(frozen=True)
class PointerEvent:
    kind: str
    x: float = 0.0
    y: float = 0.0

    @property
    def point(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class DragAnchor:
    screen: Point
    offset: Point


@dataclass(frozen=True)
class InteractionState:
    mode: Mode = Mode.IDLE
    anchor: Optional[DragAnchor] = None


@dataclass(frozen=True)
class PanTo:
    offset: Point


@dataclass(frozen=True)
class ClickAt:
    screen: Point


def transition(state: InteractionState, event: PointerEvent, scale: float, offset: Point) -> Tuple[InteractionState, List[object]]:
    """Advance the interaction state machine by one pointer event.

    Every press starts a pan; there is no distance threshold. A click is only
    resolved while idle, and since release always precedes the click, a click
    ending a drag of any length still counts as a selection attempt.
    """
    if event.kind == DOWN:
        return InteractionState(Mode.PANNING, DragAnchor(event.point, offset)), []
    if event.kind == MOVE:
        if state.mode is not Mode.PANNING or state.anchor is None:
            return state, []
        anchor = state.anchor
        new_offset = (
            anchor.offset[0] + (event.x - anchor.screen[0]) / scale,
            anchor.offset[1] + (event.y - anchor.screen[1]) / scale,
        )
        return state, [PanTo(new_offset)]
    if event.kind in (UP, LEAVE):
        return InteractionState(), []
    if event.kind == CLICK:
        if state.mode is Mode.IDLE:
            return state, [ClickAt(event.point)]
        return state, []
    raise ValueError(f"unknown pointer event kind {event.kind!r}")


class SelectionState:
    def __init__(self) -> None:
        self.selected_area_id = None

    def apply_hit(self, area_id) -> bool:
        """Description: Toggle or replace the selection; returns True when it changed
        Inputs: area_id
        """
        if area_id is None:
            return False
        self.selected_area_id = None if area_id == self.selected_area_id else area_id
        return True

    def clear(self) -> bool:
        changed = self.selected_area_id is not None
        self.selected_area_id = None
        return changed


class PointerSource:
    """Delivers PointerEvents to a single subscribed handler."""

    def __init__(self) -> None:
        self._handler: Optional[Callable[[PointerEvent], None]] = None

    def subscribe(self, handler: Callable[[PointerEvent], None]) -> None:
        self._handler = handler

    def unsubscribe(self) -> None:
        self._handler = None

    def emit(self, event: PointerEvent) -> None:
        if self._handler is not None:
            self._handler(event)


class PointerController:
    def __init__(
        self,
        viewport: ViewportState,
        hit_tester: HitTester,
        selection: SelectionState,
        redraw: Callable[[], None],
        on_selection_changed: Optional[Callable[[object], None]] = None,
        on_view_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        """Description: Init
        Inputs: viewport: ViewportState, hit_tester: HitTester, selection: SelectionState, redraw, on_selection_changed, on_view_changed
        """
        self.viewport = viewport
        self.hit_tester = hit_tester
        self.selection = selection
        self._redraw = redraw
        self._on_selection_changed = on_selection_changed
        self._on_view_changed = on_view_changed
        self._state = InteractionState()
        self._source: Optional[PointerSource] = None

    @property
    def state(self) -> InteractionState:
        return self._state

    def attach(self, source: PointerSource) -> None:
        """Description: Attach
        Inputs: source: PointerSource
        """
        self.detach()
        source.subscribe(self.handle)
        self._source = source

    def detach(self) -> None:
        if self._source is not None:
            self._source.unsubscribe()
            self._source = None

    def handle(self, event: PointerEvent) -> None:
        """Description: Handle one pointer event and apply its effects
        Inputs: event: PointerEvent
        """
        self._state, effects = transition(self._state, event, self.viewport.scale, self.viewport.offset)
        changed = False
        for effect in effects:
            if isinstance(effect, PanTo):
                self.viewport.pan_to(effect.offset)
                changed = True
                if self._on_view_changed:
                    self._on_view_changed()
            elif isinstance(effect, ClickAt):
                changed = self._select_at(effect.screen) or changed
        if changed:
            self._redraw()

    def _select_at(self, screen: Point) -> bool:
        world = self.viewport.to_world(screen)
        area_id = self.hit_tester.hit_test(world)
        if not self.selection.apply_hit(area_id):
            return False
        logger.debug("Selection is now %r", self.selection.selected_area_id)
        if self._on_selection_changed:
            self._on_selection_changed(self.selection.selected_area_id)
        return True
