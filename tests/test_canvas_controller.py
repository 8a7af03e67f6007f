import pytest

from canvas_controller import (
    CLICK,
    DOWN,
    LEAVE,
    MOVE,
    UP,
    ClickAt,
    InteractionState,
    Mode,
    PanTo,
    PointerController,
    PointerEvent,
    PointerSource,
    SelectionState,
    transition,
)
from geometry import PathCache
from hit_tester import HitTester
from viewport import ViewportState


def test_press_starts_panning_with_anchor():
    state, effects = transition(InteractionState(), PointerEvent(DOWN, 10, 20), 1.0, (3.0, 4.0))
    assert state.mode is Mode.PANNING
    assert state.anchor.screen == (10, 20)
    assert state.anchor.offset == (3.0, 4.0)
    assert effects == []


def test_move_while_panning_divides_delta_by_scale():
    state, _ = transition(InteractionState(), PointerEvent(DOWN, 10, 10), 2.0, (5.0, 5.0))
    state, effects = transition(state, PointerEvent(MOVE, 30, 0), 2.0, (5.0, 5.0))
    assert effects == [PanTo((15.0, 0.0))]
    assert state.mode is Mode.PANNING


def test_move_offset_is_relative_to_press_not_previous_move():
    state, _ = transition(InteractionState(), PointerEvent(DOWN, 0, 0), 1.0, (0.0, 0.0))
    state, _ = transition(state, PointerEvent(MOVE, 10, 10), 1.0, (10.0, 10.0))
    _, effects = transition(state, PointerEvent(MOVE, 20, 5), 1.0, (10.0, 10.0))
    assert effects == [PanTo((20.0, 5.0))]


def test_move_while_idle_does_nothing():
    state, effects = transition(InteractionState(), PointerEvent(MOVE, 5, 5), 1.0, (0.0, 0.0))
    assert state == InteractionState()
    assert effects == []


@pytest.mark.parametrize("kind", [UP, LEAVE])
def test_up_and_leave_return_to_idle(kind):
    state, _ = transition(InteractionState(), PointerEvent(DOWN, 0, 0), 1.0, (0.0, 0.0))
    state, effects = transition(state, PointerEvent(kind, 0, 0), 1.0, (0.0, 0.0))
    assert state.mode is Mode.IDLE
    assert state.anchor is None
    assert effects == []


def test_click_resolves_only_when_idle():
    _, effects = transition(InteractionState(), PointerEvent(CLICK, 4, 2), 1.0, (0.0, 0.0))
    assert effects == [ClickAt((4, 2))]
    panning, _ = transition(InteractionState(), PointerEvent(DOWN, 0, 0), 1.0, (0.0, 0.0))
    _, effects = transition(panning, PointerEvent(CLICK, 4, 2), 1.0, (0.0, 0.0))
    assert effects == []


def test_unknown_event_kind_is_rejected():
    with pytest.raises(ValueError):
        transition(InteractionState(), PointerEvent("wheel"), 1.0, (0.0, 0.0))


def test_selection_toggle_and_replace():
    selection = SelectionState()
    assert selection.apply_hit(1)
    assert selection.selected_area_id == 1
    assert selection.apply_hit(2)
    assert selection.selected_area_id == 2
    assert selection.apply_hit(2)
    assert selection.selected_area_id is None


def test_empty_hit_keeps_selection():
    selection = SelectionState()
    selection.apply_hit(1)
    assert not selection.apply_hit(None)
    assert selection.selected_area_id == 1


def test_clear_reports_change():
    selection = SelectionState()
    assert not selection.clear()
    selection.apply_hit(3)
    assert selection.clear()
    assert selection.selected_area_id is None


class Harness:
    def __init__(self, template):
        self.viewport = ViewportState()
        self.selection = SelectionState()
        self.source = PointerSource()
        self.redraws = 0
        self.selected = []
        self.view_changes = 0
        self.controller = PointerController(
            self.viewport,
            HitTester(template, PathCache()),
            self.selection,
            redraw=self._redraw,
            on_selection_changed=self.selected.append,
            on_view_changed=self._view_changed,
        )
        self.controller.attach(self.source)

    def _redraw(self):
        self.redraws += 1

    def _view_changed(self):
        self.view_changes += 1

    def click(self, x, y):
        for kind in (DOWN, UP, CLICK):
            self.source.emit(PointerEvent(kind, x, y))

    def drag(self, start, end):
        self.source.emit(PointerEvent(DOWN, *start))
        self.source.emit(PointerEvent(MOVE, *end))
        self.source.emit(PointerEvent(UP, *end))
        self.source.emit(PointerEvent(CLICK, *end))


@pytest.fixture
def harness(venue_template):
    return Harness(venue_template)


def test_click_selects_area(harness):
    harness.click(50, 50)
    assert harness.selection.selected_area_id == 2
    assert harness.selected == [2]
    assert harness.redraws == 1


def test_click_same_area_toggles_off(harness):
    harness.click(50, 50)
    harness.click(60, 60)
    assert harness.selection.selected_area_id is None
    assert harness.selected == [2, None]


def test_click_other_area_replaces(harness):
    harness.click(50, 50)
    harness.click(650, 650)
    assert harness.selected == [2, 3]


def test_empty_click_changes_nothing(harness):
    harness.click(50, 50)
    harness.click(900, 50)
    assert harness.selection.selected_area_id == 2
    assert harness.selected == [2]
    assert harness.redraws == 1


def test_drag_pans_viewport(harness):
    harness.source.emit(PointerEvent(DOWN, 100, 100))
    harness.source.emit(PointerEvent(MOVE, 140, 90))
    assert harness.viewport.offset == (40.0, -10.0)
    assert harness.view_changes == 1
    assert harness.redraws == 1


def test_drag_pans_in_map_units_when_zoomed(harness):
    harness.viewport.scale = 2.0
    harness.source.emit(PointerEvent(DOWN, 0, 0))
    harness.source.emit(PointerEvent(MOVE, 40, 20))
    assert harness.viewport.offset == (20.0, 10.0)


def test_drag_still_ends_in_selection_attempt(harness):
    # Drag the map 500 px right; the release point then lies over LEFT.
    harness.drag((20, 50), (520, 50))
    assert harness.viewport.offset == (500.0, 0.0)
    assert harness.selection.selected_area_id == 2


def test_leave_cancels_pan(harness):
    harness.source.emit(PointerEvent(DOWN, 0, 0))
    harness.source.emit(PointerEvent(LEAVE, 0, 0))
    harness.source.emit(PointerEvent(MOVE, 50, 50))
    assert harness.viewport.offset == (0.0, 0.0)
    assert harness.controller.state.mode is Mode.IDLE


def test_click_uses_current_viewport(harness):
    harness.viewport.scale = 2.0
    harness.viewport.pan_to((-300.0, -100.0))
    # Screen (100, 100) -> map (350, 150), inside STAGE.
    harness.click(100, 100)
    assert harness.selection.selected_area_id == 1


def test_detach_stops_delivery(harness):
    harness.controller.detach()
    harness.click(50, 50)
    assert harness.selection.selected_area_id is None
    assert harness.redraws == 0
