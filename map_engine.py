# Map engine: geometry, viewport, renderer and pointer controller wired together.

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from canvas_controller import PointerController, PointerSource, SelectionState
from geometry import PathCache
from hit_tester import HitTester
from model import Area, MapTemplate
from renderer import Renderer
from viewport import ViewportState

logger = logging.getLogger(__name__)


class MapEngine:
    """Interactive venue map drawn on a tk.Canvas-like surface.

    Host-facing operations are render, zoom_in, zoom_out, reset_view and
    on_area_selected. All work happens synchronously on the caller's thread.
    """

    def __init__(
        self,
        canvas,
        template: MapTemplate,
        pointer_source: Optional[PointerSource] = None,
        on_view_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self.canvas = canvas
        self.template = template
        self.viewport = ViewportState()
        self.cache = PathCache()
        self.selection = SelectionState()
        self.renderer = Renderer()
        self.hit_tester = HitTester(template, self.cache)
        self._on_view_changed = on_view_changed
        self._selection_callbacks: List[Callable[[object], None]] = []
        self.controller = PointerController(
            self.viewport,
            self.hit_tester,
            self.selection,
            redraw=self.render,
            on_selection_changed=self._notify_selection_changed,
            on_view_changed=on_view_changed,
        )
        if pointer_source is not None:
            self.controller.attach(pointer_source)

    @property
    def selected_area_id(self):
        return self.selection.selected_area_id

    def render(self) -> None:
        self.renderer.render(self.canvas, self.template, self.cache, self.viewport, self.selection.selected_area_id)

    def zoom_in(self) -> None:
        self.viewport.zoom_in()
        self._view_changed()

    def zoom_out(self) -> None:
        self.viewport.zoom_out()
        self._view_changed()

    def reset_view(self) -> None:
        self.viewport.reset()
        self._view_changed()

    def on_area_selected(self, callback: Callable[[object], None]) -> None:
        """Description: Register a callback receiving the selected area id, or None when cleared
        Inputs: callback: Callable[[object], None]
        """
        self._selection_callbacks.append(callback)

    def clear_selection(self) -> None:
        if self.selection.clear():
            self._notify_selection_changed(None)
            self.render()

    def set_template(self, template: MapTemplate) -> None:
        """Description: Set template
        Inputs: template: MapTemplate
        """
        self.template = template
        self.hit_tester.template = template
        self.cache.invalidate()
        if self.selection.clear():
            self._notify_selection_changed(None)
        self.render()

    def add_area(self, area: Area) -> None:
        self.template.areas.append(area)
        self.cache.invalidate()
        self.render()

    def replace_area(self, area: Area) -> None:
        """Description: Replace an area value; the path cache is rebuilt, not patched
        Inputs: area: Area
        """
        self.template.replace_area(area)
        self.cache.invalidate()
        self.render()

    def remove_area(self, area_id) -> None:
        self.template.areas = [area for area in self.template.areas if area.id != area_id]
        self.cache.invalidate()
        if self.selection.selected_area_id == area_id:
            self.selection.clear()
            self._notify_selection_changed(None)
        self.render()

    def detach(self) -> None:
        self.controller.detach()

    def _view_changed(self) -> None:
        self.render()
        if self._on_view_changed:
            self._on_view_changed()

    def _notify_selection_changed(self, area_id) -> None:
        area = self.template.get_area(area_id) if area_id is not None else None
        logger.debug("Area selected: %s", area.name if area else None)
        for callback in self._selection_callbacks:
            callback(area_id)
