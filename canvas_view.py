from __future__ import annotations

from typing import Callable, List, Optional, Tuple

import tkinter as tk

import config
from canvas_controller import CLICK, DOWN, LEAVE, MOVE, UP, PointerEvent, PointerSource
from map_engine import MapEngine
from model import MapTemplate


class TkPointerSource(PointerSource):
    """Translates left-button tk canvas events into PointerEvents.

    Tk has no separate click event, so a release emits "up" followed by
    "click", matching browser delivery order.
    """

    def __init__(self, canvas: tk.Canvas) -> None:
        super().__init__()
        self.canvas = canvas
        self._bindings: List[Tuple[str, str]] = []

    def subscribe(self, handler: Callable[[PointerEvent], None]) -> None:
        """Description: Subscribe
        Inputs: handler: Callable[[PointerEvent], None]
        """
        self.unsubscribe()
        super().subscribe(handler)
        self._bind("<ButtonPress-1>", self._on_press)
        self._bind("<B1-Motion>", self._on_drag)
        self._bind("<ButtonRelease-1>", self._on_release)
        self._bind("<Leave>", self._on_leave)

    def unsubscribe(self) -> None:
        for sequence, funcid in self._bindings:
            self.canvas.unbind(sequence, funcid)
        self._bindings.clear()
        super().unsubscribe()

    def _bind(self, sequence: str, callback) -> None:
        funcid = self.canvas.bind(sequence, callback, add="+")
        self._bindings.append((sequence, funcid))

    def _on_press(self, event: tk.Event) -> None:
        self.canvas.focus_set()
        self.emit(PointerEvent(DOWN, event.x, event.y))

    def _on_drag(self, event: tk.Event) -> None:
        self.emit(PointerEvent(MOVE, event.x, event.y))

    def _on_release(self, event: tk.Event) -> None:
        self.emit(PointerEvent(UP, event.x, event.y))
        self.emit(PointerEvent(CLICK, event.x, event.y))

    def _on_leave(self, event: tk.Event) -> None:
        self.emit(PointerEvent(LEAVE, event.x, event.y))


class MapCanvasView(MapEngine):
    def __init__(
        self,
        master: tk.Widget,
        template: MapTemplate,
        on_selection_changed=None,
        on_view_changed=None,
    ) -> None:
        """Description: Init
        Inputs: master: tk.Widget, template: MapTemplate, on_selection_changed, on_view_changed
        """
        canvas = tk.Canvas(master, bg=config.THEME["bg"], highlightthickness=0)
        self.pointer_source = TkPointerSource(canvas)
        super().__init__(canvas, template, pointer_source=self.pointer_source, on_view_changed=on_view_changed)
        if on_selection_changed:
            self.on_area_selected(on_selection_changed)
        self.canvas.bind("<Configure>", self._on_resize)

    def _on_resize(self, _event: tk.Event) -> None:
        self.render()

    def selected_area_name(self) -> Optional[str]:
        area = self.template.get_area(self.selected_area_id)
        return area.name if area else None
