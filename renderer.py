# Paints a map template onto a tk.Canvas-like surface.

from __future__ import annotations

import logging
from typing import List, Optional

from matplotlib import colors

import config
from geometry import PathCache
from model import TRANSPARENT, Area, MapTemplate
from viewport import ViewportState

logger = logging.getLogger(__name__)

MAP_TAG = "map"


def canvas_color(color: Optional[str]) -> str:
    """Description: Normalise a colour for tk; empty string means no paint
    Inputs: color: Optional[str]
    """
    if not color or color == TRANSPARENT:
        return ""
    try:
        rgba = colors.to_rgba(color)
    except (ValueError, TypeError):
        logger.debug("Unknown fill colour %r, using %s", color, config.DEFAULT_AREA_FILL)
        rgba = colors.to_rgba(config.DEFAULT_AREA_FILL)
    if rgba[3] == 0:
        return ""
    return colors.to_hex(rgba, keep_alpha=False)


class Renderer:
    def __init__(self) -> None:
        self.bridge_zones = {zone.upper() for zone in config.BRIDGE_ZONES}
        self.outline_zones = {zone.upper() for zone in config.OUTLINE_ZONES}

    def render(self, canvas, template: MapTemplate, cache: PathCache, viewport: ViewportState, selected_area_id=None) -> None:
        """Description: Render
        Inputs: canvas, template: MapTemplate, cache: PathCache, viewport: ViewportState, selected_area_id
        """
        canvas.delete(MAP_TAG)
        cache.ensure(template.areas)

        # Background covers the map extents in screen pixels at any zoom.
        tl = viewport.to_screen((0, 0))
        br = viewport.to_screen((template.map_width / viewport.scale, template.map_height / viewport.scale))
        canvas.create_rectangle(
            tl[0], tl[1], br[0], br[1],
            fill=config.BACKGROUND,
            outline="",
            width=0,
            tags=(MAP_TAG, "background"),
        )

        for area in template.areas:
            path = cache.get(area.id)
            if path is None:
                continue
            selected = area.id == selected_area_id
            screen = viewport.to_screen_array(path.vertices)
            coords: List[float] = screen.ravel().tolist()
            outline, width = self._stroke_for(area, selected)
            canvas.create_polygon(
                coords,
                fill=self._fill_for(area, selected),
                outline=outline,
                width=width,
                tags=(MAP_TAG, "area", f"area:{area.id}"),
            )
            self._draw_label(canvas, area, viewport)

    def _fill_for(self, area: Area, selected: bool) -> str:
        if selected and not area.is_stage:
            return config.HIGHLIGHT_FILL
        return canvas_color(area.fill_color)

    def _stroke_for(self, area: Area, selected: bool):
        """Description: Outline colour and width for an area
        Inputs: area: Area, selected: bool
        """
        zone = area.zone.upper()
        if area.is_stage or zone in self.bridge_zones:
            width = config.STAGE_STROKE_WIDTH_SELECTED if selected else config.STAGE_STROKE_WIDTH
            return config.STAGE_STROKE, width
        if zone in self.outline_zones:
            return config.OUTLINE_STROKE, config.OUTLINE_STROKE_WIDTH
        return "", 0

    def _draw_label(self, canvas, area: Area, viewport: ViewportState) -> None:
        """Description: Name anchored just below and right of the first vertex
        Inputs: canvas, area: Area, viewport: ViewportState
        """
        dx, dy = config.LABEL_OFFSET
        # Offset and font size are 1 / scale in map units, fixed in screen pixels.
        anchor = viewport.to_screen((area.vertices[0][0] + dx / viewport.scale, area.vertices[0][1] + dy / viewport.scale))
        size = config.LABEL_FONT_SIZE
        canvas.create_text(
            anchor[0], anchor[1],
            text=area.name,
            fill=config.LABEL_COLOR,
            anchor="sw",
            font=(config.LABEL_FONT, size),
            tags=(MAP_TAG, "label", f"label:{area.id}"),
        )
