# Static map preview export (PNG/SVG) with matplotlib.

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import matplotlib
from matplotlib import colors
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch, Rectangle
from matplotlib.transforms import Affine2D

import config
from geometry import ClosedPolygonPath, PathCache
from model import TRANSPARENT, Area, MapTemplate
from viewport import fit_scale

logger = logging.getLogger(__name__)


@dataclass
class LabelLayout:
    lines: List[str]
    x: float
    y: float
    font_px: int
    line_height: int

    def line_positions(self) -> List[Tuple[str, float, float]]:
        total = (len(self.lines) - 1) * self.line_height
        return [(word, self.x, self.y - total / 2 + idx * self.line_height) for idx, word in enumerate(self.lines)]


def stage_anchor(path: ClosedPolygonPath) -> Tuple[float, float]:
    """Description: Midpoint of the two vertices furthest apart horizontally
    Inputs: path: ClosedPolygonPath
    """
    xs = path.vertices[:, 0]
    p1, p2 = path.vertices[int(xs.argmin())], path.vertices[int(xs.argmax())]
    return float((p1[0] + p2[0]) / 2), float((p1[1] + p2[1]) / 2)


def layout_label(path: ClosedPolygonPath, name: str, scale: float, is_stage: bool = False) -> Optional[LabelLayout]:
    """Place an area name inside its polygon for a preview at the given scale.

    Returns None when the scaled area is too small to carry a label.
    """
    (min_x, min_y), (max_x, max_y) = path.bounds
    width = (max_x - min_x) * scale
    height = (max_y - min_y) * scale
    min_w, min_h = config.PREVIEW_LABEL_MIN_BOX
    words = name.split()
    if not words or width <= min_w or height <= min_h:
        return None
    fit = min(
        math.floor((width * 0.7) / (len(name) * 0.5)),
        math.floor(height * 0.3),
        config.PREVIEW_LABEL_MAX_SIZE,
    )
    font_px = max(config.PREVIEW_LABEL_MIN_SIZE, fit)
    x, y = stage_anchor(path) if is_stage else path.centroid()
    return LabelLayout(lines=words, x=x * scale, y=y * scale, font_px=font_px, line_height=font_px + 2)


def _mpl_color(color: Optional[str], default: str) -> str:
    if color == TRANSPARENT:
        return "none"
    if color and not colors.is_color_like(color):
        logger.debug("Unknown fill colour %r, using %s", color, default)
        return default
    return color or default


class PreviewExporter:
    def __init__(self, path: str, max_size: float = config.PREVIEW_MAX_SIZE, dpi: int = config.PREVIEW_DPI) -> None:
        """Description: Init
        Inputs: path: str, max_size: float, dpi: int
        """
        self.path = path
        self.max_size = max_size
        self.dpi = dpi

    def export(
        self,
        template: MapTemplate,
        selected_ids: Iterable = (),
        area_ids: Optional[Iterable] = None,
        display_names: Optional[Dict[object, str]] = None,
    ) -> None:
        """Description: Export
        Inputs: template: MapTemplate, selected_ids: Iterable, area_ids: Optional[Iterable], display_names: Optional[Dict]
        """
        scale = fit_scale(template.map_width, template.map_height, self.max_size)
        width_px = template.map_width * scale
        height_px = template.map_height * scale

        figure = Figure(figsize=(width_px / self.dpi, height_px / self.dpi), dpi=self.dpi)
        ax = figure.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, width_px)
        ax.set_ylim(height_px, 0)
        ax.set_axis_off()

        ax.add_patch(
            Rectangle(
                (0, 0), width_px, height_px,
                fill=False,
                edgecolor=config.PREVIEW_OUTLINE,
                linewidth=self._points(config.PREVIEW_OUTLINE_WIDTH),
            )
        )

        areas = self._areas_to_draw(template, area_ids)
        cache = PathCache()
        cache.rebuild(areas)
        selected = set(selected_ids)
        names = display_names or {}
        to_pixels = Affine2D().scale(scale)
        drawn = 0
        for area in areas:
            path = cache.get(area.id)
            if path is None:
                continue
            is_selected = area.id in selected
            ax.add_patch(
                PathPatch(
                    path.to_mpl_path().transformed(to_pixels),
                    facecolor=config.PREVIEW_SELECTED_FILL if is_selected else _mpl_color(area.fill_color, config.PREVIEW_AREA_FILL),
                    edgecolor=config.PREVIEW_SELECTED_STROKE if is_selected else config.PREVIEW_AREA_STROKE,
                    linewidth=self._points(config.PREVIEW_SELECTED_STROKE_WIDTH if is_selected else config.PREVIEW_AREA_STROKE_WIDTH),
                )
            )
            drawn += 1
            name = names.get(area.id, area.name)
            is_stage = area.is_stage or name.strip().lower() == "stage"
            layout = layout_label(path, name, scale, is_stage)
            if layout is not None:
                self._draw_label(ax, layout)

        with matplotlib.rc_context({"svg.fonttype": "none"}):
            figure.savefig(self.path, dpi=self.dpi)
        logger.info("Exported preview of %r (%d areas) to %s", template.name, drawn, self.path)

    def _areas_to_draw(self, template: MapTemplate, area_ids: Optional[Iterable]) -> List[Area]:
        """Description: Filter to the requested ids and paint the outer boundary first
        Inputs: template: MapTemplate, area_ids: Optional[Iterable]
        """
        areas = list(template.areas)
        if area_ids is not None:
            wanted = set(area_ids)
            areas = [area for area in areas if area.id in wanted]
        first = config.PREVIEW_FIRST_AREA.upper()
        return sorted(areas, key=lambda area: area.name.upper() != first)

    def _draw_label(self, ax, layout: LabelLayout) -> None:
        size = self._points(layout.font_px)
        for word, x, y in layout.line_positions():
            for dx, color in ((1, config.PREVIEW_LABEL_SHADOW), (0, config.PREVIEW_LABEL_COLOR)):
                ax.text(
                    x + dx, y + dx, word,
                    color=color,
                    fontsize=size,
                    fontweight="bold",
                    ha="center",
                    va="center",
                )

    def _points(self, pixels: float) -> float:
        return pixels * 72.0 / self.dpi
