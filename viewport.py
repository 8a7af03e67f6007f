# Viewport transform between screen (pointer) and map coordinates.

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

import config

Point = Tuple[float, float]


@dataclass
class ViewportState:
    """Scale and offset mapping map space onto the screen.

    screen = (world + offset) * scale, so the offset is expressed in pre-scale
    (map) units. Zoom is anchored at the map origin.
    """

    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    min_scale: float = config.ZOOM_MIN
    max_scale: float = config.ZOOM_MAX
    step: float = config.ZOOM_STEP

    @property
    def offset(self) -> Point:
        return (self.offset_x, self.offset_y)

    def to_screen(self, point: Point) -> Point:
        """Description: World to screen
        Inputs: point: Point
        """
        return ((point[0] + self.offset_x) * self.scale, (point[1] + self.offset_y) * self.scale)

    def to_world(self, point: Point) -> Point:
        """Description: Screen to world
        Inputs: point: Point
        """
        return (point[0] / self.scale - self.offset_x, point[1] / self.scale - self.offset_y)

    def to_screen_array(self, points: np.ndarray) -> np.ndarray:
        """Description: World to screen for an (n, 2) array of points
        Inputs: points: np.ndarray
        """
        return (np.asarray(points, dtype=float) + np.array(self.offset)) * self.scale

    def zoom_in(self) -> None:
        self.scale = min(self.scale + self.step, self.max_scale)

    def zoom_out(self) -> None:
        self.scale = max(self.scale - self.step, self.min_scale)

    def reset(self) -> None:
        self.scale = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0

    def pan_to(self, offset: Point) -> None:
        """Description: Set the offset
        Inputs: offset: Point
        """
        self.offset_x, self.offset_y = float(offset[0]), float(offset[1])


def fit_scale(map_width: float, map_height: float, max_size: float) -> float:
    """Largest scale that fits the map inside a max_size square."""
    if map_width <= 0 or map_height <= 0:
        raise ValueError(f"map size must be positive, got {map_width} x {map_height}")
    return min(max_size / map_width, max_size / map_height)
