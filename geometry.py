# Closed polygon paths derived from areas, shared by rendering and hit testing.

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Optional, Tuple

import numpy as np
from matplotlib.path import Path

from model import Area

Point = Tuple[float, float]

logger = logging.getLogger(__name__)

MIN_VERTICES = 3


class ClosedPolygonPath:
    def __init__(self, vertices: Iterable[Point]) -> None:
        """Description: Init
        Inputs: vertices: Iterable[Point]
        """
        self.vertices = np.asarray(list(vertices), dtype=float).reshape(-1, 2)
        if len(self.vertices) < MIN_VERTICES:
            raise ValueError(f"a closed polygon needs at least {MIN_VERTICES} vertices")
        self._next = np.roll(self.vertices, -1, axis=0)
        self.min_x, self.min_y = self.vertices.min(axis=0)
        self.max_x, self.max_y = self.vertices.max(axis=0)

    @property
    def bounds(self) -> Tuple[Point, Point]:
        return (float(self.min_x), float(self.min_y)), (float(self.max_x), float(self.max_y))

    def to_mpl_path(self) -> Path:
        """Description: Matplotlib path with an explicit closing segment
        Inputs: None
        """
        closed = np.vstack([self.vertices, self.vertices[:1]])
        return Path(closed, closed=True)

    def winding_number(self, point: Point) -> int:
        """Description: Winding number of the polygon around a point
        Inputs: point: Point
        """
        x, y = float(point[0]), float(point[1])
        x0, y0 = self.vertices[:, 0], self.vertices[:, 1]
        x1, y1 = self._next[:, 0], self._next[:, 1]
        side = (x1 - x0) * (y - y0) - (x - x0) * (y1 - y0)
        upward = (y0 <= y) & (y1 > y) & (side > 0)
        downward = (y0 > y) & (y1 <= y) & (side < 0)
        return int(np.count_nonzero(upward)) - int(np.count_nonzero(downward))

    def contains(self, point: Point) -> bool:
        """Description: Nonzero fill rule membership
        Inputs: point: Point
        """
        x, y = point
        if x < self.min_x or x > self.max_x or y < self.min_y or y > self.max_y:
            return False
        return self.winding_number(point) != 0

    def centroid(self) -> Point:
        """Description: Area-weighted centroid, vertex mean when the polygon has no area
        Inputs: None
        """
        x0, y0 = self.vertices[:, 0], self.vertices[:, 1]
        x1, y1 = self._next[:, 0], self._next[:, 1]
        cross = x0 * y1 - x1 * y0
        signed_area = cross.sum() / 2.0
        if abs(signed_area) < 1e-12:
            mean = self.vertices.mean(axis=0)
            return float(mean[0]), float(mean[1])
        cx = ((x0 + x1) * cross).sum() / (6.0 * signed_area)
        cy = ((y0 + y1) * cross).sum() / (6.0 * signed_area)
        return float(cx), float(cy)


class PathCache:
    """Derived area_id -> ClosedPolygonPath view of a list of areas.

    Rebuilt from scratch on invalidation, never patched. Areas with fewer than
    three vertices are left out.
    """

    def __init__(self) -> None:
        self._paths: Dict[object, ClosedPolygonPath] = {}
        self._dirty = True

    def invalidate(self) -> None:
        self._dirty = True

    @property
    def dirty(self) -> bool:
        return self._dirty

    def rebuild(self, areas: Iterable[Area]) -> None:
        """Description: Rebuild
        Inputs: areas: Iterable[Area]
        """
        paths: Dict[object, ClosedPolygonPath] = {}
        for area in areas:
            if not area.vertices or len(area.vertices) < MIN_VERTICES:
                logger.debug("Skipping area %r: %d vertices", area.id, len(area.vertices or ()))
                continue
            paths[area.id] = ClosedPolygonPath(area.vertices)
        self._paths = paths
        self._dirty = False
        logger.debug("Path cache rebuilt with %d paths", len(paths))

    def ensure(self, areas: Iterable[Area]) -> None:
        if self._dirty:
            self.rebuild(areas)

    def get(self, area_id) -> Optional[ClosedPolygonPath]:
        return self._paths.get(area_id)

    def __contains__(self, area_id) -> bool:
        return area_id in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator:
        return iter(self._paths)
