from __future__ import annotations

from typing import Iterable, Optional, Tuple

import config
from geometry import PathCache
from model import MapTemplate

Point = Tuple[float, float]


class HitTester:
    """Resolves a map-space point to an area id.

    Areas are checked in array order, the same order they are painted in, and
    the first containing area wins. Where areas overlap this is the one painted
    underneath, not the one on top.

    Areas whose zone is in skip_zones (BOUNDARY by default) are never returned.
    Pass skip_zones=() for a plain first match over every area.
    """

    def __init__(self, template: MapTemplate, cache: PathCache, skip_zones: Iterable[str] = config.UNSELECTABLE_ZONES) -> None:
        self.template = template
        self.cache = cache
        self.skip_zones = {zone.upper() for zone in skip_zones}

    def hit_test(self, point: Point) -> Optional[object]:
        """Description: Hit test
        Inputs: point: Point
        """
        self.cache.ensure(self.template.areas)
        for area in self.template.areas:
            if area.zone.upper() in self.skip_zones:
                continue
            path = self.cache.get(area.id)
            if path is None:
                continue
            if path.contains(point):
                return area.id
        return None
