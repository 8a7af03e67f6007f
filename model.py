from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
import json
from typing import Dict, List, Optional, Tuple

from matplotlib import colors

import config

Point = Tuple[float, float]

TRANSPARENT = "transparent"


class InvalidAreaError(ValueError):
    """Raised when an area payload fails validation at the data-entry boundary."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


@dataclass(frozen=True)
class Area:
    id: int
    name: str
    vertices: Tuple[Point, ...]
    zone: str = ""
    fill_color: str = config.DEFAULT_AREA_FILL
    is_stage: bool = False

    def to_dict(self) -> Dict:
        """Description: To dict
        Inputs: None
        """
        return {
            "templateAreaId": self.id,
            "name": self.name,
            "vertices": [{"x": x, "y": y} for x, y in self.vertices],
            "zone": self.zone,
            "fillColor": self.fill_color,
            "isStage": self.is_stage,
        }

    @classmethod
    def from_dict(cls, payload: Dict) -> "Area":
        """Description: From dict, without vertex-count validation
        Inputs: cls, payload: Dict
        """
        area_id = payload.get("templateAreaId", payload.get("id"))
        if area_id is None:
            raise KeyError("templateAreaId")
        return cls(
            id=area_id,
            name=str(payload.get("name", "")),
            vertices=tuple((float(v["x"]), float(v["y"])) for v in payload.get("vertices") or []),
            zone=str(payload.get("zone") or ""),
            fill_color=payload.get("fillColor") or config.DEFAULT_AREA_FILL,
            is_stage=bool(payload.get("isStage", False)),
        )


@dataclass
class MapTemplate:
    name: str
    map_width: float
    map_height: float
    areas: List[Area] = field(default_factory=list)
    id: Optional[int] = None

    @classmethod
    def new(cls, name: str = "Untitled", size: Tuple[int, int] = config.DEFAULT_MAP_SIZE) -> "MapTemplate":
        """Description: New
        Inputs: cls, name: str, size: Tuple[int, int]
        """
        return cls(name=name, map_width=size[0], map_height=size[1], areas=[])

    def to_dict(self) -> Dict:
        """Description: To dict
        Inputs: None
        """
        return {
            "templateId": self.id,
            "name": self.name,
            "mapWidth": self.map_width,
            "mapHeight": self.map_height,
            "areas": [area.to_dict() for area in self.areas],
        }

    @classmethod
    def from_dict(cls, payload: Dict) -> "MapTemplate":
        """Description: From dict
        Inputs: cls, payload: Dict
        """
        width, height = config.DEFAULT_MAP_SIZE
        try:
            template = cls(
                name=str(payload.get("name", "Untitled")),
                map_width=float(payload.get("mapWidth", width)),
                map_height=float(payload.get("mapHeight", height)),
                areas=[Area.from_dict(item) for item in payload.get("areas", [])],
                id=payload.get("templateId"),
            )
        except (TypeError, AttributeError) as exc:
            raise ValueError(f"malformed map template: {exc}") from exc
        if template.map_width <= 0 or template.map_height <= 0:
            raise ValueError(f"map size must be positive, got {template.map_width} x {template.map_height}")
        return template

    def get_area(self, area_id) -> Optional[Area]:
        """Description: Get area
        Inputs: area_id
        """
        for area in self.areas:
            if area.id == area_id:
                return area
        return None

    def next_area_id(self) -> int:
        numeric = [area.id for area in self.areas if isinstance(area.id, int)]
        return max(numeric, default=0) + 1

    def replace_area(self, area: Area) -> None:
        """Description: Swap in a new value for the area with the same id
        Inputs: area: Area
        """
        for idx, existing in enumerate(self.areas):
            if existing.id == area.id:
                self.areas[idx] = area
                return
        raise KeyError(area.id)


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _check_non_negative(payload: Dict, key: str) -> None:
    value = payload.get(key)
    if value is None:
        return
    if not _is_number(value):
        raise InvalidAreaError(key, "must be a number")
    if value < 0:
        raise InvalidAreaError(key, "must not be negative")


def parse_vertices_text(text: str) -> List:
    """Description: Decode the JSON vertex list typed into the area form
    Inputs: text: str
    """
    try:
        vertices = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidAreaError("vertices", f"vertices are not valid JSON ({exc.msg})") from exc
    if not isinstance(vertices, list):
        raise InvalidAreaError("vertices", "vertices must be a list of {x, y} points")
    return vertices


def parse_area(payload: Dict, area_id=None) -> Area:
    """Build a validated Area from a form or API payload.

    The payload uses the wire shape ``{name, vertices: [{x, y}, ...], zone?, fillColor?, isStage?}``.
    Raises InvalidAreaError naming the first field that failed.
    """
    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        raise InvalidAreaError("name", "area name is required")

    vertices = payload.get("vertices")
    if not isinstance(vertices, (list, tuple)):
        raise InvalidAreaError("vertices", "vertices must be a list of {x, y} points")
    if len(vertices) < 3:
        raise InvalidAreaError("vertices", "an area needs at least 3 vertices")
    points: List[Point] = []
    for idx, vertex in enumerate(vertices):
        if not isinstance(vertex, dict):
            raise InvalidAreaError(f"vertices[{idx}]", "vertex must have the form {x: number, y: number}")
        x, y = vertex.get("x"), vertex.get("y")
        if not _is_number(x) or not _is_number(y):
            raise InvalidAreaError(f"vertices[{idx}]", "vertex must have the form {x: number, y: number}")
        points.append((float(x), float(y)))

    for key in ("x", "y", "width", "height"):
        _check_non_negative(payload, key)

    fill_color = payload.get("fillColor") or config.DEFAULT_AREA_FILL
    if not isinstance(fill_color, str) or not (fill_color == TRANSPARENT or colors.is_color_like(fill_color)):
        raise InvalidAreaError("fillColor", f"unknown colour {fill_color!r}")

    zone = payload.get("zone") or ""
    if not isinstance(zone, str):
        raise InvalidAreaError("zone", "zone must be text")

    if area_id is None:
        area_id = payload.get("templateAreaId", payload.get("id"))
    if area_id is None:
        raise InvalidAreaError("id", "area id is required")

    return Area(
        id=area_id,
        name=name.strip(),
        vertices=tuple(points),
        zone=zone.strip(),
        fill_color=fill_color,
        is_stage=bool(payload.get("isStage", False)),
    )
