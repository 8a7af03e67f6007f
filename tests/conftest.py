from __future__ import annotations

from typing import Dict, List

import pytest

from model import Area, MapTemplate


class RecordingCanvas:
    """Stands in for tk.Canvas, recording the items the renderer creates."""

    def __init__(self) -> None:
        self.items: List[Dict] = []
        self.deleted: List[str] = []
        self._next_id = 1

    def _add(self, kind: str, coords, options: Dict) -> int:
        if len(coords) == 1 and isinstance(coords[0], (list, tuple)):
            coords = coords[0]
        tags = options.get("tags", ())
        if isinstance(tags, str):
            tags = (tags,)
        item = {"id": self._next_id, "kind": kind, "coords": [float(c) for c in coords], **options, "tags": tuple(tags)}
        self.items.append(item)
        self._next_id += 1
        return item["id"]

    def create_rectangle(self, *coords, **options) -> int:
        return self._add("rectangle", coords, options)

    def create_polygon(self, *coords, **options) -> int:
        return self._add("polygon", coords, options)

    def create_text(self, *coords, **options) -> int:
        return self._add("text", coords, options)

    def delete(self, tag) -> None:
        self.deleted.append(tag)
        self.items = [item for item in self.items if tag not in item["tags"]]

    def of_kind(self, kind: str) -> List[Dict]:
        return [item for item in self.items if item["kind"] == kind]

    def tagged(self, tag: str) -> Dict:
        matches = [item for item in self.items if tag in item["tags"]]
        assert len(matches) == 1, f"expected one item tagged {tag!r}, found {len(matches)}"
        return matches[0]


def square(area_id, x0: float, y0: float, size: float, **kwargs) -> Area:
    return Area(
        id=area_id,
        name=kwargs.pop("name", f"Area {area_id}"),
        vertices=((x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)),
        **kwargs,
    )


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def make_square():
    return square


@pytest.fixture
def overlap_template() -> MapTemplate:
    """A at index 0 and B at index 1 both contain (50, 50)."""
    return MapTemplate(
        name="Overlap",
        map_width=1000,
        map_height=1000,
        areas=[
            square("A", 0, 0, 100, name="A"),
            square("B", 25, 25, 100, name="B"),
        ],
    )


@pytest.fixture
def venue_template() -> MapTemplate:
    return MapTemplate(
        name="Venue",
        map_width=1000,
        map_height=1000,
        areas=[
            square(1, 300, 100, 200, name="STAGE", is_stage=True, fill_color="#E2C1D2"),
            square(2, 0, 0, 100, name="LEFT", fill_color="#D9D9D9"),
            square(3, 600, 600, 100, name="RIGHT", fill_color="#D9D9D9"),
            Area(id=4, name="BROKEN", vertices=((10.0, 10.0), (20.0, 20.0))),
        ],
    )
