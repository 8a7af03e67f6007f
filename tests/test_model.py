import pytest

from model import TRANSPARENT, Area, InvalidAreaError, MapTemplate, parse_area, parse_vertices_text

TRIANGLE = [{"x": 0, "y": 0}, {"x": 10, "y": 0}, {"x": 5, "y": 8}]


def payload(**overrides):
    data = {"name": "Floor A", "vertices": TRIANGLE}
    data.update(overrides)
    return data


def test_parse_area_defaults():
    area = parse_area(payload(), area_id=4)
    assert area == Area(id=4, name="Floor A", vertices=((0.0, 0.0), (10.0, 0.0), (5.0, 8.0)), fill_color="#000000")
    assert not area.is_stage


def test_parse_area_trims_and_reads_optional_fields():
    area = parse_area(payload(name="  Stage ", zone=" BRIDGE ", fillColor="#abc", isStage=True, templateAreaId=12))
    assert (area.id, area.name, area.zone, area.fill_color, area.is_stage) == (12, "Stage", "BRIDGE", "#abc", True)


def test_transparent_fill_is_accepted():
    assert parse_area(payload(fillColor=TRANSPARENT), area_id=1).fill_color == TRANSPARENT


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"name": ""}, "name"),
        ({"name": "   "}, "name"),
        ({"name": None}, "name"),
        ({"vertices": None}, "vertices"),
        ({"vertices": TRIANGLE[:2]}, "vertices"),
        ({"vertices": [{"x": 0, "y": 0}, {"x": 1}, {"x": 2, "y": 2}]}, "vertices[1]"),
        ({"vertices": [{"x": 0, "y": 0}, {"x": 1, "y": 1}, [2, 2]]}, "vertices[2]"),
        ({"vertices": [{"x": "0", "y": 0}, {"x": 1, "y": 1}, {"x": 2, "y": 2}]}, "vertices[0]"),
        ({"vertices": [{"x": True, "y": 0}, {"x": 1, "y": 1}, {"x": 2, "y": 2}]}, "vertices[0]"),
        ({"width": -1}, "width"),
        ({"x": -0.5}, "x"),
        ({"height": "tall"}, "height"),
        ({"fillColor": "not-a-colour"}, "fillColor"),
        ({"zone": 3}, "zone"),
    ],
)
def test_parse_area_rejects(overrides, field):
    with pytest.raises(InvalidAreaError) as info:
        parse_area(payload(**overrides), area_id=1)
    assert info.value.field == field


def test_parse_area_requires_an_id():
    with pytest.raises(InvalidAreaError) as info:
        parse_area(payload())
    assert info.value.field == "id"


def test_invalid_area_error_is_a_value_error():
    assert issubclass(InvalidAreaError, ValueError)
    assert str(InvalidAreaError("name", "required")) == "name: required"


def test_parse_vertices_text():
    assert parse_vertices_text('[{"x": 1, "y": 2}]') == [{"x": 1, "y": 2}]
    with pytest.raises(InvalidAreaError):
        parse_vertices_text("[{x: 1}]")
    with pytest.raises(InvalidAreaError):
        parse_vertices_text('{"x": 1, "y": 2}')


def test_template_helpers():
    template = MapTemplate.new("Hall")
    assert (template.map_width, template.map_height) == (1000, 1000)
    assert template.next_area_id() == 1
    template.areas.append(parse_area(payload(), area_id=3))
    assert template.next_area_id() == 4
    assert template.get_area(3).name == "Floor A"
    assert template.get_area(99) is None
    with pytest.raises(KeyError):
        template.replace_area(Area(id=99, name="x", vertices=()))


def test_area_wire_shape():
    area = parse_area(payload(isStage=True), area_id=2)
    data = area.to_dict()
    assert data["templateAreaId"] == 2
    assert data["vertices"][2] == {"x": 5.0, "y": 8.0}
    assert data["isStage"] is True
    assert Area.from_dict(data) == area


def test_from_dict_tolerates_short_vertex_lists():
    area = Area.from_dict({"id": 5, "name": "line", "vertices": [{"x": 0, "y": 0}]})
    assert area.vertices == ((0.0, 0.0),)
    with pytest.raises(KeyError):
        Area.from_dict({"name": "no id"})
