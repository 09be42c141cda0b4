import json

import pytest

from core.errors import BoundaryValidationError
from core.geo import calculate_area, destination, point_in_polygon, square_around
from core.history import DesignHistory
from core.models import AdvisorState, LayerType
from core.project import Design, Project, ProjectManager, new_element

NELSON = (173.284, -41.2706)


@pytest.fixture
def manager(tmp_path):
    return ProjectManager(tmp_path / "projects")


@pytest.fixture
def project(manager):
    boundary = square_around(NELSON, 90)[:-1]  # open ring, closed on create
    return manager.create_project("Hillside Block", NELSON, boundary)


# ─── Elements ───────────────────────────────────────────────────────────
def test_new_element_catalog_defaults():
    tank = new_element("water-tank", NELSON)
    assert tank.geometry.type == "Point"
    assert tank.position == NELSON
    assert tank.properties.layer == LayerType.WATER
    assert tank.properties.meta == {"capacityLiters": 5000}
    assert len(tank.id) == 8


def test_new_element_unknown_type():
    gate = new_element("gate", NELSON, label="Front gate")
    assert gate.properties.layer == LayerType.INFRASTRUCTURE
    assert gate.properties.meta == {}
    assert gate.properties.label == "Front gate"


def test_new_plant_element():
    apple = new_element("plant:apple", NELSON)
    assert apple.properties.layer == LayerType.PLANTING


# ─── Manager ────────────────────────────────────────────────────────────
def test_create_project(project, manager):
    assert project.land.boundary[0] == project.land.boundary[-1]
    assert project.land.area == pytest.approx(8_100, rel=0.01)
    assert project.land.area == pytest.approx(calculate_area(project.land.boundary))
    assert project.land.location == NELSON
    assert [d.name for d in project.designs] == ["Design 1"]
    assert (manager.projects_dir / project.id / "project.json").exists()


def test_create_project_rejects_crossing_boundary(manager):
    bowtie = [(0, 0), (0.001, 0.001), (0.001, 0), (0, 0.001), (0, 0)]
    with pytest.raises(BoundaryValidationError, match="cross each other"):
        manager.create_project("Bad", (0.0005, 0.0005), bowtie)


def test_create_project_accepts_small_boundary_with_warning(manager, caplog):
    project = manager.create_project("Tiny", NELSON, square_around(NELSON, 5))
    assert project.land.area < 50
    assert "very small" in caplog.text


def test_save_and_load_round_trip(project, manager):
    design = project.active_design
    design.add_element(new_element("house", NELSON))
    design.regenerate_zones(project.land)
    project.advisor_state.dismiss("house-placed-zone0")
    manager.save(project)

    loaded = manager.get_project(project.id)
    assert json.loads(json.dumps(loaded.to_dict())) == json.loads(json.dumps(project.to_dict()))
    assert loaded.active_design.house is not None
    assert loaded.advisor_state.is_dismissed("house-placed-zone0")


def test_get_missing_project(manager):
    assert manager.get_project("missing") is None


def test_list_and_delete(manager, project):
    other = manager.create_project("Second", NELSON, square_around(NELSON, 60))
    assert {p.id for p in manager.list_projects()} == {project.id, other.id}

    assert manager.delete_project(project.id)
    assert not manager.delete_project(project.id)
    assert [p.id for p in manager.list_projects()] == [other.id]


# ─── Design editing ─────────────────────────────────────────────────────
def test_regenerate_zones_assigns_elements(project):
    design = project.active_design
    tank = design.add_element(new_element("water-tank", destination(NELSON, 25, 0)))
    assert tank.properties.zone is None

    design.add_element(new_element("house", NELSON))
    zones = design.regenerate_zones(project.land)

    assert [z.level for z in zones] == [0, 1, 2, 3]
    assert tank.properties.zone == 2
    assert design.house.properties.zone == 0


def test_regenerate_without_house_clears_zones(project):
    design = project.active_design
    house = design.add_element(new_element("house", NELSON))
    design.regenerate_zones(project.land)
    assert design.zones

    design.remove_element(house.id)
    assert design.regenerate_zones(project.land) == []


def test_add_element_stamps_zone(project):
    design = project.active_design
    design.add_element(new_element("house", NELSON))
    design.regenerate_zones(project.land)

    bed = design.add_element(new_element("garden-bed", destination(NELSON, 10, 90)))
    assert bed.properties.zone == 1


def test_move_element_updates_zone(project):
    design = project.active_design
    design.add_element(new_element("house", NELSON))
    design.regenerate_zones(project.land)
    bed = design.add_element(new_element("garden-bed", destination(NELSON, 10, 90)))

    target = destination(NELSON, 30, 90)
    previous = design.move_element(bed.id, target)

    assert previous == destination(NELSON, 10, 90)
    assert bed.position == target
    assert bed.properties.zone == 2


def test_move_house_rebuilds_zones(project):
    design = project.active_design
    house = design.add_element(new_element("house", NELSON))
    design.regenerate_zones(project.land)
    bed = design.add_element(new_element("garden-bed", destination(NELSON, 10, 270)))
    assert bed.properties.zone == 1

    target = destination(NELSON, 20, 90)
    design.move_element(house.id, target, project.land)

    zone0 = next(z for z in design.zones if z.level == 0)
    assert point_in_polygon(target, zone0.geometry)
    assert not point_in_polygon(NELSON, zone0.geometry)
    assert house.properties.zone == 0
    assert bed.properties.zone == 2


def test_move_house_without_land_clears_zones(project):
    design = project.active_design
    house = design.add_element(new_element("house", NELSON))
    design.regenerate_zones(project.land)
    bed = design.add_element(new_element("garden-bed", destination(NELSON, 10, 270)))

    design.move_element(house.id, destination(NELSON, 20, 90))

    assert design.zones == []
    assert house.properties.zone is None
    assert bed.properties.zone is None


def test_move_polygon_element_translates_ring(project):
    design = project.active_design
    ring = square_around(NELSON, 4)
    bed = new_element("garden-bed", NELSON)
    bed.geometry = bed.geometry.polygon(ring)
    design.add_element(bed)

    start = bed.position
    target = (start[0] + 0.0001, start[1] + 0.0002)
    design.move_element(bed.id, target)

    assert bed.geometry.type == "Polygon"
    assert bed.position[0] == pytest.approx(target[0])
    assert bed.position[1] == pytest.approx(target[1])
    assert calculate_area(bed.geometry.coordinates) == pytest.approx(16, rel=0.01)


def test_move_missing_element(project):
    assert project.active_design.move_element("nope", NELSON) is None


def test_update_element_meta(project):
    design = project.active_design
    tank = design.add_element(new_element("water-tank", NELSON))
    assert design.update_element_meta(tank.id, {"capacityLiters": 10000})
    assert tank.properties.meta == {"capacityLiters": 10000}
    assert not design.update_element_meta("nope", {})


def test_reset_advisor(project):
    project.advisor_state.dismiss("wizard-boundary")
    project.reset_advisor()
    assert project.advisor_state == AdvisorState()


def test_project_from_dict_defaults(project):
    data = project.to_dict()
    del data["advisor_state"]
    del data["version"]
    loaded = Project.from_dict(data)
    assert loaded.advisor_state == AdvisorState()
    assert loaded.version == 1


# ─── History ────────────────────────────────────────────────────────────
def test_undo_redo():
    design = Design(id="d1", name="Design 1")
    history = DesignHistory()
    assert not history.can_undo

    history.push(design)
    design.add_element(new_element("house", NELSON))

    previous = history.undo(design)
    assert previous.elements == []
    assert history.can_redo

    restored = history.redo(previous)
    assert len(restored.elements) == 1
    assert restored.elements[0].type_id == "house"
    assert not history.can_redo


def test_push_clears_redo():
    design = Design(id="d1", name="Design 1")
    history = DesignHistory()
    history.push(design)
    design = history.undo(design)
    assert history.can_redo

    history.push(design)
    assert not history.can_redo


def test_history_limit():
    design = Design(id="d1", name="Design 1")
    history = DesignHistory(max_history=3)
    for _ in range(5):
        history.push(design)

    undos = 0
    while history.undo(design) is not None:
        undos += 1
    assert undos == 3


def test_redo_respects_history_limit():
    design = Design(id="d1", name="Design 1")
    history = DesignHistory(max_history=3)
    for _ in range(3):
        history.push(design)
    history.undo(design)
    history.undo(design)

    history.max_history = 1
    history.redo(design)
    history.redo(design)

    undos = 0
    while history.undo(design) is not None:
        undos += 1
    assert undos == 1


def test_undo_on_empty_history():
    design = Design(id="d1", name="Design 1")
    history = DesignHistory()
    assert history.undo(design) is None
    assert history.redo(design) is None


def test_snapshots_do_not_share_state():
    design = Design(id="d1", name="Design 1")
    design.add_element(new_element("shed", NELSON))
    history = DesignHistory()
    history.push(design)

    design.elements[0].properties.label = "Changed"
    restored = history.undo(design)
    assert restored.elements[0].properties.label is None
