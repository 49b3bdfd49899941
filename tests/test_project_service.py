import pytest

from zerobuild.exceptions import ProjectNotFoundError, RoomNotFoundError
from zerobuild.models.domain import RoomType, SatisfactionRating
from zerobuild.services.project_service import ProjectService, portfolio_summary


@pytest.fixture
def service(storage):
    return ProjectService(storage)


def _create(service, client_id="a@x.com", **fields):
    data = {"title": "Skyview", "length": 20, "breadth": 20, "plot_area": None}
    data.update(fields)
    return service.create_project(client_id, data)


class TestCreate:

    def test_new_project_has_no_rooms(self, service, storage):
        project = _create(service)
        assert project.plot_area == 400
        assert project.rooms == []
        assert storage.get_project(project.id) == project

    def test_area_only_makes_square(self, service):
        project = _create(service, length=None, breadth=None, plot_area=400)
        assert (project.length, project.breadth) == (20, 20)

    def test_missing_dimensions_rejected(self, service):
        with pytest.raises(ValueError):
            _create(service, length=None, breadth=None, plot_area=None)

    def test_get_unknown(self, service):
        with pytest.raises(ProjectNotFoundError):
            service.get("nope")


class TestUpdate:

    def test_length_edit_recomputes_area(self, service):
        project = _create(service, length=20, breadth=15)
        updated = service.update_project(project, {"length": 25})
        assert updated.plot_area == 375
        assert updated.breadth == 15

    def test_area_edit_recomputes_sides(self, service):
        project = _create(service, length=20, breadth=15)
        updated = service.update_project(project, {"plot_area": 400})
        assert (updated.length, updated.breadth) == (20, 20)

    def test_area_conflicting_with_sides_rejected(self, service, storage):
        project = _create(service)
        with pytest.raises(ValueError):
            service.update_project(project, {"length": 25, "plot_area": 400})
        assert storage.get_project(project.id).length == 20

    def test_area_matching_sides_accepted(self, service):
        project = _create(service)
        updated = service.update_project(project, {"breadth": 10, "plot_area": 200})
        assert (updated.length, updated.breadth, updated.plot_area) == (20, 10, 200)

    def test_invalid_floors_rejected(self, service):
        project = _create(service)
        with pytest.raises(ValueError):
            service.update_project(project, {"floors": 0})


class TestRooms:

    def test_add_update_remove(self, service, storage):
        project = _create(service)
        room = service.add_room(project, "", RoomType.KITCHEN.value)
        assert room.name == "Unit 1"
        assert len(room.furniture) == 2

        service.update_room(project, room.id, name="Pantry", color="#00ff00")
        stored = storage.get_project(project.id)
        assert stored.rooms[0].name == "Pantry"
        assert stored.rooms[0].color == "#00ff00"

        service.remove_room(project, room.id)
        assert storage.get_project(project.id).rooms == []

    def test_unknown_room(self, service):
        project = _create(service)
        with pytest.raises(RoomNotFoundError):
            service.remove_room(project, "ghost")


class TestVisualMerges:

    def test_out_of_order_room_results_merge_by_id(self, service, storage):
        project = _create(service)
        first = service.add_room(project, "A", RoomType.BEDROOM.value)
        second = service.add_room(project, "B", RoomType.OFFICE.value)

        service.apply_room_visuals(project.id, second.id, after="data:image/png;base64,Qg==")
        service.apply_room_visuals(project.id, first.id, before="data:image/png;base64,QQ==")

        stored = storage.get_project(project.id)
        assert stored.find_room(first.id).before_image == "data:image/png;base64,QQ=="
        assert stored.find_room(first.id).after_image is None
        assert stored.find_room(second.id).after_image == "data:image/png;base64,Qg=="

    def test_result_for_deleted_room_dropped(self, service, storage):
        project = _create(service)
        room = service.add_room(project, "A", RoomType.BEDROOM.value)
        service.remove_room(project, room.id)

        assert service.apply_room_visuals(project.id, room.id, after="x") is None
        assert service.apply_exterior_visual("gone", "x") is None

    def test_exterior_visual_kept(self, service, storage):
        project = _create(service)
        service.apply_exterior_visual(project.id, "data:image/png;base64,QQ==")
        assert storage.get_project(project.id).visual_image == "data:image/png;base64,QQ=="


class TestDeletion:

    def test_delete_client_projects_keeps_others(self, service, storage):
        mine = _create(service, client_id="a@x.com")
        theirs = _create(service, client_id="b@x.com")

        assert service.delete_client_projects("a@x.com") == 1
        assert [p.id for p in storage.get_projects()] == [theirs.id]
        assert storage.get_project(mine.id) is None

    def test_delete_last_client_clears_store(self, service, storage):
        _create(service)
        service.delete_client_projects("a@x.com")
        assert not (storage.data_dir / "projects.json").exists()


def test_portfolio_summary(service):
    first = _create(service, client_id="a@x.com")
    service.add_room(first, "Master", RoomType.BEDROOM.value)
    service.rate_project(first, SatisfactionRating.EXCELLENT)
    second = _create(service, client_id="b@x.com", length=10, breadth=10)

    summary = portfolio_summary([first, second])

    assert summary.total_projects == 2
    assert summary.total_rooms == 1
    assert summary.global_valuation == 1107500 + 215000
    assert summary.ratings["High Accuracy"] == 1
    assert summary.ratings["Not Accurate"] == 0
    assert len(summary.ratings) == 5
    assert [row.total_budget for row in summary.projects] == [1107500, 215000]
