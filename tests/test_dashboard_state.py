"""Tests for the dashboard's optimistic list state."""

import pytest
from portfolio_app.services.dashboard_state import CategoryList, OptimisticList, UploadCache
from portfolio_app.services.ordering import MoveDirection


class FakeBackend:
    """Holds the records the dashboard would fetch."""

    def __init__(self, records):
        self.records = [dict(r) for r in records]
        self.fail_load = False

    def load(self):
        if self.fail_load:
            raise ConnectionError("offline")
        return [dict(r) for r in self.records]


def failing_write(*args):
    raise RuntimeError("write failed")


def test_add_replaces_placeholder_with_saved_record():
    backend = FakeBackend([{"id": "1", "name": "A"}])
    records = OptimisticList(backend.load)
    records.refresh()

    saved = records.add({"name": "B"}, lambda data: {**data, "id": "2"})

    assert saved == {"name": "B", "id": "2"}
    assert [r["id"] for r in records.items] == ["1", "2"]


def test_failed_add_refetches():
    backend = FakeBackend([{"id": "1", "name": "A"}])
    records = OptimisticList(backend.load)
    records.refresh()

    with pytest.raises(RuntimeError):
        records.add({"name": "B"}, failing_write)

    assert records.items == [{"id": "1", "name": "A"}]


def test_failed_update_restores_snapshot_when_refetch_fails():
    backend = FakeBackend([{"id": "1", "name": "A"}])
    records = OptimisticList(backend.load)
    records.refresh()
    backend.fail_load = True

    with pytest.raises(RuntimeError):
        records.update("1", {"name": "Changed"}, failing_write)

    assert records.items == [{"id": "1", "name": "A"}]


def test_update_applies_locally():
    backend = FakeBackend([{"id": "1", "name": "A"}])
    records = OptimisticList(backend.load)
    records.refresh()

    records.update("1", {"name": "Changed"}, lambda data: data)

    assert records.find("1")["name"] == "Changed"


def test_failed_remove_shows_backend_state():
    backend = FakeBackend([{"id": "1"}, {"id": "2"}])
    records = OptimisticList(backend.load)
    records.refresh()
    backend.records.append({"id": "3"})

    with pytest.raises(RuntimeError):
        records.remove("1", failing_write)

    assert [r["id"] for r in records.items] == ["1", "2", "3"]


def categories_backend():
    return FakeBackend([
        {"id": "c", "name": "C", "order": 3},
        {"id": "a", "name": "A", "order": 1},
        {"id": "b", "name": "B", "order": 2},
    ])


def test_category_list_is_sorted_and_suggests_next_order():
    categories = CategoryList(categories_backend().load)
    categories.refresh()

    assert [c["id"] for c in categories.items] == ["a", "b", "c"]
    assert categories.next_order() == 4


def test_next_order_ignores_pending_category():
    categories = CategoryList(lambda: [])
    categories.refresh()
    seen = []

    def write(data):
        seen.append(categories.next_order())
        return {**data, "id": "new"}

    categories.add({"name": "X", "order": 5}, write)

    assert seen == [1]
    assert categories.next_order() == 6


def test_category_move_swaps_locally_then_takes_saved_list():
    backend = categories_backend()
    categories = CategoryList(backend.load)
    categories.refresh()
    local_views = []

    def write():
        local_views.append([c["id"] for c in categories.items])
        return [
            {"id": "b", "name": "B", "order": 1},
            {"id": "a", "name": "A", "order": 2},
            {"id": "c", "name": "C", "order": 3},
        ]

    result = categories.move("b", MoveDirection.UP, write)

    assert local_views == [["b", "a", "c"]]
    assert [c["id"] for c in result] == ["b", "a", "c"]


def test_category_move_at_edge_does_not_write():
    categories = CategoryList(categories_backend().load)
    categories.refresh()

    result = categories.move("a", MoveDirection.UP, failing_write)

    assert [c["id"] for c in result] == ["a", "b", "c"]


def test_failed_category_move_refetches():
    categories = CategoryList(categories_backend().load)
    categories.refresh()

    with pytest.raises(RuntimeError):
        categories.move("c", MoveDirection.UP, failing_write)

    assert [(c["id"], c["order"]) for c in categories.items] == [("a", 1), ("b", 2), ("c", 3)]


def test_upload_cache_uploads_each_file_once():
    cache = UploadCache()
    uploads = []

    def upload():
        uploads.append("shot.png")
        return f"http://site/uploads/projects/{len(uploads)}_shot.png"

    first = cache.upload_once("edit_projects_1_imageUrl", "file-a", upload)
    again = cache.upload_once("edit_projects_1_imageUrl", "file-a", upload)

    assert first == again == "http://site/uploads/projects/1_shot.png"
    assert len(uploads) == 1


def test_upload_cache_uploads_new_files_and_fields():
    cache = UploadCache()
    counter = iter(range(1, 10))

    def upload():
        return f"url-{next(counter)}"

    assert cache.upload_once("profile_imageUrl", "file-a", upload) == "url-1"
    assert cache.upload_once("profile_imageUrl", "file-b", upload) == "url-2"
    assert cache.upload_once("add_projects_imageUrl", "file-a", upload) == "url-3"


def test_failed_upload_is_retried():
    cache = UploadCache()

    with pytest.raises(RuntimeError):
        cache.upload_once("profile_imageUrl", "file-a", failing_write)

    assert cache.upload_once("profile_imageUrl", "file-a", lambda: "url") == "url"
