"""Folder service behaviour against the SQLite test database."""

import pytest

from app.packages.explorer.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.packages.explorer.models import File, Folder
from app.packages.explorer.services.folder_service import build_folder_tree


def _flatten(nodes, parent_id=None):
    """Yield (folder id, id of the node it was placed under) for every tree node."""
    stack = [(node, parent_id) for node in nodes]
    while stack:
        node, placed_under = stack.pop()
        yield node["id"], placed_under
        stack.extend((child, node["id"]) for child in node["subfolders"])


def test_tree_places_every_folder_once_under_its_parent(db_session_fixture, folder_service, seeded):
    tree = folder_service.tree(db_session_fixture)

    placements = list(_flatten(tree))
    ids = [folder_id for folder_id, _ in placements]
    assert sorted(ids) == sorted(folder.id for folder in seeded.values())
    assert len(ids) == len(set(ids))

    parents = {folder.id: folder.parent_id for folder in seeded.values()}
    for folder_id, placed_under in placements:
        assert parents[folder_id] == placed_under


def test_tree_lists_roots_by_name(db_session_fixture, folder_service, seeded):
    tree = folder_service.tree(db_session_fixture)
    assert [node["name"] for node in tree] == ["Documents", "Music", "Pictures", "Videos"]
    documents = tree[0]
    assert [node["name"] for node in documents["subfolders"]] == ["Personal", "Projects", "Work"]


def test_created_root_folder_shows_up_at_top_level(db_session_fixture, folder_service):
    folder_service.create(db_session_fixture, {"name": "Downloads", "path": "/Downloads", "is_root": True})

    tree = folder_service.tree(db_session_fixture)

    downloads = [node for node in tree if node["name"] == "Downloads"]
    assert len(downloads) == 1
    assert downloads[0]["subfolders"] == []
    assert downloads[0]["isRoot"] is True
    assert downloads[0]["parentId"] is None


def test_created_child_appears_in_parent_content(db_session_fixture, folder_service):
    documents = folder_service.create(db_session_fixture, {"name": "Documents", "path": "/Documents"})
    work = folder_service.create(
        db_session_fixture, {"name": "Work", "path": "/Documents/Work", "parent_id": documents.id}
    )

    content = folder_service.content(db_session_fixture, documents.id)

    assert [item["id"] for item in content["subfolders"]] == [work.id]
    assert content["files"] == []
    assert content["path"] == "/Documents"
    assert work.is_root is False


def test_create_with_existing_path_conflicts(db_session_fixture, folder_service):
    folder_service.create(db_session_fixture, {"name": "Documents", "path": "/Documents"})

    with pytest.raises(ConflictError) as excinfo:
        folder_service.create(db_session_fixture, {"name": "Something else", "path": "/Documents"})
    assert "already exists" in str(excinfo.value)


def test_path_match_is_case_sensitive(db_session_fixture, folder_service):
    folder_service.create(db_session_fixture, {"name": "Documents", "path": "/Documents"})
    other = folder_service.create(db_session_fixture, {"name": "documents", "path": "/documents"})
    assert other.id is not None


@pytest.mark.parametrize("path", ["", "   ", None])
def test_create_without_path_is_a_validation_error(db_session_fixture, folder_service, path):
    with pytest.raises(ValidationError):
        folder_service.create(db_session_fixture, {"name": "Nameless", "path": path})


def test_create_under_missing_parent_is_not_found(db_session_fixture, folder_service):
    with pytest.raises(NotFoundError) as excinfo:
        folder_service.create(db_session_fixture, {"name": "Orphan", "path": "/Orphan", "parent_id": 9999})
    assert str(excinfo.value) == "Parent folder not found"


def test_get_missing_folder(db_session_fixture, folder_service):
    with pytest.raises(NotFoundError):
        folder_service.get(db_session_fixture, 424242)
    with pytest.raises(NotFoundError):
        folder_service.content(db_session_fixture, 424242)


def test_subfolders_of_none_are_the_roots(db_session_fixture, folder_service, seeded):
    roots = folder_service.subfolders(db_session_fixture, None)
    assert {folder.path for folder in roots} == {"/Documents", "/Pictures", "/Music", "/Videos"}

    work_children = folder_service.subfolders(db_session_fixture, seeded["/Documents/Work"].id)
    assert [folder.name for folder in work_children] == ["Presentations", "Reports"]


def test_update_merges_fields_and_stamps_updated_at(db_session_fixture, folder_service):
    folder = folder_service.create(db_session_fixture, {"name": "Docs", "path": "/Docs"})
    before = folder.updated_at

    updated = folder_service.update(db_session_fixture, folder.id, {"name": "Documents"})

    assert updated.name == "Documents"
    assert updated.path == "/Docs"
    assert updated.updated_at is not None
    assert before is None or updated.updated_at.replace(tzinfo=None) >= before.replace(tzinfo=None)


def test_update_rechecks_path_uniqueness(db_session_fixture, folder_service):
    folder_service.create(db_session_fixture, {"name": "A", "path": "/A"})
    b = folder_service.create(db_session_fixture, {"name": "B", "path": "/B"})

    with pytest.raises(ConflictError):
        folder_service.update(db_session_fixture, b.id, {"path": "/A"})

    # keeping its own path is not a conflict
    assert folder_service.update(db_session_fixture, b.id, {"path": "/B"}).path == "/B"


def test_update_missing_folder(db_session_fixture, folder_service):
    with pytest.raises(NotFoundError):
        folder_service.update(db_session_fixture, 31337, {"name": "ghost"})


def test_move_into_own_descendant_is_rejected(db_session_fixture, folder_service, seeded):
    documents = seeded["/Documents"]
    reports = seeded["/Documents/Work/Reports"]

    with pytest.raises(ValidationError):
        folder_service.update(db_session_fixture, documents.id, {"parent_id": reports.id})
    with pytest.raises(ValidationError):
        folder_service.update(db_session_fixture, documents.id, {"parent_id": documents.id})


def test_moving_to_root_and_back_keeps_is_root_in_sync(db_session_fixture, folder_service, seeded):
    work = seeded["/Documents/Work"]

    moved = folder_service.update(db_session_fixture, work.id, {"parent_id": None})
    assert moved.is_root is True

    moved_back = folder_service.update(
        db_session_fixture, work.id, {"parent_id": seeded["/Pictures"].id}
    )
    assert moved_back.is_root is False
    assert moved_back.parent_id == seeded["/Pictures"].id


def test_move_under_missing_parent_is_not_found(db_session_fixture, folder_service, seeded):
    with pytest.raises(NotFoundError):
        folder_service.update(db_session_fixture, seeded["/Music"].id, {"parent_id": 777777})


def test_delete_non_empty_folder_is_refused(db_session_fixture, folder_service, seeded):
    reports = seeded["/Documents/Work/Reports"]

    with pytest.raises(ConflictError) as excinfo:
        folder_service.delete(db_session_fixture, reports.id)
    assert "Cannot delete folder with subfolders or files" in str(excinfo.value)

    assert db_session_fixture.get(Folder, reports.id) is not None
    assert db_session_fixture.query(File).filter(File.folder_id == reports.id).count() == 2


def test_delete_folder_with_only_subfolders_is_refused(db_session_fixture, folder_service, seeded):
    with pytest.raises(ConflictError):
        folder_service.delete(db_session_fixture, seeded["/Documents/Work"].id)


def test_delete_empty_folder(db_session_fixture, folder_service, seeded):
    personal = seeded["/Documents/Personal"]

    folder_service.delete(db_session_fixture, personal.id)

    with pytest.raises(NotFoundError):
        folder_service.get(db_session_fixture, personal.id)
    with pytest.raises(NotFoundError):
        folder_service.delete(db_session_fixture, personal.id)


def test_search_pdf_returns_only_pdf_files(db_session_fixture, folder_service, seeded):
    result = folder_service.search(db_session_fixture, "pdf")

    assert result["folders"] == []
    assert sorted(item["name"] for item in result["files"]) == ["Q1 Report.pdf", "Q2 Report.pdf"]


def test_search_is_case_insensitive_on_name_and_path(db_session_fixture, folder_service, seeded):
    result = folder_service.search(db_session_fixture, "  WORK ")

    paths = {item["path"] for item in result["folders"]}
    assert paths == {
        "/Documents/Work",
        "/Documents/Work/Reports",
        "/Documents/Work/Presentations",
    }


def test_search_matches_file_extension(db_session_fixture, folder_service, seeded):
    result = folder_service.search(db_session_fixture, "JPG")
    assert len(result["files"]) == 3


@pytest.mark.parametrize("query", ["", "   "])
def test_blank_search_matches_nothing(db_session_fixture, folder_service, seeded, query):
    assert folder_service.search(db_session_fixture, query) == {"folders": [], "files": []}


def test_breadcrumbs_run_from_root_to_folder(db_session_fixture, folder_service, seeded):
    crumbs = folder_service.breadcrumbs(db_session_fixture, seeded["/Documents/Work/Reports"].id)
    assert [crumb["path"] for crumb in crumbs] == [
        "/Documents",
        "/Documents/Work",
        "/Documents/Work/Reports",
    ]


def test_tree_builder_skips_folders_outside_any_root():
    folders = [
        Folder(id=1, name="root", path="/root", parent_id=None, is_root=True),
        Folder(id=2, name="child", path="/root/child", parent_id=1, is_root=False),
        Folder(id=3, name="loop-a", path="/loop-a", parent_id=4, is_root=False),
        Folder(id=4, name="loop-b", path="/loop-b", parent_id=3, is_root=False),
    ]

    tree = build_folder_tree(folders)

    assert [node["id"] for node in tree] == [1]
    assert [node["id"] for node in tree[0]["subfolders"]] == [2]


def test_unique_index_race_on_create_is_a_conflict(db_session_fixture, folder_service, monkeypatch):
    folder_service.create(db_session_fixture, {"name": "Documents", "path": "/Documents"})
    # the pre-check misses the duplicate, as if another request inserted it meanwhile
    monkeypatch.setattr(folder_service.folders, "get_by_path", lambda *args, **kwargs: None)

    with pytest.raises(ConflictError) as excinfo:
        folder_service.create(db_session_fixture, {"name": "Docs", "path": "/Documents"})
    assert "already exists" in str(excinfo.value)

    # the failed commit was rolled back, so the session keeps working
    music = folder_service.create(db_session_fixture, {"name": "Music", "path": "/Music"})
    assert [folder.path for folder in folder_service.list(db_session_fixture)] == ["/Documents", "/Music"]
    assert music.is_root is True


def test_unique_index_race_on_update_is_a_conflict(db_session_fixture, folder_service, monkeypatch):
    folder_service.create(db_session_fixture, {"name": "A", "path": "/A"})
    b = folder_service.create(db_session_fixture, {"name": "B", "path": "/B"})
    monkeypatch.setattr(folder_service.folders, "get_by_path", lambda *args, **kwargs: None)

    with pytest.raises(ConflictError):
        folder_service.update(db_session_fixture, b.id, {"path": "/A"})

    assert folder_service.get(db_session_fixture, b.id).path == "/B"
