import pytest

from app.packages.explorer.core.exceptions import ConflictError, NotFoundError, ValidationError


def test_create_file_in_existing_folder(db_session_fixture, file_service, seeded):
    music = seeded["/Music"]

    file = file_service.create(
        db_session_fixture,
        {"name": "song2.mp3", "path": "/Music/song2.mp3", "folder_id": music.id, "size": 1024, "extension": ".mp3"},
    )

    assert file.id is not None
    assert file.folder_id == music.id
    assert file.extension == "mp3"
    assert [item.name for item in file_service.list_by_folder(db_session_fixture, music.id)] == [
        "song1.mp3",
        "song2.mp3",
    ]


def test_create_file_defaults_size_to_zero(db_session_fixture, file_service, seeded):
    file = file_service.create(
        db_session_fixture,
        {"name": "notes", "path": "/Documents/notes", "folder_id": seeded["/Documents"].id},
    )
    assert file.size == 0
    assert file.extension is None


def test_create_file_in_missing_folder(db_session_fixture, file_service):
    with pytest.raises(NotFoundError) as excinfo:
        file_service.create(db_session_fixture, {"name": "a.txt", "path": "/a.txt", "folder_id": 12345})
    assert str(excinfo.value) == "Parent folder not found"


def test_create_file_with_taken_path(db_session_fixture, file_service, seeded):
    with pytest.raises(ConflictError):
        file_service.create(
            db_session_fixture,
            {
                "name": "Q1 Report.pdf",
                "path": "/Documents/Work/Reports/Q1 Report.pdf",
                "folder_id": seeded["/Documents/Work/Reports"].id,
            },
        )


def test_negative_size_is_rejected(db_session_fixture, file_service, seeded):
    with pytest.raises(ValidationError):
        file_service.create(
            db_session_fixture,
            {"name": "bad.bin", "path": "/Music/bad.bin", "folder_id": seeded["/Music"].id, "size": -1},
        )


def test_move_file_between_folders(db_session_fixture, file_service, seeded):
    song = file_service.list_by_folder(db_session_fixture, seeded["/Music"].id)[0]
    videos = seeded["/Videos"]

    moved = file_service.update(
        db_session_fixture, song.id, {"folder_id": videos.id, "path": "/Videos/song1.mp3"}
    )

    assert moved.folder_id == videos.id
    assert file_service.list_by_folder(db_session_fixture, seeded["/Music"].id) == []
    assert len(file_service.list_by_folder(db_session_fixture, videos.id)) == 2


def test_update_file_into_missing_folder(db_session_fixture, file_service, seeded):
    song = file_service.list_by_folder(db_session_fixture, seeded["/Music"].id)[0]
    with pytest.raises(NotFoundError):
        file_service.update(db_session_fixture, song.id, {"folder_id": 99999})


def test_update_file_path_conflict(db_session_fixture, file_service, seeded):
    reports = file_service.list_by_folder(db_session_fixture, seeded["/Documents/Work/Reports"].id)
    q1, q2 = sorted(reports, key=lambda item: item.name)

    with pytest.raises(ConflictError):
        file_service.update(db_session_fixture, q2.id, {"path": q1.path})


def test_delete_file(db_session_fixture, file_service, seeded):
    video = file_service.list_by_folder(db_session_fixture, seeded["/Videos"].id)[0]

    file_service.delete(db_session_fixture, video.id)

    with pytest.raises(NotFoundError):
        file_service.get(db_session_fixture, video.id)
    assert len(file_service.list(db_session_fixture)) == 9


def test_null_size_on_update_is_a_validation_error(db_session_fixture, file_service, seeded):
    video = file_service.list_by_folder(db_session_fixture, seeded["/Videos"].id)[0]

    with pytest.raises(ValidationError):
        file_service.update(db_session_fixture, video.id, {"size": None})
    assert file_service.get(db_session_fixture, video.id).size == 52428800


def test_unique_index_race_on_create_is_a_conflict(db_session_fixture, file_service, seeded, monkeypatch):
    reports = seeded["/Documents/Work/Reports"]
    # the pre-check misses the duplicate, as if another request inserted it meanwhile
    monkeypatch.setattr(file_service.files, "get_by_path", lambda *args, **kwargs: None)

    with pytest.raises(ConflictError) as excinfo:
        file_service.create(
            db_session_fixture,
            {"name": "Q1 Report.pdf", "path": "/Documents/Work/Reports/Q1 Report.pdf", "folder_id": reports.id},
        )
    assert "already exists" in str(excinfo.value)

    # the failed commit was rolled back, so the session keeps working
    other = file_service.create(
        db_session_fixture,
        {"name": "Q3 Report.pdf", "path": "/Documents/Work/Reports/Q3 Report.pdf", "folder_id": reports.id},
    )
    assert other.id is not None


def test_unique_index_race_on_update_is_a_conflict(db_session_fixture, file_service, seeded, monkeypatch):
    q1, q2 = file_service.list_by_folder(db_session_fixture, seeded["/Documents/Work/Reports"].id)
    monkeypatch.setattr(file_service.files, "get_by_path", lambda *args, **kwargs: None)

    with pytest.raises(ConflictError):
        file_service.update(db_session_fixture, q2.id, {"path": q1.path})

    assert file_service.get(db_session_fixture, q2.id).path == "/Documents/Work/Reports/Q2 Report.pdf"
