"""Shared fixtures: an isolated SQLite database plus sync and async API clients."""

import os
import tempfile
from typing import AsyncGenerator, Generator

TEST_DB_PATH = os.path.join(os.path.dirname(__file__), "test.db")
TEST_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"

# Must be set before the application modules read their settings.
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="explorer_logs_"))

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from app.main import app  # noqa: E402
from app.packages.explorer.core.dependencies import get_db  # noqa: E402
from app.packages.explorer.crud.file import CRUDFile  # noqa: E402
from app.packages.explorer.crud.folder import CRUDFolder  # noqa: E402
from app.packages.explorer.db import session as db_session  # noqa: E402
from app.packages.explorer.db.init_db import init_db, seed_sample_data  # noqa: E402
from app.packages.explorer.models import File, Folder  # noqa: E402
from app.packages.explorer.models.base import Base  # noqa: E402
from app.packages.explorer.services.file_service import FileService  # noqa: E402
from app.packages.explorer.services.folder_service import FolderService  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_database() -> Generator[None, None, None]:
    """Create an isolated SQLite database and remove it when the session ends."""
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db_session.engine = engine
    db_session.SessionLocal = TestingSessionLocal

    Base.metadata.create_all(bind=engine)
    init_db()
    yield

    engine.dispose()
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture(autouse=True)
def clean_tables() -> Generator[None, None, None]:
    """Every test starts from empty tables."""
    yield
    session = db_session.SessionLocal()
    try:
        session.query(File).delete()
        session.query(Folder).delete()
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def db_session_fixture() -> Generator[Session, None, None]:
    session = db_session.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def seeded(db_session_fixture: Session) -> dict[str, Folder]:
    """Load the sample tree and return folders keyed by path."""
    seed_sample_data(db_session_fixture)
    db_session_fixture.commit()
    return {folder.path: folder for folder in db_session_fixture.query(Folder).all()}


@pytest.fixture()
def folder_service() -> FolderService:
    return FolderService(CRUDFolder(Folder), CRUDFile(File))


@pytest.fixture()
def file_service() -> FileService:
    return FileService(CRUDFile(File), CRUDFolder(Folder))


def _override_get_db() -> Generator[Session, None, None]:
    session = db_session.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db_session_fixture) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the test database."""
    app.dependency_overrides[get_db] = _override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Async client over the ASGI app, rooted at the versioned API prefix."""
    app.dependency_overrides[get_db] = _override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test/api/v1") as http_client:
        yield http_client
    app.dependency_overrides.clear()
