"""Database bootstrapping utilities."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.packages.explorer.core.config import get_settings
from app.packages.explorer.db import session as db_session
from app.packages.explorer.models import File, Folder
from app.packages.explorer.models.base import Base

logger = logging.getLogger(__name__)

# (path, parent path) in insertion order; names are the last path segment.
SAMPLE_FOLDERS: list[tuple[str, Optional[str]]] = [
    ("/Documents", None),
    ("/Pictures", None),
    ("/Music", None),
    ("/Videos", None),
    ("/Documents/Work", "/Documents"),
    ("/Documents/Personal", "/Documents"),
    ("/Documents/Projects", "/Documents"),
    ("/Pictures/Vacation", "/Pictures"),
    ("/Pictures/Family", "/Pictures"),
    ("/Documents/Work/Reports", "/Documents/Work"),
    ("/Documents/Work/Presentations", "/Documents/Work"),
    ("/Documents/Projects/Web Development", "/Documents/Projects"),
    ("/Documents/Projects/Mobile Apps", "/Documents/Projects"),
]

# (folder path, file name, size in bytes, extension)
SAMPLE_FILES: list[tuple[str, str, int, str]] = [
    ("/Documents/Work/Reports", "Q1 Report.pdf", 2048576, "pdf"),
    ("/Documents/Work/Reports", "Q2 Report.pdf", 1536000, "pdf"),
    ("/Documents/Work/Presentations", "Company Presentation.pptx", 5120000, "pptx"),
    ("/Documents/Projects/Web Development", "README.md", 2048, "md"),
    ("/Documents/Projects/Web Development", "package.json", 1024, "json"),
    ("/Pictures/Vacation", "beach.jpg", 3145728, "jpg"),
    ("/Pictures/Vacation", "mountains.jpg", 2097152, "jpg"),
    ("/Pictures/Family", "family_photo.jpg", 4194304, "jpg"),
    ("/Music", "song1.mp3", 8388608, "mp3"),
    ("/Videos", "video1.mp4", 52428800, "mp4"),
]


def init_db() -> None:
    """Create all tables if missing and, when enabled, seed the sample tree."""
    Base.metadata.create_all(bind=db_session.engine)

    if not get_settings().seed_sample_data:
        return

    session = db_session.SessionLocal()
    try:
        seed_sample_data(session)
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to seed sample data during database initialization")
        raise
    finally:
        session.close()


def seed_sample_data(db: Session) -> int:
    """Insert the sample folders and files unless folders already exist.

    Returns the number of folders created; the caller owns the commit.
    """
    if db.query(Folder).first() is not None:
        return 0

    by_path: dict[str, Folder] = {}
    for path, parent_path in SAMPLE_FOLDERS:
        parent = by_path.get(parent_path) if parent_path else None
        folder = Folder(
            name=path.rsplit("/", 1)[-1],
            path=path,
            parent_id=parent.id if parent else None,
            is_root=parent is None,
        )
        db.add(folder)
        db.flush()
        by_path[path] = folder

    for folder_path, name, size, extension in SAMPLE_FILES:
        db.add(
            File(
                name=name,
                path=f"{folder_path}/{name}",
                folder_id=by_path[folder_path].id,
                size=size,
                extension=extension,
            )
        )
    db.flush()
    logger.info("Seeded %s sample folders and %s sample files", len(by_path), len(SAMPLE_FILES))
    return len(by_path)
