"""FastAPI dependencies: database session and service construction."""

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.packages.explorer.crud.file import CRUDFile
from app.packages.explorer.crud.folder import CRUDFolder
from app.packages.explorer.db import session as db_session
from app.packages.explorer.models import File, Folder
from app.packages.explorer.services.file_service import FileService
from app.packages.explorer.services.folder_service import FolderService


def get_db() -> Generator[Session, None, None]:
    """Yield a session and close it once the request is done."""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_folder_repository() -> CRUDFolder:
    return CRUDFolder(Folder)


def get_file_repository() -> CRUDFile:
    return CRUDFile(File)


def get_folder_service(
    folders: CRUDFolder = Depends(get_folder_repository),
    files: CRUDFile = Depends(get_file_repository),
) -> FolderService:
    return FolderService(folders, files)


def get_file_service(
    files: CRUDFile = Depends(get_file_repository),
    folders: CRUDFolder = Depends(get_folder_repository),
) -> FileService:
    return FileService(files, folders)
