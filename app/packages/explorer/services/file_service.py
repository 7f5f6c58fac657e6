"""File business logic: parent-folder and path checks around the file repository."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.packages.explorer.core.constants import (
    FILE_NOT_FOUND,
    FILE_PATH_EXISTS,
    PARENT_FOLDER_NOT_FOUND,
)
from app.packages.explorer.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.packages.explorer.core.timezone import now as tz_now
from app.packages.explorer.crud.file import CRUDFile
from app.packages.explorer.crud.folder import CRUDFolder
from app.packages.explorer.models import File

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("name", "path", "folder_id", "size", "extension")


class FileService:
    """File operations; files are leaves, so deletes are unconditional."""

    def __init__(self, file_repository: CRUDFile, folder_repository: CRUDFolder) -> None:
        self.files = file_repository
        self.folders = folder_repository

    def list(self, db: Session) -> List[File]:
        return self.files.list_all(db)

    def get(self, db: Session, file_id: int) -> File:
        file = self.files.get(db, file_id)
        if file is None:
            raise NotFoundError(FILE_NOT_FOUND)
        return file

    def list_by_folder(self, db: Session, folder_id: int) -> List[File]:
        return self.files.list_by_folder(db, folder_id)

    def create(self, db: Session, data: Mapping[str, Any]) -> File:
        folder_id = data.get("folder_id")
        if folder_id is None or self.folders.get(db, folder_id) is None:
            raise NotFoundError(PARENT_FOLDER_NOT_FOUND)

        path = self._normalize_required(data.get("path"), "path")
        if self.files.get_by_path(db, path) is not None:
            raise ConflictError(FILE_PATH_EXISTS)

        payload = {
            "name": self._normalize_required(data.get("name"), "name"),
            "path": path,
            "folder_id": folder_id,
            "size": self._normalize_size(data.get("size")),
            "extension": self._normalize_extension(data.get("extension")),
        }
        try:
            file = self.files.create(db, payload)
        except IntegrityError as exc:
            raise ConflictError(FILE_PATH_EXISTS) from exc
        logger.info("Created file %s (id=%s)", file.path, file.id)
        return file

    def update(self, db: Session, file_id: int, changes: Mapping[str, Any]) -> File:
        file = self.get(db, file_id)
        updates = {key: value for key, value in changes.items() if key in _UPDATABLE_FIELDS}

        if "folder_id" in updates:
            if updates["folder_id"] is None or self.folders.get(db, updates["folder_id"]) is None:
                raise NotFoundError(PARENT_FOLDER_NOT_FOUND)
        if "path" in updates:
            updates["path"] = self._normalize_required(updates["path"], "path")
            if self.files.get_by_path(db, updates["path"], exclude_id=file.id) is not None:
                raise ConflictError(FILE_PATH_EXISTS)
        if "name" in updates:
            updates["name"] = self._normalize_required(updates["name"], "name")
        if "size" in updates:
            # an explicit null is not "unchanged"; zero must be sent as 0
            if updates["size"] is None:
                raise ValidationError("File validation failed: size is required")
            updates["size"] = self._normalize_size(updates["size"])
        if "extension" in updates:
            updates["extension"] = self._normalize_extension(updates["extension"])

        for key, value in updates.items():
            setattr(file, key, value)
        file.updated_at = tz_now()

        try:
            return self.files.save(db, file)
        except IntegrityError as exc:
            raise ConflictError(FILE_PATH_EXISTS) from exc

    def delete(self, db: Session, file_id: int) -> None:
        file = self.get(db, file_id)
        path = file.path
        self.files.hard_delete(db, file)
        logger.info("Deleted file %s (id=%s)", path, file_id)

    @staticmethod
    def _normalize_required(value: Optional[str], field: str) -> str:
        text = (value or "").strip()
        if not text:
            raise ValidationError(f"File validation failed: {field} is required")
        return text

    @staticmethod
    def _normalize_size(value: Optional[int]) -> int:
        if value is None:
            return 0
        if value < 0:
            raise ValidationError("File validation failed: size must be non-negative")
        return int(value)

    @staticmethod
    def _normalize_extension(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        # stored without the leading dot: ".pdf" -> "pdf"
        trimmed = value.strip().lstrip(".")
        return trimmed or None
