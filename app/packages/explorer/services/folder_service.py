"""Folder business logic: invariants on create/update/delete and the derived views.

Entity operations (``list``/``get``/``create``/``update``) return ORM rows;
the derived views (``tree``/``content``/``breadcrumbs``/``search``) return
JSON-ready dicts since they are projections, never persisted.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.packages.explorer.core.constants import (
    FOLDER_NOT_EMPTY,
    FOLDER_NOT_FOUND,
    FOLDER_PATH_EXISTS,
    PARENT_FOLDER_NOT_FOUND,
)
from app.packages.explorer.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.packages.explorer.core.timezone import now as tz_now
from app.packages.explorer.crud.file import CRUDFile
from app.packages.explorer.crud.folder import CRUDFolder
from app.packages.explorer.models import Folder
from app.packages.explorer.services.serializers import (
    serialize_breadcrumb,
    serialize_file,
    serialize_folder,
)

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("name", "path", "parent_id")


def build_folder_tree(folders: Iterable[Folder]) -> List[Dict[str, Any]]:
    """Nest ``folders`` under their parents, roots first.

    Sibling order follows the input order. The walk uses an explicit stack
    over a parent-indexed mapping; a folder whose parent chain never reaches
    a root (orphan or cycle) is left out and reported.
    """
    folders = list(folders)
    children_map: Dict[Optional[int], List[Folder]] = defaultdict(list)
    for folder in folders:
        children_map[folder.parent_id].append(folder)

    roots: List[Dict[str, Any]] = []
    stack: List[tuple[int, Dict[str, Any]]] = []
    for folder in children_map.get(None, []):
        node = {**serialize_folder(folder), "subfolders": []}
        roots.append(node)
        stack.append((folder.id, node))

    placed = len(roots)
    while stack:
        folder_id, node = stack.pop()
        for child in children_map.get(folder_id, []):
            child_node = {**serialize_folder(child), "subfolders": []}
            node["subfolders"].append(child_node)
            stack.append((child.id, child_node))
            placed += 1

    if placed != len(folders):
        logger.warning(
            "Folder tree skipped %s folder(s) not reachable from a root", len(folders) - placed
        )
    return roots


class FolderService:
    """Folder operations over the folder and file repositories."""

    def __init__(self, folder_repository: CRUDFolder, file_repository: CRUDFile) -> None:
        self.folders = folder_repository
        self.files = file_repository

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self, db: Session) -> List[Folder]:
        return self.folders.list_all(db)

    def get(self, db: Session, folder_id: int) -> Folder:
        folder = self.folders.get(db, folder_id)
        if folder is None:
            raise NotFoundError(FOLDER_NOT_FOUND)
        return folder

    def tree(self, db: Session) -> List[Dict[str, Any]]:
        return build_folder_tree(self.folders.list_all(db))

    def content(self, db: Session, folder_id: int) -> Dict[str, Any]:
        """The folder plus its direct subfolders and direct files."""
        folder = self.get(db, folder_id)
        subfolders = self.folders.list_by_parent(db, folder.id)
        files = self.files.list_by_folder(db, folder.id)
        return {
            **serialize_folder(folder),
            "subfolders": [serialize_folder(item) for item in subfolders],
            "files": [serialize_file(item) for item in files],
        }

    def subfolders(self, db: Session, parent_id: Optional[int]) -> List[Folder]:
        return self.folders.list_by_parent(db, parent_id)

    def breadcrumbs(self, db: Session, folder_id: int) -> List[Dict[str, Any]]:
        """Ancestors of ``folder_id`` from its root down to the folder itself."""
        folder = self.get(db, folder_id)
        by_id = {item.id: item for item in self.folders.list_all(db)}

        chain: List[Folder] = []
        seen: set[int] = set()
        current: Optional[Folder] = folder
        while current is not None and current.id not in seen:
            seen.add(current.id)
            chain.append(current)
            current = by_id.get(current.parent_id) if current.parent_id is not None else None
        chain.reverse()
        return [serialize_breadcrumb(item) for item in chain]

    def search(self, db: Session, query: str) -> Dict[str, List[Dict[str, Any]]]:
        """Case-insensitive substring search; a blank query matches nothing."""
        needle = (query or "").strip().lower()
        if not needle:
            return {"folders": [], "files": []}

        folders = [
            item
            for item in self.folders.list_all(db)
            if needle in item.name.lower() or needle in item.path.lower()
        ]
        files = [
            item
            for item in self.files.list_all(db)
            if needle in item.name.lower() or needle in (item.extension or "").lower()
        ]
        return {
            "folders": [serialize_folder(item) for item in folders],
            "files": [serialize_file(item) for item in files],
        }

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, db: Session, data: Mapping[str, Any]) -> Folder:
        """Insert a folder after checking path, name and parent."""
        path = self._normalize_path(data.get("path"))
        name = self._normalize_name(data.get("name"))
        parent_id = data.get("parent_id")

        if parent_id is not None and self.folders.get(db, parent_id) is None:
            raise NotFoundError(PARENT_FOLDER_NOT_FOUND)
        if self.folders.get_by_path(db, path) is not None:
            raise ConflictError(FOLDER_PATH_EXISTS)

        payload = {
            "name": name,
            "path": path,
            "parent_id": parent_id,
            "is_root": parent_id is None,
        }
        try:
            folder = self.folders.create(db, payload)
        except IntegrityError as exc:
            raise ConflictError(FOLDER_PATH_EXISTS) from exc
        logger.info("Created folder %s (id=%s)", folder.path, folder.id)
        return folder

    def update(self, db: Session, folder_id: int, changes: Mapping[str, Any]) -> Folder:
        """Merge ``changes`` into the folder; ``is_root`` always follows ``parent_id``."""
        folder = self.get(db, folder_id)
        updates = {key: value for key, value in changes.items() if key in _UPDATABLE_FIELDS}

        if "name" in updates:
            updates["name"] = self._normalize_name(updates["name"])
        if "path" in updates:
            updates["path"] = self._normalize_path(updates["path"])
            if self.folders.get_by_path(db, updates["path"], exclude_id=folder.id) is not None:
                raise ConflictError(FOLDER_PATH_EXISTS)
        if "parent_id" in updates and updates["parent_id"] != folder.parent_id:
            self._ensure_valid_parent(db, folder, updates["parent_id"])

        for key, value in updates.items():
            setattr(folder, key, value)
        folder.is_root = folder.parent_id is None
        folder.updated_at = tz_now()

        try:
            return self.folders.save(db, folder)
        except IntegrityError as exc:
            raise ConflictError(FOLDER_PATH_EXISTS) from exc

    def delete(self, db: Session, folder_id: int) -> None:
        """Delete an empty folder; folders with children are refused."""
        folder = self.get(db, folder_id)
        if self.folders.has_children(db, folder.id) or self.files.has_files(db, folder.id):
            raise ConflictError(FOLDER_NOT_EMPTY)
        path = folder.path
        self.folders.hard_delete(db, folder)
        logger.info("Deleted folder %s (id=%s)", path, folder_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_valid_parent(self, db: Session, folder: Folder, parent_id: Optional[int]) -> None:
        """The new parent must exist and must not sit below ``folder``."""
        if parent_id is None:
            return
        if parent_id == folder.id:
            raise ValidationError("Folder validation failed: a folder cannot be its own parent")

        parents = {item.id: item.parent_id for item in self.folders.list_all(db)}
        if parent_id not in parents:
            raise NotFoundError(PARENT_FOLDER_NOT_FOUND)

        seen: set[int] = set()
        current: Optional[int] = parent_id
        while current is not None and current not in seen:
            if current == folder.id:
                raise ValidationError(
                    "Folder validation failed: a folder cannot be moved into its own descendant"
                )
            seen.add(current)
            current = parents.get(current)

    @staticmethod
    def _normalize_path(value: Optional[str]) -> str:
        path = (value or "").strip()
        if not path:
            raise ValidationError("Folder validation failed: path is required")
        return path

    @staticmethod
    def _normalize_name(value: Optional[str]) -> str:
        name = (value or "").strip()
        if not name:
            raise ValidationError("Folder validation failed: name is required")
        return name
