"""Row -> JSON-ready dict conversion shared by services and endpoints."""

from __future__ import annotations

from typing import Any, Dict

from app.packages.explorer.core.timezone import format_datetime
from app.packages.explorer.models import File, Folder


def serialize_folder(folder: Folder) -> Dict[str, Any]:
    return {
        "id": folder.id,
        "name": folder.name,
        "path": folder.path,
        "parentId": folder.parent_id,
        "isRoot": bool(folder.is_root),
        "createdAt": format_datetime(folder.created_at),
        "updatedAt": format_datetime(folder.updated_at),
    }


def serialize_file(file: File) -> Dict[str, Any]:
    return {
        "id": file.id,
        "name": file.name,
        "path": file.path,
        "folderId": file.folder_id,
        "size": file.size,
        "extension": file.extension,
        "createdAt": format_datetime(file.created_at),
        "updatedAt": format_datetime(file.updated_at),
    }


def serialize_breadcrumb(folder: Folder) -> Dict[str, Any]:
    return {"id": folder.id, "name": folder.name, "path": folder.path}
