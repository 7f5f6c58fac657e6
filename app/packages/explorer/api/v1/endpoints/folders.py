"""Folder routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.packages.explorer.api.v1.schemas.folders import (
    BreadcrumbResponse,
    DeletionResponse,
    FolderContentResponse,
    FolderCreateRequest,
    FolderListResponse,
    FolderResponse,
    FolderTreeResponse,
    FolderUpdateRequest,
    SearchResponse,
)
from app.packages.explorer.core.constants import HTTP_STATUS_CREATED
from app.packages.explorer.core.dependencies import get_db, get_folder_service
from app.packages.explorer.core.logger import logger
from app.packages.explorer.core.responses import create_response
from app.packages.explorer.services.folder_service import FolderService
from app.packages.explorer.services.serializers import serialize_folder

router = APIRouter(prefix="/folders", tags=["folders"])


@router.get("", response_model=FolderListResponse)
def list_folders(
    db: Session = Depends(get_db),
    service: FolderService = Depends(get_folder_service),
) -> FolderListResponse:
    """All folders ordered by name."""
    data = [serialize_folder(item) for item in service.list(db)]
    return create_response("Folders retrieved successfully", data)


@router.get("/tree", response_model=FolderTreeResponse)
def get_folder_tree(
    db: Session = Depends(get_db),
    service: FolderService = Depends(get_folder_service),
) -> FolderTreeResponse:
    """Nested folder tree, roots at the top level."""
    tree = service.tree(db)
    logger.debug("Folder tree built with %s root(s)", len(tree))
    return create_response("Folder tree retrieved successfully", tree)


@router.get("/search", response_model=SearchResponse)
def search_folders_and_files(
    q: str = Query("", description="Case-insensitive substring of a name, path or extension"),
    db: Session = Depends(get_db),
    service: FolderService = Depends(get_folder_service),
) -> SearchResponse:
    return create_response("Search completed successfully", service.search(db, q))


@router.get("/subfolders", response_model=FolderListResponse)
def list_root_folders(
    db: Session = Depends(get_db),
    service: FolderService = Depends(get_folder_service),
) -> FolderListResponse:
    """Direct children of "no parent", i.e. the root folders."""
    data = [serialize_folder(item) for item in service.subfolders(db, None)]
    return create_response("Subfolders retrieved successfully", data)


@router.get("/{folder_id}", response_model=FolderResponse)
def get_folder(
    folder_id: int,
    db: Session = Depends(get_db),
    service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    return create_response("Folder retrieved successfully", serialize_folder(service.get(db, folder_id)))


@router.get("/{folder_id}/content", response_model=FolderContentResponse)
def get_folder_content(
    folder_id: int,
    db: Session = Depends(get_db),
    service: FolderService = Depends(get_folder_service),
) -> FolderContentResponse:
    """The folder with its direct subfolders and files."""
    return create_response("Folder content retrieved successfully", service.content(db, folder_id))


@router.get("/{folder_id}/subfolders", response_model=FolderListResponse)
def list_subfolders(
    folder_id: int,
    db: Session = Depends(get_db),
    service: FolderService = Depends(get_folder_service),
) -> FolderListResponse:
    data = [serialize_folder(item) for item in service.subfolders(db, folder_id)]
    return create_response("Subfolders retrieved successfully", data)


@router.get("/{folder_id}/breadcrumbs", response_model=BreadcrumbResponse)
def get_breadcrumbs(
    folder_id: int,
    db: Session = Depends(get_db),
    service: FolderService = Depends(get_folder_service),
) -> BreadcrumbResponse:
    """Ancestor chain from the root down to the folder."""
    return create_response("Breadcrumbs retrieved successfully", service.breadcrumbs(db, folder_id))


@router.post("", response_model=FolderResponse, status_code=HTTP_STATUS_CREATED)
def create_folder(
    payload: FolderCreateRequest,
    db: Session = Depends(get_db),
    service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    folder = service.create(db, payload.model_dump(exclude_unset=True))
    return create_response("Folder created successfully", serialize_folder(folder))


@router.put("/{folder_id}", response_model=FolderResponse)
def update_folder(
    folder_id: int,
    payload: FolderUpdateRequest,
    db: Session = Depends(get_db),
    service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    """Partial update: only the keys present in the body are applied."""
    folder = service.update(db, folder_id, payload.model_dump(exclude_unset=True))
    return create_response("Folder updated successfully", serialize_folder(folder))


@router.delete("/{folder_id}", response_model=DeletionResponse)
def delete_folder(
    folder_id: int,
    db: Session = Depends(get_db),
    service: FolderService = Depends(get_folder_service),
) -> DeletionResponse:
    """Delete an empty folder."""
    service.delete(db, folder_id)
    return create_response("Folder deleted successfully")
