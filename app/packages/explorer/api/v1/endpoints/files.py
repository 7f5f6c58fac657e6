"""File routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.packages.explorer.api.v1.schemas.files import (
    FileCreateRequest,
    FileListResponse,
    FileResponse,
    FileUpdateRequest,
)
from app.packages.explorer.api.v1.schemas.folders import DeletionResponse
from app.packages.explorer.core.constants import HTTP_STATUS_CREATED
from app.packages.explorer.core.dependencies import get_db, get_file_service
from app.packages.explorer.core.responses import create_response
from app.packages.explorer.services.file_service import FileService
from app.packages.explorer.services.serializers import serialize_file

router = APIRouter(prefix="/files", tags=["files"])


@router.get("", response_model=FileListResponse)
def list_files(
    db: Session = Depends(get_db),
    service: FileService = Depends(get_file_service),
) -> FileListResponse:
    data = [serialize_file(item) for item in service.list(db)]
    return create_response("Files retrieved successfully", data)


@router.get("/folder/{folder_id}", response_model=FileListResponse)
def list_files_in_folder(
    folder_id: int,
    db: Session = Depends(get_db),
    service: FileService = Depends(get_file_service),
) -> FileListResponse:
    """Files stored directly in ``folder_id``; an unknown folder yields an empty list."""
    data = [serialize_file(item) for item in service.list_by_folder(db, folder_id)]
    return create_response("Files retrieved successfully", data)


@router.get("/{file_id}", response_model=FileResponse)
def get_file(
    file_id: int,
    db: Session = Depends(get_db),
    service: FileService = Depends(get_file_service),
) -> FileResponse:
    return create_response("File retrieved successfully", serialize_file(service.get(db, file_id)))


@router.post("", response_model=FileResponse, status_code=HTTP_STATUS_CREATED)
def create_file(
    payload: FileCreateRequest,
    db: Session = Depends(get_db),
    service: FileService = Depends(get_file_service),
) -> FileResponse:
    file = service.create(db, payload.model_dump(exclude_unset=True))
    return create_response("File created successfully", serialize_file(file))


@router.put("/{file_id}", response_model=FileResponse)
def update_file(
    file_id: int,
    payload: FileUpdateRequest,
    db: Session = Depends(get_db),
    service: FileService = Depends(get_file_service),
) -> FileResponse:
    file = service.update(db, file_id, payload.model_dump(exclude_unset=True))
    return create_response("File updated successfully", serialize_file(file))


@router.delete("/{file_id}", response_model=DeletionResponse)
def delete_file(
    file_id: int,
    db: Session = Depends(get_db),
    service: FileService = Depends(get_file_service),
) -> DeletionResponse:
    service.delete(db, file_id)
    return create_response("File deleted successfully")
