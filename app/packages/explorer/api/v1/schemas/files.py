"""File request and response models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.packages.explorer.api.v1.schemas.common import ResponseEnvelope


class FileCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    path: str = Field(..., max_length=1024)
    folder_id: int = Field(..., alias="folderId")
    size: int = Field(default=0, ge=0)
    extension: Optional[str] = Field(default=None, max_length=50)


class FileUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    path: Optional[str] = Field(default=None, max_length=1024)
    folder_id: Optional[int] = Field(default=None, alias="folderId")
    size: Optional[int] = Field(default=None, ge=0)
    extension: Optional[str] = Field(default=None, max_length=50)


class FileItem(BaseModel):
    id: int
    name: str
    path: str
    folderId: int
    size: int
    extension: Optional[str]
    createdAt: Optional[str]
    updatedAt: Optional[str]


FileResponse = ResponseEnvelope[FileItem]
FileListResponse = ResponseEnvelope[List[FileItem]]
