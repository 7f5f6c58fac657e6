"""Folder request and response models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.packages.explorer.api.v1.schemas.common import ResponseEnvelope
from app.packages.explorer.api.v1.schemas.files import FileItem


class FolderCreateRequest(BaseModel):
    """Body of ``POST /folders``. ``isRoot`` is accepted but derived from ``parentId``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    path: str = Field(..., max_length=1024)
    parent_id: Optional[int] = Field(default=None, alias="parentId")
    is_root: Optional[bool] = Field(default=None, alias="isRoot")


class FolderUpdateRequest(BaseModel):
    """Partial update; only the fields present in the body are applied."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    path: Optional[str] = Field(default=None, max_length=1024)
    parent_id: Optional[int] = Field(default=None, alias="parentId")
    is_root: Optional[bool] = Field(default=None, alias="isRoot")


class FolderItem(BaseModel):
    id: int
    name: str
    path: str
    parentId: Optional[int]
    isRoot: bool
    createdAt: Optional[str]
    updatedAt: Optional[str]


class FolderTreeNode(FolderItem):
    subfolders: List["FolderTreeNode"]


FolderTreeNode.model_rebuild()


class FolderContent(FolderItem):
    subfolders: List[FolderItem]
    files: List[FileItem]


class Breadcrumb(BaseModel):
    id: int
    name: str
    path: str


class SearchResult(BaseModel):
    folders: List[FolderItem]
    files: List[FileItem]


FolderResponse = ResponseEnvelope[FolderItem]
FolderListResponse = ResponseEnvelope[List[FolderItem]]
FolderTreeResponse = ResponseEnvelope[List[FolderTreeNode]]
FolderContentResponse = ResponseEnvelope[FolderContent]
BreadcrumbResponse = ResponseEnvelope[List[Breadcrumb]]
SearchResponse = ResponseEnvelope[SearchResult]
DeletionResponse = ResponseEnvelope[None]
