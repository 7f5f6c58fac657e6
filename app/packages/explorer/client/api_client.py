"""Typed async client for the explorer REST API.

Every call resolves to an :class:`ApiResponse`; HTTP errors, transport
failures and malformed bodies are folded into ``success=False`` with a
readable ``error`` so callers only ever branch on ``success``.

Usage:
    async with create_http_client() as http_client:
        api = ExplorerApiClient(http_client)
        response = await api.get_folder_tree()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from app.packages.explorer.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

NO_RESPONSE_ERROR = "No response from server. Please check your connection."

_FOLDER_FIELDS = {"name": "name", "path": "path", "parent_id": "parentId"}
_FILE_FIELDS = {
    "name": "name",
    "path": "path",
    "folder_id": "folderId",
    "size": "size",
    "extension": "extension",
}


@dataclass
class ApiResponse:
    success: bool
    data: Any = None
    message: Optional[str] = None
    error: Optional[str] = None


async def _log_request(request: httpx.Request) -> None:
    logger.debug("API Request: %s %s", request.method, request.url)


async def _log_response(response: httpx.Response) -> None:
    logger.debug("API Response: %s %s", response.status_code, response.request.url)


def create_http_client(settings: Optional[Settings] = None, **kwargs: Any) -> httpx.AsyncClient:
    """Build an ``AsyncClient`` pointed at the configured API base URL."""
    settings = settings or get_settings()
    options: Dict[str, Any] = {
        "base_url": settings.client_base_url,
        "timeout": settings.client_timeout,
        "headers": {"Content-Type": "application/json"},
        "event_hooks": {"request": [_log_request], "response": [_log_response]},
    }
    options.update(kwargs)
    return httpx.AsyncClient(**options)


def _to_wire(changes: Mapping[str, Any], fields: Mapping[str, str]) -> Dict[str, Any]:
    unknown = set(changes) - set(fields)
    if unknown:
        raise TypeError(f"Unsupported field(s): {', '.join(sorted(unknown))}")
    return {fields[key]: value for key, value in changes.items()}


class ExplorerApiClient:
    """Thin wrapper over ``/folders`` and ``/files``; paths are relative to the client's base URL."""

    def __init__(self, http_client: httpx.AsyncClient):
        self.http_client = http_client

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    async def get_all_folders(self) -> ApiResponse:
        return await self._request("GET", "/folders")

    async def get_folder_tree(self) -> ApiResponse:
        return await self._request("GET", "/folders/tree")

    async def get_folder(self, folder_id: int) -> ApiResponse:
        return await self._request("GET", f"/folders/{folder_id}")

    async def get_folder_content(self, folder_id: int) -> ApiResponse:
        return await self._request("GET", f"/folders/{folder_id}/content")

    async def get_subfolders(self, folder_id: Optional[int]) -> ApiResponse:
        """Children of ``folder_id``; ``None`` lists the root folders."""
        if folder_id is None:
            return await self._request("GET", "/folders/subfolders")
        return await self._request("GET", f"/folders/{folder_id}/subfolders")

    async def get_breadcrumbs(self, folder_id: int) -> ApiResponse:
        return await self._request("GET", f"/folders/{folder_id}/breadcrumbs")

    async def search(self, query: str) -> ApiResponse:
        return await self._request("GET", "/folders/search", params={"q": query})

    async def create_folder(self, *, name: str, path: str, parent_id: Optional[int] = None) -> ApiResponse:
        body = {"name": name, "path": path, "parentId": parent_id, "isRoot": parent_id is None}
        return await self._request("POST", "/folders", json=body)

    async def update_folder(self, folder_id: int, **changes: Any) -> ApiResponse:
        return await self._request("PUT", f"/folders/{folder_id}", json=_to_wire(changes, _FOLDER_FIELDS))

    async def delete_folder(self, folder_id: int) -> ApiResponse:
        return await self._request("DELETE", f"/folders/{folder_id}")

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    async def get_all_files(self) -> ApiResponse:
        return await self._request("GET", "/files")

    async def get_file(self, file_id: int) -> ApiResponse:
        return await self._request("GET", f"/files/{file_id}")

    async def get_files_by_folder(self, folder_id: int) -> ApiResponse:
        return await self._request("GET", f"/files/folder/{folder_id}")

    async def create_file(
        self,
        *,
        name: str,
        path: str,
        folder_id: int,
        size: int = 0,
        extension: Optional[str] = None,
    ) -> ApiResponse:
        body = {"name": name, "path": path, "folderId": folder_id, "size": size, "extension": extension}
        return await self._request("POST", "/files", json=body)

    async def update_file(self, file_id: int, **changes: Any) -> ApiResponse:
        return await self._request("PUT", f"/files/{file_id}", json=_to_wire(changes, _FILE_FIELDS))

    async def delete_file(self, file_id: int) -> ApiResponse:
        return await self._request("DELETE", f"/files/{file_id}")

    # ------------------------------------------------------------------

    async def _request(self, method: str, url: str, **kwargs: Any) -> ApiResponse:
        try:
            response = await self.http_client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("API Request Error: %s %s: %s", method, url, exc)
            return ApiResponse(success=False, error=NO_RESPONSE_ERROR)

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            error = body.get("error") if isinstance(body, dict) else None
            logger.info("API Response Error: %s %s -> %s", method, url, response.status_code)
            return ApiResponse(
                success=False,
                error=error or f"HTTP {response.status_code}: {response.reason_phrase}",
            )

        if not isinstance(body, dict):
            return ApiResponse(success=False, error="Malformed response from server")

        return ApiResponse(
            success=bool(body.get("success")),
            data=body.get("data"),
            message=body.get("message"),
            error=body.get("error"),
        )
