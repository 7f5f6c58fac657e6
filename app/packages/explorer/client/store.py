"""Client-side navigation cache for the folder tree and per-folder content.

The store mirrors the last fetched tree and lazily caches folder content
keyed by folder id. Every mutation goes through :meth:`ExplorerStore.invalidate`,
which evicts the touched folders and their parents, drops the search
snapshot and refetches the whole tree.

Actions never raise: failures land in ``error`` and the action returns
``None``/``False``. Actions are not serialized against each other, so two
overlapping mutations leave the cache reflecting whichever refetch finished
last; ``loading`` stays true until every in-flight action has finished.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Set

from app.packages.explorer.client.api_client import ApiResponse, ExplorerApiClient

logger = logging.getLogger(__name__)

Node = Dict[str, Any]


class ExplorerStore:
    def __init__(self, api: ExplorerApiClient) -> None:
        self.api = api
        self.tree: List[Node] = []
        self.content_by_folder_id: Dict[int, Node] = {}
        self.expanded_folder_ids: Set[int] = set()
        self.search_results: Optional[Dict[str, List[Node]]] = None
        self.error: Optional[str] = None
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    # ------------------------------------------------------------------
    # Getters over the cached state
    # ------------------------------------------------------------------

    def get_folder_by_id(self, folder_id: int) -> Optional[Node]:
        stack = list(reversed(self.tree))
        while stack:
            node = stack.pop()
            if node["id"] == folder_id:
                return node
            stack.extend(reversed(node.get("subfolders") or []))
        return None

    def get_subfolders(self, folder_id: int) -> List[Node]:
        content = self.content_by_folder_id.get(folder_id)
        return content["subfolders"] if content else []

    def get_files(self, folder_id: int) -> List[Node]:
        content = self.content_by_folder_id.get(folder_id)
        return content["files"] if content else []

    def get_breadcrumbs(self, folder_id: int) -> List[Dict[str, Any]]:
        """Root-to-folder chain from the cached tree; empty if the folder is unknown."""
        stack: List[tuple[Node, tuple[Node, ...]]] = [(node, ()) for node in reversed(self.tree)]
        while stack:
            node, ancestors = stack.pop()
            chain = ancestors + (node,)
            if node["id"] == folder_id:
                return [{"id": item["id"], "name": item["name"], "path": item["path"]} for item in chain]
            for child in reversed(node.get("subfolders") or []):
                stack.append((child, chain))
        return []

    def filter_tree(self, query: str) -> List[Node]:
        """Local name filter over the cached tree, flattened in tree order.

        A blank query returns the tree itself. Unlike :meth:`search` this never
        hits the server and ignores paths and files.
        """
        needle = (query or "").strip().lower()
        if not needle:
            return self.tree

        matches: List[Node] = []
        stack = list(reversed(self.tree))
        while stack:
            node = stack.pop()
            if needle in node["name"].lower():
                matches.append(node)
            stack.extend(reversed(node.get("subfolders") or []))
        return matches

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def load_tree(self) -> bool:
        """Unconditionally refetch and replace the tree."""
        response = await self._run(self.api.get_folder_tree, "Failed to load folder tree")
        if response is None:
            return False
        self.tree = response.data or []
        return True

    async def load_content(self, folder_id: int) -> Optional[Node]:
        """Fetch a folder's content once; later calls hit the cache until it is evicted."""
        cached = self.content_by_folder_id.get(folder_id)
        if cached is not None:
            return cached

        response = await self._run(
            lambda: self.api.get_folder_content(folder_id), "Failed to load folder content"
        )
        if response is None:
            return None
        self.content_by_folder_id[folder_id] = response.data
        return response.data

    async def search(self, query: str) -> Optional[Dict[str, List[Node]]]:
        """Server-side search; replaces the search snapshot, leaves the tree alone."""
        response = await self._run(lambda: self.api.search(query), "Search failed")
        if response is None:
            return None
        self.search_results = response.data or {"folders": [], "files": []}
        return self.search_results

    def toggle_folder(self, folder_id: int) -> None:
        if folder_id in self.expanded_folder_ids:
            self.expanded_folder_ids.discard(folder_id)
        else:
            self.expanded_folder_ids.add(folder_id)

    def clear_error(self) -> None:
        self.error = None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create_folder(self, *, name: str, path: str, parent_id: Optional[int] = None) -> Optional[Node]:
        response = await self._run(
            lambda: self.api.create_folder(name=name, path=path, parent_id=parent_id),
            "Failed to create folder",
        )
        if response is None:
            return None
        await self.invalidate([response.data["id"], parent_id])
        return response.data

    async def update_folder(self, folder_id: int, **changes: Any) -> Optional[Node]:
        response = await self._run(
            lambda: self.api.update_folder(folder_id, **changes), "Failed to update folder"
        )
        if response is None:
            return None
        await self.invalidate([folder_id, response.data.get("parentId")])
        return response.data

    async def delete_folder(self, folder_id: int) -> bool:
        response = await self._run(lambda: self.api.delete_folder(folder_id), "Failed to delete folder")
        if response is None:
            return False
        self.expanded_folder_ids.discard(folder_id)
        await self.invalidate([folder_id])
        return True

    async def create_file(
        self,
        *,
        name: str,
        path: str,
        folder_id: int,
        size: int = 0,
        extension: Optional[str] = None,
    ) -> Optional[Node]:
        response = await self._run(
            lambda: self.api.create_file(
                name=name, path=path, folder_id=folder_id, size=size, extension=extension
            ),
            "Failed to create file",
        )
        if response is None:
            return None
        await self.invalidate([folder_id])
        return response.data

    async def update_file(self, file_id: int, **changes: Any) -> Optional[Node]:
        """Update a file; on moves both the old and the new folder are evicted."""
        previous_folder_id = self._folder_of_file(file_id)
        response = await self._run(
            lambda: self.api.update_file(file_id, **changes), "Failed to update file"
        )
        if response is None:
            return None
        await self.invalidate([response.data.get("folderId"), previous_folder_id])
        return response.data

    async def delete_file(self, file_id: int) -> bool:
        folder_id = self._folder_of_file(file_id)
        response = await self._run(lambda: self.api.delete_file(file_id), "Failed to delete file")
        if response is None:
            return False
        await self.invalidate([folder_id])
        return True

    async def invalidate(self, changed_folder_ids: Iterable[Optional[int]]) -> None:
        """Evict every changed folder and its parent, drop search results, reload the tree.

        Parents are resolved from the cache as it was before the mutation,
        so this must run before the tree is refetched.
        """
        stale: Set[int] = set()
        for folder_id in changed_folder_ids:
            if folder_id is None:
                continue
            stale.add(folder_id)
            parent_id = self._parent_of(folder_id)
            if parent_id is not None:
                stale.add(parent_id)

        for folder_id in stale:
            self.content_by_folder_id.pop(folder_id, None)
        self.search_results = None
        logger.debug("Evicted content for folders %s", sorted(stale))
        await self.load_tree()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _parent_of(self, folder_id: int) -> Optional[int]:
        node = self.get_folder_by_id(folder_id) or self.content_by_folder_id.get(folder_id)
        return node.get("parentId") if node else None

    def _folder_of_file(self, file_id: int) -> Optional[int]:
        for folder_id, content in self.content_by_folder_id.items():
            if any(item["id"] == file_id for item in content.get("files") or []):
                return folder_id
        return None

    async def _run(
        self, call: Callable[[], Awaitable[ApiResponse]], fallback_error: str
    ) -> Optional[ApiResponse]:
        """Run one API call with loading/error bookkeeping; ``None`` means failure."""
        self._in_flight += 1
        self.error = None
        try:
            response = await call()
        except Exception as exc:  # actions must never raise to the caller
            logger.exception("Explorer store action failed")
            self.error = str(exc) or fallback_error
            return None
        finally:
            self._in_flight -= 1

        if not response.success:
            self.error = response.error or fallback_error
            return None
        return response
