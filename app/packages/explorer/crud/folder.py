"""Folder CRUD."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.packages.explorer.crud.base import CRUDBase
from app.packages.explorer.models import Folder


class CRUDFolder(CRUDBase[Folder]):
    """Folder queries; every list is ordered by name."""

    def list_all(self, db: Session) -> list[Folder]:
        return self.query(db).order_by(Folder.name.asc(), Folder.id.asc()).all()

    def list_by_parent(self, db: Session, parent_id: Optional[int]) -> list[Folder]:
        """Direct children of ``parent_id``; ``None`` selects root folders."""
        query = self.query(db)
        if parent_id is None:
            query = query.filter(Folder.parent_id.is_(None))
        else:
            query = query.filter(Folder.parent_id == parent_id)
        return query.order_by(Folder.name.asc(), Folder.id.asc()).all()

    def has_children(self, db: Session, folder_id: int) -> bool:
        return self.query(db).filter(Folder.parent_id == folder_id).first() is not None
