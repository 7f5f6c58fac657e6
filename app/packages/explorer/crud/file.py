"""File CRUD."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.packages.explorer.crud.base import CRUDBase
from app.packages.explorer.models import File


class CRUDFile(CRUDBase[File]):
    def list_all(self, db: Session) -> list[File]:
        return self.query(db).order_by(File.name.asc(), File.id.asc()).all()

    def list_by_folder(self, db: Session, folder_id: int) -> list[File]:
        return (
            self.query(db)
            .filter(File.folder_id == folder_id)
            .order_by(File.name.asc(), File.id.asc())
            .all()
        )

    def has_files(self, db: Session, folder_id: int) -> bool:
        return self.query(db).filter(File.folder_id == folder_id).first() is not None
