"""CRUD base class: generic data access shared by every entity."""

from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Query, Session

from app.packages.explorer.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """Query, create, save and delete helpers bound to one model.

    Instances hold no session and no state besides the model, so they are
    safe to share; the session is passed into every call.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return self.query(db).filter(self.model.id == id).first()

    def get_by_path(
        self, db: Session, path: str, *, exclude_id: Optional[int] = None
    ) -> Optional[ModelType]:
        """Narrow existence lookup on the unique ``path`` column."""
        query = self.query(db).filter(self.model.path == path)
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        return query.first()

    def create(self, db: Session, obj_in: Dict[str, Any]) -> ModelType:
        db_obj = self.model(**obj_in)
        return self.save(db, db_obj)

    def save(self, db: Session, db_obj: ModelType) -> ModelType:
        """Add, commit and refresh ``db_obj``."""
        db.add(db_obj)
        self._commit(db)
        db.refresh(db_obj)
        return db_obj

    def hard_delete(self, db: Session, db_obj: ModelType) -> None:
        db.delete(db_obj)
        self._commit(db)

    def query(self, db: Session) -> Query:
        return db.query(self.model)

    @staticmethod
    def _commit(db: Session) -> None:
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
