"""Folder model: adjacency list keyed by ``parent_id``.

Storage rules:
- path: globally unique, acts as the natural key (e.g. "/Documents/Work");
- parent_id: NULL for root folders, and ``is_root`` mirrors that;
- deleting a parent at the storage level detaches children (SET NULL).
"""

from typing import List, Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.explorer.models.base import Base, TimestampMixin


class Folder(TimestampMixin, Base):
    __tablename__ = "folders"
    __table_args__ = (
        CheckConstraint("parent_id IS NULL OR parent_id <> id", name="no_self_parent"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    path: Mapped[str] = mapped_column(String(1024), unique=True, nullable=False)
    parent_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("folders.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_root: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    parent: Mapped[Optional["Folder"]] = relationship(
        "Folder", remote_side=lambda: Folder.id, back_populates="children"
    )
    children: Mapped[List["Folder"]] = relationship(
        "Folder", back_populates="parent", passive_deletes=True
    )
    files: Mapped[List["File"]] = relationship(
        "File", back_populates="folder", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"Folder(id={self.id!r}, path={self.path!r})"
