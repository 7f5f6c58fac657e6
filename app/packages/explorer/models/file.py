"""File model: a leaf that belongs to exactly one folder."""

from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.explorer.models.base import Base, TimestampMixin


class File(TimestampMixin, Base):
    __tablename__ = "files"
    __table_args__ = (
        CheckConstraint("size >= 0", name="size_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    path: Mapped[str] = mapped_column(String(1024), unique=True, nullable=False)
    folder_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("folders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    size: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    extension: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    folder: Mapped["Folder"] = relationship("Folder", back_populates="files")

    def __repr__(self) -> str:
        return f"File(id={self.id!r}, path={self.path!r})"
