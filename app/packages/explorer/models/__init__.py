"""ORM entities; importing this package registers both tables on ``Base.metadata``."""

from app.packages.explorer.models.file import File
from app.packages.explorer.models.folder import Folder

__all__ = ["File", "Folder"]
