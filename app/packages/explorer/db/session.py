"""Engine and session factory bound to ``Settings.sql_database_url``.

Callers should reach these through the module (``db_session.SessionLocal``)
so the test suite can rebind them to its own database.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.packages.explorer.core.config import get_settings

_settings = get_settings()

engine = create_engine(
    _settings.sql_database_url,
    echo=_settings.database_echo,
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=True)
