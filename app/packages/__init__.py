"""Business packages the application can serve; the explorer is the default."""

from __future__ import annotations

import os
from typing import Dict

from . import explorer
from .types import AppPackage

PACKAGE_REGISTRY: Dict[str, AppPackage] = {explorer.package.name: explorer.package}


def get_active_package() -> AppPackage:
    """Resolve ``APP_ACTIVE_PACKAGE``; an unknown name fails at startup."""
    name = os.getenv("APP_ACTIVE_PACKAGE", explorer.package.name)
    if name not in PACKAGE_REGISTRY:
        raise RuntimeError(f"Unknown business package {name!r}, available: {', '.join(PACKAGE_REGISTRY)}")
    return PACKAGE_REGISTRY[name]
