"""File explorer package: folders, files and the navigation client."""

from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError

from app.packages.types import AppPackage

from .api.v1 import api_router
from .core.config import get_settings
from .core.exceptions import (
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from .core.logger import logger, setup_logging
from .core.responses import create_response
from .db.init_db import init_db

package = AppPackage(
    name="explorer",
    api_router=api_router,
    get_settings=get_settings,
    setup_logging=setup_logging,
    logger=logger,
    init_db=init_db,
    create_response=create_response,
    exception_handlers={
        HTTPException: http_exception_handler,
        RequestValidationError: validation_exception_handler,
        Exception: generic_exception_handler,
    },
)
