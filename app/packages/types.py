"""Contract between a business package and ``app.main``."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger
from typing import Any, Callable, Dict, Type

from fastapi import APIRouter, FastAPI


@dataclass(frozen=True)
class AppPackage:
    """Router, settings, logging and exception handlers of one business package."""

    name: str
    api_router: APIRouter
    get_settings: Callable[[], Any]
    setup_logging: Callable[[], None]
    logger: Logger
    init_db: Callable[[], None]
    create_response: Callable[..., dict]
    # exception class -> async handler, registered in this order
    exception_handlers: Dict[Type[Exception], Callable[..., Any]] = field(default_factory=dict)

    def install(self, app: FastAPI, prefix: str) -> None:
        """Register the handlers and mount the router under ``prefix``."""
        for exc_class, handler in self.exception_handlers.items():
            app.add_exception_handler(exc_class, handler)
        app.include_router(self.api_router, prefix=prefix)
