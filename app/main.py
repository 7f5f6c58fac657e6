"""ASGI entry point: ``uvicorn app.main:app``."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.middleware.request_id import RequestIdMiddleware
from app.packages import get_active_package

package = get_active_package()
package.setup_logging()
settings = package.get_settings()
logger = package.logger

app = FastAPI(title=settings.project_name, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(RequestIdMiddleware)


@app.on_event("startup")
async def startup_event() -> None:
    """Create the schema (and optional sample data) before serving."""
    package.init_db()
    logger.info("Explorer API listening on port %s, routes under %s", settings.app_port, settings.api_v1_str)


@app.get("/health")
async def health_check() -> dict:
    """Liveness check."""
    return package.create_response("Windows Explorer Backend is running", {"status": "healthy"})


package.install(app, settings.api_v1_str)
