"""FastAPI application."""

from fastapi import FastAPI

from backend.docreview.api.routes.docs import router as docs_router
from backend.docreview.api.routes.health import router as health_router
from backend.docreview.api.routes.metrics import router as metrics_router
from backend.docreview.api.routes.tools import router as tools_router
from backend.docreview.config import get_settings
from backend.docreview.utils.logging import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(title="Document Review API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(docs_router, tags=["docs"])
app.include_router(tools_router, tags=["tools"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Document Review API", "version": "0.1.0"}
