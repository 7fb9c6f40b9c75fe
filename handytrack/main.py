"""HandyTrack Server - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlmodel import Session

from handytrack.config import settings
from handytrack.database import engine, init_db
from handytrack.services.auth_service import seed_admin

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and the default admin on startup."""
    init_db()
    if settings.seed_admin_on_startup:
        with Session(engine) as session:
            seed_admin(session)
    yield


app = FastAPI(
    title="HandyTrack",
    description="Inventory and order tracking for resold phones",
    version="0.1.0",
    lifespan=lifespan,
)

# --- Register API routers ---
from handytrack.api.auth import router as auth_router  # noqa: E402
from handytrack.api.devices import router as devices_router  # noqa: E402
from handytrack.api.company import router as company_router  # noqa: E402

API_PREFIX = "/api/v1"

app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(devices_router, prefix=API_PREFIX)
app.include_router(company_router, prefix=API_PREFIX)


@app.get("/")
def root():
    """Server info."""
    return {
        "name": settings.server_name,
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/api/v1/health")
def health():
    return {"status": "ok"}
