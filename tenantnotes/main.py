"""FastAPI application entrypoint."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tenantnotes.api.routes import api_router
from tenantnotes.core.config import get_settings
from tenantnotes.core.database import init_db
from tenantnotes.core.exceptions import register_exception_handlers
from tenantnotes.core.logging_config import setup_logging

_settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup: configure logging, ensure tables exist
    setup_logging(_settings.log_level)
    await init_db()
    yield


app = FastAPI(
    title="TenantNotes",
    version="0.1.0",
    description="Multi-tenant notes API with free/pro subscription plans",
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.origin_list,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept", "Origin"],
    max_age=86400,
)

# ── Errors ───────────────────────────────────────────────────
register_exception_handlers(app)

# ── API routes ───────────────────────────────────────────────
app.include_router(api_router)
