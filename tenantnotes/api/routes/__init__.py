"""API router aggregation."""

from fastapi import APIRouter, Request, Response

from tenantnotes.api.routes.auth import router as auth_router
from tenantnotes.api.routes.notes import router as notes_router
from tenantnotes.api.routes.seed import router as seed_router
from tenantnotes.api.routes.tenants import router as tenants_router
from tenantnotes.api.routes.users import router as users_router
from tenantnotes.core.config import get_settings

settings = get_settings()

# Preflight answers for clients that send OPTIONS without CORS request headers
CORS_HEADERS = {
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Requested-With, Accept, Origin",
    "Access-Control-Max-Age": "86400",
}

api_router = APIRouter(prefix=settings.api_prefix)
api_router.include_router(auth_router)
api_router.include_router(notes_router)
api_router.include_router(tenants_router)
api_router.include_router(users_router)
api_router.include_router(seed_router)


@api_router.get("/health", tags=["system"])
async def health_check() -> dict:
    return {"status": "ok"}


@api_router.options("/{path:path}", include_in_schema=False)
async def preflight(path: str, request: Request) -> Response:
    headers = dict(CORS_HEADERS)
    origin = allowed_origin(request.headers.get("origin"))
    if origin is not None:
        headers["Access-Control-Allow-Origin"] = origin
        if origin != "*":
            headers["Vary"] = "Origin"
    return Response(status_code=200, headers=headers)


def allowed_origin(request_origin: str | None) -> str | None:
    """Single value for Access-Control-Allow-Origin, or None when the origin is not allowed.

    The header carries one origin only, so a configured list is matched against
    the request's Origin instead of being echoed verbatim.
    """
    origins = settings.origin_list
    if "*" in origins:
        return "*"
    if request_origin in origins:
        return request_origin
    return None
