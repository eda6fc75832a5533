from __future__ import annotations

from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .routes.analyze import router as analyze_router
from .routes.entries import router as entries_router
from .routes.profile import router as profile_router
from .security import get_current_user


app: FastAPI = FastAPI(
    title="NutriVision",
    version="2.0.0",
    description="Estimates nutrition from meal photos and keeps a daily food log",
)


@app.api_route("/", methods=["GET", "HEAD"], include_in_schema=False)
@app.api_route("/healthz", methods=["GET", "HEAD"], include_in_schema=False)
async def healthz() -> dict[str, str]:
    """Lightweight endpoint used for health checks."""
    return {"status": "ok"}


@app.get("/v2/api-schema")
async def get_api_schema(request: Request, _: Any = Depends(get_current_user)) -> JSONResponse:
    """Return the OpenAPI schema for this API version."""
    openapi_schema: Dict[str, Any] = request.app.openapi()
    return JSONResponse(openapi_schema)


for router in (
    analyze_router,
    entries_router,
    profile_router,
):
    app.include_router(router, prefix="/v2", dependencies=[Depends(get_current_user)])
