"""Root API routers."""

from fastapi import APIRouter, Request

health_router = APIRouter(tags=["system"])


@health_router.get("/health", summary="Service health probe")
async def healthcheck(request: Request) -> dict[str, str | bool]:
    """Report liveness and whether a weather request is outstanding."""

    coordinator = request.app.state.coordinator
    return {"status": "ok", "fetch_in_flight": coordinator.in_flight}
