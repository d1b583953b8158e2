"""
Health check endpoints.

- GET /health — liveness check, plus the id strategies in use
"""

from fastapi import APIRouter, Request

from src.api.schemas import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


def _strategy_name(strategy) -> str:
    return type(strategy).__name__ if strategy is not None else ""


@router.get("", response_model=HealthResponse)
async def health(request: Request):
    """Liveness check. Returns 200 if process is alive."""
    state = request.app.state.app_state
    options = state.injector_options
    return HealthResponse(
        status="ok",
        uptime_seconds=state.uptime_seconds,
        id_header=state.settings.request_id.header,
        generator=_strategy_name(options and options.generator),
        save_handler=_strategy_name(options and options.save_handler),
        post_processor=_strategy_name(options and options.post_processor),
    )
