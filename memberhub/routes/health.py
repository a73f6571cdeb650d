import logging
from collections.abc import Callable

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from memberhub.config import settings
from memberhub.db import db_ping
from memberhub.redis_client import redis_ping

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

@router.get("/health")
def health() -> dict:
    return {"status": "ok"}

def _readiness_checks() -> dict[str, Callable[[], bool]]:
    checks: dict[str, Callable[[], bool]] = {"db": db_ping}
    # redis only backs rate limiting
    if settings.rate_limit_enabled:
        checks["redis"] = redis_ping
    return checks

@router.get("/ready")
def ready():
    checks = {name: bool(fn()) for name, fn in _readiness_checks().items()}
    ok = all(checks.values())
    if not ok:
        logger.warning("not ready: %s", ", ".join(name for name, up in checks.items() if not up))

    body = {"status": "ok" if ok else "unready", "env": settings.app_env, "checks": checks}
    return JSONResponse(status_code=200 if ok else 503, content=body)
