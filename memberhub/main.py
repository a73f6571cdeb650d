import logging

from fastapi import FastAPI

from memberhub.config import settings
from memberhub.errors import register_error_handlers
from memberhub.routes.auth import router as auth_router
from memberhub.routes.groups import router as groups_router
from memberhub.routes.health import router as health_router
from memberhub.routes.memberships import router as memberships_router
from memberhub.routes.users import router as users_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)

def create_app() -> FastAPI:
    app = FastAPI(title="memberhub", version="0.1.0")
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(groups_router)
    app.include_router(memberships_router)
    return app

app = create_app()
