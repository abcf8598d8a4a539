from fastapi import FastAPI

from .auth import router as auth_router
from .communities import router as communities_router
from .feed import router as feed_router
from .notifications import router as notifications_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(communities_router)
    app.include_router(feed_router)
    app.include_router(notifications_router)


__all__ = ["register_routes"]
