"""FastAPI application wiring for the Dominion tick engine."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI

from dominion.api import routes
from dominion.api.runtime import ApiState, build_state


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Instantiate the FastAPI application with routing and lifecycle hooks."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state = state_factory()
        app.state.api_state = state
        await state.startup()
        try:
            yield
        finally:
            await state.shutdown()

    app = FastAPI(title="Dominion Tick API", version="0.1.0", lifespan=lifespan)
    app.include_router(routes.router)
    return app


app = create_app()
