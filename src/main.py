"""
Server entrypoint

Builds the FastAPI app around a single session coordinator and runs it with uvicorn.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
import uvicorn
from fastapi import FastAPI

from src.api.routes import router
from src.core.config import DispatchMode, Settings
from src.core.log_config import configure_logging
from src.session.coordinator import SessionCoordinator
from src.session.strategy import AsynchronousStrategy, DispatchStrategy, SynchronousStrategy

logger = structlog.get_logger(__name__)


def build_strategy(mode: DispatchMode) -> DispatchStrategy:
    if mode == DispatchMode.SYNC:
        return SynchronousStrategy()
    return AsynchronousStrategy()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    coordinator = SessionCoordinator(build_strategy(settings.dispatch_mode))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        coordinator.start()
        logger.info("session coordinator started", dispatch_mode=str(settings.dispatch_mode))
        try:
            yield
        finally:
            await coordinator.stop()
            logger.info("session coordinator stopped")

    app = FastAPI(title="tic-tac-toe session", lifespan=lifespan)
    app.state.coordinator = coordinator
    app.state.settings = settings
    app.include_router(router)
    return app


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings)
    logger.info("starting server", host=settings.host, port=settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
