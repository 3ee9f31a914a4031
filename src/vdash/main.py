"""Main entry point for the vdash application."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import uvicorn
from fastapi import FastAPI

from vdash.api.deps import init_workflow, shutdown_workflow
from vdash.api.routes import backup, drafts, health, stages, subtitles, videos
from vdash.config import settings
from vdash.services.persistence import JSONStateStore
from vdash.services.subtitles import SubtitleChunker


def create_app(store: JSONStateStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: State store to load from and save to; defaults to the
            configured state file
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Load state on startup, write pending changes on shutdown."""
        state_store = store
        if state_store is None:
            settings.ensure_directories()
            state_store = JSONStateStore(settings.state_path)
        init_workflow(
            state_store,
            save_delay=settings.save_debounce_seconds,
            chunker=SubtitleChunker(
                max_chunk_length=settings.subtitle_max_chunk_length,
                block_duration_seconds=settings.subtitle_block_seconds,
            ),
            default_theme=settings.default_theme,
        )
        yield
        await shutdown_workflow()

    app = FastAPI(
        title="vdash - Video Production Dashboard",
        description="Video production workflow tracking",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Include API routes
    app.include_router(health.router)
    app.include_router(stages.router)
    app.include_router(drafts.router)
    app.include_router(videos.router)
    app.include_router(backup.router)
    app.include_router(subtitles.router)

    return app


app = create_app()


def main() -> None:
    """Run the application."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings.ensure_directories()
    uvicorn.run(
        "vdash.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
