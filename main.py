#!/usr/bin/env python3

"""
Main application entry point for the task manager backend.

Architecture: FastAPI application with an async SQLAlchemy database, a
cookie-session security chain and REST routers for users and tasks.
Key Features: Lifecycle management, database health checks, domain error mapping, CORS configuration.
"""

import asyncio
import sys

# Add this block to switch asyncio event loop policy on Windows
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

import errno
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todo_app import __version__
from todo_app.api.auth import router as auth_router
from todo_app.api.tasks import router as tasks_router
from todo_app.api.users import router as users_router
from todo_app.config import settings
from todo_app.db import check_db_connection, close_db, init_db
from todo_app.exceptions import TodoAppError
from todo_app.middleware import SecurityMiddleware
from todo_app.utils.logger import setup_logger

logger = setup_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup...")
    try:
        logger.info("Initializing database...")
        await init_db()
        logger.info("Database initialization complete.")

        logger.info("Checking database connectivity...")
        if await check_db_connection():
            logger.info("Database connectivity confirmed.")
        else:
            logger.critical("Database connectivity check failed.")
            raise SystemExit("Database connection failed.")

    except Exception as e:
        logger.critical(f"Startup error: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    logger.info(f"{settings.project_name} startup successful.")

    yield

    logger.info(f"{settings.project_name} shutdown...")
    await close_db()
    logger.info("Shutdown complete.")


def create_app():
    app = FastAPI(title=settings.project_name, version=__version__, lifespan=lifespan)

    @app.exception_handler(TodoAppError)
    async def domain_exception_handler(request: Request, exc: TodoAppError):
        logger.info(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
        )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(OSError)
    async def oserror_exception_handler(request: Request, exc: OSError):
        logger.error(
            f"OSError caught: {exc}, errno: {exc.errno}, winerror: {getattr(exc, 'winerror', None)}"
        )
        is_timeout_or_refused = False
        if hasattr(exc, "winerror") and exc.winerror == 121:
            is_timeout_or_refused = True
        elif exc.errno in [errno.ETIMEDOUT, errno.ECONNREFUSED]:
            is_timeout_or_refused = True

        if is_timeout_or_refused:
            logger.error(
                f"Returning 503 due to DB connection issue: {settings.db_unavailable_hint}"
            )
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"detail": settings.db_unavailable_hint},
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": f"An unexpected OS error occurred: {exc}"},
        )

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(tasks_router)
    app.add_middleware(SecurityMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    return app


app = create_app()


def main():
    port = int(settings.server_port)
    host = settings.server_host

    logger.info(f"Starting {settings.project_name} on {host}:{port}")

    try:
        uvicorn.run(app, host=host, port=port, workers=settings.server_workers)
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
