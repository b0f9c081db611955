import argparse
import asyncio
from collections.abc import AsyncGenerator

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from todo_app import models  # noqa: F401
from todo_app.config import settings
from todo_app.models.base import Base
from todo_app.utils.logger import setup_logger

logger = setup_logger("db")


def _engine_options(database_url: str) -> dict:
    """Pool settings for the configured backend."""
    if database_url.startswith("postgresql+asyncpg://"):
        return {
            "pool_pre_ping": True,
            "pool_size": 20,
            "max_overflow": 30,
            "pool_timeout": 60,
            "pool_recycle": 300,
            "connect_args": {"timeout": 30},
        }
    if database_url.startswith("sqlite+aiosqlite://"):
        options = {"connect_args": {"check_same_thread": False}}
        # An in-memory database lives as long as its single connection
        if ":memory:" in database_url or database_url == "sqlite+aiosqlite://":
            options["poolclass"] = StaticPool
        return options
    raise ValueError(f"Unsupported settings.app_database_url prefix: {database_url}")


logger.debug(f"Application DB URL: {settings.app_database_url}")
app_engine = create_async_engine(
    settings.app_database_url,
    echo=settings.db_echo,
    **_engine_options(settings.app_database_url),
)

AppAsyncSessionLocal = async_sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=app_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# --- Dependency for FastAPI ---
async def get_app_db() -> AsyncGenerator[AsyncSession, None]:
    async with AppAsyncSessionLocal() as session:
        yield session


async def init_db():
    """Create all tables registered on ``Base.metadata`` that do not exist yet."""
    if not Base.metadata.tables:
        logger.warning("Base.metadata.tables is EMPTY! No tables will be created.")
    else:
        logger.debug(
            f"Tables registered in Base.metadata: {list(Base.metadata.tables.keys())}"
        )

    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema initialized.")


async def reset_db():
    """Drop every table and recreate the empty schema."""
    logger.warning(
        "Attempting to reset the Application database. THIS IS A DESTRUCTIVE OPERATION."
    )
    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        logger.info("All application tables dropped.")
    await init_db()
    logger.info("Application database has been reset and re-initialized.")


async def close_db():
    """Closes database connections."""
    logger.info("Closing database connections.")
    await app_engine.dispose()
    logger.info("Database connections closed.")


async def list_tables() -> list[str]:
    """Lists all tables present in the application database."""
    async with app_engine.connect() as conn:
        table_names = await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).get_table_names()
        )

    if table_names:
        logger.info(f"Tables in Application DB: {table_names}")
    else:
        logger.info("No tables found in Application DB.")
    return table_names


async def check_db_connection(engine_to_check=None, db_name="Application DB"):
    """Performs a simple query to check actual DB connectivity."""
    if engine_to_check is None:
        engine_to_check = app_engine

    session_maker = async_sessionmaker(
        bind=engine_to_check,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        try:
            result = await session.execute(text("SELECT 1"))
            if result.scalar_one() == 1:
                logger.info(
                    f"Successfully connected to {db_name} and executed a test query."
                )
                return True
            raise RuntimeError(f"Test query to {db_name} returned an unexpected result.")
        except Exception as e:
            logger.error(
                f"Failed to execute test query on {db_name}: {e}", exc_info=True
            )
            raise RuntimeError(
                f"Database connectivity check failed for {db_name}."
            ) from e


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Task manager database initialization utility"
    )
    parser.add_argument(
        "action",
        choices=["init", "reset", "list-tables", "check"],
        help="'init' to create missing tables, "
        "'reset' to drop and recreate all tables, "
        "'list-tables' to show existing tables, "
        "'check' to run a connectivity test query.",
    )
    args = parser.parse_args()

    if args.action == "init":
        asyncio.run(init_db())
    elif args.action == "reset":
        confirm = input(
            "WARNING: This will delete all users and tasks. Are you sure? (yes/no): "
        )
        if confirm.lower() == "yes":
            asyncio.run(reset_db())
        else:
            logger.info("Application Database reset cancelled by user.")
    elif args.action == "list-tables":
        asyncio.run(list_tables())
    elif args.action == "check":
        asyncio.run(check_db_connection())
    logger.info("Application Database utility script finished.")
