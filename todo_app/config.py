"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


import os

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from todo_app.utils.logger import setup_logger

load_dotenv(override=False)


logger = setup_logger("core_config")

INSECURE_DEFAULT_SECRET = "change-this-secret-key-in-production"


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_prefix="",
    )

    project_name: str = Field(
        default="Task Manager API",
        alias="PROJECT_NAME",
        description="Title shown in the OpenAPI documentation",
    )

    # ===== Database Configuration =====
    app_database_url: str = Field(
        default="sqlite+aiosqlite:///./todo_app.db",
        alias="TODO_DATABASE_URL",
        description="Application database URL (postgresql:// or sqlite://)",
    )

    db_echo: bool = Field(
        default=False,
        alias="DB_ECHO",
        description="Echo SQL statements emitted by SQLAlchemy",
    )

    # ===== Security Configuration =====
    secret_key: str = Field(
        default=INSECURE_DEFAULT_SECRET,
        alias="SECRET_KEY",
        description="Key used to sign session tokens",
    )

    jwt_algorithm: str = Field(
        default="HS256",
        alias="JWT_ALGORITHM",
        description="Signing algorithm for session tokens",
    )

    access_token_expire_minutes: int = Field(
        default=1440,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
        description="Session lifetime in minutes (24 hours default)",
    )

    session_cookie_name: str = Field(
        default="TODO_SESSION",
        alias="SESSION_COOKIE_NAME",
        description="Name of the cookie carrying the session token",
    )

    session_cookie_secure: bool = Field(
        default=False,
        alias="SESSION_COOKIE_SECURE",
        description="Only send the session cookie over HTTPS",
    )

    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        alias="BCRYPT_ROUNDS",
        description="bcrypt cost factor for password digests",
    )

    default_user_role: str = Field(
        default="ROLE_USER",
        alias="DEFAULT_USER_ROLE",
        description="Role assigned to every newly registered user",
    )

    public_paths: list[str] = Field(
        default_factory=lambda: [
            "/",
            "/login",
            "/logout",
            "/register",
            "/css/**",
            "/js/**",
            "/images/**",
            "/api/tasks/**",
        ],
        alias="PUBLIC_PATHS",
        description="Paths reachable without a session; '/**' suffix matches a subtree",
    )

    role_rules: dict[str, str] = Field(
        default_factory=lambda: {"/api/users": "ROLE_USER"},
        alias="ROLE_RULES",
        description="Path prefix to role required for requests under it",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=8080, alias="SERVER_PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:3000",
            "http://127.0.0.1:5173",
        ],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=True,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    # User-facing hint for database connection errors
    db_unavailable_hint: str = os.getenv(
        "DB_UNAVAILABLE_HINT",
        "Database connection failed. The server may be offline or network connectivity is down.",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Normalize the database URL and warn about insecure defaults."""

        if self.app_database_url.startswith("postgresql://"):
            self.app_database_url = self.app_database_url.replace(
                "postgresql://", "postgresql+asyncpg://", 1
            )
        elif self.app_database_url.startswith("sqlite://"):
            self.app_database_url = self.app_database_url.replace(
                "sqlite://", "sqlite+aiosqlite://", 1
            )

        if self.secret_key == INSECURE_DEFAULT_SECRET:
            logger.warning("SECRET_KEY environment variable not set.")

        if not self.session_cookie_secure:
            logger.debug("Session cookie will be sent over plain HTTP.")

        return self


# Global settings instance
settings = Settings()
