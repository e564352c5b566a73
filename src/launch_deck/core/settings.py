"""Application settings and configuration.

This module defines all configuration options for the Launch Deck application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Launch Deck", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    # Non-production mode: lets owners vote on their own launches for testing.
    dev_mode: bool = Field(default=False, alias="DEV_MODE")

    # Database configuration
    database_url: str = Field(default="sqlite:///./launch_deck.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT authentication settings
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Competition rules
    launch_poten_threshold: int = Field(default=10, alias="LAUNCH_POTEN_THRESHOLD")
    post_poten_threshold: int = Field(default=10, alias="POST_POTEN_THRESHOLD")
    max_launches_per_week: int = Field(default=3, alias="MAX_LAUNCHES_PER_WEEK")
    leaderboard_top_limit: int = Field(default=50, alias="LEADERBOARD_TOP_LIMIT")

    # Scheduled jobs (snapshot rebuild and weekly finalization)
    scheduler_enabled: bool = Field(default=False, alias="SCHEDULER_ENABLED")
    snapshot_interval_seconds: float = Field(
        default=300.0,
        alias="SNAPSHOT_INTERVAL_SECONDS",
    )
    finalize_check_interval_seconds: float = Field(
        default=3600.0,
        alias="FINALIZE_CHECK_INTERVAL_SECONDS",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()  # type: ignore[call-arg]
