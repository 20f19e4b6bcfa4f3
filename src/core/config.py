"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Coyote Connection API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool | None = Field(
        default=None,
        description="Force JSON log output (defaults to on in production)",
    )

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/coyote_connection",
        description="PostgreSQL connection URL with asyncpg driver",
    )

    # Supabase
    supabase_url: str = Field(
        default="",
        description="Supabase project URL (e.g. https://xyzabc.supabase.co)",
    )
    supabase_anon_key: str = Field(
        default="",
        description="Supabase anonymous/public API key",
    )
    supabase_service_role_key: str = Field(
        default="",
        description="Supabase service role key (server-side only, keep secret)",
    )
    supabase_timeout_seconds: float = Field(default=10.0)

    # JWT verification
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Supabase JWT secret (HS256) and test token signing key",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=60)

    # Access policy
    allowed_email_domain: str = Field(
        default="@yotes.collegeofidaho.edu",
        description="Email suffix required to hold an account",
    )
    min_password_length: int = Field(default=8)

    # Feed
    post_max_length: int = Field(default=400)
    feed_limit: int = Field(default=50)

    # Uploads
    avatar_max_bytes: int = Field(default=3 * 1024 * 1024)
    post_image_max_bytes: int = Field(default=5 * 1024 * 1024)
    avatars_bucket: str = Field(default="avatars")
    post_images_bucket: str = Field(default="post-images")

    # Client-side status messages
    status_message_ttl_seconds: float = Field(default=2.5)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def supabase_jwks_url(self) -> str:
        """JWKS endpoint for ES256 token verification."""
        if self.supabase_url:
            return f"{self.supabase_url.rstrip('/')}/auth/v1/.well-known/jwks.json"
        return ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def supabase_auth_url(self) -> str:
        """Base URL of the Supabase Auth (GoTrue) REST API."""
        return f"{self.supabase_url.rstrip('/')}/auth/v1"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def supabase_storage_url(self) -> str:
        """Base URL of the Supabase Storage REST API."""
        return f"{self.supabase_url.rstrip('/')}/storage/v1"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Supabase and most hosts supply a standard ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
