"""Application settings and configuration."""

from functools import lru_cache
from typing import ClassVar, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Student Directory API", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    port: int = Field(default=8000, description="Port to bind to")
    log_level: str = Field(default="INFO", description="Root logging level")

    # CORS
    allowed_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:8080",
            "http://localhost:8081",
        ],
        description="Allowed CORS origins",
    )

    # Document store
    document_store_backend: Literal["sql", "memory"] = Field(
        default="sql", description="Back-end holding the student documents"
    )
    postgres_user: str = Field(default="admin", description="PostgreSQL user")
    postgres_password: str = Field(
        default="supersecretpassword", description="PostgreSQL password"
    )
    postgres_host: str = Field(default="localhost", description="PostgreSQL host")
    postgres_port: int = Field(default=5432, description="PostgreSQL port")
    postgres_db: str = Field(
        default="student_directory", description="PostgreSQL database name"
    )
    document_store_url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL overriding the PostgreSQL components",
    )
    students_collection: str = Field(
        default="students", description="Collection holding student records"
    )
    users_collection: str = Field(
        default="users", description="Collection holding user profiles"
    )

    # Session cache
    session_cache_backend: Literal["sql", "memory"] = Field(
        default="sql", description="Back-end holding the local session cache"
    )
    session_cache_url: str = Field(
        default="sqlite+aiosqlite:///./session_cache.db",
        description="SQLAlchemy URL of the local key-value database",
    )

    # Behaviour
    keep_remembered_credential_on_sign_out: bool = Field(
        default=False,
        description="Only drop the signed-in identity on sign-out, keeping remember-me",
    )

    @property
    def database_url(self) -> str:
        """Construct the document store URL from individual components."""
        if self.document_store_url:
            return self.document_store_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
