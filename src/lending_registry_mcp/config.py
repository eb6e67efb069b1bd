"""Configuration management for Lending Registry MCP Server.

Settings come from (highest priority first):
1. Constructor arguments
2. Environment variables prefixed with LENDING_REGISTRY_
3. A local .env file
4. The defaults below

Complex values such as ``seed_people`` are read from the environment as JSON.
"""

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SeedPerson(BaseModel):
    """A person registered automatically when the server starts."""

    id: str = Field(..., min_length=1, description="Person identifier")
    name: str = Field(..., min_length=1, description="Display name")


class ServerConfig(BaseSettings):
    """MCP server configuration.

    Covers the protocol handshake metadata (name, version), the transport
    the server listens on, logging verbosity and the people to register at
    startup. Lending state itself is never configured: it always starts empty.
    """

    model_config = SettingsConfigDict(
        # Use LENDING_REGISTRY_ prefix for all env vars
        env_prefix="LENDING_REGISTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Server Metadata (Required by MCP Protocol) ===

    server_name: str = Field(
        default="lending-registry",
        description="MCP server name used in protocol handshake",
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="0.1.0",
        description="Server version for capability negotiation",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    # === Transport Configuration ===

    transport: str = Field(
        default="stdio",
        description="Primary transport mechanism",
        pattern=r"^(stdio|streamable_http)$",
    )

    http_host: str = Field(
        default="127.0.0.1",
        description="HTTP server host for Streamable HTTP transport",
    )

    http_port: int = Field(
        default=8080,
        description="HTTP server port for Streamable HTTP transport",
        ge=1024,  # Avoid privileged ports
        le=65535,
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging for protocol messages",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    # === Registry Bootstrap ===

    seed_people: list[SeedPerson] = Field(
        default_factory=list,
        description="People registered in the lending registry at startup",
    )

    # === Validation Methods ===

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v: str) -> str:
        """Validate server name meets MCP naming conventions.

        MCP clients use server names for identification and routing.
        """
        if len(v) < 3:
            raise ValueError("Server name must be at least 3 characters")
        if len(v) > 50:
            raise ValueError("Server name must not exceed 50 characters")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("seed_people")
    @classmethod
    def validate_unique_seed_ids(cls, v: list[SeedPerson]) -> list[SeedPerson]:
        ids = [person.id for person in v]
        duplicates = sorted({pid for pid in ids if ids.count(pid) > 1})
        if duplicates:
            raise ValueError(f"Duplicate seed person ids: {', '.join(duplicates)}")
        return v

    # === Computed Properties ===

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.debug or self.log_level == "DEBUG"

    @property
    def server_info(self) -> dict[str, str]:
        """Get server information for MCP handshake."""
        return {
            "name": self.server_name,
            "version": self.server_version,
            "transport": self.transport,
        }


# === Global Configuration Instance ===


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = ServerConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing).

    Allows tests to use different configurations
    without affecting other tests.
    """
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
