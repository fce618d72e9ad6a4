"""Application configuration models with Pydantic validation."""

from pydantic import BaseModel, Field


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the Flask server",
    )
    debug: bool = Field(
        default=False,
        description="Enable Flask debug mode",
    )


class TaskwarriorConfig(BaseModel):
    """How the external ``task`` program is invoked."""

    data_location: str = Field(
        default="~/.task",
        min_length=1,
        description="Data directory pinned with rc.data.location (~ is expanded)",
    )
    taskrc_location: str | None = Field(
        default=None,
        description="Optional taskrc file, passed to task as TASKRC",
    )
    binary: str = Field(
        default="task",
        min_length=1,
        description="Name or path of the Taskwarrior executable",
    )
    command_timeout: float = Field(
        default=30.0,
        gt=0,
        le=600,
        description="Seconds before a task invocation is killed",
    )


class AuthConfig(BaseModel):
    """Bearer token authentication."""

    tokens: list[str] = Field(
        default_factory=list,
        description="Accepted bearer tokens (requests are refused when empty)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="info",
        pattern="^(debug|info|warn|error)$",
        description="Root log level",
    )


class CORSConfig(BaseModel):
    """Cross-origin request settings."""

    enabled: bool = Field(default=True, description="Whether CORS headers are sent")
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API ('*' allows any)",
    )


class AppConfig(BaseModel):
    """Root application configuration.

    Loaded from config.yaml, overridden by TW_* environment variables and
    validated with Pydantic.
    """

    server: ServerConfig = Field(default_factory=ServerConfig)
    taskwarrior: TaskwarriorConfig = Field(default_factory=TaskwarriorConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cors: CORSConfig = Field(default_factory=CORSConfig)

    @property
    def address(self) -> str:
        """Return the ``host:port`` the server listens on."""
        return f"{self.server.host}:{self.server.port}"
