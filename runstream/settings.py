"""runstream settings with environment variable support."""

import os
from pathlib import Path

# Load .env file from project root
from dotenv import load_dotenv

# Find .env file - check current dir and parent dirs
def _find_env_file() -> Path | None:
    """Find .env file in current or parent directories."""
    current = Path.cwd()
    for _ in range(5):  # Check up to 5 levels
        env_file = current / ".env"
        if env_file.exists():
            return env_file
        current = current.parent
    # Also check package directory
    pkg_dir = Path(__file__).parent.parent
    env_file = pkg_dir / ".env"
    if env_file.exists():
        return env_file
    return None

env_file = _find_env_file()
if env_file:
    load_dotenv(env_file, override=True)  # Override shell vars with .env

from pydantic import BaseModel


class ServerSettings(BaseModel):
    """HTTP server settings."""

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3002"))
    cors_origins: str = os.getenv("SERVER__CORS_ORIGINS", "*")

    @property
    def cors_origin_list(self) -> list[str]:
        """CORS origins as a list (comma-separated in the environment)."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]


class LLMSettings(BaseModel):
    """LLM provider settings for the default workflow."""

    default_model: str = os.getenv("LLM__DEFAULT_MODEL", "openai:gpt-4o-mini")
    temperature: float = float(os.getenv("LLM__TEMPERATURE", "0.5"))
    request_limit: int = int(os.getenv("LLM__REQUEST_LIMIT", "20"))


class WorkflowSettings(BaseModel):
    """Which workflow the server proxies into.

    ref is either a YAML workflow schema path or a ``module:attribute``
    import path. Unset means the built-in default assistant.
    """

    ref: str | None = os.getenv("WORKFLOW__REF") or None


class Settings(BaseModel):
    """Application settings."""

    server: ServerSettings = ServerSettings()
    llm: LLMSettings = LLMSettings()
    workflow: WorkflowSettings = WorkflowSettings()
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    environment: str = os.getenv("ENVIRONMENT", "development")


settings = Settings()
