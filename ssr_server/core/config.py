"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here — no scattered magic strings.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the server.
        version: Current application version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        error_boundary_entrypoint: Bundler entrypoint holding the error page assets.
        error_boundary_template: Jinja2 template used as the root error boundary.
            When unset, no fallback page is rendered.
        assets_manifest_path: Bundler stats file listing entrypoint assets.
        assets_public_path: URL prefix for assets when the manifest has none.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "SSR Server"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    error_boundary_entrypoint: str = "rootErrorBoundary"
    error_boundary_template: Optional[Path] = None
    assets_manifest_path: Path = Path("dist/stats.json")
    assets_public_path: str = "/dist/"


settings = Settings()
