"""
Centralized configuration management for the document engine.

Pydantic v2 settings management: values are read from DOCGEN_*
environment variables (or a local .env file), validated once, and
frozen for the lifetime of the process.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings parsed from the environment.

    Instances are passed explicitly into the catalog, store and render
    pipeline; no component reads the environment on its own.
    """

    # ---------------------------------------------------------------------
    # Runtime
    # ---------------------------------------------------------------------

    environment: Literal["development", "production"] = "development"

    log_level: Annotated[
        Optional[str],
        Field(
            default=None,
            description="Root log level. Defaults to DEBUG in development, INFO otherwise.",
        ),
    ]

    # ---------------------------------------------------------------------
    # Filesystem layout
    # ---------------------------------------------------------------------

    template_dir: Annotated[
        Path,
        Field(
            default=Path("templates"),
            description="Directory holding <name>.html.jinja templates and <name>.json samples",
        ),
    ]

    documents_dir: Annotated[
        Path,
        Field(
            default=Path("templates/documents"),
            description="Directory where final documents are persisted by id",
        ),
    ]

    assets_dir: Annotated[
        Path,
        Field(
            default=Path("assets"),
            description="Static assets served under /assets when present",
        ),
    ]

    # ---------------------------------------------------------------------
    # Verification
    # ---------------------------------------------------------------------

    public_base_url: Annotated[
        str,
        Field(
            default="http://localhost:3000",
            description="Externally reachable base URL used in verification links",
        ),
    ]

    # ---------------------------------------------------------------------
    # Headless renderer
    # ---------------------------------------------------------------------

    render_timeout_seconds: Annotated[
        float,
        Field(
            default=8.0,
            ge=1.0,
            le=60.0,
            description="Upper bound for navigation and PDF conversion",
        ),
    ]

    viewport_width: int = Field(default=1200, ge=320)
    viewport_height: int = Field(default=1600, ge=320)
    device_scale_factor: float = Field(default=1.5, gt=0)

    browser_executable_path: Annotated[
        Optional[Path],
        Field(
            default=None,
            description="System Chromium binary; the Playwright-managed browser is used when unset",
        ),
    ]

    internal_base_url: Annotated[
        Optional[str],
        Field(
            default=None,
            description=(
                "Optional URL the renderer opens before loading content so "
                "that relative asset URLs resolve against this service"
            ),
        ),
    ]

    # ---------------------------------------------------------------------
    # Template engine
    # ---------------------------------------------------------------------

    strict_undefined: Annotated[
        bool,
        Field(
            default=False,
            description="Fail renders that reference variables missing from the payload",
        ),
    ]

    # ---------------------------------------------------------------------
    # HTTP
    # ---------------------------------------------------------------------

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(
        env_prefix="DOCGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    @field_validator("public_base_url", "internal_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.rstrip("/")

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.environment == "development" else "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings singleton."""
    return Settings()
