"""
Library settings.

Tunables for tree limits, id generation, adapter defaults and logging,
read from environment variables or a .env file by pydantic-settings.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings loaded from environment variables.

    Nothing here is secret; every value has a usable default so the
    library can be imported without any environment configured.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application Settings
    APP_NAME: str = Field(default="CMS Node Tree", description="Library name")
    APP_VERSION: str = Field(default="1.0.0", description="Library version")
    DEBUG: bool = Field(default=False, description="Debug mode flag")
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment (development/staging/production)",
    )

    # Logging Settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    LOG_FILE: str | None = Field(default=None, description="Log file path (None for stdout only)")

    # Tree Settings
    MAX_TREE_DEPTH: int = Field(
        default=64, ge=1, description="Deepest nesting accepted when loading a serialized tree"
    )
    NODE_ID_PREFIX: str = Field(default="", description="Optional prefix for generated node ids")

    # Gallery Settings
    GALLERY_ROOT_LABEL: str = Field(
        default="Gallery", description="Breadcrumb label for the gallery root"
    )

    # Menu Settings
    MENU_ROOT_LABEL: str = Field(default="Menu", description="Breadcrumb label for the menu root")
    MENU_DEFAULT_LABEL: str = Field(
        default="New Item", description="Label given to menu items created without one"
    )
    MENU_DEFAULT_URL: str = Field(
        default="/", description="URL given to menu items created without one"
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()


settings = get_settings()
