"""
Configuration management for Supplier Portal.

Settings are read from environment variables and an optional ``.env`` file
using pydantic-settings, validated once and cached for the process lifetime.
"""

from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from supplier_portal.utils.exceptions import ConfigurationError


class SupplierPortalConfig(BaseSettings):
    """Application configuration."""

    # Database
    database_url: str = Field(default="sqlite:///./supplier_portal.db")
    database_echo: bool = Field(default=False)

    # Tokens
    secret_key: str = Field(
        default="change-me-in-production",
        validation_alias=AliasChoices("SECRET_KEY", "JWT_SECRET"),
    )
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_hours: int = Field(default=24)

    # Default administrator created on startup
    admin_username: str = Field(
        default="admin",
        validation_alias=AliasChoices("ADMIN_USERNAME", "OWNER_EMAIL"),
    )
    admin_password: str = Field(
        default="admin123",
        validation_alias=AliasChoices("ADMIN_PASSWORD", "OWNER_PASSWORD"),
    )

    # Business rules
    max_products_per_tenant: int = Field(default=50)
    allow_signup: bool = Field(default=True)
    password_min_length: int = Field(default=6)
    bcrypt_rounds: int = Field(default=12)

    # HTTP server
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, validation_alias=AliasChoices("API_PORT", "PORT"))
    cors_origins: str = Field(default="*")
    static_dir: Optional[str] = Field(default=None)

    # Logging
    log_level: str = Field(default="INFO")
    log_dir: str = Field(default="./logs")
    debug: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator('secret_key')
    @classmethod
    def validate_secret_key(cls, v):
        if not v or len(v.strip()) == 0:
            raise ValueError("SECRET_KEY must not be empty")
        return v

    @field_validator('access_token_expire_hours', 'max_products_per_tenant', 'password_min_length')
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @property
    def cors_origin_list(self) -> List[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Global configuration instance
_config: Optional[SupplierPortalConfig] = None


def get_config() -> SupplierPortalConfig:
    """
    Get the global configuration instance.

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If configuration validation fails
    """
    global _config

    if _config is None:
        try:
            _config = SupplierPortalConfig()
        except PydanticValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}")

    return _config


def reload_config() -> SupplierPortalConfig:
    """Reload configuration from environment variables."""
    global _config
    _config = None
    return get_config()
