"""
Configuration management for OKpay.

Hybrid configuration system using YAML files and environment variables.
Priority: Environment variables > YAML config > Pydantic defaults
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from okpay.domain.value_objects.currency import SUPPORTED_CURRENCIES


class Settings(BaseSettings):
    """
    OKpay configuration schema.

    Loads configuration from:
    1. Environment variables prefixed with OKPAY_ (highest priority)
    2. YAML configuration files
    3. Pydantic defaults (lowest priority)

    Configuration files:
        - config/default.yaml: Base defaults
        - config/production.yaml: Production overrides
        - config/development.yaml: Development overrides
        - config/test.yaml: Test overrides
    """

    model_config = SettingsConfigDict(
        env_prefix="OKPAY_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    APP_NAME: str = "OKpay"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="production", description="Environment name")

    # Hive account registry (JSON-RPC)
    hive_rpc_url: str = Field(
        default="https://api.hive.blog",
        description="Hive JSON-RPC endpoint used for account lookups",
    )
    avatar_url_template: str = Field(
        default="https://images.hive.blog/u/{account}/avatar/original",
        description="Avatar image URL for a resolved account",
    )

    # Exchange rates
    exchange_rate_url: str = Field(
        default="https://api.exchangerate-api.com/v4/latest/USD",
        description="Exchange-rate endpoint returning rates relative to USD",
    )
    rate_cache_prefix: str = Field(default="okpay_rates_")
    default_currency: str = Field(default="USD")

    # HTTP client behaviour
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    http_max_retries: int = Field(default=2, ge=1, le=10)
    http_retry_initial_delay: float = Field(default=0.5, ge=0)

    # Transfer delivery
    settlement_asset: str = Field(default="HBD")
    keychain_scheme: str = Field(default="keychain")
    signer_transfer_url: str = Field(
        default="https://hivesigner.com/sign/transfer",
        description="Hosted signer page used when no native handler exists",
    )
    deep_link_fallback_seconds: float = Field(default=1.2, gt=0)
    extension_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="How long to wait for a signing extension to answer",
    )
    delivery_policy: str = Field(
        default="extension_first",
        description="extension_first or always_race",
    )

    # Payment links
    payment_base_url: str = Field(default="http://menobass.github.io/okpay")

    # Session
    validation_debounce_seconds: float = Field(default=0.3, ge=0)
    memo_storage_key: str = Field(default="okpay_memo")

    # Storage
    storage_dir: str = Field(
        default="~/.okpay",
        description="Directory holding the persistent rate cache",
    )

    # Logging
    log_level: str = Field(default="info")
    log_file: Optional[str] = Field(default=None)
    verbose: int = Field(default=1, ge=0, le=3)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["debug", "info", "warning", "error", "critical"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid log_level. Must be one of: {allowed}")
        return v_lower

    @field_validator("default_currency")
    @classmethod
    def validate_default_currency(cls, v: str) -> str:
        """Default currency must be in the supported table."""
        code = v.upper()
        if code not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported default_currency: {v}")
        return code

    @field_validator("delivery_policy")
    @classmethod
    def validate_delivery_policy(cls, v: str) -> str:
        """Validate delivery policy name."""
        allowed = ["extension_first", "always_race"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid delivery_policy. Must be one of: {allowed}")
        return v_lower

    @field_validator(
        "hive_rpc_url", "exchange_rate_url", "signer_transfer_url", "payment_base_url"
    )
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Remote endpoints must be http(s) URLs."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Expected an http(s) URL, got: {v}")
        return v.rstrip("/")

    @property
    def storage_path(self) -> Path:
        """Expanded storage directory."""
        return Path(self.storage_dir).expanduser()


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override

    Returns:
        Settings instance

    Raises:
        ValidationError: If a configured value is invalid
    """
    # Component root: okpay/src/okpay/config/settings.py -> okpay/
    project_root = Path(__file__).resolve().parents[3]
    config_dir = project_root / "config"

    environment = env or os.getenv("OKPAY_ENV", "production")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }
    default_env_file, default_config_file = env_map.get(
        environment, (".env.production", "production.yaml")
    )
    env_file = env_file or default_env_file
    config_file = config_file or default_config_file

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=False)

    merged_config: dict = {}
    for path in (config_dir / "default.yaml", config_dir / config_file):
        if path.exists():
            with open(path, "r") as f:
                loaded = yaml.safe_load(f)
                if loaded:
                    merged_config.update(loaded)

    merged_config["ENV"] = environment

    # Environment variables override YAML values
    for name in Settings.model_fields:
        if name != "ENV" and f"OKPAY_{name.upper()}" in os.environ:
            merged_config.pop(name, None)

    return Settings(**merged_config)


# Global settings singleton (lazy initialization)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or initialize global settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """
    Override global settings (for testing).

    Args:
        new_settings: New Settings instance to use
    """
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
