"""
autocluster.tier0_core.config
──────────────────────────────
Typed configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic; invalid values raise
ConfigurationError at startup, not halfway through identity resolution.

The resolver and the backend selector take a config explicitly; the
cached ``get_config()`` instance is only their default.

Minimal stack: pydantic-settings + python-dotenv
"""
from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class AutoclusterConfig(BaseSettings):
    """
    Configuration snapshot consumed by the identity resolver and the
    backend selector. Fields may be set by env var alias or by name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── Discovery ─────────────────────────────────────────────────────────────
    backend: str | None = Field(default=None, alias="AUTOCLUSTER_TYPE")
    backend_port: int | None = Field(default=None, alias="AUTOCLUSTER_PORT")
    tags: Annotated[list[tuple[str, str]], NoDecode] = Field(
        default_factory=list, alias="AUTOCLUSTER_TAGS"
    )

    # ── Node naming ───────────────────────────────────────────────────────────
    longname: bool = Field(default=False, alias="RABBITMQ_USE_LONGNAME")
    node_name: str = Field(default="rabbit", alias="RABBITMQ_NODENAME")
    node_nic: str | None = Field(default=None, alias="AUTOCLUSTER_NODE_NIC")

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="AUTOCLUSTER_LOG_LEVEL")
    log_format: str = Field(default="json", alias="AUTOCLUSTER_LOG_FORMAT")

    @field_validator("backend", mode="before")
    @classmethod
    def normalize_backend(cls, v: Any) -> Any:
        if isinstance(v, bytes):
            v = v.decode("utf-8")
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("backend_port", mode="before")
    @classmethod
    def parse_backend_port(cls, v: Any) -> Any:
        from autocluster.tier1_runtime.ports import parse_port

        if v is None:
            return None
        return parse_port(v)

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, v: Any) -> Any:
        from autocluster.tier1_runtime.proplist import as_proplist

        return as_proplist(v)

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "console"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got {v!r}")
        return v.lower()


def load_config(**overrides: Any) -> AutoclusterConfig:
    """
    Build a config, translating Pydantic errors into ConfigurationError
    that names the offending env var.
    """
    from autocluster.tier0_core.errors import ConfigurationError, InvalidIntegerError

    try:
        return AutoclusterConfig(**overrides)
    except InvalidIntegerError as exc:
        raise ConfigurationError(
            "invalid_setting",
            f"AUTOCLUSTER_PORT is not a valid port: {exc.user_message}",
            key="AUTOCLUSTER_PORT",
        ) from exc
    except PydanticValidationError as exc:
        aliases = _field_aliases()
        keys = [
            aliases.get(str(err["loc"][0]).lower(), str(err["loc"][0]))
            for err in exc.errors()
            if err["loc"]
        ]
        raise ConfigurationError(
            "invalid_setting",
            f"Invalid configuration for {', '.join(keys) or 'autocluster'}: {exc.errors()[0]['msg']}",
            keys=keys,
        ) from exc


def _field_aliases() -> dict[str, str]:
    aliases: dict[str, str] = {}
    for name, info in AutoclusterConfig.model_fields.items():
        alias = info.alias or name
        aliases[name.lower()] = alias
        aliases[alias.lower()] = alias
    return aliases


@lru_cache(maxsize=1)
def get_config() -> AutoclusterConfig:
    """
    Return the singleton config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    return load_config()


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()
