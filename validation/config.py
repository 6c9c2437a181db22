"""
Configuration validation for CorrespondingReference.

Provides a pydantic-settings model for validating plugin configuration
with fail-fast behavior and sensible defaults. Values passed by the host
take precedence over CR_-prefixed environment variables.
"""

from pydantic import Field, field_validator, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import logging

log = logging.getLogger('CorrespondingReference.config')

LOG_LEVELS = ('trace', 'debug', 'info', 'warning', 'error')


class CorrespondingReferenceConfig(BaseSettings):
    """
    CorrespondingReference plugin configuration with validation.

    Optional tunables:
        enabled: Master on/off switch (default: True)
        definitions_path: YAML file holding reference pair definitions
        entities_path: JSON entity store used by the plugin script
        notify: Emit "Added/Removed ... corresponding record(s)" notices (default: True)
        log_level: trace, debug, info, warning or error (default: info)
        json_logs: Structured JSON log output (default: False)
    """

    model_config = SettingsConfigDict(env_prefix="CR_", extra="ignore")

    enabled: bool = True

    definitions_path: str = Field(
        default="corresponding_reference.yml",
        description="YAML file with the reference pair definitions"
    )
    entities_path: str = Field(
        default="entities.json",
        description="JSON entity store used when running as a plugin script"
    )

    notify: bool = Field(
        default=True,
        description="Report every counterpart change as a user-facing notice"
    )

    log_level: str = Field(
        default="info",
        description="Log level: trace, debug, info, warning, error"
    )
    json_logs: bool = Field(
        default=False,
        description="Emit structured JSON log lines"
    )

    @field_validator('definitions_path', 'entities_path', mode='after')
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('path must not be empty')
        return v.strip()

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log_level is one of: trace, debug, info, warning, error."""
        if isinstance(v, str) and v.lower() in LOG_LEVELS:
            return v.lower()
        raise ValueError(f"log_level must be one of {LOG_LEVELS}, got: {v}")

    @field_validator('enabled', 'notify', 'json_logs', mode='before')
    @classmethod
    def validate_booleans(cls, v):
        """Ensure boolean fields are actual booleans, not truthy strings."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            lower = v.lower()
            if lower in ('true', '1', 'yes'):
                return True
            if lower in ('false', '0', 'no'):
                return False
            raise ValueError(f"Invalid boolean value: {v}")
        raise ValueError(f"Expected boolean, got {type(v).__name__}")

    def log_config(self) -> None:
        """Log configuration summary."""
        log.info(
            f"CorrespondingReference config: enabled={self.enabled}, "
            f"definitions={self.definitions_path}, entities={self.entities_path}, "
            f"notify={self.notify}, log_level={self.log_level}"
        )
        if not self.enabled:
            log.info("Plugin disabled: saves will not be reconciled")


def validate_config(config_dict: dict) -> tuple[Optional[CorrespondingReferenceConfig], Optional[str]]:
    """
    Validate configuration dictionary and return CorrespondingReferenceConfig or error message.

    Args:
        config_dict: Dictionary containing configuration values

    Returns:
        Tuple of (CorrespondingReferenceConfig, None) on success,
        or (None, error_message) on validation failure
    """
    try:
        config = CorrespondingReferenceConfig(**config_dict)
        return (config, None)
    except ValidationError as e:
        # Extract user-friendly error messages
        errors = []
        for error in e.errors():
            field = '.'.join(str(loc) for loc in error['loc'])
            msg = error['msg']
            errors.append(f"{field}: {msg}")
        error_message = '; '.join(errors)
        return (None, error_message)


# Re-export ValidationError for external use
__all__ = ['CorrespondingReferenceConfig', 'validate_config', 'ValidationError']
