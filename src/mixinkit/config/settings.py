"""
Configuration Management for MixinKit

🔧 Runtime Settings:
This module holds the process-wide settings that tune how the composition
engine reports mistakes and answers membership queries, supporting different
environments (development, testing, production).
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from enum import Enum
import logging
import os

MEMBERSHIP_IMMEDIATE = "immediate"
MEMBERSHIP_ON_RETIREMENT = "on_retirement"
MEMBERSHIP_POLICIES = (MEMBERSHIP_IMMEDIATE, MEMBERSHIP_ON_RETIREMENT)

_TRUTHY = ("1", "true", "yes", "on")


def _validate_membership_policy(policy: str) -> str:
    if policy not in MEMBERSHIP_POLICIES:
        raise ValueError(
            f"Unknown membership policy {policy!r}, expected one of {MEMBERSHIP_POLICIES}"
        )
    return policy


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class LoggingConfig:
    """Logging configuration for the mixinkit logger"""
    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class MixinSettings:
    """
    Complete mixinkit configuration.

    strict_constraints turns constraint diagnostics into
    ConstraintViolationError. membership_policy decides whether a unit
    stops being a member as soon as its own finalizer ran ("immediate")
    or only once the whole registry is retired ("on_retirement").
    """
    environment: Environment = Environment.DEVELOPMENT
    strict_constraints: bool = False
    membership_policy: str = MEMBERSHIP_IMMEDIATE
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        _validate_membership_policy(self.membership_policy)

    @property
    def retire_membership_immediately(self) -> bool:
        return self.membership_policy == MEMBERSHIP_IMMEDIATE

    @classmethod
    def for_environment(cls, environment: Environment) -> 'MixinSettings':
        """Create settings for a specific environment"""
        settings = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            settings.logging.level = "DEBUG"

        elif environment == Environment.TESTING:
            settings.logging.level = "WARNING"

        elif environment == Environment.PRODUCTION:
            settings.logging.level = "ERROR"

        return settings

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'MixinSettings':
        """Create settings from a dictionary"""
        environment = Environment(config_dict.get("environment", Environment.DEVELOPMENT.value))
        settings = cls.for_environment(environment)

        if "strict_constraints" in config_dict:
            settings.strict_constraints = bool(config_dict["strict_constraints"])

        if "membership_policy" in config_dict:
            settings.membership_policy = _validate_membership_policy(config_dict["membership_policy"])

        if "logging" in config_dict:
            for key, value in config_dict["logging"].items():
                if hasattr(settings.logging, key):
                    setattr(settings.logging, key, value)

        return settings

    @classmethod
    def from_environment(cls) -> 'MixinSettings':
        """Create settings from environment variables"""
        env_name = os.getenv('MIXINKIT_ENV', Environment.DEVELOPMENT.value)
        settings = cls.for_environment(Environment(env_name.lower()))

        if os.getenv('MIXINKIT_STRICT'):
            settings.strict_constraints = os.getenv('MIXINKIT_STRICT').lower() in _TRUTHY

        if os.getenv('MIXINKIT_MEMBERSHIP'):
            settings.membership_policy = _validate_membership_policy(os.getenv('MIXINKIT_MEMBERSHIP').lower())

        if os.getenv('MIXINKIT_LOG_LEVEL'):
            settings.logging.level = os.getenv('MIXINKIT_LOG_LEVEL').upper()

        return settings

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a dictionary"""
        return {
            "environment": self.environment.value,
            "strict_constraints": self.strict_constraints,
            "membership_policy": self.membership_policy,
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
            },
        }


# Global settings management
_current_settings: Optional[MixinSettings] = None
_log_handler: Optional[logging.Handler] = None


def set_settings(settings: MixinSettings):
    """Set the global settings"""
    global _current_settings
    _current_settings = settings


def get_settings() -> MixinSettings:
    """Get the current global settings"""
    global _current_settings

    if _current_settings is None:
        # Auto-create from environment if not set
        _current_settings = MixinSettings.from_environment()

    return _current_settings


def reset_settings():
    """Forget the current settings; the next lookup re-reads the environment"""
    global _current_settings
    _current_settings = None


def configure_from_dict(config_dict: Dict[str, Any]) -> MixinSettings:
    """Configure mixinkit from a dictionary"""
    settings = MixinSettings.from_dict(config_dict)
    set_settings(settings)
    return settings


def configure_logging(settings: Optional[MixinSettings] = None) -> logging.Logger:
    """
    Apply the logging configuration to the ``mixinkit`` logger.

    A stream handler is attached only once, so calling this repeatedly
    just updates the level and format.
    """
    global _log_handler

    settings = settings or get_settings()
    logger = logging.getLogger("mixinkit")
    logger.setLevel(settings.logging.level)

    if _log_handler is None:
        _log_handler = logging.StreamHandler()
    if _log_handler not in logger.handlers:
        logger.addHandler(_log_handler)
    _log_handler.setFormatter(logging.Formatter(settings.logging.format))

    return logger


def get_log_handler() -> Optional[logging.Handler]:
    """The handler configure_logging attached, if it has run"""
    return _log_handler


# Export main components
__all__ = [
    "MixinSettings", "Environment", "LoggingConfig",
    "MEMBERSHIP_IMMEDIATE", "MEMBERSHIP_ON_RETIREMENT", "MEMBERSHIP_POLICIES",
    "set_settings", "get_settings", "reset_settings",
    "configure_from_dict", "configure_logging", "get_log_handler",
]
