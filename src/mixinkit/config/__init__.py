"""
MixinKit Configuration

Process-wide settings for the composition engine and its logging.
"""

from .settings import (
    MixinSettings, Environment, LoggingConfig,
    MEMBERSHIP_IMMEDIATE, MEMBERSHIP_ON_RETIREMENT, MEMBERSHIP_POLICIES,
    set_settings, get_settings, reset_settings,
    configure_from_dict, configure_logging, get_log_handler,
)

__all__ = [
    "MixinSettings", "Environment", "LoggingConfig",
    "MEMBERSHIP_IMMEDIATE", "MEMBERSHIP_ON_RETIREMENT", "MEMBERSHIP_POLICIES",
    "set_settings", "get_settings", "reset_settings",
    "configure_from_dict", "configure_logging", "get_log_handler",
]
