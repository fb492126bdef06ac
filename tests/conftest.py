"""
Shared fixtures for the mixinkit test suite.
"""

import logging

import pytest

from mixinkit.config import MixinSettings, set_settings, reset_settings
from mixinkit.config import settings as settings_module


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts from default settings, independent of MIXINKIT_* variables"""
    settings = MixinSettings()
    set_settings(settings)
    yield settings
    reset_settings()


@pytest.fixture(autouse=True)
def restore_mixinkit_logger(monkeypatch):
    """Undo configure_logging so handlers bound to captured streams do not leak"""
    monkeypatch.setattr(settings_module, "_log_handler", None)
    logger = logging.getLogger("mixinkit")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def calls():
    """Ordered record of initializer and finalizer calls"""
    return []
