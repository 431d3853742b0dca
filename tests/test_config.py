"""
tests/test_config.py -- Tests for the Settings SECRET_KEY policy.

Settings is instantiated directly with keyword arguments, which take
precedence over the environment set up in conftest.py.
"""

from __future__ import annotations

import pytest

from core.config import Settings, get_settings


def test_debug_generates_secret_key() -> None:
    settings = Settings(debug=True, secret_key="")
    assert len(settings.secret_key) >= 32


def test_production_requires_secret_key() -> None:
    with pytest.raises(ValueError, match="SECRET_KEY is required"):
        Settings(debug=False, secret_key="")


def test_short_secret_key_rejected() -> None:
    with pytest.raises(ValueError, match="at least 32 characters"):
        Settings(debug=False, secret_key="too-short")


def test_explicit_secret_key_kept() -> None:
    key = "k" * 40
    assert Settings(debug=False, secret_key=key).secret_key == key


def test_bcrypt_rounds_bounds() -> None:
    with pytest.raises(ValueError):
        Settings(debug=True, bcrypt_rounds=3)


def test_environment_is_read() -> None:
    """conftest.py sets these before the first get_settings() call."""
    settings = get_settings()
    assert settings.debug is True
    assert settings.bcrypt_rounds == 4
    assert "testserver" in settings.allowed_hosts
    assert get_settings() is settings
