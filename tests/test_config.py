"""Unit tests for core/config.py -- Settings validation.

Covers:
- production mode without SECRET_KEY refuses to start
- debug mode auto-generates a long SECRET_KEY
- short keys are rejected in either mode
- token lifetime defaults to 24 hours
"""

import pytest

from core.config import Settings


def test_production_requires_secret_key():
    with pytest.raises(ValueError, match="SECRET_KEY is required"):
        Settings(debug=False, secret_key="")


def test_debug_generates_secret_key():
    settings = Settings(debug=True, secret_key="")
    assert len(settings.secret_key) >= 32


def test_short_secret_key_rejected():
    with pytest.raises(ValueError, match="at least 32 characters"):
        Settings(debug=True, secret_key="too-short")


def test_token_lifetime_default_is_one_day():
    settings = Settings(debug=False, secret_key="k" * 32)
    assert settings.token_expire_seconds == 24 * 60 * 60


def test_bcrypt_rounds_bounds():
    with pytest.raises(ValueError):
        Settings(debug=True, bcrypt_rounds=2)
