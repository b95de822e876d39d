"""
Tests for settings parsing.
"""

import pytest
from pydantic import ValidationError

from app.core.config import Settings

REQUIRED = {"database_url": "sqlite+aiosqlite:///:memory:", "jwt_secret_key": "k"}


def test_defaults():
    settings = Settings(**REQUIRED)

    assert settings.jwt_expire_minutes == 30
    assert settings.api_prefix == "/api/v1"
    assert settings.default_page_size == 10
    assert settings.max_page_size == 100


@pytest.mark.parametrize("raw,expected", [
    ('["https://shop.example", "https://admin.example"]', ["https://shop.example", "https://admin.example"]),
    ("https://shop.example, https://admin.example", ["https://shop.example", "https://admin.example"]),
    ("*", ["*"]),
])
def test_cors_origins_accept_json_or_comma_list(raw, expected):
    assert Settings(**REQUIRED, cors_origins=raw).cors_origins == expected


def test_log_level_normalized():
    assert Settings(**REQUIRED, log_level=" debug ").log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(**REQUIRED, log_level="chatty")


def test_docs_only_enabled_locally():
    assert Settings(**REQUIRED, environment="local").docs_enabled
    assert not Settings(**REQUIRED, environment="production").docs_enabled
