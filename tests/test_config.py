"""Test environment-driven configuration."""
import pytest

from core.config import AppConfig, AuthConfig, DatabaseConfig, ServiceConfig, check_secrets


def test_defaults():
    config = ServiceConfig.default()
    assert config.auth.token_ttl_seconds == 3600
    assert config.auth.jwt_algorithm == "HS256"
    assert not config.database.is_sqlite


def test_database_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./books.db")
    monkeypatch.setenv("DB_POOL_SIZE", "5")
    monkeypatch.setenv("DB_ECHO", "true")
    config = DatabaseConfig.from_env()
    assert config.is_sqlite
    assert config.pool_size == 5
    assert config.echo


def test_auth_from_env(monkeypatch):
    monkeypatch.setenv("JWT_ISSUER", "issuer-x")
    monkeypatch.setenv("JWT_TTL_SECONDS", "600")
    monkeypatch.setenv("AUTH_SEED_USERNAME", "")
    config = AuthConfig.from_env()
    assert config.jwt_issuer == "issuer-x"
    assert config.token_ttl_seconds == 600
    assert not config.seed_enabled


def test_app_cors_origins(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("DEBUG", "no")
    config = AppConfig.from_env()
    assert config.cors_origins == ("http://a.test", "http://b.test")
    assert not config.debug


def test_default_key_refused_outside_debug():
    with pytest.raises(RuntimeError, match="JWT_KEY"):
        check_secrets(ServiceConfig.default())


def test_default_key_tolerated_in_debug():
    config = ServiceConfig(app=AppConfig(debug=True))
    warnings = check_secrets(config)
    assert any("JWT_KEY" in w for w in warnings)
    assert any("AUTH_SEED_PASSWORD" in w for w in warnings)


def test_configured_secrets_pass_quietly():
    config = ServiceConfig(
        auth=AuthConfig(jwt_key="k" * 40, seed_username=""),
    )
    assert check_secrets(config) == []
