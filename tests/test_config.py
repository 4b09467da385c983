"""Tests for configuration selection."""
import pytest

from app.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    get_config_class,
)


def test_testing_config_uses_memory_db(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'testing')
    config = get_config_class()
    assert config is TestingConfig
    assert config.TESTING is True
    assert config.RATELIMIT_ENABLED is False
    assert config.SQLALCHEMY_DATABASE_URI.startswith('sqlite://')


def test_development_is_default(monkeypatch):
    monkeypatch.delenv('APP_ENV', raising=False)
    config = get_config_class()
    assert config is DevelopmentConfig
    assert config.DEBUG is True


def test_production_requires_secrets(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    for key in ('SECRET_KEY', 'DATABASE_URL', 'JWT_SECRET'):
        monkeypatch.delenv(key, raising=False)
    with pytest.raises(RuntimeError) as exc:
        get_config_class()
    assert 'SECRET_KEY' in str(exc.value)
    assert 'JWT_SECRET' in str(exc.value)


def test_production_with_secrets(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    monkeypatch.setenv('SECRET_KEY', 's')
    monkeypatch.setenv('DATABASE_URL', 'postgresql://db/arzaquna')
    monkeypatch.setenv('JWT_SECRET', 'j')
    assert get_config_class() is ProductionConfig


def test_defaults(app):
    assert app.config['ACCESS_TOKEN_LIFETIME_MIN'] == 60
    assert app.config['REFRESH_TOKEN_LIFETIME_DAYS'] == 30
    assert app.config['DEFAULT_PAGE_SIZE'] == 10
    assert app.config['MAX_PAGE_SIZE'] == 100
    assert app.config['APPLY_LIMIT_PER_IP'] == '10 per hour'
