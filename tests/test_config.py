from __future__ import annotations

from pathlib import Path

import pytest

from profiles_api.config import Settings

ENV_VARS = [
    "PROFILES_DATA_DIR",
    "PROFILES_PUBLIC_DIR",
    "PROFILES_CORS_ORIGINS",
    "PROFILES_RESERVED_NAMES",
    "PROFILES_HOST",
    "PROFILES_PORT",
    "PROFILES_SSL_KEYFILE",
    "PROFILES_SSL_CERTFILE",
    "PROFILES_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings.from_env()
    assert settings.profiles_path == Path("data") / "userData.json"
    assert settings.credentials_path == Path("data") / "userLogins.json"
    assert settings.cors_origins == ["*"]
    assert settings.reserved_names == []
    assert settings.port == 443
    assert settings.tls_enabled is False
    assert settings.log_level == "INFO"


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PROFILES_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PROFILES_CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("PROFILES_RESERVED_NAMES", "zephyr,, tuna ")
    monkeypatch.setenv("PROFILES_PORT", "8443")
    monkeypatch.setenv("PROFILES_SSL_KEYFILE", "/etc/tls/privkey.pem")
    monkeypatch.setenv("PROFILES_SSL_CERTFILE", "/etc/tls/fullchain.pem")
    monkeypatch.setenv("PROFILES_LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.profiles_path == tmp_path / "userData.json"
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.reserved_names == ["zephyr", "tuna"]
    assert settings.port == 8443
    assert settings.tls_enabled is True
    assert settings.log_level == "DEBUG"


def test_tls_needs_both_key_and_cert(monkeypatch) -> None:
    monkeypatch.setenv("PROFILES_SSL_KEYFILE", "/etc/tls/privkey.pem")
    assert Settings.from_env().tls_enabled is False


def test_bad_port_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("PROFILES_PORT", "https")
    with pytest.raises(ValueError, match="PROFILES_PORT"):
        Settings.from_env()
