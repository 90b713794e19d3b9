"""Tests for settings persistence and overrides."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from inkwell.services.settings import SecretVault, Settings, SettingsStore, redact_secret

_ENV_NAMES = (
    "GROQ_API_KEY",
    "INKWELL_API_KEY",
    "INKWELL_MODEL",
    "INKWELL_PORT",
    "INKWELL_RATE_LIMIT_WINDOW",
    "INKWELL_RATE_LIMIT_MAX_REQUESTS",
    "INKWELL_DEBUG_LOGGING",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store(tmp_path: Path) -> SettingsStore:
    return SettingsStore(tmp_path / "settings.json")


def test_missing_file_yields_defaults(store: SettingsStore) -> None:
    settings = store.load()

    assert settings == Settings()
    assert settings.rate_limit_window == 60.0
    assert settings.rate_limit_max_requests == 5


def test_save_encrypts_api_key_and_round_trips(store: SettingsStore) -> None:
    store.save(Settings(api_key="gsk-secret-value", model="custom-model", port=9000))

    raw = json.loads(store.path.read_text(encoding="utf-8"))
    assert "api_key" not in raw
    assert raw["api_key_ciphertext"]
    assert "gsk-secret-value" not in store.path.read_text(encoding="utf-8")

    loaded = store.load()
    assert loaded.api_key == "gsk-secret-value"
    assert loaded.model == "custom-model"
    assert loaded.port == 9000


def test_undecryptable_key_is_dropped(store: SettingsStore, tmp_path: Path) -> None:
    store.save(Settings(api_key="secret"))
    other_vault = SecretVault(key_path=tmp_path / "other.key")

    loaded = SettingsStore(store.path, vault=other_vault).load()

    assert loaded.api_key == ""


def test_invalid_json_falls_back_to_defaults(store: SettingsStore) -> None:
    store.path.write_text("{broken", encoding="utf-8")

    assert store.load() == Settings()


def test_unknown_fields_are_ignored(store: SettingsStore) -> None:
    store.path.write_text(json.dumps({"model": "m", "legacy": True}), encoding="utf-8")

    assert store.load().model == "m"


def test_environment_overrides_win_over_cli_overrides(
    store: SettingsStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("INKWELL_MODEL", "env-model")
    monkeypatch.setenv("INKWELL_RATE_LIMIT_MAX_REQUESTS", "10")
    monkeypatch.setenv("INKWELL_RATE_LIMIT_WINDOW", "30.5")
    monkeypatch.setenv("INKWELL_DEBUG_LOGGING", "yes")

    settings = store.load(overrides={"model": "cli-model", "port": 9100})

    assert settings.model == "env-model"
    assert settings.port == 9100
    assert settings.rate_limit_max_requests == 10
    assert settings.rate_limit_window == 30.5
    assert settings.debug_logging is True


def test_invalid_numeric_environment_values_are_ignored(
    store: SettingsStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("INKWELL_PORT", "eighty")
    monkeypatch.setenv("INKWELL_RATE_LIMIT_WINDOW", "soon")

    settings = store.load()

    assert settings.port == 8000
    assert settings.rate_limit_window == 60.0


def test_groq_key_is_read_and_inkwell_key_takes_precedence(
    store: SettingsStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("GROQ_API_KEY", "groq-key")
    assert store.load().api_key == "groq-key"

    monkeypatch.setenv("INKWELL_API_KEY", "inkwell-key")
    assert store.load().api_key == "inkwell-key"


def test_client_settings_carry_provider_fields() -> None:
    settings = Settings(api_key="k", model="m", request_timeout=12.0, default_headers={"X-Team": "docs"})

    client_settings = settings.client_settings()

    assert client_settings.api_key == "k"
    assert client_settings.model == "m"
    assert client_settings.request_timeout == 12.0
    assert client_settings.default_headers == {"X-Team": "docs"}


def test_vault_reuses_persisted_key(tmp_path: Path) -> None:
    key_path = tmp_path / "vault.key"
    token = SecretVault(key_path=key_path).encrypt("value")

    assert SecretVault(key_path=key_path).decrypt(token) == "value"
    with pytest.raises(ValueError):
        SecretVault(key_path=tmp_path / "fresh.key").decrypt(token)


@pytest.mark.parametrize(
    ("value", "expected"),
    [("", ""), ("abcd", "****"), ("gsk-123456", "gs******56")],
)
def test_redact_secret(value: str, expected: str) -> None:
    assert redact_secret(value) == expected
