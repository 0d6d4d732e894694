from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from profiles_api.config import Settings
from profiles_api.main import create_app
from profiles_api.passwords import Sha256PasswordVerifier
from profiles_api.store import InMemoryRecordStore, JsonRecordStore


def make_settings(tmp_path: Path, **overrides) -> Settings:
    settings = Settings(
        data_dir=tmp_path / "data",
        public_dir=tmp_path / "public",
    )
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def json_store(settings: Settings) -> JsonRecordStore:
    return JsonRecordStore.from_settings(settings)


@pytest.fixture
def client(settings: Settings, json_store: JsonRecordStore) -> TestClient:
    return TestClient(create_app(settings, store=json_store))


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def verifier() -> Sha256PasswordVerifier:
    return Sha256PasswordVerifier()
