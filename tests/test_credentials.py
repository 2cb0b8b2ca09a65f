from __future__ import annotations

import json

import pytest

from app.core.credentials import STORAGE_KEY, CredentialStore
from app.core.exceptions import NotConfiguredError, ValidationError
from app.schemas.credential import Credential


@pytest.mark.parametrize(
    "url,api_key",
    [("", "key"), ("https://n8n.example.com", ""), ("   ", "key"), ("", "")],
)
def test_save_rejects_blank_fields(url, api_key):
    storage: dict[str, str] = {}
    store = CredentialStore(storage)
    with pytest.raises(ValidationError):
        store.save(Credential(base_url=url, api_key=api_key))
    assert not store.is_configured
    assert store.load() is None
    assert storage == {}


def test_save_then_load_returns_same_credential():
    storage: dict[str, str] = {}
    store = CredentialStore(storage)
    credential = Credential(base_url="https://n8n.example.com/", api_key="abc")
    store.save(credential)

    assert store.is_configured
    assert json.loads(storage[STORAGE_KEY]) == {"url": "https://n8n.example.com/", "apiKey": "abc"}

    restored = CredentialStore(storage).load()
    assert restored == credential
    assert store.load() == credential


def test_clear_returns_to_unconfigured():
    storage: dict[str, str] = {}
    store = CredentialStore(storage)
    store.save(Credential(url="https://n8n.example.com", apiKey="abc"))
    store.clear()

    assert not store.is_configured
    assert store.load() is None
    assert STORAGE_KEY not in storage
    with pytest.raises(NotConfiguredError):
        store.require()


def test_failed_save_keeps_previous_credential():
    store = CredentialStore()
    first = store.save(Credential(base_url="https://a.example.com", api_key="k1"))
    with pytest.raises(ValidationError):
        store.save(Credential(base_url="", api_key="k2"))
    assert store.require() == first


def test_load_discards_corrupt_record():
    storage = {STORAGE_KEY: "{not json"}
    store = CredentialStore(storage)
    assert store.load() is None
    assert STORAGE_KEY not in storage


def test_load_discards_incomplete_record():
    storage = {STORAGE_KEY: json.dumps({"url": "https://n8n.example.com", "apiKey": ""})}
    store = CredentialStore(storage)
    assert store.load() is None
    assert not store.is_configured
