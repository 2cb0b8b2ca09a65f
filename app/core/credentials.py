"""Session-scoped storage for the single n8n credential."""
from __future__ import annotations

import json
import logging
from typing import MutableMapping

from app.core.exceptions import NotConfiguredError, ValidationError
from app.schemas.credential import Credential

logger = logging.getLogger(__name__)

STORAGE_KEY = "n8n_config"


class CredentialStore:
    """Owns the operator's n8n credential for the lifetime of the session.

    The record is kept as JSON under ``STORAGE_KEY`` in ``storage`` so a
    session-like mapping (cookie session, shared dict) can back it.
    """

    def __init__(self, storage: MutableMapping[str, str] | None = None):
        self._storage: MutableMapping[str, str] = storage if storage is not None else {}
        self._credential: Credential | None = None

    @property
    def is_configured(self) -> bool:
        return self._credential is not None

    @property
    def credential(self) -> Credential | None:
        return self._credential

    def save(self, credential: Credential) -> Credential:
        base_url = (credential.base_url or "").strip()
        api_key = (credential.api_key or "").strip()
        if not base_url or not api_key:
            raise ValidationError("Both the n8n URL and the API key are required.")

        stored = Credential(base_url=base_url, api_key=api_key)
        self._storage[STORAGE_KEY] = json.dumps(stored.model_dump(by_alias=True))
        self._credential = stored
        logger.info("n8n credential saved for %s", stored.base_url)
        return stored

    def load(self) -> Credential | None:
        raw = self._storage.get(STORAGE_KEY)
        if not raw:
            self._credential = None
            return None
        try:
            payload = json.loads(raw)
            credential = Credential.model_validate(payload)
        except ValueError:
            logger.warning("Discarding unreadable n8n credential record")
            self.clear()
            return None
        if not credential.base_url or not credential.api_key:
            logger.warning("Discarding incomplete n8n credential record")
            self.clear()
            return None
        self._credential = credential
        return credential

    def clear(self) -> None:
        self._storage.pop(STORAGE_KEY, None)
        self._credential = None
        logger.info("n8n credential cleared")

    def require(self) -> Credential:
        if self._credential is None:
            raise NotConfiguredError("n8n credential is not configured")
        return self._credential
