import os
import sys
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault('APP_ENV', 'test')

from app.core.credentials import CredentialStore  # noqa: E402
from app.integrations.n8n import N8NClient  # noqa: E402
from app.schemas.credential import Credential  # noqa: E402


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every request it answered."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def store():
    store = CredentialStore()
    store.save(Credential(base_url='https://n8n.example.com/', api_key='secret-key'))
    return store


@pytest.fixture
def make_client(store):
    def factory(handler):
        transport = RecordingTransport(handler)
        return N8NClient(store, transport=transport), transport

    return factory
