import httpx
import pytest

from hackattic.services.http_client import ClientConfig, HTTPClient
from hackattic.services.problem_service import ProblemClient
from tests.test_utils import BASE_URL


@pytest.fixture
def make_client():
    """
    Build HTTPClients backed by an httpx.MockTransport.

    Usage: client = make_client(handler, timeout=5.0)
    """
    clients = []

    def factory(handler, **config_overrides) -> HTTPClient:
        config = ClientConfig(base_url=BASE_URL, **config_overrides)
        client = HTTPClient(config, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def make_problem_client(make_client):
    def factory(handler) -> ProblemClient:
        return ProblemClient(make_client(handler))

    return factory
