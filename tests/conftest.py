from typing import Callable

import httpx
import pytest

from core.domain.models import Identity


@pytest.fixture
def identity():
    return Identity(name="Jane", reg_no="REG1", email="jane@x.com")


@pytest.fixture
def recorded_requests():
    return []


@pytest.fixture
def make_client(recorded_requests) -> Callable[..., httpx.Client]:
    """Build an httpx.Client whose requests are answered by `handler`."""

    clients = []

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(recording_handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


