"""Test configuration and fixtures for swift-tools."""

from typing import Optional

import pytest

from swift_tools.auth import AuthSession
from swift_tools.objectstorage import AccountClient, ContainerClient, ContainerDescriptor
from swift_tools.transport import RequestSpec, ResponseEnvelope

STORAGE_URL = "https://api.example.com/v1/AUTH_test"
TOKEN = "tk-0123456789"


class FakeExecutor:
    """Records every ``RequestSpec`` and replays queued responses."""

    def __init__(self):
        self.requests: list[RequestSpec] = []
        self.bodies: list[Optional[bytes]] = []
        self.responses: list[ResponseEnvelope] = []
        self.closed = False

    def queue(self, status: int, headers: Optional[dict] = None, body: bytes = b""):
        self.responses.append(ResponseEnvelope.build(status, headers or {}, body))
        return self

    def send(self, spec: RequestSpec) -> ResponseEnvelope:
        self.requests.append(spec)
        if hasattr(spec.body, "read"):
            self.bodies.append(spec.body.read())
        else:
            self.bodies.append(spec.body)
        response = self.responses.pop(0)
        return ResponseEnvelope.build(
            response.status_code, response.headers, response.body, spec.url
        )

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> RequestSpec:
        return self.requests[-1]


@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory for testing."""
    return tmp_path


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def auth_session():
    return AuthSession(storage_url=STORAGE_URL, token=TOKEN)


@pytest.fixture
def account(fake_executor, auth_session):
    return AccountClient(fake_executor, auth_session)


@pytest.fixture
def container(fake_executor, auth_session):
    descriptor = ContainerDescriptor(
        name="photos",
        url=f"{STORAGE_URL}/photos",
        metadata={"x-container-object-count": "2"},
    )
    return ContainerClient(fake_executor, auth_session, descriptor)


@pytest.fixture
def sample_file(temp_dir):
    """Create a small local file for uploads."""
    path = temp_dir / "report.txt"
    path.write_bytes(b"quarterly numbers\n")
    return path
