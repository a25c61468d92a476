"""Shared fixtures: an in-memory fake of the Mailtrap inbox API."""

import httpx
import pytest

from mailprobe.client import MailtrapClient
from mailprobe.config import MailtrapConfig


class FakeMailtrap:
    """Serves the messages and clean endpoints for any inbox id."""

    def __init__(self):
        self.inboxes: dict[str, list[dict]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None

    def deliver(self, inbox_id: str, **fields) -> None:
        """Add a message as the newest in the inbox."""
        messages = self.inboxes.setdefault(inbox_id, [])
        fields.setdefault("id", len(messages) + 1)
        messages.insert(0, fields)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with:
            return httpx.Response(self.fail_with, json={"error": "Unauthorized"})

        parts = request.url.path.strip("/").split("/")
        # api / v1 / inboxes / {id} / {action}
        if len(parts) != 5 or parts[2] != "inboxes":
            return httpx.Response(404, json={"error": "Not Found"})
        inbox_id, action = parts[3], parts[4]

        if request.method == "GET" and action == "messages":
            return httpx.Response(200, json=self.inboxes.get(inbox_id, []))
        if request.method == "PATCH" and action == "clean":
            self.inboxes[inbox_id] = []
            return httpx.Response(200, json={"id": int(inbox_id) if inbox_id.isdigit() else inbox_id})
        return httpx.Response(405)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api():
    """A fresh fake Mailtrap API."""
    return FakeMailtrap()


@pytest.fixture
def config():
    """Test configuration matching the fake API."""
    return MailtrapConfig(client_id="tok", inbox_id="42")


@pytest.fixture
def client(config, fake_api):
    """A MailtrapClient wired to the fake API."""
    with MailtrapClient(config, transport=fake_api.transport) as client:
        yield client
