"""Tests for the Mailtrap HTTP client."""

import json

import httpx
import pytest

from mailprobe.client import MailtrapClient, get_client
from mailprobe.config import MailtrapConfig
from mailprobe.errors import EmptyInboxError


def fixed_response(status: int, body: str) -> httpx.MockTransport:
    """Transport that answers every request with the same raw body."""
    return httpx.MockTransport(
        lambda request: httpx.Response(
            status, content=body.encode(), headers={"Content-Type": "application/json"}
        )
    )


class TestRequests:
    def test_list_messages_request(self, client, fake_api):
        fake_api.deliver("42", subject="Hi")

        client.list_messages()

        request = fake_api.requests[0]
        assert request.method == "GET"
        assert str(request.url) == "https://mailtrap.io/api/v1/inboxes/42/messages"
        assert request.headers["Api-Token"] == "tok"

    def test_clean_inbox_request(self, client, fake_api):
        client.clean_inbox()

        request = fake_api.requests[0]
        assert request.method == "PATCH"
        assert str(request.url) == "https://mailtrap.io/api/v1/inboxes/42/clean"
        assert request.headers["Api-Token"] == "tok"

    def test_version_in_url(self, fake_api):
        config = MailtrapConfig(client_id="tok", inbox_id="42", version="v2")
        fake_api.deliver("42", subject="Hi")

        with MailtrapClient(config, transport=fake_api.transport) as client:
            client.list_messages()

        assert str(fake_api.requests[0].url) == "https://mailtrap.io/api/v2/inboxes/42/messages"

    def test_explicit_inbox_id(self, client, fake_api):
        fake_api.deliver("7", subject="Other inbox")

        messages = client.list_messages("7")

        assert messages[0].subject == "Other inbox"
        assert fake_api.requests[0].url.path == "/api/v1/inboxes/7/messages"


class TestListMessages:
    def test_newest_first(self, client, fake_api):
        fake_api.deliver("42", subject="first")
        fake_api.deliver("42", subject="second")

        messages = client.list_messages()

        assert [m.subject for m in messages] == ["second", "first"]

    def test_empty_inbox(self, client):
        with pytest.raises(EmptyInboxError, match="No messages received in inbox 42"):
            client.list_messages()

    def test_empty_inbox_is_assertion_error(self, client):
        with pytest.raises(AssertionError):
            client.list_messages()

    def test_no_caching(self, client, fake_api):
        fake_api.deliver("42", subject="one")
        client.list_messages()
        fake_api.deliver("42", subject="two")

        assert client.list_messages()[0].subject == "two"
        assert len(fake_api.requests) == 2


class TestFetchLatestMessage:
    def test_returns_head(self, client, fake_api):
        fake_api.deliver("42", subject="m1", from_email="old@x.com")
        fake_api.deliver("42", subject="m0", from_email="new@x.com")

        latest = client.fetch_latest_message()

        assert latest.subject == "m0"
        assert latest.from_email == "new@x.com"

    def test_empty_inbox(self, client):
        with pytest.raises(EmptyInboxError):
            client.fetch_latest_message()


class TestCleanInbox:
    def test_then_list_is_empty(self, client, fake_api):
        fake_api.deliver("42", subject="Hi")
        fake_api.deliver("42", subject="Again")

        assert client.clean_inbox() is None
        assert fake_api.inboxes["42"] == []
        with pytest.raises(EmptyInboxError):
            client.list_messages()

    def test_idempotent(self, client, fake_api):
        client.clean_inbox()
        client.clean_inbox()
        assert fake_api.inboxes["42"] == []


class TestTransportErrors:
    def test_http_error_propagates(self, client, fake_api):
        fake_api.fail_with = 401
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            client.list_messages()
        assert exc_info.value.response.status_code == 401

    def test_clean_http_error_propagates(self, client, fake_api):
        fake_api.fail_with = 500
        with pytest.raises(httpx.HTTPStatusError):
            client.clean_inbox()

    def test_malformed_json(self, config):
        with MailtrapClient(config, transport=fixed_response(200, "not json")) as client:
            with pytest.raises(json.JSONDecodeError):
                client.list_messages()

    def test_non_list_payload(self, config):
        with MailtrapClient(config, transport=fixed_response(200, '{"error": "x"}')) as client:
            with pytest.raises(ValueError, match="Expected a list"):
                client.list_messages()

    def test_network_error(self, config):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        with MailtrapClient(config, transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(httpx.ConnectError):
                client.fetch_latest_message()


class TestGetClient:
    def test_with_config(self, config):
        client = get_client(config)
        assert client.config is config
        assert client.inbox_id == "42"
        client.close()

    def test_loads_config(self, monkeypatch, config):
        monkeypatch.setattr("mailprobe.client.load_config", lambda: config)
        with get_client() as client:
            assert client.config is config
