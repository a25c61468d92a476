"""HTTP client for the Mailtrap inbox API."""

from typing import Any

import httpx
from loguru import logger

from .config import MailtrapConfig, load_config
from .errors import EmptyInboxError
from .models import Message


class MailtrapClient:
    """Synchronous client for a single Mailtrap test inbox.

    Every call goes to the network; nothing is cached between calls.
    Transport errors (network failures, non-2xx responses, malformed JSON)
    propagate unchanged.

    Example:
        with MailtrapClient(load_config()) as client:
            message = client.fetch_latest_message()
            print(message.subject)
    """

    def __init__(
        self,
        config: MailtrapConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Validated connection settings
            transport: Optional httpx transport (used to fake the API in tests)
        """
        self.config = config
        self._http = httpx.Client(
            base_url=config.api_base_url,
            headers={"Api-Token": config.client_id},
            timeout=config.timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._http.close()

    def __enter__(self) -> "MailtrapClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def inbox_id(self) -> str:
        return self.config.inbox_id

    def _request(self, method: str, path: str) -> httpx.Response:
        logger.debug(f"{method} {self.config.api_base_url}{path}")
        response = self._http.request(method, path)
        logger.debug(f"{method} {path} -> {response.status_code}")
        response.raise_for_status()
        return response

    def list_messages(self, inbox_id: str | None = None) -> list[Message]:
        """Get all messages in the inbox, newest first.

        Raises:
            EmptyInboxError: If the inbox holds no messages
        """
        inbox_id = inbox_id or self.inbox_id
        data = self._request("GET", f"inboxes/{inbox_id}/messages").json()

        if not isinstance(data, list):
            raise ValueError(f"Expected a list of messages, got {type(data).__name__}")
        if not data:
            raise EmptyInboxError(inbox_id)

        return [Message.model_validate(item) for item in data]

    def fetch_latest_message(self, inbox_id: str | None = None) -> Message:
        """Get the most recent message in the inbox."""
        return self.list_messages(inbox_id)[0]

    def clean_inbox(self, inbox_id: str | None = None) -> None:
        """Delete all messages from the inbox."""
        inbox_id = inbox_id or self.inbox_id
        self._request("PATCH", f"inboxes/{inbox_id}/clean")
        logger.info(f"Cleaned Mailtrap inbox {inbox_id}")


def get_client(config: MailtrapConfig | None = None) -> MailtrapClient:
    """Get a client for the given or loaded configuration."""
    if config is None:
        config = load_config()
    return MailtrapClient(config)
