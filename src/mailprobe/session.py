"""Per-scenario inbox lifecycle."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from loguru import logger

from .assertions import EmailAssertions
from .client import MailtrapClient
from .config import MailtrapConfig


@contextmanager
def inbox_session(
    config: MailtrapConfig,
    transport: httpx.BaseTransport | None = None,
) -> Iterator[EmailAssertions]:
    """Yield assertion helpers and clean the inbox on every exit path.

    A cleanup failure raised while the scenario is already failing is
    logged so the original error reaches the caller. That only applies when
    the scenario runs inside the ``with`` block: pytest does not throw a
    failed test's exception into fixtures, so under the ``mailtrap`` fixture
    a cleanup failure is always reported as a teardown error.
    """
    client = MailtrapClient(config, transport=transport)
    failed = False
    try:
        yield EmailAssertions(client)
    except BaseException:
        failed = True
        raise
    finally:
        try:
            client.clean_inbox()
        except httpx.HTTPError as e:
            if not failed:
                raise
            logger.warning(f"Failed to clean inbox {config.inbox_id} after failed scenario: {e}")
        finally:
            client.close()
