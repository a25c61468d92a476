"""Assertion helpers over the latest message in a Mailtrap inbox.

Each helper fetches the newest message afresh and compares one field.
Nothing waits for delivery: if the email has not arrived yet, the helper
fails straight away.
"""

from collections.abc import Mapping

from .client import MailtrapClient
from .errors import EmailMismatchError
from .models import Message, MessageField


class EmailAssertions:
    """Assertion-style checks bound to a MailtrapClient."""

    def __init__(self, client: MailtrapClient) -> None:
        self.client = client

    def _assert_equals(self, field: MessageField, expected: str) -> Message:
        message = self.client.fetch_latest_message()
        actual = message.get(field)
        if actual != expected:
            raise EmailMismatchError(field.value, expected, actual)
        return message

    def _assert_contains(self, field: MessageField, expected: str) -> Message:
        message = self.client.fetch_latest_message()
        actual = message.get(field)
        if expected not in actual:
            raise EmailMismatchError(field.value, expected, actual, contains=True)
        return message

    def receive_an_email(self, expected: Mapping[str | MessageField, str]) -> Message:
        """Check every field/value pair against the latest message.

        Field names are validated before the inbox is queried.
        """
        checks = [(MessageField.parse(name), value) for name, value in expected.items()]
        message = self.client.fetch_latest_message()
        for field, value in checks:
            actual = message.get(field)
            if actual != value:
                raise EmailMismatchError(field.value, value, actual)
        return message

    def receive_an_email_from_email(self, sender_email: str) -> Message:
        return self._assert_equals(MessageField.FROM_EMAIL, sender_email)

    def receive_an_email_from_name(self, sender_name: str) -> Message:
        return self._assert_equals(MessageField.FROM_NAME, sender_name)

    def receive_an_email_to_email(self, recipient_email: str) -> Message:
        return self._assert_equals(MessageField.TO_EMAIL, recipient_email)

    def receive_an_email_to_name(self, recipient_name: str) -> Message:
        return self._assert_equals(MessageField.TO_NAME, recipient_name)

    def receive_an_email_with_subject(self, subject: str) -> Message:
        return self._assert_equals(MessageField.SUBJECT, subject)

    def receive_an_email_with_text_body(self, text_body: str) -> Message:
        return self._assert_equals(MessageField.TEXT_BODY, text_body)

    def receive_an_email_with_html_body(self, html_body: str) -> Message:
        return self._assert_equals(MessageField.HTML_BODY, html_body)

    def see_in_email_text_body(self, expected: str) -> Message:
        """Check that the latest text body contains a literal substring."""
        return self._assert_contains(MessageField.TEXT_BODY, expected)

    def see_in_email_html_body(self, expected: str) -> Message:
        """Check that the latest HTML body contains a literal substring."""
        return self._assert_contains(MessageField.HTML_BODY, expected)
