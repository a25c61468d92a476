"""Exceptions raised by mailprobe.

Assertion failures subclass AssertionError so test runners report them as
failed tests. Transport errors from httpx are never wrapped.
"""


class ConfigError(ValueError):
    """Required Mailtrap settings are missing or invalid."""


class EmptyInboxError(AssertionError):
    """The test inbox holds no messages."""

    def __init__(self, inbox_id: str):
        self.inbox_id = inbox_id
        super().__init__(f"No messages received in inbox {inbox_id}")


class EmailMismatchError(AssertionError):
    """A field of the latest message does not hold the expected value."""

    def __init__(self, field: str, expected: str, actual: str, contains: bool = False):
        self.field = field
        self.expected = expected
        self.actual = actual
        self.contains = contains
        if contains:
            message = f"Email {field} does not contain {expected!r}; actual: {actual!r}"
        else:
            message = f"Email {field} mismatch: expected {expected!r}, got {actual!r}"
        super().__init__(message)
