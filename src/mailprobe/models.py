"""Core data models for mailprobe."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class MessageField(str, Enum):
    """Message fields that assertions can compare."""

    FROM_EMAIL = "from_email"
    FROM_NAME = "from_name"
    TO_EMAIL = "to_email"
    TO_NAME = "to_name"
    SUBJECT = "subject"
    TEXT_BODY = "text_body"
    HTML_BODY = "html_body"

    @classmethod
    def parse(cls, name: "str | MessageField") -> "MessageField":
        """Resolve a field name, rejecting anything not enumerated."""
        try:
            return cls(name)
        except ValueError:
            allowed = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown message field {name!r}; expected one of: {allowed}") from None


class Message(BaseModel):
    """A captured email as returned by the Mailtrap API."""

    id: str = Field(default="", description="Opaque message identifier")

    from_email: str = ""
    from_name: str = ""
    to_email: str = ""
    to_name: str = ""

    subject: str = ""
    text_body: str = ""
    html_body: str = ""

    model_config = {"frozen": True, "extra": "ignore", "coerce_numbers_to_str": True}

    @field_validator("*", mode="before")
    @classmethod
    def null_to_empty(cls, value: Any) -> Any:
        # The API sends null for absent names and bodies
        return "" if value is None else value

    def get(self, field: MessageField | str) -> str:
        """Value of a comparable field."""
        return getattr(self, MessageField.parse(field).value)

    @property
    def sender(self) -> str:
        if self.from_name:
            return f"{self.from_name} <{self.from_email}>"
        return self.from_email

    @property
    def recipient(self) -> str:
        if self.to_name:
            return f"{self.to_name} <{self.to_email}>"
        return self.to_email


# Exit codes for the CLI
class ExitCode(int, Enum):
    SUCCESS = 0
    EMPTY_INBOX = 1
    CONFIG_ERROR = 2
    CONNECTION_ERROR = 3
