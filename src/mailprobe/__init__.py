"""Assert on emails captured by a Mailtrap test inbox."""

__version__ = "0.1.0"

from .assertions import EmailAssertions
from .client import MailtrapClient, get_client
from .config import MailtrapConfig, load_config
from .errors import ConfigError, EmailMismatchError, EmptyInboxError
from .models import Message, MessageField
from .session import inbox_session

__all__ = [
    "ConfigError",
    "EmailAssertions",
    "EmailMismatchError",
    "EmptyInboxError",
    "MailtrapClient",
    "MailtrapConfig",
    "Message",
    "MessageField",
    "get_client",
    "inbox_session",
    "load_config",
]
