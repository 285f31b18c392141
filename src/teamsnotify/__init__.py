"""Microsoft Teams Incoming Webhook 용 MessageCard 클라이언트."""

__version__ = "0.1.0"

from teamsnotify.client import AsyncTeamsClient, TeamsClient  # noqa: E402
from teamsnotify.errors import (  # noqa: E402
    InvalidMessageCardError,
    MalformedWebhookURLError,
    RemoteRejectionError,
    SerializationError,
    TeamsNotifyError,
    TeamsTransportError,
    UnrecognizedWebhookHostError,
    WebhookURLError,
)
from teamsnotify.format import format_as_code_block, format_as_code_snippet  # noqa: E402
from teamsnotify.messagecard import (  # noqa: E402
    Action,
    ActionType,
    Card,
    Fact,
    Image,
    OpenURITarget,
    Section,
)
from teamsnotify.validation import (  # noqa: E402
    DEFAULT_WEBHOOK_URL_VALIDATION_PATTERN,
    WebhookURLValidator,
    validate_message_card,
)

__all__ = [
    "Action",
    "ActionType",
    "AsyncTeamsClient",
    "Card",
    "DEFAULT_WEBHOOK_URL_VALIDATION_PATTERN",
    "Fact",
    "Image",
    "InvalidMessageCardError",
    "MalformedWebhookURLError",
    "OpenURITarget",
    "RemoteRejectionError",
    "Section",
    "SerializationError",
    "TeamsClient",
    "TeamsNotifyError",
    "TeamsTransportError",
    "UnrecognizedWebhookHostError",
    "WebhookURLError",
    "WebhookURLValidator",
    "format_as_code_block",
    "format_as_code_snippet",
    "validate_message_card",
]
