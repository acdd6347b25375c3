"""
Chat platform (Discord forum) client.

Provides the rate-limit aware HTTP transport, the forum thread operations and
the message payload models.
"""

from .client import DiscordForumClient
from .http import AttemptOutcome, AttemptResult, DiscordHTTP, classify_response
from .models import Embed, EmbedField, MessagePayload, ThreadIdentity, ThreadRef

__all__ = [
    "AttemptOutcome",
    "AttemptResult",
    "DiscordForumClient",
    "DiscordHTTP",
    "Embed",
    "EmbedField",
    "MessagePayload",
    "ThreadIdentity",
    "ThreadRef",
    "classify_response",
]
