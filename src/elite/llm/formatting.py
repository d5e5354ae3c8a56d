"""Display helpers for dispatcher error messages."""

from __future__ import annotations

import re

# "Failed to get response from openai:" / "Failed to get AI response:"
_BOILERPLATE_PREFIX = re.compile(
    r"Failed to get (?:response from [^:]+?|AI response):"
)


def format_error_message(message: str) -> str:
    """Strip the dispatcher's boilerplate prefix from *message*.

    Returns the text after the prefix, trimmed.  Messages without a
    recognised prefix are returned unchanged.
    """
    match = _BOILERPLATE_PREFIX.search(message)
    if match is None:
        return message
    return message[match.end():].strip()
