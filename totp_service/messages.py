# totp_service/messages.py
# Human-readable texts for errors and security warnings, looked up by dotted key.
# Only used to render text; nothing branches on the returned strings.

from typing import Any, Mapping

DEFAULT_MESSAGE = "Message not found"

CATALOG = {
    "validation": {
        "secret_empty": "The secret key cannot be empty.",
        "secret_length": "The secret key is invalid. Its length must be a multiple of 8.",
        "secret_characters": "The secret key contains invalid characters.",
        "code_format": "The code must be a %d-digit number.",
    },
    "configuration": {
        "unsupported_algorithm": "Unsupported hash algorithm.",
        "invalid_digits": "Digits must be either 6 or 8.",
        "invalid_period": "Period must be a positive integer.",
        "invalid_discrepancy": "Discrepancy must be between 0 and %d.",
        "invalid_max_discrepancy": "Maximum discrepancy must be a non-negative integer.",
    },
    "encoding": {
        "invalid_base32_char": "Invalid Base32 character: %s",
    },
    "generation": {
        "random_source_failed": "Unable to read from the secure random source: %s",
    },
    "security": {
        "weak_secret_log": "TOTP Security Warning: Weak secret detected (%d bytes, recommend >= 20 bytes)",
        "audit_secret_empty": "Secret is empty (0 bytes).",
        "audit_invalid_base32": "Secret is not valid Base32 format.",
        "audit_zero_bytes": "Secret decodes to 0 bytes.",
        "audit_weak_secret": "Secret is weak (%d bytes); recommend >= 20 bytes for adequate security.",
    },
}


class MessageStore:
    """Read-only view over a nested message catalog.

    ``get("validation.code_format", 6)`` walks the dotted path and applies
    %-formatting when arguments are given. Unknown keys never raise; they
    render as ``"Message not found: <key>"`` instead.
    """

    def __init__(self, catalog: Mapping[str, Any]):
        self._catalog = catalog

    def _lookup(self, key: str):
        node: Any = self._catalog
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None

    def get(self, key: str, *args) -> str:
        message = self._lookup(key)
        if message is None:
            return f"{DEFAULT_MESSAGE}: {key}"
        if not args:
            return message
        try:
            return message % args
        except (TypeError, ValueError):
            # arguments that do not fit the template leave it unformatted
            return message

    def has(self, key: str) -> bool:
        return self._lookup(key) is not None


MESSAGES = MessageStore(CATALOG)
