from __future__ import annotations

from typing import Final

# Callers branch on the error type, never on the message text.
# Grow this list only when a new type is actually emitted.
KNOWN_ERROR_TYPES: Final[set[str]] = {
    "IMPORT_FAILED",
    "INVALID_ARGUMENT",
    "PERSISTENCE_FAILED",
    "VALIDATION_FAILED",
}


def assert_known_error_type(error_type: str) -> None:
    if error_type not in KNOWN_ERROR_TYPES:
        raise ValueError(f"Unknown error type: {error_type!r}. Add it to badgedesk.core.error_types.KNOWN_ERROR_TYPES.")
