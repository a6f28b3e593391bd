"""Organization ID format validation for the organization header."""

import re

# CUID/UUID-style: alphanumeric, hyphen, underscore.
ORGANIZATION_ID_MAX_LENGTH = 64
_ORGANIZATION_ID_RE = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(ORGANIZATION_ID_MAX_LENGTH) + r"}$"
)


def is_valid_organization_id_format(value: str) -> bool:
    """Return True if value looks like an organization ID."""
    if not value or len(value) > ORGANIZATION_ID_MAX_LENGTH:
        return False
    return bool(_ORGANIZATION_ID_RE.fullmatch(value))
