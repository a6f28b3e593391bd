"""Organization scoping dependency."""

from fastapi import HTTPException, Request

from app.core.config import get_settings
from app.core.organization_validation import is_valid_organization_id_format


async def get_organization_id(request: Request) -> str:
    """Return the organization ID forwarded by the gateway in the organization header."""
    name = get_settings().organization_header_name
    value = request.headers.get(name)
    if not value:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required header: {name}",
        )
    if not is_valid_organization_id_format(value):
        raise HTTPException(
            status_code=400,
            detail="Invalid organization ID format (use alphanumeric, hyphen, underscore; max 64 characters)",
        )
    return value
