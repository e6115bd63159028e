from typing import Optional

from fastapi import Depends, Request

from .config import Settings, get_settings
from .errors import ApiError
from .models import Principal

BEARER_PREFIX = "Bearer "


def extract_api_key(request: Request) -> Optional[str]:
    """X-API-Key wins; otherwise fall back to an Authorization bearer token."""
    key = request.headers.get("X-API-Key")
    if key:
        return key
    authorization = request.headers.get("Authorization", "")
    if authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):].strip() or None
    return None


async def require_api_key(request: Request, settings: Settings = Depends(get_settings)) -> Principal:
    api_key = extract_api_key(request)
    if not api_key:
        raise ApiError.unauthorized("Access denied. No API key provided.")
    if api_key not in settings.api_keys:
        raise ApiError.unauthorized("Access denied. Invalid API key.")

    # No identity store behind the allow-list, so every key maps to the same client.
    principal = Principal(id="user-123", name="Catalog Client", role="editor", apiKey=api_key)
    request.state.user = principal
    return principal
