"""API key authentication for the table API and the chat function."""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

security = HTTPBearer(auto_error=False)


async def require_api_key(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """
    Accept the anon or the service-role key as a bearer token or ``apikey`` header.

    Either credential may carry the key: a signed-in client sends its own
    token as the bearer and the anon key as ``apikey``.

    With no keys configured every request is accepted.
    """
    settings = request.app.state.settings
    accepted = {key for key in (settings.ANON_KEY, settings.SERVICE_ROLE_KEY) if key}
    if not accepted:
        return None

    presented = [credentials.credentials if credentials else None, request.headers.get("apikey")]
    token = next((key for key in presented if key in accepted), None)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token
