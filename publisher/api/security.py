from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette import status

from publisher.api.deps import get_app_settings
from publisher.config import Settings

bearer_scheme = HTTPBearer(auto_error=False)


async def require_token(
    credentials: HTTPAuthorizationCredentials = Security(bearer_scheme),
    config: Settings = Depends(get_app_settings),
) -> str:
    """Validate that the caller provides the configured bearer token."""
    if credentials is None or credentials.credentials != config.api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing token")
    return credentials.credentials
