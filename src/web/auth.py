"""Optional bearer-token extraction for FastAPI.

The token is the record store's own access token. It is not decoded here:
the repository validates it against the auth server on every call, and an
invalid or missing token simply means local-only mode.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

security = HTTPBearer(auto_error=False)


async def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials
