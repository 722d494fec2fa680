"""
Authentication dependencies backed by the configured identity provider.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend.api.dependencies.container import get_auth_service_dep
from backend.models.profile import AuthContext
from backend.services.auth_service import AuthService

security = HTTPBearer(auto_error=False)


async def get_auth_context(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth_service: AuthService = Depends(get_auth_service_dep),
) -> AuthContext:
    """
    Validate the bearer token and return the caller's AuthContext.

    The context is also stored on ``request.state.auth`` for handlers and
    middleware further down the chain.
    """
    if credentials is None:
        # HTTPBearer drops malformed headers; re-parse to report why
        token = AuthService.extract_token(request.headers.get("Authorization"))
    else:
        token = credentials.credentials

    ctx = await auth_service.authenticate(token)
    request.state.auth = ctx
    return ctx
