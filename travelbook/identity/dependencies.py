from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from travelbook.config import AppConfig

from .context import UserPrincipal
from .cookie_events import validate_principal
from .msal_client import USERS_API_SCOPES, ChallengeUserError, TokenAcquisition


def get_app_config(request: Request) -> AppConfig:
    config = getattr(request.app.state, "app_config", None)
    if config is None:
        raise RuntimeError("App config not loaded. Did app startup run?")
    return config


def get_token_acquisition(request: Request) -> TokenAcquisition:
    token_acquisition = getattr(request.app.state, "token_acquisition", None)
    if token_acquisition is None:
        raise RuntimeError("Token acquisition not configured. Did app startup run?")
    return token_acquisition


def get_current_principal(
    request: Request,
    token_acquisition: TokenAcquisition = Depends(get_token_acquisition),
) -> UserPrincipal:
    """
    Authenticated-session guard.

    Revalidates the session principal against the token cache on every
    request (see cookie_events) and exposes it on ``request.state.principal``.
    """

    principal = validate_principal(request.session, token_acquisition)
    if principal is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    request.state.principal = principal
    return principal


def get_graph_access_token(
    principal: UserPrincipal = Depends(get_current_principal),
    token_acquisition: TokenAcquisition = Depends(get_token_acquisition),
) -> str:
    """Delegated Graph token for the users endpoints; a challenge asks the client to sign in again."""

    try:
        return token_acquisition.get_access_token_for_user(USERS_API_SCOPES, principal)
    except ChallengeUserError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Sign-in or consent required for scopes: {' '.join(exc.scopes)}",
            headers={"Location": "/Authentication/LogIn"},
        ) from exc
