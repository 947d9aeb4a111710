"""
Sign-in / sign-out endpoints.

    GET  /Authentication/LogIn         -> redirect to Entra (auth code flow)
    POST /Authentication/LogOut        -> clear session, redirect to Entra end-session
    GET  {AzureAd.CallbackPath}        -> redeem code, store principal in session
    GET  {AzureAd.SignedOutCallbackPath}

The callback paths come from configuration, so those routes are built by
``build_callback_router`` once the config is loaded.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from travelbook.config import AppConfig, AzureAdConfig
from travelbook.identity.cookie_events import ID_TOKEN_SESSION_KEY, load_principal, store_principal
from travelbook.identity.dependencies import get_app_config, get_token_acquisition
from travelbook.identity.msal_client import USERS_API_SCOPES, TokenAcquisition
from travelbook.identity.oidc import SignInError, build_logout_url, complete_sign_in, start_sign_in

logger = logging.getLogger(__name__)

AUTH_FLOW_SESSION_KEY = "auth_flow"
POST_LOGIN_REDIRECT_SESSION_KEY = "post_login_redirect"

router = APIRouter(prefix="/Authentication", tags=["authentication"])


def sign_in_scopes(config: AppConfig) -> list[str]:
    """Scopes consented at sign-in: the users API scopes plus MicrosoftGraph.Scopes."""
    scopes = list(USERS_API_SCOPES)
    for scope in config.microsoft_graph.scopes:
        if scope not in scopes:
            scopes.append(scope)
    return scopes


def _callback_url(request: Request, azure_ad: AzureAdConfig) -> str:
    return str(request.base_url).rstrip("/") + azure_ad.callback_path


@router.get("/LogIn")
def log_in(
    request: Request,
    config: AppConfig = Depends(get_app_config),
    token_acquisition: TokenAcquisition = Depends(get_token_acquisition),
) -> RedirectResponse:
    current = load_principal(request.session)
    login_hint = current.login_hint if current else None

    flow = start_sign_in(
        token_acquisition.msal_app,
        sign_in_scopes(config),
        _callback_url(request, config.azure_ad),
        login_hint=login_hint,
    )
    request.session[AUTH_FLOW_SESSION_KEY] = flow
    request.session[POST_LOGIN_REDIRECT_SESSION_KEY] = "/"
    return RedirectResponse(flow["auth_uri"], status_code=status.HTTP_302_FOUND)


@router.post("/LogOut")
def log_out(
    request: Request,
    config: AppConfig = Depends(get_app_config),
    token_acquisition: TokenAcquisition = Depends(get_token_acquisition),
) -> RedirectResponse:
    principal = load_principal(request.session)
    id_token = request.session.get(ID_TOKEN_SESSION_KEY)

    if principal is not None:
        token_acquisition.remove_account(principal)
        logger.info("User signed out")
    request.session.clear()

    url = build_logout_url(config.azure_ad, id_token=id_token, login_hint=principal.login_hint if principal else None)
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


def build_callback_router(azure_ad: AzureAdConfig) -> APIRouter:
    callback_router = APIRouter(tags=["authentication"])

    @callback_router.get(azure_ad.callback_path)
    def sign_in_callback(
        request: Request,
        token_acquisition: TokenAcquisition = Depends(get_token_acquisition),
    ) -> RedirectResponse:
        flow = request.session.pop(AUTH_FLOW_SESSION_KEY, None)
        if not flow:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Sign-in flow not found or expired")

        try:
            principal, id_token = complete_sign_in(token_acquisition.msal_app, flow, dict(request.query_params))
        except SignInError as exc:
            request.session.clear()
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Authentication failed: {exc}") from exc

        redirect_to = request.session.pop(POST_LOGIN_REDIRECT_SESSION_KEY, "/")
        store_principal(request.session, principal, id_token)
        logger.info("User signed in tenant=%s", principal.tenant_id)
        return RedirectResponse(redirect_to, status_code=status.HTTP_302_FOUND)

    @callback_router.get(azure_ad.signed_out_callback_path)
    def signed_out_callback() -> RedirectResponse:
        return RedirectResponse("/", status_code=status.HTTP_302_FOUND)

    return callback_router
