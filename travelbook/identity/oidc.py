"""
OpenID Connect sign-in / sign-out helpers on top of MSAL's auth code flow.

Pure functions over an MSAL app and plain dicts; the FastAPI routes in
``travelbook.routers.authentication`` own the session handling.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

import msal

from travelbook.config import AzureAdConfig

from .context import UserPrincipal

logger = logging.getLogger(__name__)


class SignInError(Exception):
    """Raised when the authorization response cannot be redeemed."""


def start_sign_in(
    msal_app: msal.ConfidentialClientApplication,
    scopes: list[str],
    redirect_uri: str,
    login_hint: str | None = None,
) -> dict[str, Any]:
    """
    Begin the auth code flow.

    Returns MSAL's flow dict; it must be kept (in the session) until the
    callback, and its ``auth_uri`` is where the browser goes next.
    """
    return msal_app.initiate_auth_code_flow(
        scopes=scopes,
        redirect_uri=redirect_uri,
        login_hint=login_hint,
    )


def complete_sign_in(
    msal_app: msal.ConfidentialClientApplication,
    auth_flow: dict[str, Any],
    auth_response: dict[str, Any],
) -> tuple[UserPrincipal, str | None]:
    """
    Redeem the authorization code. Tokens land in the MSAL cache.

    Returns the principal and the raw ID token (kept for ``id_token_hint``).
    """
    try:
        result = msal_app.acquire_token_by_auth_code_flow(
            auth_code_flow=auth_flow,
            auth_response=auth_response,
        )
    except ValueError as exc:
        # MSAL raises ValueError on state mismatch.
        raise SignInError("Invalid authorization response") from exc

    if "error" in result:
        logger.info("Sign-in failed error=%s", result.get("error"))
        raise SignInError(f"{result.get('error')}: {result.get('error_description') or ''}".strip())

    claims = result.get("id_token_claims") or {}
    principal = UserPrincipal.from_claims(claims)
    if not principal.object_id or not principal.tenant_id:
        raise SignInError("ID token is missing oid/tid claims")
    return principal, result.get("id_token")


def build_logout_url(
    azure_ad: AzureAdConfig,
    id_token: str | None = None,
    login_hint: str | None = None,
) -> str:
    """Entra end-session URL with hints so the right account is signed out."""
    params: dict[str, str] = {"post_logout_redirect_uri": azure_ad.signed_out_redirect_uri}
    if id_token:
        params["id_token_hint"] = id_token
    if login_hint:
        params["logout_hint"] = login_hint
    return f"{azure_ad.authority}/oauth2/v2.0/logout?{urlencode(params)}"
