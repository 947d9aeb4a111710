"""
MSAL confidential client and per-user token acquisition.

Background for newcomers:
    After the OpenID Connect sign-in, MSAL keeps the user's refresh token in
    its token cache. Every later Graph call asks MSAL for an access token
    *silently* for the signed-in account. If the account is no longer in the
    cache (process restarted, cache evicted) the user must sign in again;
    MSAL reports that situation with an error code and we surface it as a
    ``ChallengeUserError``.

    MSAL Python adds ``openid profile offline_access`` to every request on
    its own and rejects them if passed explicitly, so our scope lists only
    name resource scopes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import msal

from travelbook.config import AzureAdConfig

from .context import UserPrincipal

logger = logging.getLogger(__name__)

# Scopes the users endpoints need on Microsoft Graph.
USERS_API_SCOPES: tuple[str, ...] = ("user.read", "user.readwrite.all", "device.read.all")

# Scope used to revalidate a session on each request.
REVALIDATION_SCOPES: tuple[str, ...] = ("user.read",)

USER_NULL_ERROR = "user_null"


class MsalUiRequiredError(Exception):
    """MSAL could not get a token without user interaction."""

    def __init__(self, error_code: str, message: str = "") -> None:
        super().__init__(message or error_code)
        self.error_code = error_code


class ChallengeUserError(Exception):
    """The user must be sent back through sign-in (or consent) for ``scopes``."""

    def __init__(self, inner: Exception | None, scopes: Iterable[str]) -> None:
        self.inner = inner
        self.scopes = tuple(scopes)
        super().__init__(f"User challenge required for scopes {list(self.scopes)}: {inner}")


def build_token_cache() -> msal.TokenCache:
    """In-memory token cache shared by the whole process."""
    return msal.TokenCache()


def build_msal_app(
    azure_ad: AzureAdConfig,
    cache: msal.TokenCache | None = None,
) -> msal.ConfidentialClientApplication:
    if not azure_ad.client_id or not azure_ad.tenant_id:
        raise ValueError("AzureAd TenantId and ClientId must be set")
    return msal.ConfidentialClientApplication(
        client_id=azure_ad.client_id,
        client_credential=azure_ad.client_secret,
        authority=azure_ad.authority,
        token_cache=cache,
    )


class TokenAcquisition:
    """Acquire access tokens on behalf of the signed-in user from the MSAL cache."""

    def __init__(self, msal_app: msal.ConfidentialClientApplication) -> None:
        self._app = msal_app

    @property
    def msal_app(self) -> msal.ConfidentialClientApplication:
        return self._app

    def _find_account(self, principal: UserPrincipal) -> dict | None:
        for account in self._app.get_accounts():
            if account.get("home_account_id") == principal.home_account_id:
                return account
        return None

    def get_access_token_for_user(
        self,
        scopes: Iterable[str],
        principal: UserPrincipal | None,
    ) -> str:
        """
        Return an access token for ``scopes`` without user interaction.

        Raises ChallengeUserError when the account is missing from the cache
        (inner error code ``user_null``) or MSAL cannot refresh silently.
        """
        scope_list = list(scopes)

        account = self._find_account(principal) if principal is not None else None
        if account is None:
            logger.debug("No cached account for principal")
            raise ChallengeUserError(
                MsalUiRequiredError(USER_NULL_ERROR, "No account or login hint was passed to acquire_token_silent"),
                scope_list,
            )

        result = self._app.acquire_token_silent(scope_list, account=account)
        if not result:
            raise ChallengeUserError(MsalUiRequiredError("no_tokens_found", "No token found in cache"), scope_list)
        if "access_token" not in result:
            error = result.get("error") or "unknown_error"
            logger.info("Silent token acquisition failed error=%s", error)
            raise ChallengeUserError(MsalUiRequiredError(error, result.get("error_description") or ""), scope_list)

        return result["access_token"]

    def remove_account(self, principal: UserPrincipal) -> None:
        """Forget the principal's tokens (sign-out)."""
        account = self._find_account(principal)
        if account is not None:
            self._app.remove_account(account)
