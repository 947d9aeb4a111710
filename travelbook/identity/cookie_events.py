"""
Session (cookie) principal revalidation.

The session cookie outlives the in-memory MSAL token cache. A user whose
account vanished from the cache would carry a valid-looking session but
every Graph call would fail, so each request re-acquires a token silently
and drops the session when the cache no longer knows the account.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

from .context import UserPrincipal
from .msal_client import (
    REVALIDATION_SCOPES,
    USER_NULL_ERROR,
    ChallengeUserError,
    MsalUiRequiredError,
    TokenAcquisition,
)

logger = logging.getLogger(__name__)

PRINCIPAL_SESSION_KEY = "principal"
ID_TOKEN_SESSION_KEY = "id_token"


def load_principal(session: MutableMapping[str, Any]) -> UserPrincipal | None:
    raw = session.get(PRINCIPAL_SESSION_KEY)
    if not isinstance(raw, dict):
        return None
    try:
        return UserPrincipal.from_dict(raw)
    except KeyError:
        logger.warning("Malformed principal in session; ignoring")
        return None


def store_principal(
    session: MutableMapping[str, Any],
    principal: UserPrincipal,
    id_token: str | None = None,
) -> None:
    session[PRINCIPAL_SESSION_KEY] = principal.to_dict()
    if id_token:
        session[ID_TOKEN_SESSION_KEY] = id_token


def reject_principal(session: MutableMapping[str, Any]) -> None:
    session.clear()


def account_does_not_exist_in_token_cache(exc: ChallengeUserError | None) -> bool:
    if exc is None or not isinstance(exc.inner, MsalUiRequiredError):
        return False
    return exc.inner.error_code == USER_NULL_ERROR


def validate_principal(
    session: MutableMapping[str, Any],
    token_acquisition: TokenAcquisition,
) -> UserPrincipal | None:
    """
    Return the session principal if it is still backed by the token cache.

    Only a ``user_null`` challenge rejects the principal (and clears the
    session). Any other challenge keeps it; the endpoint's own token request
    will decide what to do.
    """
    principal = load_principal(session)
    if principal is None:
        return None

    try:
        token_acquisition.get_access_token_for_user(REVALIDATION_SCOPES, principal)
    except ChallengeUserError as exc:
        if account_does_not_exist_in_token_cache(exc):
            logger.info("Account not in token cache; rejecting session principal")
            reject_principal(session)
            return None
        logger.warning("Session revalidation needs user challenge (%s); keeping principal", type(exc.inner).__name__)

    return principal
