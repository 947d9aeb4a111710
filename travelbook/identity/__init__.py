"""
Entra ID sign-in for the web app: MSAL auth code flow, per-user token
acquisition from an in-memory cache, and session principal revalidation.
"""

from .context import UserPrincipal
from .cookie_events import validate_principal
from .msal_client import (
    ChallengeUserError,
    MsalUiRequiredError,
    TokenAcquisition,
    build_msal_app,
    build_token_cache,
)

__all__ = [
    "ChallengeUserError",
    "MsalUiRequiredError",
    "TokenAcquisition",
    "UserPrincipal",
    "build_msal_app",
    "build_token_cache",
    "validate_principal",
]
