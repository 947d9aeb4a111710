"""Serializable principal stored in the session after OpenID Connect sign-in."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UserPrincipal:
    """
    Signed-in user, built from validated ID token claims.

    The session only holds this small dict; tokens themselves stay in the
    MSAL token cache, keyed by ``home_account_id``.
    """

    object_id: str
    """Entra object id (oid); stable across app registrations."""

    tenant_id: str
    """Home tenant id (tid)."""

    preferred_username: str | None = None
    """Usually the UPN; display only."""

    name: str | None = None

    login_hint: str | None = None
    """Optional ``login_hint`` claim, forwarded on re-authentication and sign-out."""

    @property
    def home_account_id(self) -> str:
        """MSAL account key for Entra accounts: ``<oid>.<tid>``."""
        return f"{self.object_id}.{self.tenant_id}"

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> UserPrincipal:
        oid = claims.get("oid") or claims.get("sub") or ""
        return cls(
            object_id=str(oid),
            tenant_id=str(claims.get("tid") or ""),
            preferred_username=_str_or_none(claims.get("preferred_username")),
            name=_str_or_none(claims.get("name")),
            login_hint=_str_or_none(claims.get("login_hint")),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserPrincipal:
        return cls(
            object_id=str(data["object_id"]),
            tenant_id=str(data["tenant_id"]),
            preferred_username=data.get("preferred_username"),
            name=data.get("name"),
            login_hint=data.get("login_hint"),
        )

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict."""
        return {
            "object_id": self.object_id,
            "tenant_id": self.tenant_id,
            "preferred_username": self.preferred_username,
            "name": self.name,
            "login_hint": self.login_hint,
        }


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None
