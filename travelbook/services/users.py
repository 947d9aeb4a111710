"""
User directory operations behind the ``api/users`` endpoints.

Lookups query Graph ``/users`` with an OData filter and return the first
match; creation builds the UPN from the mail nickname and the tenant's
configured domain.
"""

from __future__ import annotations

import logging
import uuid

from travelbook.graph import GraphServiceError, GraphUser, GraphUserService, PasswordProfile
from travelbook.schemas.users import (
    CreateUserDto,
    CreateUserResponseDto,
    GetUserByIdDto,
    GetUserByPrincipalNameDto,
    GetUserResponseDto,
)

logger = logging.getLogger(__name__)

USER_SELECT = ("id", "userPrincipalName", "displayName", "mailNickname")

MANDATORY_FIELDS_MESSAGE = "DisplayName et MailNickName are mandatory."
REGISTRATION_FAILED_MESSAGE = "The user registration failed."


class UserLookupError(ValueError):
    """Lookup failed: Graph error or no matching user."""


class UserValidationError(ValueError):
    """Create request is missing mandatory fields."""


class UserCreationError(Exception):
    """Create failed upstream; ``status_code`` mirrors Graph's when it answered."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def odata_literal(value: str) -> str:
    """Quote a string for an OData ``$filter`` (single quotes are doubled)."""
    return "'" + value.replace("'", "''") + "'"


def generate_initial_password() -> str:
    # 32 hex chars plus one of each remaining class to satisfy Entra complexity rules
    return uuid.uuid4().hex + "Aa1!"


class UserDirectory:
    def __init__(self, graph: GraphUserService, domain: str | None) -> None:
        if not domain or not domain.strip():
            raise ValueError("Azure domain is not set in configuration")
        self._graph = graph
        self._domain = domain.strip()

    @property
    def domain(self) -> str:
        return self._domain

    def _find_first(self, filter: str) -> GetUserResponseDto:
        try:
            users = self._graph.get_users(select=USER_SELECT, filter=filter)
        except GraphServiceError as exc:
            raise UserLookupError(f"Graph API error: {exc.message}") from exc
        except Exception as exc:
            logger.exception("Unexpected error looking up user")
            raise UserLookupError(f"TravelBook API error: {exc}") from exc

        user = users[0] if users else None
        if user is None:
            raise UserLookupError("TravelBook API error: Graph API error")

        return GetUserResponseDto(
            message="User found",
            user_id=user.id,
            user_principal_name=user.user_principal_name,
            display_name=user.display_name,
            mail_nick_name=user.mail_nickname,
        )

    def get_user_by_id(self, dto: GetUserByIdDto) -> GetUserResponseDto:
        return self._find_first(f"id eq {odata_literal(dto.user_id)}")

    def get_user_by_principal_name(self, dto: GetUserByPrincipalNameDto) -> GetUserResponseDto:
        return self._find_first(f"userPrincipalName eq {odata_literal(dto.user_principal_name)}")

    def create_user(self, dto: CreateUserDto | None) -> CreateUserResponseDto:
        """
        Create an enabled account that must change its password at first sign-in.

        The requested UPN is ignored; it is always ``<mail nickname>@<domain>``.
        """
        if dto is None or not dto.display_name.strip() or not dto.mail_nick_name.strip():
            raise UserValidationError(MANDATORY_FIELDS_MESSAGE)

        new_user = GraphUser(
            account_enabled=True,
            display_name=dto.display_name,
            mail_nickname=dto.mail_nick_name,
            user_principal_name=f"{dto.mail_nick_name}@{self._domain}",
            password_profile=PasswordProfile(
                force_change_password_next_sign_in=True,
                password=generate_initial_password(),
            ),
        )

        try:
            created = self._graph.create_user(new_user)
        except GraphServiceError as exc:
            logger.warning("Graph API error creating user: %s", exc.message)
            raise UserCreationError(exc.message, exc.status_code) from exc
        except Exception as exc:
            logger.exception("Unexpected error creating user")
            raise UserCreationError(str(exc)) from exc

        if created is None:
            raise UserCreationError(REGISTRATION_FAILED_MESSAGE)

        logger.info("User created: %s", created.display_name)
        return CreateUserResponseDto(
            message="User created successfully",
            user_id=created.id,
            user_principal_name=created.user_principal_name,
            user_display_name=created.display_name,
            user_mail_nickname=created.mail_nickname,
        )
