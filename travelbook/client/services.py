"""
HTTP proxy for the server's ``api/users`` controller.

Lookups never raise: failures come back as a GetUserResponseDto whose
``message`` starts with ``"API Error: "`` (server answered non-2xx) or
``"Application error: "`` (the call itself failed).
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin

import requests
from pydantic import BaseModel

from travelbook.schemas.users import (
    CreateUserDto,
    CreateUserResponseDto,
    GetUserByIdDto,
    GetUserByPrincipalNameDto,
    GetUserResponseDto,
)

logger = logging.getLogger(__name__)


class UsersServiceError(Exception):
    """CreateUser was refused by the server."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UsersService:
    def __init__(self, http: requests.Session, base_address: str, timeout: float = 30) -> None:
        self._http = http
        # urljoin drops the last path segment unless the base ends with "/"
        self._base_address = base_address if base_address.endswith("/") else base_address + "/"
        self._timeout = timeout

    def _post(self, path: str, dto: BaseModel) -> requests.Response:
        return self._http.post(
            urljoin(self._base_address, path),
            json=dto.model_dump(by_alias=True),
            timeout=self._timeout,
        )

    def _lookup(self, path: str, dto: BaseModel) -> GetUserResponseDto:
        try:
            resp = self._post(path, dto)
            if not resp.ok:
                return GetUserResponseDto(message=f"API Error: {resp.text}")
            return GetUserResponseDto.model_validate(resp.json())
        except (requests.RequestException, ValueError) as exc:
            logger.info("Users API call failed path=%s: %s", path, type(exc).__name__)
            return GetUserResponseDto(message=f"Application error: {exc}")

    # POST: api/users/GetUserById
    def get_user_by_id(self, dto: GetUserByIdDto) -> GetUserResponseDto:
        return self._lookup("api/users/GetUserById", dto)

    # POST: api/users/GetUserByPrincipalName
    def get_user_by_principal_name(self, dto: GetUserByPrincipalNameDto) -> GetUserResponseDto:
        return self._lookup("api/users/GetUserByPrincipalName", dto)

    # POST: api/users/CreateUser
    def create_user(self, dto: CreateUserDto) -> CreateUserResponseDto:
        resp = self._post("api/users/CreateUser", dto)
        if resp.ok:
            return CreateUserResponseDto.model_validate(resp.json())

        raise UsersServiceError(resp.reason or "Could not read from Json", status_code=resp.status_code)


def load_client_services(base_address: str, session: requests.Session | None = None) -> UsersService:
    """Wire the client services against the app's base address."""
    return UsersService(session or requests.Session(), base_address)
