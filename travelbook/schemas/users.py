from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Dto(BaseModel):
    # Wire names are camelCase; snake_case is accepted too.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GetUserByIdDto(_Dto):
    user_id: str


class GetUserByPrincipalNameDto(_Dto):
    user_principal_name: str


class GetUserResponseDto(_Dto):
    message: str | None = None
    user_id: str | None = None
    user_principal_name: str | None = None
    display_name: str | None = None
    mail_nick_name: str | None = None


class CreateUserDto(_Dto):
    user_principal_name: str = ""
    display_name: str = ""
    mail_nick_name: str = ""


class CreateUserResponseDto(_Dto):
    message: str | None = None
    user_id: str | None = None
    user_principal_name: str | None = None
    user_display_name: str | None = None
    user_mail_nickname: str | None = None
