from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

_MAIL_NICKNAME_RE = re.compile(r"^[a-zA-Z0-9]+$")
# Same looseness as a browser's type=email check: one "@" with text on both sides.
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")


def _required(value: str, message: str) -> str:
    if not value or not value.strip():
        raise PydanticCustomError("required", message)
    return value


class CreateUserFormModel(BaseModel):
    """Create-user form; every field is checked, including untouched defaults."""

    model_config = ConfigDict(validate_default=True)

    display_name: str = ""
    mail_nick_name: str = ""
    user_principal_name: str = ""

    @field_validator("display_name")
    @classmethod
    def _check_display_name(cls, value: str) -> str:
        return _required(value, "Le nom complet est obligatoire.")

    @field_validator("mail_nick_name")
    @classmethod
    def _check_mail_nick_name(cls, value: str) -> str:
        _required(value, "Le surnom (MailNickname) est obligatoire.")
        if not _MAIL_NICKNAME_RE.match(value):
            raise PydanticCustomError(
                "pattern",
                "Le MailNickname ne doit contenir que des lettres et chiffres.",
            )
        return value

    @field_validator("user_principal_name")
    @classmethod
    def _check_user_principal_name(cls, value: str) -> str:
        _required(value, "UserPrincipalName est obligatoire.")
        if not _EMAIL_RE.match(value):
            raise PydanticCustomError("email", "UserPrincipalName doit être un email valide.")
        return value
