from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _GraphModel(BaseModel):
    # Graph speaks camelCase; unknown properties are ignored.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PasswordProfile(_GraphModel):
    force_change_password_next_sign_in: bool = True
    password: str | None = None


class GraphUser(_GraphModel):
    id: str | None = None
    user_principal_name: str | None = None
    display_name: str | None = None
    mail_nickname: str | None = None
    account_enabled: bool | None = None
    password_profile: PasswordProfile | None = None

    def to_graph(self) -> dict[str, object]:
        """Request body for POST /users."""
        return self.model_dump(by_alias=True, exclude_none=True)
