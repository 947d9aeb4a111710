from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import ValidationError

from travelbook.schemas.users import CreateUserDto

from .forms import CreateUserFormModel
from .services import UsersService, UsersServiceError

logger = logging.getLogger(__name__)


class CreateUserPage:
    """
    State and handlers of the create-user page.

    ``form_data`` holds the bound input values; ``validation_errors`` maps a
    field name to its message; ``result_message`` is the banner shown after
    a submit.
    """

    def __init__(self, users_service: UsersService) -> None:
        self.users_service = users_service
        self.form_data: dict[str, Any] = {}
        self.validation_errors: dict[str, str] = {}
        self.result_message = ""

    def reset_form(self) -> None:
        self.form_data = {}
        self.validation_errors = {}

    def submit(self) -> None:
        try:
            model = CreateUserFormModel(**self.form_data)
        except ValidationError as exc:
            self.validation_errors = {str(err["loc"][0]): err["msg"] for err in exc.errors()}
            return
        self.validation_errors = {}
        self.handle_valid_submit(model)

    def handle_valid_submit(self, model: CreateUserFormModel) -> None:
        try:
            created = self.users_service.create_user(
                CreateUserDto(
                    user_principal_name=model.user_principal_name,
                    display_name=model.display_name,
                    mail_nick_name=model.mail_nick_name,
                )
            )
        except (UsersServiceError, requests.RequestException, ValueError) as exc:
            logger.info("Create user failed: %s", exc)
            self.result_message = f"Error : {exc}"
            return

        self.result_message = f"User created: {created.user_display_name} ({created.user_principal_name})"
        self.reset_form()
