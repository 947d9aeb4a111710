"""
Client-side code for the users API: the HTTP proxy used by front-end code
and the create-user form / page logic.
"""

from .forms import CreateUserFormModel
from .pages import CreateUserPage
from .services import UsersService, UsersServiceError, load_client_services

__all__ = [
    "CreateUserFormModel",
    "CreateUserPage",
    "UsersService",
    "UsersServiceError",
    "load_client_services",
]
