from .client import GraphServiceError, GraphUserService
from .models import GraphUser, PasswordProfile

__all__ = ["GraphServiceError", "GraphUser", "GraphUserService", "PasswordProfile"]
