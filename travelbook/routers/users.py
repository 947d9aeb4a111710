from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from travelbook.config import AppConfig
from travelbook.graph import GraphUserService
from travelbook.identity.dependencies import get_app_config, get_graph_access_token
from travelbook.schemas.users import (
    CreateUserDto,
    CreateUserResponseDto,
    GetUserByIdDto,
    GetUserByPrincipalNameDto,
    GetUserResponseDto,
)
from travelbook.services.users import UserCreationError, UserDirectory, UserValidationError

router = APIRouter(prefix="/api/users", tags=["users"])


def get_user_directory(
    config: AppConfig = Depends(get_app_config),
    access_token: str = Depends(get_graph_access_token),
) -> UserDirectory:
    graph = GraphUserService(access_token, base_url=config.microsoft_graph.base_url)
    return UserDirectory(graph, config.azure_ad.domain)


@router.post("/GetUserById", response_model=GetUserResponseDto)
def get_user_by_id(dto: GetUserByIdDto, directory: UserDirectory = Depends(get_user_directory)) -> GetUserResponseDto:
    # UserLookupError is answered by the app-level handler (see main.py).
    return directory.get_user_by_id(dto)


@router.post("/GetUserByPrincipalName", response_model=GetUserResponseDto)
def get_user_by_principal_name(
    dto: GetUserByPrincipalNameDto,
    directory: UserDirectory = Depends(get_user_directory),
) -> GetUserResponseDto:
    return directory.get_user_by_principal_name(dto)


@router.post("/CreateUser", response_model=CreateUserResponseDto)
def create_user(dto: CreateUserDto, directory: UserDirectory = Depends(get_user_directory)):
    try:
        return directory.create_user(dto)
    except UserValidationError as exc:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=str(exc))
    except UserCreationError as exc:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
