"""User use cases."""

from .create_user import CreateUserRequest, CreateUserUseCase
from .get_me import GetMeRequest, GetMeUseCase
from .get_user import GetUserRequest, GetUserUseCase
from .lookup_user import LookupUserRequest, LookupUserUseCase
from .response import UserDetailResponse, UserLookupResponse, UserResponse
from .update_user import UpdateUserRequest, UpdateUserUseCase

__all__ = [
    "CreateUserRequest",
    "CreateUserUseCase",
    "GetMeRequest",
    "GetMeUseCase",
    "GetUserRequest",
    "GetUserUseCase",
    "LookupUserRequest",
    "LookupUserUseCase",
    "UpdateUserRequest",
    "UpdateUserUseCase",
    "UserDetailResponse",
    "UserLookupResponse",
    "UserResponse",
]
