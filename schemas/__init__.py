from .user import (
    UserRegister,
    UserLogin,
    UserProfileUpdate,
    UserResponse,
    Identity,
    TokenResponse,
)
from .task import TaskCreate, TaskUpdate
from .response import StandardResponse, ErrorResponse, HealthCheckResponse

__all__ = [
    # User schemas
    "UserRegister", "UserLogin", "UserProfileUpdate", "UserResponse",
    "Identity", "TokenResponse",

    # Task schemas
    "TaskCreate", "TaskUpdate",

    # Response schemas
    "StandardResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
