from .base import (
    AppError,
    AuthErrorCode,
    DomainError,
    InfrastructureError,
    PasswordHashingError,
    UnauthorizedError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "AuthErrorCode",
    "DomainError",
    "InfrastructureError",
    "PasswordHashingError",
    "UnauthorizedError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
