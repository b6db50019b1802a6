"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase
from .dtos import LoginResponse, UserInfo

__all__ = [
    # Use Cases
    "LoginUseCase",
    # DTOs - Responses
    "LoginResponse",
    # DTOs - Nested Models
    "UserInfo",
]
