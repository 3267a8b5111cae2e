"""
Authentication Use Cases

Registration and login.
"""

from .dtos import AuthResponse, IdentityInfo, RegisterCommand, TenantInfo
from .login_use_case import LoginUseCase
from .register_use_case import RegisterUseCase

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    # DTOs
    "RegisterCommand",
    "AuthResponse",
    "IdentityInfo",
    "TenantInfo",
]
