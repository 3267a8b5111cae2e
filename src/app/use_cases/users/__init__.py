"""
User Management Use Cases

All user-related business logic.
"""

from .change_password_use_case import ChangePasswordUseCase
from .dtos import ChangePasswordResponse, ContextResponse
from .load_context_use_case import LoadContextUseCase
from .update_profile_use_case import UpdateProfileUseCase

__all__ = [
    "LoadContextUseCase",
    "UpdateProfileUseCase",
    "ChangePasswordUseCase",
    "ChangePasswordResponse",
    "ContextResponse",
]
