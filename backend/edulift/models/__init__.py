"""
Pydantic models for database documents.
"""
from edulift.models.user import (
    User,
    UserRole,
    RiskFlag,
    Language,
    Profile,
    ConsentFlags,
    Preferences,
    enum_values,
    example_user,
)

__all__ = [
    "User",
    "UserRole",
    "RiskFlag",
    "Language",
    "Profile",
    "ConsentFlags",
    "Preferences",
    "enum_values",
    "example_user",
]
