"""Typed models for lab lending snapshots.

Expose dataclass models, enums and helper configs used across the project.
"""

from .lab import (
    ActivityLevel,
    BorrowRequest,
    Component,
    LoanStatus,
    LoginSession,
    RequestStatus,
    StockStatus,
    SystemData,
    User,
    UserRole,
    production_config,
    snapshot_from_dict,
    snapshot_to_dict,
)

__all__ = [
    "ActivityLevel",
    "BorrowRequest",
    "Component",
    "LoanStatus",
    "LoginSession",
    "RequestStatus",
    "StockStatus",
    "SystemData",
    "User",
    "UserRole",
    "production_config",
    "snapshot_from_dict",
    "snapshot_to_dict",
]
