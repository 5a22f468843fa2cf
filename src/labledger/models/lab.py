"""
Lab lending dataclasses and snapshot loading helpers.

The dashboard keeps its state in browser storage as camelCase JSON. The
models here mirror those records with snake_case attributes; `snapshot_from_dict`
and `snapshot_to_dict` convert between the two shapes.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dacite import Config, from_dict

production_config = Config(
    strict=False,
    check_types=True,
    cast=[Enum, int, float],
)


# --------------------------------------------------------------------------------------------------
# Enumerations
# --------------------------------------------------------------------------------------------------


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    RETURNED = "returned"
    REJECTED = "rejected"


class UserRole(str, Enum):
    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"


class StockStatus(str, Enum):
    """Stock bucket of a component; the value is the sheet display string."""

    OUT_OF_STOCK = "OUT OF STOCK"
    LOW = "LOW STOCK"
    MEDIUM = "MEDIUM STOCK"
    GOOD = "GOOD STOCK"


class LoanStatus(str, Enum):
    """Due-date standing of an approved request; the value is the sheet display string."""

    ON_LOAN = "ON LOAN"
    DUE_TODAY = "DUE TODAY"
    OVERDUE = "OVERDUE"
    UNKNOWN = "UNKNOWN"


class ActivityLevel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    INACTIVE = "Inactive"


# --------------------------------------------------------------------------------------------------
# Records
# --------------------------------------------------------------------------------------------------


@dataclass
class Component:
    """An inventory item. `0 <= available_quantity <= total_quantity` holds for valid data."""

    id: str
    name: str
    category: str
    total_quantity: int
    available_quantity: int
    description: str | None = None

    @property
    def borrowed_quantity(self) -> int:
        return self.total_quantity - self.available_quantity


@dataclass
class BorrowRequest:
    """A single borrow transaction from request through return."""

    id: str
    student_id: str
    student_name: str
    roll_no: str
    mobile: str
    component_id: str
    component_name: str
    quantity: int
    request_date: str
    due_date: str
    status: RequestStatus
    approved_by: str | None = None
    approved_at: str | None = None
    returned_at: str | None = None


@dataclass
class User:
    id: str
    name: str
    email: str
    role: UserRole
    registered_at: str
    last_login_at: str | None = None
    login_count: int | None = None
    is_active: bool = True


@dataclass
class LoginSession:
    id: str
    user_id: str
    login_at: str
    logout_at: str | None = None
    # milliseconds
    session_duration: int | None = None
    device: str | None = None


@dataclass
class SystemData:
    """Aggregate snapshot handed to the report exporter.

    Consumers treat the snapshot as read-only; transaction helpers return a
    new instance instead of mutating this one.
    """

    requests: list[BorrowRequest] = field(default_factory=list)
    components: list[Component] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    sessions: list[LoginSession] = field(default_factory=list)

    def component_by_id(self, component_id: str) -> Component | None:
        for component in self.components:
            if component.id == component_id:
                return component
        return None

    def requests_with_status(self, status: RequestStatus) -> list[BorrowRequest]:
        return [r for r in self.requests if r.status == status]


# --------------------------------------------------------------------------------------------------
# Conversion helpers
# --------------------------------------------------------------------------------------------------

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(name: str) -> str:
    """Convert `rollNo` style keys to `roll_no`; snake_case input is returned unchanged."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _snake_keys(record: dict[str, Any]) -> dict[str, Any]:
    return {camel_to_snake(k): v for k, v in record.items()}


def snapshot_from_dict(payload: dict[str, Any]) -> SystemData:
    """Build a `SystemData` snapshot from the browser-store JSON structure.

    Args:
        payload (dict[str, Any]): Mapping with optional `requests`, `components`,
            `users` and `sessions` lists of camelCase (or snake_case) records.

    Returns:
        SystemData: The typed snapshot. Unknown keys are ignored.

    """
    converted = {
        key: [_snake_keys(item) for item in payload.get(key) or []]
        for key in ("requests", "components", "users", "sessions")
    }
    return from_dict(SystemData, converted, config=production_config)


def camelize(value: Any) -> Any:
    """Recursively convert enums to values and snake_case keys to camelCase."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {snake_to_camel(k): camelize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [camelize(v) for v in value]
    return value


def snapshot_to_dict(data: SystemData) -> dict[str, Any]:
    """Serialize a snapshot back to the camelCase browser-store structure."""
    return camelize(dataclasses.asdict(data))
