import datetime

import pytest

from labledger.models.lab import (
    BorrowRequest,
    Component,
    LoginSession,
    RequestStatus,
    SystemData,
    User,
    UserRole,
)

NOW = datetime.datetime(2026, 10, 19, 12, 0, tzinfo=datetime.UTC)


def make_request(
    request_id: str = "req-1",
    *,
    status: RequestStatus = RequestStatus.APPROVED,
    due_date: str = "2026-10-25",
    component_id: str = "cmp-arduino",
    component_name: str = "Arduino Uno",
    quantity: int = 1,
    student_id: str = "student-1",
    approved_by: str | None = "Staff",
    returned_at: str | None = None,
) -> BorrowRequest:
    return BorrowRequest(
        id=request_id,
        student_id=student_id,
        student_name="Asha Rao",
        roll_no="21EC042",
        mobile="09876543210",
        component_id=component_id,
        component_name=component_name,
        quantity=quantity,
        request_date="2026-10-10T09:15:00.000Z",
        due_date=due_date,
        status=status,
        approved_by=approved_by,
        approved_at="2026-10-10T09:15:00.000Z" if approved_by else None,
        returned_at=returned_at,
    )


def make_component(
    component_id: str = "cmp-arduino",
    *,
    total: int = 10,
    available: int = 8,
    name: str = "Arduino Uno",
    category: str = "Microcontrollers",
    description: str | None = None,
) -> Component:
    return Component(
        id=component_id,
        name=name,
        category=category,
        total_quantity=total,
        available_quantity=available,
        description=description,
    )


@pytest.fixture
def now() -> datetime.datetime:
    return NOW


@pytest.fixture
def snapshot() -> SystemData:
    return SystemData(
        requests=[
            make_request("req-1", due_date="2026-10-25", quantity=2),
            make_request("req-2", due_date="2026-10-18"),
            make_request(
                "req-3",
                status=RequestStatus.RETURNED,
                component_id="cmp-servo",
                component_name="SG90 Servo",
                returned_at="2026-10-15T10:00:00.000Z",
            ),
            make_request("req-4", status=RequestStatus.PENDING, approved_by=None),
        ],
        components=[
            make_component("cmp-arduino", total=10, available=7),
            make_component(
                "cmp-servo",
                total=5,
                available=5,
                name="SG90 Servo",
                category="Actuators",
                description="Micro servo motor",
            ),
            make_component("cmp-ldr", total=10, available=0, name="LDR", category="Sensors"),
        ],
        users=[
            User(
                id="student-1",
                name="Asha Rao",
                email="asha@example.edu",
                role=UserRole.STUDENT,
                registered_at="2026-09-19T08:00:00.000Z",
                last_login_at="2026-10-17T08:00:00.000Z",
                login_count=12,
                is_active=True,
            ),
            User(
                id="staff-1",
                name="Lab Staff",
                email="staff@example.edu",
                role=UserRole.STAFF,
                registered_at="2026-01-01",
            ),
        ],
        sessions=[
            LoginSession(
                id="s-1",
                user_id="student-1",
                login_at="2026-10-12T09:00:00.000Z",
                session_duration=3_600_000,
                device="Desktop",
            ),
            LoginSession(
                id="s-2",
                user_id="student-1",
                login_at="2026-10-13T10:30:00.000Z",
                session_duration=1_800_000,
                device="Mobile",
            ),
            LoginSession(
                id="s-3",
                user_id="student-1",
                login_at="2026-10-14T19:00:00.000Z",
                session_duration=1_800_000,
                device="Desktop",
            ),
        ],
    )
