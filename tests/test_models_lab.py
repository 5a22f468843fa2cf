from labledger.models.lab import (
    RequestStatus,
    SystemData,
    UserRole,
    camel_to_snake,
    snake_to_camel,
    snapshot_from_dict,
    snapshot_to_dict,
)


def test_key_case_conversion():
    assert camel_to_snake("rollNo") == "roll_no"
    assert camel_to_snake("availableQuantity") == "available_quantity"
    assert camel_to_snake("id") == "id"
    assert camel_to_snake("due_date") == "due_date"
    assert snake_to_camel("session_duration") == "sessionDuration"


def test_snapshot_from_browser_payload():
    payload = {
        "components": [
            {
                "id": "c1",
                "name": "Breadboard",
                "category": "Prototyping",
                "totalQuantity": 20,
                "availableQuantity": 15,
                "imageUrl": "ignored.png",
            }
        ],
        "requests": [
            {
                "id": "req-1",
                "studentId": "student-1",
                "studentName": "Ravi",
                "rollNo": "R1",
                "mobile": "99999",
                "componentId": "c1",
                "componentName": "Breadboard",
                "quantity": 5,
                "requestDate": "2026-10-01T10:00:00.000Z",
                "dueDate": "2026-10-08",
                "status": "approved",
                "approvedBy": "Staff",
            }
        ],
        "users": [
            {
                "id": "u1",
                "name": "Ravi",
                "email": "ravi@example.edu",
                "role": "student",
                "registeredAt": "2026-09-01",
                "isActive": False,
            }
        ],
    }
    data = snapshot_from_dict(payload)
    assert data.components[0].available_quantity == 15
    assert data.components[0].description is None
    assert data.requests[0].status is RequestStatus.APPROVED
    assert data.requests[0].returned_at is None
    assert data.users[0].role is UserRole.STUDENT
    assert data.users[0].is_active is False
    assert data.sessions == []


def test_snapshot_to_dict_uses_camel_case_and_plain_values(snapshot):
    out = snapshot_to_dict(snapshot)
    first = out["requests"][0]
    assert first["rollNo"] == "21EC042"
    assert first["status"] == "approved"
    assert out["components"][0]["totalQuantity"] == 10
    assert snapshot_from_dict(out) == snapshot


def test_system_data_lookups(snapshot):
    assert snapshot.component_by_id("cmp-servo").name == "SG90 Servo"
    assert snapshot.component_by_id("missing") is None
    assert [r.id for r in snapshot.requests_with_status(RequestStatus.APPROVED)] == [
        "req-1",
        "req-2",
    ]
    assert SystemData().requests_with_status(RequestStatus.RETURNED) == []
