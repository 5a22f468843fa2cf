from conftest import NOW

from labledger.models.lab import ActivityLevel, LoginSession
from labledger.processing.activity import (
    USER_ACTIVITY,
    activity_level,
    device_usage,
    engagement_score,
    most_active_day,
    preferred_login_time,
    total_session_hours,
    user_activity_frame,
)


def _session(login_at: str, device: str | None = None) -> LoginSession:
    return LoginSession(id=login_at, user_id="u1", login_at=login_at, device=device)


def test_activity_level_thresholds():
    assert activity_level(None) is ActivityLevel.INACTIVE
    assert activity_level(0) is ActivityLevel.INACTIVE
    assert activity_level(1) is ActivityLevel.LOW
    assert activity_level(4) is ActivityLevel.MEDIUM
    assert activity_level(11) is ActivityLevel.HIGH


def test_engagement_score_formatting():
    assert engagement_score(12, 31) == "38.71"
    assert engagement_score(0, 31) == "0.00"
    assert engagement_score(5, 0) == "0.00"
    assert engagement_score(5, None) == "0.00"


def test_session_summaries(snapshot):
    assert total_session_hours(snapshot.sessions) == 2.0
    assert most_active_day(snapshot.sessions, "UTC") == "Monday"
    assert preferred_login_time(snapshot.sessions, "UTC") == "Morning"
    assert device_usage(snapshot.sessions) == "Desktop"


def test_session_summaries_without_sessions():
    assert most_active_day([]) == "N/A"
    assert preferred_login_time([]) == "N/A"
    assert device_usage([]) == "Unknown"
    assert total_session_hours([]) == 0


def test_preferred_login_time_buckets():
    assert preferred_login_time([_session("2026-10-19T13:00:00Z")], "UTC") == "Afternoon"
    assert preferred_login_time([_session("2026-10-19T18:00:00Z")], "UTC") == "Evening"
    assert preferred_login_time([_session("2026-10-19T23:30:00Z")], "UTC") == "Night"
    assert preferred_login_time([_session("2026-10-19T02:00:00Z")], "UTC") == "Night"


def test_most_active_day_prefers_highest_count():
    sessions = [
        _session("2026-10-16T09:00:00Z"),  # Friday
        _session("2026-10-23T09:00:00Z"),  # Friday
        _session("2026-10-19T09:00:00Z"),  # Monday
    ]
    assert most_active_day(sessions, "UTC") == "Friday"


def test_user_activity_frame(snapshot):
    df = user_activity_frame(
        snapshot.users, snapshot.sessions, snapshot.requests, NOW, date_format="%Y-%m-%d", tz="UTC"
    )
    assert df.columns == USER_ACTIVITY.headers
    student, staff = list(df.iter_rows(named=True))

    assert student["User Role"] == "STUDENT"
    assert student["Registration Date"] == "2026-09-19"
    assert student["Last Login Date"] == "2026-10-17"
    assert student["Account Status"] == "ACTIVE"
    assert student["Activity Level"] == "High"
    assert student["Days Since Last Login"] == 3
    assert student["Account Age (Days)"] == 31
    assert student["Engagement Score"] == "38.71"
    assert student["Total Session Time (Hours)"] == "2.00"
    assert student["Average Session Duration"] == "0.67 hours"
    assert student["Peak Activity Day"] == "Monday"
    assert student["Components Borrowed"] == 4
    assert student["Active Requests"] == 2
    assert student["Completed Returns"] == 1
    assert student["Success Rate (%)"] == 33.33

    assert staff["Last Login Date"] == "Never"
    assert staff["Days Since Last Login"] is None
    assert staff["Total Login Count"] == 0
    assert staff["Activity Level"] == "Inactive"
    assert staff["Average Session Duration"] == "0 hours"
    assert staff["Device Usage"] == "Unknown"
    assert staff["Success Rate (%)"] is None
