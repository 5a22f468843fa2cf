"""User activity metrics for the optional activity report sheet.

The helpers here summarise login sessions per user (peak weekday, usual login
time of day, most used device) and combine them with the user's borrowing
history into one table row.
"""

from __future__ import annotations

import calendar
import datetime
from collections import Counter
from zoneinfo import ZoneInfo

import polars as pl

from labledger.config import settings
from labledger.models.lab import (
    ActivityLevel,
    BorrowRequest,
    LoginSession,
    RequestStatus,
    User,
    UserRole,
)
from labledger.processing.sheets import INVALID_DATE, NOT_APPLICABLE, SheetLayout, build_frame
from labledger.utils.dates import ceil_days, format_date, parse_timestamp

MS_PER_HOUR = 3_600_000

# (label, first hour inclusive, last hour exclusive); anything else is Night
LOGIN_TIME_BUCKETS = (
    ("Morning", 5, 12),
    ("Afternoon", 12, 17),
    ("Evening", 17, 21),
)

USER_ACTIVITY = SheetLayout(
    name="User Activity Report",
    schema={
        "User ID": pl.Utf8,
        "Full Name": pl.Utf8,
        "Email Address": pl.Utf8,
        "User Role": pl.Utf8,
        "Registration Date": pl.Utf8,
        "Last Login Date": pl.Utf8,
        "Total Login Count": pl.Int64,
        "Account Status": pl.Utf8,
        "Activity Level": pl.Utf8,
        "Days Since Last Login": pl.Int64,
        "Account Age (Days)": pl.Int64,
        "Engagement Score": pl.Utf8,
        "Total Session Time (Hours)": pl.Utf8,
        "Average Session Duration": pl.Utf8,
        "Peak Activity Day": pl.Utf8,
        "Preferred Login Time": pl.Utf8,
        "Device Usage": pl.Utf8,
        "Components Borrowed": pl.Int64,
        "Active Requests": pl.Int64,
        "Completed Returns": pl.Int64,
        "Success Rate (%)": pl.Float64,
    },
    widths=(15, 25, 30, 12, 15, 15, 15, 15, 15, 18, 15, 15, 20, 20, 15, 18, 15, 18, 15, 18, 15),
    header_color="3F51B5",
    placeholders={
        "Days Since Last Login": "Never logged in",
        "Account Age (Days)": NOT_APPLICABLE,
        "Success Rate (%)": NOT_APPLICABLE,
    },
)


def activity_level(login_count: int | None) -> ActivityLevel:
    count = login_count or 0
    if count > 10:
        return ActivityLevel.HIGH
    if count > 3:
        return ActivityLevel.MEDIUM
    if count > 0:
        return ActivityLevel.LOW
    return ActivityLevel.INACTIVE


def engagement_score(login_count: int | None, account_age_days: int | None) -> str:
    """Return logins per day of account age as a percentage with two decimals."""
    if not login_count or not account_age_days or account_age_days <= 0:
        return "0.00"
    return f"{login_count / account_age_days * 100:.2f}"


def total_session_hours(sessions: list[LoginSession]) -> float:
    return sum((s.session_duration or 0) for s in sessions) / MS_PER_HOUR


def _local_login_times(sessions: list[LoginSession], tz: str) -> list[datetime.datetime]:
    zone = ZoneInfo(tz)
    times = []
    for session in sessions:
        parsed = parse_timestamp(session.login_at)
        if parsed is not None:
            times.append(parsed.astimezone(zone))
    return times


def most_active_day(sessions: list[LoginSession], tz: str | None = None) -> str:
    """Return the weekday name with the most logins, or "N/A" without sessions.

    Ties resolve to the earliest weekday, Monday first.
    """
    logins = _local_login_times(sessions, tz or settings.display_timezone)
    if not logins:
        return NOT_APPLICABLE
    counts = Counter(moment.weekday() for moment in logins)
    best = max(range(7), key=lambda day: counts.get(day, 0))
    return calendar.day_name[best]


def _login_bucket(hour: int) -> str:
    for label, start, end in LOGIN_TIME_BUCKETS:
        if start <= hour < end:
            return label
    return "Night"


def preferred_login_time(sessions: list[LoginSession], tz: str | None = None) -> str:
    """Return the part of the day the user most often logs in, or "N/A"."""
    logins = _local_login_times(sessions, tz or settings.display_timezone)
    if not logins:
        return NOT_APPLICABLE
    counts = Counter(_login_bucket(moment.hour) for moment in logins)
    order = [label for label, _, _ in LOGIN_TIME_BUCKETS] + ["Night"]
    return max(order, key=lambda label: counts.get(label, 0))


def device_usage(sessions: list[LoginSession]) -> str:
    devices = Counter(s.device for s in sessions if s.device)
    if not devices:
        return "Unknown"
    return devices.most_common(1)[0][0]


def success_rate(requests: list[BorrowRequest]) -> float | None:
    """Return the share of approved loans that came back, as a percentage.

    Args:
        requests (list[BorrowRequest]): One user's requests.

    Returns:
        float | None: `returned / (approved + returned) * 100` rounded to two
            decimals, or `None` when the user never had an approved loan.

    """
    returned = sum(1 for r in requests if r.status == RequestStatus.RETURNED)
    active = sum(1 for r in requests if r.status == RequestStatus.APPROVED)
    if returned + active == 0:
        return None
    return round(returned / (returned + active) * 100, 2)


def user_activity_frame(
    users: list[User],
    sessions: list[LoginSession],
    requests: list[BorrowRequest],
    now: datetime.datetime,
    *,
    date_format: str | None = None,
    tz: str | None = None,
) -> pl.DataFrame:
    """Build the User Activity Report table, one row per user.

    Sessions are matched by `LoginSession.user_id` and borrowing history by
    `BorrowRequest.student_id`, both against `User.id`.

    Args:
        users (list[User]): Registered users.
        sessions (list[LoginSession]): All login sessions.
        requests (list[BorrowRequest]): All borrow requests.
        now (datetime.datetime): Reference time for ages and recency.
        date_format (str | None): Override for `settings.date_format`.
        tz (str | None): Override for `settings.display_timezone`.

    Returns:
        pl.DataFrame: Table with the `USER_ACTIVITY` schema.

    """
    date_format = date_format or settings.date_format
    tz = tz or settings.display_timezone
    rows = []
    for user in users:
        user_sessions = [s for s in sessions if s.user_id == user.id]
        user_requests = [r for r in requests if r.student_id == user.id]

        registered = parse_timestamp(user.registered_at)
        last_login = parse_timestamp(user.last_login_at)
        account_age = ceil_days(now, registered) if registered else None
        since_last_login = ceil_days(now, last_login) if last_login else None

        hours = total_session_hours(user_sessions)
        average = (
            f"{round(hours, 2) / len(user_sessions):.2f} hours" if user_sessions else "0 hours"
        )
        borrowed = sum(
            r.quantity
            for r in user_requests
            if r.status in (RequestStatus.APPROVED, RequestStatus.RETURNED)
        )

        rows.append(
            (
                user.id,
                user.name,
                user.email,
                UserRole(user.role).value.upper(),
                format_date(user.registered_at, date_format, tz) or INVALID_DATE,
                format_date(user.last_login_at, date_format, tz) or "Never",
                user.login_count or 0,
                "ACTIVE" if user.is_active else "INACTIVE",
                activity_level(user.login_count).value,
                since_last_login,
                account_age,
                engagement_score(user.login_count, account_age),
                f"{hours:.2f}",
                average,
                most_active_day(user_sessions, tz),
                preferred_login_time(user_sessions, tz),
                device_usage(user_sessions),
                borrowed,
                sum(1 for r in user_requests if r.status == RequestStatus.APPROVED),
                sum(1 for r in user_requests if r.status == RequestStatus.RETURNED),
                success_rate(user_requests),
            )
        )
    return build_frame(USER_ACTIVITY, rows)
