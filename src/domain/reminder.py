"""Service reminder date arithmetic"""

from datetime import date, datetime, timedelta


def next_service_due_date(visit_date: date, reminder_weeks: int) -> date:
    """
    Date the next service is due: visit_date plus reminder_weeks calendar weeks.

    Datetimes are reduced to their date component; no timezone conversion.
    """
    if isinstance(reminder_weeks, bool) or not isinstance(reminder_weeks, int):
        raise ValueError(f"reminder_weeks must be an integer, got {reminder_weeks!r}")
    if reminder_weeks < 0:
        raise ValueError(f"reminder_weeks must be >= 0, got {reminder_weeks}")
    if isinstance(visit_date, datetime):
        visit_date = visit_date.date()
    return visit_date + timedelta(days=reminder_weeks * 7)
