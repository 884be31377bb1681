"""Due-date based urgency inference."""

from datetime import date

# (max days until due, urgency), checked in order
URGENCY_BUCKETS: list[tuple[int, int]] = [
    (0, 10),  # overdue or due today
    (1, 9),
    (3, 7),
    (7, 5),
    (14, 3),
]
DISTANT_URGENCY = 1


def infer_urgency(due_date: date | None, today: date) -> int | None:
    """Infer urgency (0-10) from how many days remain until due_date."""
    if due_date is None:
        return None

    days_until = (due_date - today).days
    for max_days, urgency in URGENCY_BUCKETS:
        if days_until <= max_days:
            return urgency
    return DISTANT_URGENCY
