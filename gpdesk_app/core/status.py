"""Status label helpers shared by pages, aggregations and reports.

Status labels come from the tracker verbatim (Spanish workflow names). The
completion rate only counts rows whose label equals ``CLOSED_STATUS`` exactly,
so a renamed workflow state silently drops to 0%.
"""

from __future__ import annotations

from collections.abc import Iterable

from .config import CLOSED_STATUS, FIXED_STATUSES, STATUS_COLORS, UNKNOWN_LABEL
from .models import StatusCount


def clean_status_name(value: str | None) -> str:
    """Sanitize status string, converting null-like values to "Unknown".

    Parameters
    ----------
    value : str | None
        Raw status string.

    Returns
    -------
    str
        Cleaned status string or "Unknown" for empty/null values.
    """
    if not value:
        return UNKNOWN_LABEL
    text = str(value).strip()
    if not text:
        return UNKNOWN_LABEL
    if text.lower() in {"nan", "none", "null"}:
        return UNKNOWN_LABEL
    return text


def is_closed_status(value: str | None) -> bool:
    return value == CLOSED_STATUS


def closed_count(statuses: Iterable[StatusCount]) -> int:
    """Tickets in the closed status (first matching row, as the view has one per label)."""
    for row in statuses:
        if is_closed_status(row.status):
            return int(row.count)
    return 0


def status_color(value: str | None, default: str = "#94a3b8") -> str:
    return STATUS_COLORS.get(clean_status_name(value), default)


def ordered_status_labels(labels: Iterable[str]) -> list[str]:
    """Fixed workflow statuses first, then any extra label alphabetically."""
    seen = {clean_status_name(label) for label in labels}
    extras = sorted(seen.difference(FIXED_STATUSES), key=str.lower)
    return list(FIXED_STATUSES) + extras
