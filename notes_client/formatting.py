"""Human-readable note dates."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

_MONTHS: dict[str, tuple[str, ...]] = {
    "es": (
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ),
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}  # fmt: skip


def format_created_at(value: Optional[datetime], locale: str = "es-MX") -> str:
    """Format a creation timestamp as a long date with a 12-hour clock.

    Aware timestamps are shown in local time. Unknown locales fall back
    to ISO-8601.
    """
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone()

    language = locale.split("-", 1)[0].lower()
    months = _MONTHS.get(language)
    if months is None:
        return value.isoformat(timespec="minutes")

    month = months[value.month - 1]
    hour = value.hour % 12 or 12
    if language == "es":
        meridiem = "a.m." if value.hour < 12 else "p.m."
        return f"{value.day} de {month} de {value.year}, {hour:02d}:{value.minute:02d} {meridiem}"
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{month} {value.day}, {value.year}, {hour:02d}:{value.minute:02d} {meridiem}"
