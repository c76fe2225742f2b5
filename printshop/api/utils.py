from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date
from typing import Any

from printshop.domain.reports import DateWindow


def date_window(start: date | None, end: date | None) -> DateWindow:
    return DateWindow(start=start, end=end)


def window_payload(window: DateWindow) -> dict[str, str | None]:
    return {
        "start": window.start.isoformat() if window.start else None,
        "end": window.end.isoformat() if window.end else None,
    }


def to_payload(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, list):
        return [to_payload(item) for item in value]
    return value


def today() -> date:
    # Business days follow the shop's local calendar.
    return date.today()
