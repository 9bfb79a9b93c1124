from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

NO_ACCOMMODATION = "No Accommodation"
BOOKED_LABEL = "Booked"

_STAY_LABEL_RE = re.compile(r"^(?P<name>[^()]*?)\s*\((?P<sub>[^()]*)\)\s*$")
_TIME_RE = re.compile(r"^\s*(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::\d{2}(?:\.\d+)?)?\s*$")


@dataclass(frozen=True)
class StayOption:
    name: str
    subtitle: str
    location: str


def parse_budget(value: str | None) -> int:
    """Upper bound of a free-text budget such as ``"$500-$1000"``; 0 if unreadable."""
    cleaned = re.sub(r"[^0-9-]", "", value or "")
    if "-" in cleaned:
        parts = cleaned.split("-")
        upper = _to_int(parts[1])
        if upper is not None:
            return upper
        return _to_int(parts[0]) or 0
    return _to_int(cleaned) or 0


def _to_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def normalize_stay_option(label: str | None, location: str) -> StayOption:
    text = (label or "").strip()
    if not text:
        return StayOption(name=NO_ACCOMMODATION, subtitle="", location=location)

    match = _STAY_LABEL_RE.match(text)
    if match and match.group("name").strip():
        sub = match.group("sub").strip()
        subtitle = f"{sub} · {BOOKED_LABEL}" if sub else BOOKED_LABEL
        return StayOption(name=match.group("name").strip(), subtitle=subtitle, location=location)
    return StayOption(name=text, subtitle=BOOKED_LABEL, location=location)


def normalize_time(value: Any) -> str | None:
    """``"9:05"`` / ``"09:05:00"`` -> ``"09:05"``; anything else -> ``None``."""
    if not isinstance(value, str):
        return None
    match = _TIME_RE.match(value)
    if not match:
        return None
    hour, minute = int(match.group("hour")), int(match.group("minute"))
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"
