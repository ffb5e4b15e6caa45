"""Date rendering and movement helpers shared by every export format."""

import re
from datetime import datetime
from typing import List, Optional

from ..models import Movement, ProcessRecord


SENTINEL_VALUES = {"não informado", "n/a", "não disponível"}

_DATE_FORMATS = {
    "date": "%d/%m/%Y",
    "time": "%H:%M:%S",
    "datetime": "%d/%m/%Y %H:%M:%S",
}


def parse_date(value: str) -> Optional[datetime]:
    """Parse the timestamp shapes DataJud returns (ISO-8601, YYYYMMDDHHMMSS, YYYYMMDD)."""
    if not value:
        return None
    s = value.strip()
    if re.fullmatch(r"\d{14}", s):
        return datetime.strptime(s, "%Y%m%d%H%M%S")
    if re.fullmatch(r"\d{8}", s):
        return datetime.strptime(s, "%Y%m%d")
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(value: Optional[str], kind: str = "date") -> str:
    """Render a timestamp in pt-BR form.

    Sentinel text ("Não informado") and unparseable values are returned
    unchanged. The timestamp is shown as given, without timezone conversion.
    """
    if not value:
        return ""
    if value.strip().lower() in SENTINEL_VALUES:
        return value
    parsed = parse_date(value)
    if parsed is None:
        return value
    return parsed.strftime(_DATE_FORMATS[kind])


def latest_movements(record: ProcessRecord, count: int = 3) -> List[Optional[Movement]]:
    """Most recent movements first, padded with None up to ``count``.

    The last element of ``movimentos`` is the most recent one. Every format
    uses this convention.
    """
    recent = list(reversed(record.movimentos[-count:])) if count > 0 else []
    return recent + [None] * (count - len(recent))


def movement_history(record: ProcessRecord) -> str:
    """Flatten the whole movement history into one text cell."""
    entries = []
    for idx, mov in enumerate(record.movimentos, start=1):
        date = format_date(mov.dataHora, "date")
        time = format_date(mov.dataHora, "time")
        note = f" | {mov.complemento}" if mov.complemento else ""
        entries.append(f"[{idx}] {date} {time} - {mov.nome}{note}")
    return " || ".join(entries)
