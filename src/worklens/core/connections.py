"""Connection (contact) search - pure, no I/O."""

from collections.abc import Iterable
from typing import Any

from .records import as_records, field, resolve_text


def filter_connections(connections: Iterable[Any] | None, search_text: str) -> list[Any]:
    """Match name or email case-insensitively, or phone as a plain substring."""
    query = (search_text or "").strip().lower()
    records = as_records(connections)
    if not query:
        return records

    def matches(conn: Any) -> bool:
        name = resolve_text(conn, (field("name"),)).lower()
        email = resolve_text(conn, (field("email"),)).lower()
        phone = resolve_text(conn, (field("phone"),))
        return query in name or query in email or query in phone

    return [c for c in records if matches(c)]


def mask_phone(phone: Any) -> str:
    """Keep the first and last two characters, mask the rest."""
    if phone is None or phone == "":
        return ""
    digits = str(phone)
    if len(digits) <= 4:
        return digits
    return f"{digits[:2]}{'*' * (len(digits) - 4)}{digits[-2:]}"
