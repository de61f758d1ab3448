"""Record access via ordered alias chains - no I/O dependencies.

Upstream records are loosely-typed mappings where one logical attribute can
live under several keys. Each attribute is an explicit tuple of accessors,
evaluated in order; the first present value wins.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

Record = Mapping[str, Any]
Accessor = Callable[[Any], Any]
AliasChain = tuple[Accessor, ...]


def is_present(value: Any) -> bool:
    """None, empty strings and empty containers count as absent."""
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value) > 0
    return True


def field(key: str) -> Accessor:
    """Accessor for a top-level key."""

    def get(record: Any) -> Any:
        if not isinstance(record, Mapping):
            return None
        return record.get(key)

    return get


def nested(outer: str, key: str) -> Accessor:
    """Accessor for ``record[outer][key]`` when ``record[outer]`` is a mapping."""

    def get(record: Any) -> Any:
        if not isinstance(record, Mapping):
            return None
        inner = record.get(outer)
        if not isinstance(inner, Mapping):
            return None
        return inner.get(key)

    return get


def text_field(key: str) -> Accessor:
    """Accessor that only yields string values (e.g. ``project`` as a plain name)."""

    def get(record: Any) -> Any:
        value = field(key)(record)
        return value if isinstance(value, str) else None

    return get


def number_field(key: str, coerce: bool = False) -> Accessor:
    """
    Accessor for a numeric key; zero falls through to the next alias.

    Numeric strings count only when ``coerce`` is set.
    """

    def get(record: Any) -> Any:
        value = field(key)(record)
        if isinstance(value, str) and not coerce:
            return None
        return to_number(value) or None

    return get


def date_field(key: str) -> Accessor:
    """Accessor for a date key; zero or false falls through to the next alias."""

    def get(record: Any) -> Any:
        value = field(key)(record)
        if value is False or (isinstance(value, (int, float)) and value == 0):
            return None
        return value

    return get


def first_present(record: Any, chain: AliasChain) -> Any:
    """Resolve an attribute: the first present value along the chain, else None."""
    for accessor in chain:
        value = accessor(record)
        if is_present(value):
            return value
    return None


def resolve_text(record: Any, chain: AliasChain) -> str:
    """Resolve an attribute as a string, defaulting to ""."""
    value = first_present(record, chain)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def resolve_number(record: Any, chain: AliasChain) -> float:
    """Resolve an attribute as a number, defaulting to 0."""
    return to_number(first_present(record, chain))


def to_number(value: Any) -> float:
    """Coerce ints, floats and numeric strings; everything else is 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0
    return 0


def contains_folded(haystacks: Iterable[str], needle: str) -> bool:
    """Case-insensitive substring test against any of the haystacks."""
    needle = needle.casefold()
    return any(needle in h.casefold() for h in haystacks)


def as_records(collection: Iterable[Any] | None) -> list[Any]:
    """A None collection is an empty one."""
    if collection is None:
        return []
    return list(collection)


# Alias chains shared across views

WORK_TITLE: AliasChain = (field("title"), field("taskName"), field("issueTitle"), field("name"))
WORK_DESCRIPTION: AliasChain = (field("desc"), field("description"))
WORK_PROJECT: AliasChain = (nested("project", "projectName"), text_field("project"), field("projectName"))
DUE_DATE: AliasChain = (date_field("endDate"), date_field("dueDate"), date_field("date"))
PROGRESS: AliasChain = (number_field("percent"), number_field("progress"))
STATUS: AliasChain = (field("status"),)

ISSUE_NAME: AliasChain = (field("name"), field("issueTitle"), field("title"), field("taskName"))
ISSUE_PROJECT: AliasChain = (nested("project", "projectName"), field("projectName"))
ISSUE_CREATOR: AliasChain = (field("creatorName"), nested("creator", "name"))
ISSUE_LOCATION: AliasChain = (nested("project", "location"), field("projectLocation"))

PROJECT_NAME: AliasChain = (field("projectName"), field("name"))
PROJECT_DESCRIPTION: AliasChain = (field("description"),)
PROJECT_LOCATION: AliasChain = (field("location"),)
