"""Facet option derivation - pure, no I/O."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .records import (
    AliasChain,
    ISSUE_CREATOR,
    ISSUE_LOCATION,
    ISSUE_PROJECT,
    PROJECT_LOCATION,
    STATUS,
    as_records,
    field,
    first_present,
)

FacetOptions = dict[str, list[str]]


@dataclass(frozen=True)
class Facet:
    """A multi-select filter dimension and how to read its values off a record."""

    name: str
    values: Callable[[Any], list[str]]


def single(chain: AliasChain) -> Callable[[Any], list[str]]:
    """Single-valued facet resolved through an alias chain."""

    def extract(record: Any) -> list[str]:
        value = first_present(record, chain)
        if value is None:
            return []
        return [value if isinstance(value, str) else str(value)]

    return extract


def many(key: str) -> Callable[[Any], list[str]]:
    """Multi-valued facet stored as a list (e.g. tags)."""
    get = field(key)

    def extract(record: Any) -> list[str]:
        value = get(record)
        if not isinstance(value, (list, tuple)):
            return []
        return [v for v in value if isinstance(v, str) and v]

    return extract


ISSUE_FACETS: dict[str, Facet] = {
    "status": Facet("status", single(STATUS)),
    "projects": Facet("projects", single(ISSUE_PROJECT)),
    "createdBy": Facet("createdBy", single(ISSUE_CREATOR)),
    "locations": Facet("locations", single(ISSUE_LOCATION)),
}

PROJECT_FACETS: dict[str, Facet] = {
    "tags": Facet("tags", many("tags")),
    "locations": Facet("locations", single(PROJECT_LOCATION)),
}


def compute_facets(collection: Iterable[Any] | None, facets: Mapping[str, Facet]) -> FacetOptions:
    """
    Distinct, sorted, non-empty values of each facet across a collection.

    Pure function - recomputed on every call, so options never outlive
    the collection they were derived from.
    """
    seen: dict[str, set[str]] = {name: set() for name in facets}
    for record in as_records(collection):
        for name, facet in facets.items():
            seen[name].update(v for v in facet.values(record) if v)
    return {name: sorted(values) for name, values in seen.items()}


def issue_facets(issues: Iterable[Any] | None) -> FacetOptions:
    """Facet options for the issue list: status, projects, createdBy, locations."""
    return compute_facets(issues, ISSUE_FACETS)


def project_facets(projects: Iterable[Any] | None) -> FacetOptions:
    """Facet options for the project list: tags, locations."""
    return compute_facets(projects, PROJECT_FACETS)
