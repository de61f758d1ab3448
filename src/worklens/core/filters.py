"""Search and multi-select facet filtering - pure, no I/O."""

import logging
from collections.abc import Callable, Collection, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .facets import ISSUE_FACETS, PROJECT_FACETS, Facet
from .records import (
    ISSUE_NAME,
    PROJECT_DESCRIPTION,
    PROJECT_LOCATION,
    PROJECT_NAME,
    STATUS,
    as_records,
    contains_folded,
    number_field,
    resolve_number,
    resolve_text,
)

logger = logging.getLogger(__name__)

FilterSet = Mapping[str, Collection[str]]

PROJECT_PROGRESS = (number_field("progress", coerce=True),)


@dataclass
class ProjectCategories:
    """Filtered projects split by completion."""

    pending: list[Any] = field(default_factory=list)
    completed: list[Any] = field(default_factory=list)


def _selected(values: Collection[str] | str | None) -> Collection[str]:
    # A bare string is one value, not a collection of characters
    if isinstance(values, str):
        return [values] if values else []
    return values or []


def active_filter_count(filter_set: FilterSet | None) -> int:
    """Total number of selected values across all facets."""
    if not filter_set:
        return 0
    return sum(len(_selected(values)) for values in filter_set.values())


def toggle_filter(filter_set: FilterSet, facet: str, value: str) -> dict[str, list[str]]:
    """Return a new FilterSet with ``value`` added to or removed from ``facet``."""
    updated = {name: list(_selected(values)) for name, values in filter_set.items()}
    current = updated.get(facet, [])
    if value in current:
        updated[facet] = [v for v in current if v != value]
    else:
        updated[facet] = current + [value]
    return updated


def clear_filters(filter_set: FilterSet) -> dict[str, list[str]]:
    """Same facets, nothing selected."""
    return {name: [] for name in filter_set}


def matches_facets(record: Any, filter_set: FilterSet | None, facets: Mapping[str, Facet]) -> bool:
    """True when the record satisfies every active facet constraint."""
    if not filter_set:
        return True
    for name, values in filter_set.items():
        accepted = _selected(values)
        if not accepted:
            continue
        facet = facets.get(name)
        if facet is None:
            logger.debug(f"Ignoring unknown facet {name!r}")
            continue
        if not any(v in accepted for v in facet.values(record)):
            return False
    return True


def filter_records(
    collection: Iterable[Any] | None,
    search_text: str,
    filter_set: FilterSet | None,
    *,
    text: Callable[[Any], list[str]],
    facets: Mapping[str, Facet],
) -> list[Any]:
    """
    Stable filter: text search AND every active facet.

    ``text`` yields the searchable strings of a record; an empty search
    matches everything.
    """
    search_text = search_text or ""
    result = [
        r
        for r in as_records(collection)
        if (not search_text or contains_folded(text(r), search_text))
        and matches_facets(r, filter_set, facets)
    ]
    logger.debug(f"Filtered {len(result)} records (search={search_text!r})")
    return result


def _issue_text(issue: Any) -> list[str]:
    return [resolve_text(issue, ISSUE_NAME)]


def _project_text(project: Any) -> list[str]:
    tags = project.get("tags") if isinstance(project, Mapping) else None
    return [
        resolve_text(project, PROJECT_NAME),
        resolve_text(project, PROJECT_DESCRIPTION),
        resolve_text(project, PROJECT_LOCATION),
        *(t for t in tags or [] if isinstance(t, str)),
    ]


def filter_issues(
    issues: Iterable[Any] | None,
    search_text: str,
    filter_set: FilterSet | None,
) -> list[Any]:
    """Filter issues by display name and status/projects/createdBy/locations."""
    return filter_records(issues, search_text, filter_set, text=_issue_text, facets=ISSUE_FACETS)


def filter_projects(
    projects: Iterable[Any] | None,
    search_text: str,
    filter_set: FilterSet | None,
) -> list[Any]:
    """
    Filter projects by name, description, location or any tag, then by
    tags/locations facets. Whitespace-only searches are ignored.
    """
    search_text = search_text or ""
    if not search_text.strip():
        search_text = ""
    return filter_records(projects, search_text, filter_set, text=_project_text, facets=PROJECT_FACETS)


def is_project_completed(project: Any) -> bool:
    """Completed when progress reached 100 or status says so."""
    if resolve_number(project, PROJECT_PROGRESS) >= 100:
        return True
    return resolve_text(project, STATUS).lower() == "completed"


def categorize_projects(projects: Iterable[Any] | None) -> ProjectCategories:
    """Partition projects into pending and completed, preserving order."""
    categories = ProjectCategories()
    for project in as_records(projects):
        if is_project_completed(project):
            categories.completed.append(project)
        else:
            categories.pending.append(project)
    return categories
