"""Task list view: ordering, search, facets - pure, no I/O."""

from collections.abc import Iterable
from typing import Any

from .facets import Facet, FacetOptions, compute_facets, many, single
from .filters import FilterSet, filter_records
from .records import (
    AliasChain,
    as_records,
    date_field,
    field,
    first_present,
    nested,
    number_field,
    resolve_number,
    resolve_text,
)
from .worklist import parse_due

MY_TASKS = "mytasks"
CREATED_BY = "createdby"

TASK_NAME: AliasChain = (field("name"), field("taskName"))
TASK_PROJECT: AliasChain = (nested("project", "name"), nested("project", "projectName"), field("projectTitle"))
TASK_DUE: AliasChain = (date_field("endDate"), date_field("dueDate"))
TASK_CREATOR: AliasChain = (nested("creator", "name"), nested("creator", "username"), field("creatorName"))
TASK_PROGRESS: AliasChain = (number_field("progress"),)


def task_status(task: Any) -> str:
    """Explicit status, else derived from the task mode."""
    status = resolve_text(task, (field("status"),))
    if status:
        return status
    mode = resolve_text(task, (field("mode"),))
    return "Active Workflow" if mode == "WORKFLOW" else "Pending"


def task_project(task: Any) -> str:
    return resolve_text(task, TASK_PROJECT[:2]) or "No Project"


def is_completed(task: Any) -> bool:
    return resolve_number(task, TASK_PROGRESS) == 100 or resolve_text(task, (field("status"),)) == "Completed"


def _assigned_names(task: Any) -> list[str]:
    users = field("assignedUserDetails")(task)
    if not isinstance(users, list):
        return []
    names = [resolve_text(u, (field("name"),)) for u in users]
    return [n for n in names if n]


def _creator_names(task: Any) -> list[str]:
    name = resolve_text(task, TASK_CREATOR)
    return [name] if name else []


def task_facet_table(tab: str) -> dict[str, Facet]:
    """Facets for a task tab; 'assignedTo' means the creator on the mytasks tab."""
    people = _creator_names if tab == MY_TASKS else _assigned_names
    return {
        "status": Facet("status", lambda t: [task_status(t)]),
        "projects": Facet("projects", lambda t: [task_project(t)]),
        "assignedTo": Facet("assignedTo", people),
        "locations": Facet("locations", single((nested("project", "location"),))),
        "tags": Facet("tags", many("tags")),
        "category": Facet("category", single((field("category"),))),
        "mode": Facet("mode", single((field("mode"),))),
    }


def _timestamp(value: Any) -> float | None:
    parsed = parse_due(value)
    if parsed is None:
        return None
    try:
        return parsed.timestamp()
    except (OverflowError, OSError, ValueError):
        return None


def sort_key(task: Any) -> tuple[bool, int, float]:
    """Pending before completed, dated (oldest first) before undated (newest created first)."""
    due = _timestamp(first_present(task, TASK_DUE))
    if due is not None:
        return (is_completed(task), 0, due)
    created = _timestamp(field("createdAt")(task)) or 0.0
    return (is_completed(task), 1, -created)


def sort_tasks(tasks: Iterable[Any] | None) -> list[Any]:
    """Stable ordering for the task list."""
    return sorted(as_records(tasks), key=sort_key)


def _task_text(task: Any) -> list[str]:
    return [resolve_text(task, TASK_NAME), resolve_text(task, TASK_PROJECT)]


def filter_tasks(
    tasks: Iterable[Any] | None,
    search_text: str,
    filter_set: FilterSet | None,
    tab: str = MY_TASKS,
) -> list[Any]:
    """Sorted task list narrowed by name/project search and facets."""
    return filter_records(
        sort_tasks(tasks),
        search_text,
        filter_set,
        text=_task_text,
        facets=task_facet_table(tab),
    )


def task_facets(tasks: Iterable[Any] | None, tab: str = MY_TASKS) -> FacetOptions:
    """Facet options for the task list."""
    return compute_facets(tasks, task_facet_table(tab))

