"""Functional core - pure list-view logic with no I/O."""

from .facets import Facet, compute_facets, issue_facets, project_facets
from .filters import (
    ProjectCategories,
    active_filter_count,
    categorize_projects,
    clear_filters,
    filter_issues,
    filter_projects,
    filter_records,
    toggle_filter,
)
from .worklist import NO_DUE_DATE, WORKLIST_LIMIT, RankedRecord, WorklistMode, rank_worklist
from .roles import RoleResult, resolve_role
from .tasks import filter_tasks, sort_tasks, task_facets
from .connections import filter_connections, mask_phone

__all__ = [
    # Facets
    "Facet",
    "compute_facets",
    "issue_facets",
    "project_facets",
    # Filters
    "ProjectCategories",
    "active_filter_count",
    "categorize_projects",
    "clear_filters",
    "filter_issues",
    "filter_projects",
    "filter_records",
    "toggle_filter",
    # Worklist
    "NO_DUE_DATE",
    "WORKLIST_LIMIT",
    "RankedRecord",
    "WorklistMode",
    "rank_worklist",
    # Roles
    "RoleResult",
    "resolve_role",
    # Tasks
    "filter_tasks",
    "sort_tasks",
    "task_facets",
    # Connections
    "filter_connections",
    "mask_phone",
]
