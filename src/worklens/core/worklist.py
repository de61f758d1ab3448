"""Worklist prioritization - pure, no I/O, no wall clock.

Picks tasks or issues, drops finished items, searches, then orders by
criticality (issues only), overdue-first and soonest-due-first, capped.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any

from .records import (
    DUE_DATE,
    PROGRESS,
    STATUS,
    WORK_DESCRIPTION,
    WORK_PROJECT,
    WORK_TITLE,
    as_records,
    contains_folded,
    first_present,
    resolve_number,
    resolve_text,
)

logger = logging.getLogger(__name__)

WORKLIST_LIMIT = 20
NO_DUE_DATE = math.inf

ISSUE_DONE_STATUSES = {"completed", "resolved"}
REOPENED = "reopen"


class WorklistMode(Enum):
    """Which collection feeds the worklist."""

    TASKS = "tasks"
    ISSUES = "issues"


@dataclass(frozen=True)
class RankedRecord:
    """A worklist record with its transient day offset."""

    record: Any
    days_until_due: float

    @property
    def has_due_date(self) -> bool:
        return self.days_until_due != NO_DUE_DATE

    @property
    def is_overdue(self) -> bool:
        return self.days_until_due < 0

    @property
    def is_critical(self) -> bool:
        return isinstance(self.record, Mapping) and bool(self.record.get("isCritical"))


def _status(record: Any) -> str:
    return resolve_text(record, STATUS).lower()


def is_issue_done(issue: Any) -> bool:
    """Resolved/completed (or at 100%) issues are done, unless reopened."""
    status = _status(issue)
    if status == REOPENED:
        return False
    return status in ISSUE_DONE_STATUSES or resolve_number(issue, PROGRESS) == 100


def is_task_done(task: Any) -> bool:
    """Completed tasks, and tasks flagged as issues, stay off the task worklist."""
    if _status(task) == "completed" or resolve_number(task, PROGRESS) == 100:
        return True
    return isinstance(task, Mapping) and task.get("isIssue") is True


def matches_search(record: Any, search_text: str) -> bool:
    """Case-insensitive substring over title, description and project name."""
    if not search_text:
        return True
    fields = [
        resolve_text(record, WORK_TITLE),
        resolve_text(record, WORK_DESCRIPTION),
        resolve_text(record, WORK_PROJECT),
    ]
    return contains_folded(fields, search_text)


def parse_due(value: Any, tzinfo=None) -> datetime | None:
    """
    Parse a due date into a datetime comparable with a midnight in ``tzinfo``.

    Accepts ISO strings, date/datetime objects and epoch milliseconds.
    Zero or unparseable values mean "no due date".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not value or not math.isfinite(value):
            return None
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=tzinfo)
        except (OverflowError, OSError, ValueError):
            return None
        return parsed
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, datetime.min.time())
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            try:
                parsed = datetime.combine(date.fromisoformat(text.split("T")[0]), datetime.min.time())
            except ValueError:
                return None
    else:
        return None

    # Align awareness with the reference midnight
    if tzinfo is None and parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone().replace(tzinfo=None)
        except (OverflowError, OSError, ValueError):
            return None
    elif tzinfo is not None and parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tzinfo)
    return parsed


def days_until_due(record: Any, now: datetime) -> float:
    """Signed days from today's midnight to the due date (negative if overdue)."""
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    due = parse_due(first_present(record, DUE_DATE), midnight.tzinfo)
    if due is None:
        return NO_DUE_DATE
    return (due - midnight) / timedelta(days=1)


def rank_key(item: RankedRecord, mode: WorklistMode) -> tuple[bool, bool, float]:
    """Sort key: critical first (issues), overdue first, soonest first."""
    not_critical = mode is WorklistMode.ISSUES and not item.is_critical
    return (not_critical, not item.is_overdue, item.days_until_due)


def rank_worklist(
    tasks: Iterable[Any] | None,
    issues: Iterable[Any] | None,
    mode: WorklistMode | str,
    search_text: str,
    now: datetime,
    limit: int = WORKLIST_LIMIT,
) -> list[RankedRecord]:
    """
    Build the "what should I do next" list for the active mode.

    Pure function - ``now`` is supplied by the caller. Ties keep input
    order since ``sorted`` is stable. ``limit`` is clamped to 0..WORKLIST_LIMIT.
    """
    try:
        mode = WorklistMode(mode)
    except ValueError:
        logger.warning(f"Unknown worklist mode: {mode!r}")
        return []

    if mode is WorklistMode.ISSUES:
        source = [r for r in as_records(issues) if not is_issue_done(r)]
    else:
        source = [r for r in as_records(tasks) if not is_task_done(r)]

    search_text = search_text or ""
    ranked = [
        RankedRecord(record=r, days_until_due=days_until_due(r, now))
        for r in source
        if matches_search(r, search_text)
    ]
    limit = max(0, min(limit, WORKLIST_LIMIT))
    ranked = sorted(ranked, key=lambda item: rank_key(item, mode))
    logger.debug(f"Ranked {len(ranked)} {mode.value}, keeping {min(len(ranked), limit)}")
    return ranked[:limit]
