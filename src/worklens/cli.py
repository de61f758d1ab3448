"""worklens CLI - list views over exported task/issue/project data."""

import json
import logging
import sys
from datetime import datetime

import click

from .adapters.json_store import JsonRecordStore, RecordStoreError
from .config import load_config
from .core import (
    categorize_projects,
    filter_connections,
    filter_issues,
    filter_projects,
    filter_tasks,
    issue_facets,
    mask_phone,
    project_facets,
    rank_worklist,
    resolve_role,
    task_facets,
)
from .core.records import ISSUE_NAME, PROJECT_NAME, STATUS, WORK_PROJECT, WORK_TITLE, resolve_text
from .core.tasks import CREATED_BY, MY_TASKS, TASK_NAME, task_project, task_status
from .core.worklist import NO_DUE_DATE, WORKLIST_LIMIT, WorklistMode
from .ports.record_source import RecordSource


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _load(ctx: click.Context, name: str) -> list[dict]:
    """Load a collection from the record source, exiting on unreadable data."""
    source: RecordSource = ctx.obj["source"]
    fetchers = {
        "tasks": source.fetch_tasks,
        "issues": source.fetch_issues,
        "projects": source.fetch_projects,
        "connections": source.fetch_connections,
    }
    try:
        return fetchers[name]()
    except RecordStoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _due_label(days: float) -> str:
    if days == NO_DUE_DATE:
        return "no due date"
    whole = int(days // 1)
    if whole < 0:
        return f"OVERDUE by {-whole}d"
    if whole == 0:
        return "due TODAY"
    return f"due in {whole}d"


@click.group()
@click.version_option(package_name="worklens")
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Directory of JSON collections")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, data_dir: str | None, debug: bool):
    """worklens - filter, facet and prioritize work items."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    config = load_config()
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["source"] = JsonRecordStore(data_dir or config.resolved_data_dir)


@main.command()
@click.option("--mode", type=click.Choice([m.value for m in WorklistMode]), default=None, help="Tasks or issues")
@click.option("--search", default="", help="Search title, description and project")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Rank as of this date")
@click.option("--limit", type=click.IntRange(0, WORKLIST_LIMIT, clamp=True), default=None, help="Maximum items to show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def worklist(ctx, mode: str | None, search: str, today: datetime | None, limit: int | None, as_json: bool):
    """Show what to do next: open items, overdue and critical first."""
    config = ctx.obj["config"]
    mode = mode or config.default_mode
    tasks = _load(ctx, "tasks") if mode == WorklistMode.TASKS.value else []
    issues = _load(ctx, "issues") if mode == WorklistMode.ISSUES.value else []
    now = today or datetime.now()

    ranked = rank_worklist(
        tasks,
        issues,
        mode,
        search,
        now,
        limit=limit if limit is not None else config.worklist_limit,
    )

    if as_json:
        _echo_json(
            [
                {
                    **item.record,
                    "daysUntilDue": item.days_until_due if item.has_due_date else None,
                }
                for item in ranked
            ]
        )
        return

    if not ranked:
        click.echo(f"No open {mode}.")
        return

    for item in ranked:
        marker = "!" if item.is_critical else " "
        title = resolve_text(item.record, WORK_TITLE) or "(untitled)"
        project = resolve_text(item.record, WORK_PROJECT)
        suffix = f", project: {project}" if project else ""
        click.echo(f"{marker} {title} ({_due_label(item.days_until_due)}{suffix})")


@main.command()
@click.option("--search", default="", help="Search issue names")
@click.option("--status", multiple=True, help="Accepted status (repeatable)")
@click.option("--project", "projects", multiple=True, help="Accepted project name (repeatable)")
@click.option("--created-by", "created_by", multiple=True, help="Accepted creator name (repeatable)")
@click.option("--location", "locations", multiple=True, help="Accepted location (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def issues(ctx, search: str, status, projects, created_by, locations, as_json: bool):
    """List issues matching a search and facet filters."""
    filter_set = {
        "status": list(status),
        "projects": list(projects),
        "createdBy": list(created_by),
        "locations": list(locations),
    }
    matched = filter_issues(_load(ctx, "issues"), search, filter_set)

    if as_json:
        _echo_json(matched)
        return

    if not matched:
        click.echo("No matching issues.")
        return

    for issue in matched:
        status_str = resolve_text(issue, STATUS) or "-"
        click.echo(f"• [{status_str}] {resolve_text(issue, ISSUE_NAME) or '(untitled)'}")


@main.command()
@click.option("--search", default="", help="Search name, description, location and tags")
@click.option("--tag", "tags", multiple=True, help="Accepted tag (repeatable)")
@click.option("--location", "locations", multiple=True, help="Accepted location (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def projects(ctx, search: str, tags, locations, as_json: bool):
    """List projects split into pending and completed."""
    filter_set = {"tags": list(tags), "locations": list(locations)}
    matched = filter_projects(_load(ctx, "projects"), search, filter_set)
    categories = categorize_projects(matched)

    if as_json:
        _echo_json({"pending": categories.pending, "completed": categories.completed})
        return

    for label, group in (("Pending", categories.pending), ("Completed", categories.completed)):
        click.echo(f"### {label} ({len(group)})")
        for project in group:
            click.echo(f"  {resolve_text(project, PROJECT_NAME) or '(unnamed)'}")


@main.command()
@click.option("--tab", type=click.Choice([MY_TASKS, CREATED_BY]), default=MY_TASKS, help="Assigned to me or created by me")
@click.option("--search", default="", help="Search task and project names")
@click.option("--status", multiple=True, help="Accepted status (repeatable)")
@click.option("--project", "projects", multiple=True, help="Accepted project name (repeatable)")
@click.option("--tag", "tags", multiple=True, help="Accepted tag (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def tasks(ctx, tab: str, search: str, status, projects, tags, as_json: bool):
    """List tasks, pending first, oldest due date first."""
    filter_set = {"status": list(status), "projects": list(projects), "tags": list(tags)}
    matched = filter_tasks(_load(ctx, "tasks"), search, filter_set, tab)

    if as_json:
        _echo_json(matched)
        return

    if not matched:
        click.echo("No matching tasks.")
        return

    for task in matched:
        name = resolve_text(task, TASK_NAME) or "(untitled)"
        click.echo(f"• [{task_status(task)}] {name} ({task_project(task)})")


@main.command()
@click.argument("collection", type=click.Choice(["issues", "projects", "tasks"]))
@click.option("--tab", type=click.Choice([MY_TASKS, CREATED_BY]), default=MY_TASKS, help="Task tab (tasks only)")
@click.pass_context
def facets(ctx, collection: str, tab: str):
    """Show the filter options available for a collection."""
    records = _load(ctx, collection)
    if collection == "issues":
        options = issue_facets(records)
    elif collection == "projects":
        options = project_facets(records)
    else:
        options = task_facets(records, tab)
    _echo_json(options)


@main.command()
@click.argument("project_id")
@click.option("--user-id", default=None, help="User id (default: USER_ID from config)")
@click.option("--user-name", default=None, help="User name (default: USER_NAME from config)")
@click.pass_context
def role(ctx, project_id: str, user_id: str | None, user_name: str | None):
    """Show whether a user owns or co-administers a project."""
    config = ctx.obj["config"]
    project = next(
        (
            p
            for p in _load(ctx, "projects")
            if project_id in (str(p.get("_id", "")), str(p.get("id", "")), str(p.get("projectId", "")))
        ),
        None,
    )
    if project is None:
        click.echo(f"Error: project {project_id} not found", err=True)
        sys.exit(1)

    result = resolve_role(project, user_id or config.user_id, user_name or config.user_name)
    _echo_json({"isOwner": result.is_owner, "isCoAdmin": result.is_co_admin})


@main.command()
@click.option("--search", default="", help="Search name, email or phone")
@click.pass_context
def connections(ctx, search: str):
    """List connections with masked phone numbers."""
    matched = filter_connections(_load(ctx, "connections"), search)
    if not matched:
        click.echo("No matching connections.")
        return

    for conn in matched:
        phone = mask_phone(conn.get("phone"))
        click.echo(f"• {conn.get('name', '')}" + (f" ({phone})" if phone else ""))


if __name__ == "__main__":
    main()
