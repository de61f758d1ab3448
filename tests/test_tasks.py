"""Tests for the task list view."""

import pytest

from worklens.core.tasks import CREATED_BY, MY_TASKS, filter_tasks, sort_tasks, task_facets, task_status


@pytest.fixture
def sample_tasks():
    return [
        {
            "id": "1",
            "name": "Pour foundation",
            "status": "In Progress",
            "endDate": "2025-01-20",
            "project": {"name": "Tower B", "location": "Pune"},
            "creator": {"name": "Asha"},
            "tags": ["civil"],
            "category": "Construction",
        },
        {
            "id": "2",
            "taskName": "Order cement",
            "progress": 100,
            "endDate": "2025-01-10",
            "project": {"projectName": "Annex"},
            "creatorName": "Ravi",
        },
        {
            "id": "3",
            "name": "Site survey",
            "mode": "WORKFLOW",
            "createdAt": "2025-01-02T08:00:00",
            "assignedUserDetails": [{"name": "Meera"}, {"name": "Ravi"}],
        },
        {
            "id": "4",
            "name": "Permit renewal",
            "dueDate": "2025-01-12",
            "projectTitle": "City office",
            "creator": {"username": "kiran"},
            "tags": ["admin", "civil"],
        },
        {
            "id": "5",
            "name": "Safety audit",
            "createdAt": "2025-01-05T08:00:00",
        },
    ]


def ids(tasks):
    return [t["id"] for t in tasks]


class TestTaskStatus:
    def test_explicit_status(self):
        assert task_status({"status": "Blocked"}) == "Blocked"

    def test_workflow_default(self):
        assert task_status({"mode": "WORKFLOW"}) == "Active Workflow"

    def test_pending_default(self):
        assert task_status({}) == "Pending"


class TestSortTasks:
    def test_pending_dated_undated_then_completed(self, sample_tasks):
        assert ids(sort_tasks(sample_tasks)) == ["4", "1", "5", "3", "2"]

    def test_undated_without_created_at_sorted_last(self):
        tasks = [{"id": "a"}, {"id": "b", "createdAt": "2025-01-01"}]
        assert ids(sort_tasks(tasks)) == ["b", "a"]

    def test_completed_by_status_is_case_sensitive(self):
        tasks = [{"id": "a", "status": "Completed"}, {"id": "b", "status": "completed"}]
        assert ids(sort_tasks(tasks)) == ["b", "a"]

    def test_out_of_range_due_date_sorts_as_undated(self):
        tasks = [{"id": "a", "endDate": "9999-12-31T23:00:00-05:00"}, {"id": "b", "endDate": "2025-01-10"}]
        assert ids(sort_tasks(tasks)) == ["b", "a"]

    def test_string_progress_is_not_completed(self):
        tasks = [{"id": "a", "progress": "100", "endDate": "2025-01-10"}, {"id": "b", "endDate": "2025-01-12"}]
        assert ids(sort_tasks(tasks)) == ["a", "b"]

    def test_does_not_mutate_input(self, sample_tasks):
        before = ids(sample_tasks)
        sort_tasks(sample_tasks)
        assert ids(sample_tasks) == before


class TestFilterTasks:
    def test_no_filters_returns_sorted(self, sample_tasks):
        assert ids(filter_tasks(sample_tasks, "", {})) == ["4", "1", "5", "3", "2"]

    def test_search_name(self, sample_tasks):
        assert ids(filter_tasks(sample_tasks, "SURVEY", {})) == ["3"]

    def test_search_project(self, sample_tasks):
        assert ids(filter_tasks(sample_tasks, "city", {})) == ["4"]

    def test_status_facet_with_derived_values(self, sample_tasks):
        assert ids(filter_tasks(sample_tasks, "", {"status": ["Pending"]})) == ["4", "5", "2"]

    def test_project_facet_defaults_to_no_project(self, sample_tasks):
        assert ids(filter_tasks(sample_tasks, "", {"projects": ["No Project"]})) == ["4", "5", "3"]

    def test_assigned_to_on_my_tasks_means_creator(self, sample_tasks):
        assert ids(filter_tasks(sample_tasks, "", {"assignedTo": ["Ravi"]}, MY_TASKS)) == ["2"]

    def test_assigned_to_on_created_by_means_assignees(self, sample_tasks):
        assert ids(filter_tasks(sample_tasks, "", {"assignedTo": ["Ravi"]}, CREATED_BY)) == ["3"]

    def test_tags_match_any(self, sample_tasks):
        assert ids(filter_tasks(sample_tasks, "", {"tags": ["civil"]})) == ["4", "1"]

    def test_location_and_category(self, sample_tasks):
        filters = {"locations": ["Pune"], "category": ["Construction"]}
        assert ids(filter_tasks(sample_tasks, "", filters)) == ["1"]


class TestTaskFacets:
    def test_my_tasks_options(self, sample_tasks):
        options = task_facets(sample_tasks, MY_TASKS)
        assert options["status"] == ["Active Workflow", "In Progress", "Pending"]
        assert options["projects"] == ["Annex", "No Project", "Tower B"]
        assert options["assignedTo"] == ["Asha", "Ravi", "kiran"]
        assert options["locations"] == ["Pune"]
        assert options["tags"] == ["admin", "civil"]
        assert options["category"] == ["Construction"]
        assert options["mode"] == ["WORKFLOW"]

    def test_created_by_options(self, sample_tasks):
        assert task_facets(sample_tasks, CREATED_BY)["assignedTo"] == ["Meera", "Ravi"]
