"""Tests for project role resolution."""

from worklens.core.roles import RoleResult, is_co_admin, is_owner, resolve_role


class TestIsOwner:
    def test_nested_underscore_id(self):
        assert is_owner({"userId": {"_id": "42"}}, "42", None) is True

    def test_nested_id(self):
        assert is_owner({"userId": {"id": 42}}, "42", None) is True

    def test_scalar_user_id_compared_as_string(self):
        assert is_owner({"userId": 42}, "42", None) is True

    def test_creator_id_fallback(self):
        assert is_owner({"creatorId": "7"}, "7", None) is True

    def test_creator_user_id_fallback(self):
        assert is_owner({"creatorUserId": "7"}, 7, None) is True

    def test_user_id_takes_precedence_over_creator_id(self):
        assert is_owner({"userId": "1", "creatorId": "7"}, "7", None) is False

    def test_name_fallback_trimmed_case_insensitive(self):
        assert is_owner({"userId": "999", "creatorName": "  Asha Rao "}, "42", "asha rao") is True

    def test_name_from_populated_user(self):
        assert is_owner({"userId": {"_id": "999", "name": "Asha"}}, "42", "ASHA") is True

    def test_name_mismatch(self):
        assert is_owner({"userId": "999", "creatorName": "Ravi"}, "42", "Asha") is False

    def test_missing_project(self):
        assert is_owner(None, "42", "Asha") is False

    def test_missing_user(self):
        assert is_owner({"userId": "42", "creatorName": "Asha"}, None, None) is False


class TestIsCoAdmin:
    def test_object_entries(self):
        project = {"coAdmins": [{"id": "5"}, {"_id": "42"}]}
        assert is_co_admin(project, "42") is True

    def test_scalar_entries(self):
        assert is_co_admin({"coAdmins": ["5", 42]}, "42") is True

    def test_not_listed(self):
        assert is_co_admin({"coAdmins": [{"id": "5"}]}, "42") is False

    def test_missing_list(self):
        assert is_co_admin({}, "42") is False

    def test_missing_user_id(self):
        assert is_co_admin({"coAdmins": ["42"]}, None) is False

    def test_malformed_list(self):
        assert is_co_admin({"coAdmins": "42"}, "42") is False


class TestResolveRole:
    def test_owner_and_co_admin(self):
        project = {"userId": {"_id": "42"}, "coAdmins": ["42"]}
        assert resolve_role(project, "42", "Asha") == RoleResult(is_owner=True, is_co_admin=True)

    def test_missing_everything(self):
        assert resolve_role(None, None, None) == RoleResult(False, False)

    def test_idempotent(self):
        project = {"creatorName": "Asha", "coAdmins": [{"id": "3"}]}
        assert resolve_role(project, "3", "asha") == resolve_role(project, "3", "asha")
