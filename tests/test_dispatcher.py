"""Tests for the tool dispatcher."""

import json

import httpx
import pytest

from rollbar_mcp.errors import ErrorKind
from rollbar_mcp.mcp.handlers import ROUTES, canonical_tool_name
from rollbar_mcp.mcp.results import ToolFailure, ToolSuccess, render_result


class TestRouting:
    async def test_unknown_tool_makes_no_call(self, api, make_dispatcher):
        dispatcher = make_dispatcher(project_token="p", account_token="a")

        result = await dispatcher.invoke("rollbar_delete_project", {"id": 1})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.UNKNOWN_TOOL
        assert "rollbar_delete_project" in result.message
        assert api.requests == []

    async def test_bare_names_are_accepted(self, api, make_dispatcher, sample_items):
        api.add("/items", json=sample_items)
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("list_items", {})

        assert isinstance(result, ToolSuccess)
        assert canonical_tool_name("get_deploy") == "rollbar_get_deploy"
        assert canonical_tool_name("rollbar_get_deploy") == "rollbar_get_deploy"

    def test_route_table_covers_catalogue(self):
        assert len(ROUTES) == 12


class TestCredentials:
    async def test_project_tool_without_project_token(self, api, make_dispatcher):
        dispatcher = make_dispatcher(account_token="a")

        result = await dispatcher.invoke("rollbar_list_items", {"status": "active"})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.CONFIGURATION_ERROR
        assert "ROLLBAR_PROJECT_TOKEN" in result.message
        assert api.requests == []

    async def test_account_tool_without_account_token(self, api, make_dispatcher):
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_list_users", {})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.CONFIGURATION_ERROR
        assert "ROLLBAR_ACCOUNT_TOKEN" in result.message
        assert api.requests == []

    async def test_tools_use_their_own_token(self, api, make_dispatcher):
        api.add("/users", json={"err": 0, "result": {"users": []}})
        api.add("/deploy/1", json={"err": 0, "result": {"id": 1}})
        dispatcher = make_dispatcher(project_token="p", account_token="a")

        await dispatcher.invoke("rollbar_list_users", {})
        await dispatcher.invoke("rollbar_get_deploy", {"deployId": 1})

        assert [r.headers["X-Rollbar-Access-Token"] for r in api.requests] == ["a", "p"]


class TestListItems:
    async def test_query_parameters(self, api, make_dispatcher, sample_items):
        api.add("/items", json=sample_items)
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_list_items", {"status": "active", "limit": 5})

        assert isinstance(result, ToolSuccess)
        assert result.payload == sample_items
        assert api.paths == ["/items"]
        assert api.query() == {"status": "active", "limit": "5", "page": "1"}

    async def test_defaults(self, api, make_dispatcher, sample_items):
        api.add("/items", json=sample_items)
        dispatcher = make_dispatcher(project_token="p")

        await dispatcher.invoke("rollbar_list_items", None)

        assert api.query() == {"limit": "20", "page": "1"}

    async def test_explicit_null_filter_is_not_sent(self, api, make_dispatcher, sample_items):
        api.add("/items", json=sample_items)
        dispatcher = make_dispatcher(project_token="p")

        await dispatcher.invoke("rollbar_list_items", {"level": None, "environment": "production"})

        assert api.query() == {"environment": "production", "limit": "20", "page": "1"}


class TestOccurrences:
    async def test_item_scoped_listing(self, api, make_dispatcher):
        api.add("/instances", json={"err": 0, "result": {"instances": []}})
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_list_occurrences", {"itemId": 42})

        assert isinstance(result, ToolSuccess)
        assert api.paths == ["/instances"]
        assert api.query()["item_id"] == "42"

    async def test_project_listing(self, api, make_dispatcher):
        api.add("/occurrences", json={"err": 0, "result": {"instances": []}})
        dispatcher = make_dispatcher(project_token="p")

        await dispatcher.invoke("rollbar_list_occurrences", {})

        assert api.paths == ["/occurrences"]

    async def test_get_occurrence_accepts_numeric_id(self, api, make_dispatcher):
        api.add("/instance/481761298", json={"err": 0, "result": {"id": 481761298}})
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_get_occurrence", {"id": 481761298})

        assert isinstance(result, ToolSuccess)
        assert api.paths == ["/instance/481761298"]

    async def test_get_occurrence_accepts_digit_string(self, api, make_dispatcher):
        api.add("/instance/481761298", json={"err": 0, "result": {"id": 481761298}})
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_get_occurrence", {"id": " 481761298 "})

        assert isinstance(result, ToolSuccess)
        assert api.paths == ["/instance/481761298"]


class TestProjectResolution:
    async def test_explicit_project_id(self, api, make_dispatcher):
        api.add("/project/77/environments", json={"err": 0, "result": ["production"]})
        dispatcher = make_dispatcher(project_token="p", account_token="a", project_id=123, project_name="x")

        result = await dispatcher.invoke("rollbar_list_environments", {"projectId": 77})

        assert isinstance(result, ToolSuccess)
        assert api.paths == ["/project/77/environments"]

    async def test_default_project_id(self, api, make_dispatcher):
        api.add("/project/123", json={"err": 0, "result": {"id": 123}})
        dispatcher = make_dispatcher(account_token="a", project_id=123)

        result = await dispatcher.invoke("rollbar_get_project", {})

        assert isinstance(result, ToolSuccess)
        assert api.paths == ["/project/123"]

    async def test_project_name_lookup_runs_first(self, api, make_dispatcher, sample_projects):
        api.add("/projects", json=sample_projects)
        api.add("/project/456/deploys", json={"err": 0, "result": {"deploys": []}})
        dispatcher = make_dispatcher(project_token="p", account_token="a", project_name="test-project")

        result = await dispatcher.invoke("rollbar_list_deploys", {"environment": "production"})

        assert isinstance(result, ToolSuccess)
        assert api.paths == ["/projects", "/project/456/deploys"]
        assert api.query() == {"environment": "production", "limit": "20", "page": "1"}

    @pytest.mark.parametrize("tool", ["rollbar_list_environments", "rollbar_list_deploys"])
    async def test_missing_project_id(self, api, make_dispatcher, tool):
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke(tool, {})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.MISSING_PARAMETER
        assert "project id required" in result.message
        assert api.requests == []

    async def test_unknown_project_name(self, api, make_dispatcher, sample_projects):
        api.add("/projects", json=sample_projects)
        dispatcher = make_dispatcher(account_token="a", project_name="missing")

        result = await dispatcher.invoke("rollbar_get_project", {})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.MISSING_PARAMETER
        assert api.paths == ["/projects"]


class TestArgumentValidation:
    async def test_missing_required_argument(self, api, make_dispatcher):
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_get_item", {})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.MISSING_PARAMETER
        assert "id" in result.message
        assert api.requests == []

    async def test_unknown_argument(self, api, make_dispatcher):
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_get_item", {"id": 1, "verbose": True})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.INTERNAL_ERROR
        assert "verbose" in result.message
        assert api.requests == []

    async def test_mistyped_argument(self, api, make_dispatcher):
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_get_deploy", {"deployId": "latest"})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.INTERNAL_ERROR
        assert api.requests == []

    async def test_boolean_is_not_an_integer(self, api, make_dispatcher):
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_get_item", {"id": True})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.INTERNAL_ERROR
        assert api.requests == []

    @pytest.mark.parametrize("occurrence_id", ["../users", "123/../../users", "abc"])
    async def test_occurrence_id_must_be_digits(self, api, make_dispatcher, occurrence_id):
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_get_occurrence", {"id": occurrence_id})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.INTERNAL_ERROR
        assert api.requests == []


class TestUpstreamFailures:
    async def test_not_found(self, api, make_dispatcher):
        api.add("/deploy/1", json={"err": 1, "message": "Deploy not found"}, status=404)
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_get_deploy", {"deployId": 1})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.UPSTREAM_ERROR
        assert result.status == 404
        assert result.data == {"err": 1, "message": "Deploy not found"}

    async def test_non_json_error_body(self, api, make_dispatcher):
        api.add_handler("/user/5", lambda request: httpx.Response(502, text="Bad Gateway"))
        dispatcher = make_dispatcher(account_token="a")

        result = await dispatcher.invoke("rollbar_get_user", {"id": 5})

        assert isinstance(result, ToolFailure)
        assert result.status == 502
        assert result.data == "Bad Gateway"

    async def test_transport_error(self, api, make_dispatcher):
        def timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        api.add_handler("/item/1", timeout)
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_get_item", {"id": 1})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.TRANSPORT_ERROR
        assert result.status is None
        assert "timed out" in result.message

    async def test_malformed_success_body(self, api, make_dispatcher):
        api.add_handler("/item_by_counter/42", lambda request: httpx.Response(200, text="not json"))
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_get_item_by_counter", {"counter": 42})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.INTERNAL_ERROR


class TestRenderResult:
    def test_success_is_passed_through(self, sample_items):
        text = render_result(ToolSuccess(sample_items))

        assert json.loads(text) == sample_items
        assert text == json.dumps(sample_items, indent=2)

    def test_upstream_error_envelope(self):
        failure = ToolFailure(ErrorKind.UPSTREAM_ERROR, "Not Found", status=404, data={"err": 1})

        assert json.loads(render_result(failure)) == {
            "error": "API Error",
            "kind": "UpstreamError",
            "message": "Not Found",
            "status": 404,
            "data": {"err": 1},
        }

    def test_server_error_envelope_omits_empty_fields(self):
        failure = ToolFailure(ErrorKind.CONFIGURATION_ERROR, "ROLLBAR_PROJECT_TOKEN is not set")

        assert json.loads(render_result(failure)) == {
            "error": "Server Error",
            "kind": "ConfigurationError",
            "message": "ROLLBAR_PROJECT_TOKEN is not set",
        }


class TestNullArguments:
    async def test_null_pagination_uses_defaults(self, api, make_dispatcher):
        api.add("/occurrences", json={"err": 0, "result": {"instances": []}})
        dispatcher = make_dispatcher(project_token="p")

        await dispatcher.invoke("rollbar_list_occurrences", {"itemId": None, "limit": None, "page": None})

        assert api.paths == ["/occurrences"]
        assert api.query() == {"limit": "20", "page": "1"}

    async def test_null_required_argument_is_missing(self, make_dispatcher):
        dispatcher = make_dispatcher(project_token="p")

        result = await dispatcher.invoke("rollbar_get_deploy", {"deployId": None})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.MISSING_PARAMETER
