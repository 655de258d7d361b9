"""
Tests for MCP tool registration and the tool response envelope

Run with:
    pytest tests/test_tools.py -v
"""

import pytest
from azure.devops.v7_1.git.models import GitPullRequest, GitRepository
from tl.ado_mcp_adapter.ado_tools import AzureDevOpsTools
from tl.ado_mcp_adapter.catalog import (
    ALL_TOOL_NAMES,
    BOARDS_TOOLS,
    GIT_TOOLS,
    PROJECT_TOOLS,
    TOOL_GROUPS,
    WORK_ITEM_TOOLS,
)
from tl.ado_mcp_adapter.errors import RepositoryMismatchError
from tl.ado_mcp_adapter.models import ADOToolResponse
from tl.ado_mcp_adapter.tools import BoardsTools, GitTools, ProjectTools, WorkItemTools
from unittest.mock import MagicMock


def registered_names(mcp):
    return [call.kwargs['name'] for call in mcp.tool.call_args_list]


# ============================================================================
# CATALOG
# ============================================================================


@pytest.mark.parametrize(
    'tools_class,catalog',
    [
        (WorkItemTools, WORK_ITEM_TOOLS),
        (GitTools, GIT_TOOLS),
        (BoardsTools, BOARDS_TOOLS),
        (ProjectTools, PROJECT_TOOLS),
    ],
)
def test_every_catalog_entry_has_a_method(tools_class, catalog):
    assert tools_class.tools is catalog
    for name in catalog:
        assert callable(getattr(tools_class, name))


@pytest.mark.parametrize('tools_class', [WorkItemTools, GitTools, BoardsTools, ProjectTools])
def test_every_tool_documents_its_arguments(tools_class):
    for name in tools_class.tools:
        doc = getattr(tools_class, name).__doc__

        assert doc, f'{tools_class.__name__}.{name} has no docstring'
        assert 'Args:' in doc, f'{tools_class.__name__}.{name} does not document its arguments'


def test_tool_names_are_unique_across_groups():
    total = sum(len(tools) for tools in TOOL_GROUPS.values())

    assert total == len(ALL_TOOL_NAMES)


# ============================================================================
# REGISTRATION
# ============================================================================


class TestToolGroupRegistration:
    def test_only_allowed_tools_are_registered(self):
        mcp = MagicMock()
        group = GitTools(mcp, MagicMock(), {'get_pull_request', 'list_work_items'})

        registered = group.register()

        assert registered == ['get_pull_request']
        assert registered_names(mcp) == ['get_pull_request']
        assert mcp.tool.call_args.kwargs['description'] == GIT_TOOLS['get_pull_request']
        mcp.tool.return_value.assert_called_once_with(group.get_pull_request)

    def test_all_tools(self):
        mcp = MagicMock()

        registered = ProjectTools(mcp, MagicMock(), ALL_TOOL_NAMES).register()

        assert registered == list(PROJECT_TOOLS)

    def test_nothing_allowed(self):
        mcp = MagicMock()

        assert BoardsTools(mcp, MagicMock(), set()).register() == []
        mcp.tool.assert_not_called()


class TestAzureDevOpsTools:
    def test_services_only_for_groups_with_allowed_tools(
        self, pat_config, sdk_clients, mock_connection
    ):
        mcp = MagicMock()

        tools = AzureDevOpsTools(mcp, pat_config, {'get_pull_request', 'list_projects'})

        assert set(tools.groups) == {'git', 'projects'}
        assert sorted(tools.registered) == ['get_pull_request', 'list_projects']
        assert sorted(registered_names(mcp)) == ['get_pull_request', 'list_projects']
        assert mock_connection.call_count == 2

    def test_every_tool_by_default(self, pat_config, sdk_clients):
        mcp = MagicMock()

        tools = AzureDevOpsTools(mcp, pat_config, ALL_TOOL_NAMES)

        assert set(tools.registered) == set(ALL_TOOL_NAMES)
        assert set(tools.groups) == set(TOOL_GROUPS)

    def test_unknown_names_are_ignored_with_warning(self, pat_config, sdk_clients, log_messages):
        mcp = MagicMock()

        tools = AzureDevOpsTools(mcp, pat_config, {'get_boards', 'drop_database'})

        assert tools.registered == ['get_boards']
        output = ''.join(log_messages)
        assert 'Ignoring unknown tools in ALLOWED_TOOLS' in output
        assert 'drop_database' in output

    def test_get_pull_request_end_to_end(self, pat_config, sdk_clients):
        sdk_clients['git'].get_pull_request.return_value = GitPullRequest(
            pull_request_id=7,
            status=3,
            merge_status=6,
            repository=GitRepository(id='repo-1', name='Web'),
        )
        tools = AzureDevOpsTools(MagicMock(), pat_config, {'get_pull_request'})

        response = tools.groups['git'].get_pull_request(repository_id='repo-1', pull_request_id=7)

        assert response['status'] == 'success'
        assert response['result']['status'] == 'completed'
        assert response['result']['merge_status'] == 'succeeded'
        assert response['result']['repository'] == {'id': 'repo-1', 'name': 'Web'}


# ============================================================================
# RESPONSES
# ============================================================================


class TestToolResponses:
    def test_sdk_models_are_serialized(self):
        service = MagicMock()
        service.get_repository.return_value = GitRepository(id='repo-1', name='Web')

        response = GitTools(MagicMock(), service, ALL_TOOL_NAMES).get_repository('repo-1')

        assert response == {
            'status': 'success',
            'message': 'Retrieved repository repo-1',
            'result': {'id': 'repo-1', 'name': 'Web'},
        }

    def test_errors_become_error_responses(self):
        service = MagicMock()
        service.merge_pull_request.side_effect = RepositoryMismatchError(7, 'repo-1', 'repo-2')

        response = GitTools(MagicMock(), service, ALL_TOOL_NAMES).merge_pull_request('repo-1', 7)

        assert response.status == 'error'
        assert response.result is None
        assert response.message.startswith('RepositoryMismatchError: ')
        assert 'repo-2' in response.message

    def test_list_branches_filter_argument(self):
        service = MagicMock()
        service.list_branches.return_value = []

        GitTools(MagicMock(), service, ALL_TOOL_NAMES).list_branches('repo-1', filter='main')

        service.list_branches.assert_called_once_with(
            repository_id='repo-1', name_filter='main', top=None
        )

    def test_work_item_tool_forwards_arguments(self):
        service = MagicMock()
        service.get_work_item.return_value = {'id': 5}

        response = WorkItemTools(MagicMock(), service, ALL_TOOL_NAMES).get_work_item(5)

        service.get_work_item.assert_called_once_with(id=5, expand=None)
        assert response.result == {'id': 5}


def test_error_response_shape():
    assert ADOToolResponse.error('boom') == {'status': 'error', 'message': 'boom', 'result': None}
