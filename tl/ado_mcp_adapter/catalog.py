"""Names and descriptions of every tool the server can expose, by group."""

from typing import Dict, FrozenSet

WORK_ITEM_TOOLS: Dict[str, str] = {
    'list_work_items': 'List work items matching a WIQL query',
    'get_work_item': 'Get a single work item by ID',
    'get_work_items': 'Get several work items by ID in one request',
    'create_work_item': 'Create a new work item in the configured project',
    'update_work_item': 'Update fields of an existing work item',
    'add_work_item_comment': 'Add a comment to a work item',
}

GIT_TOOLS: Dict[str, str] = {
    'list_repositories': 'List all repositories in the project',
    'get_repository': 'Get details of a repository',
    'create_repository': 'Create a new Git repository',
    'list_branches': 'List branches of a repository',
    'search_code': 'Search repository items by path text and file extension',
    'browse_repository': 'List the items under a path of a repository',
    'get_file_content': 'Get the content of a file in a repository',
    'get_commit_history': 'Get the commit history of a repository',
    'get_commits': 'Get commits of a repository',
    'get_pull_requests': 'List pull requests of a repository',
    'create_pull_request': 'Create a new pull request',
    'get_pull_request': 'Get a pull request with readable status values',
    'get_pull_request_comments': 'Get the comment threads of a pull request',
    'approve_pull_request': 'Approve a pull request as the authenticated user',
    'merge_pull_request': 'Merge a pull request with the given merge strategy',
    'add_pull_request_comment': 'Add a comment to a pull request',
    'complete_pull_request': 'Complete a pull request',
}

BOARDS_TOOLS: Dict[str, str] = {
    'get_boards': 'List the boards of a team',
    'get_board_columns': 'Get the columns of a board',
    'get_sprints': 'List the sprints (iterations) of a team',
    'get_current_sprint': 'Get the current sprint of a team',
}

PROJECT_TOOLS: Dict[str, str] = {
    'list_projects': 'List all projects in the organization or collection',
    'get_project_details': 'Get details of a project',
    'list_teams': 'List the teams of a project',
}

TOOL_GROUPS: Dict[str, Dict[str, str]] = {
    'work_items': WORK_ITEM_TOOLS,
    'git': GIT_TOOLS,
    'boards': BOARDS_TOOLS,
    'projects': PROJECT_TOOLS,
}

ALL_TOOL_NAMES: FrozenSet[str] = frozenset(
    name for tools in TOOL_GROUPS.values() for name in tools
)
