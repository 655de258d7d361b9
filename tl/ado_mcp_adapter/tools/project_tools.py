from tl.ado_mcp_adapter.catalog import PROJECT_TOOLS
from tl.ado_mcp_adapter.models import ADOToolResponse
from tl.ado_mcp_adapter.tools.base import ToolGroup
from typing import Optional


class ProjectTools(ToolGroup):
    """Project and team tools."""

    tools = PROJECT_TOOLS

    def list_projects(
        self,
        state_filter: Optional[str] = None,
        top: Optional[int] = None,
        skip: Optional[int] = None,
    ) -> ADOToolResponse:
        """List all projects in the organization or collection.

        Args:
            state_filter: wellFormed (default), createPending, deleting, new or all
            top: Maximum number of projects to return
            skip: Number of projects to skip
        """
        return self._respond(
            'Retrieved projects',
            self.service.list_projects,
            state_filter=state_filter,
            top=top,
            skip=skip,
        )

    def get_project_details(
        self,
        project_id: Optional[str] = None,
        include_capabilities: Optional[bool] = False,
        include_history: Optional[bool] = False,
    ) -> ADOToolResponse:
        """Get details of a project.

        Args:
            project_id: Project name or ID, defaults to the configured project
            include_capabilities: Whether to include process and source control capabilities
            include_history: Whether to include the project history
        """
        return self._respond(
            'Retrieved project details',
            self.service.get_project_details,
            project_id=project_id,
            include_capabilities=include_capabilities,
            include_history=include_history,
        )

    def list_teams(
        self, project_id: Optional[str] = None, mine: Optional[bool] = None, top: Optional[int] = None
    ) -> ADOToolResponse:
        """List the teams of a project.

        Args:
            project_id: Project name or ID, defaults to the configured project
            mine: Only teams the authenticated user belongs to
            top: Maximum number of teams to return
        """
        return self._respond(
            'Retrieved teams', self.service.list_teams, project_id=project_id, mine=mine, top=top
        )
