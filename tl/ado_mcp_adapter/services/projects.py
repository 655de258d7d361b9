"""Project and team operations."""

from tl.ado_mcp_adapter.services.base import AzureDevOpsService, remote_operation
from typing import Optional


class ProjectService(AzureDevOpsService):
    def _core(self):
        return self._client('core')

    @remote_operation('listing projects')
    def list_projects(
        self,
        state_filter: Optional[str] = None,
        top: Optional[int] = None,
        skip: Optional[int] = None,
    ):
        projects = self._core().get_projects(state_filter=state_filter, top=top, skip=skip)
        # Newer SDK releases wrap paged results; plain lists pass through
        return list(getattr(projects, 'value', projects) or [])

    @remote_operation('getting project details')
    def get_project_details(
        self,
        project_id: Optional[str] = None,
        include_capabilities: Optional[bool] = None,
        include_history: Optional[bool] = None,
    ):
        return self._core().get_project(
            project_id=self._project(project_id),
            include_capabilities=include_capabilities,
            include_history=include_history,
        )

    @remote_operation('listing teams')
    def list_teams(
        self, project_id: Optional[str] = None, mine: Optional[bool] = None, top: Optional[int] = None
    ):
        return self._core().get_teams(project_id=self._project(project_id), mine=mine, top=top)
