"""Boards and sprint operations."""

from azure.devops.v7_1.work.models import TeamContext
from tl.ado_mcp_adapter.services.base import AzureDevOpsService, remote_operation
from typing import Optional


class BoardsService(AzureDevOpsService):
    """Boards, board columns and iterations of a team."""

    def _work(self):
        return self._client('work')

    def _team_context(self, team: Optional[str] = None) -> TeamContext:
        # Azure DevOps names a project's default team "<project> Team"
        return TeamContext(project=self.config.project, team=team or f'{self.config.project} Team')

    @remote_operation('getting boards')
    def get_boards(self, team: Optional[str] = None):
        return self._work().get_boards(team_context=self._team_context(team))

    @remote_operation('getting board columns')
    def get_board_columns(self, board: str, team: Optional[str] = None):
        return self._work().get_board_columns(team_context=self._team_context(team), board=board)

    @remote_operation('getting sprints')
    def get_sprints(self, team: Optional[str] = None, timeframe: Optional[str] = None):
        return self._work().get_team_iterations(
            team_context=self._team_context(team), timeframe=timeframe
        )

    @remote_operation('getting current sprint')
    def get_current_sprint(self, team: Optional[str] = None):
        iterations = self._work().get_team_iterations(
            team_context=self._team_context(team), timeframe='current'
        )
        return iterations[0] if iterations else None
