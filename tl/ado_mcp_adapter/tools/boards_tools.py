from tl.ado_mcp_adapter.catalog import BOARDS_TOOLS
from tl.ado_mcp_adapter.models import ADOToolResponse
from tl.ado_mcp_adapter.tools.base import ToolGroup
from typing import Optional


class BoardsTools(ToolGroup):
    """Board and sprint tools. ``team`` defaults to the project's default team."""

    tools = BOARDS_TOOLS

    def get_boards(self, team: Optional[str] = None) -> ADOToolResponse:
        """List the boards of a team.

        Args:
            team: Team name
        """
        return self._respond('Retrieved boards', self.service.get_boards, team=team)

    def get_board_columns(self, board: str, team: Optional[str] = None) -> ADOToolResponse:
        """Get the columns of a board.

        Args:
            board: Board name or ID, e.g. Stories
            team: Team name
        """
        return self._respond(
            f'Retrieved columns of board {board}',
            self.service.get_board_columns,
            board=board,
            team=team,
        )

    def get_sprints(self, team: Optional[str] = None, timeframe: Optional[str] = None) -> ADOToolResponse:
        """List the sprints of a team.

        Args:
            team: Team name
            timeframe: Only 'current' is supported by Azure DevOps
        """
        return self._respond(
            'Retrieved sprints', self.service.get_sprints, team=team, timeframe=timeframe
        )

    def get_current_sprint(self, team: Optional[str] = None) -> ADOToolResponse:
        """Get the sprint that is currently running for a team.

        Args:
            team: Team name
        """
        return self._respond('Retrieved current sprint', self.service.get_current_sprint, team=team)
