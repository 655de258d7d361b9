from tl.ado_mcp_adapter.tools.base import ToolGroup
from tl.ado_mcp_adapter.tools.boards_tools import BoardsTools
from tl.ado_mcp_adapter.tools.git_tools import GitTools
from tl.ado_mcp_adapter.tools.project_tools import ProjectTools
from tl.ado_mcp_adapter.tools.work_item_tools import WorkItemTools

__all__ = ['BoardsTools', 'GitTools', 'ProjectTools', 'ToolGroup', 'WorkItemTools']
