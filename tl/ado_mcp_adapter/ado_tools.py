"""Azure DevOps MCP tools.

Wires each tool group to its service and registers the tools allowed by
``ALLOWED_TOOLS`` with the MCP server.
"""

from mcp.server.fastmcp import FastMCP
from tl.ado_mcp_adapter.catalog import TOOL_GROUPS
from tl.ado_mcp_adapter.config import AzureDevOpsConfig
from tl.ado_mcp_adapter.logging_config import ServerLogging
from tl.ado_mcp_adapter.services import (
    AzureDevOpsService,
    BoardsService,
    GitService,
    ProjectService,
    WorkItemService,
)
from tl.ado_mcp_adapter.tools import BoardsTools, GitTools, ProjectTools, ToolGroup, WorkItemTools
from typing import Dict, Iterable, List, Optional, Tuple, Type

TOOL_GROUP_CLASSES: Dict[str, Tuple[Type[ToolGroup], Type[AzureDevOpsService]]] = {
    'work_items': (WorkItemTools, WorkItemService),
    'git': (GitTools, GitService),
    'boards': (BoardsTools, BoardsService),
    'projects': (ProjectTools, ProjectService),
}


class AzureDevOpsTools:
    """Tools for interacting with Azure DevOps resources.

    A group's service, and with it its connection, is only created when at
    least one of the group's tools is allowed.

    Args:
        mcp: The MCP server instance
        config: Resolved Azure DevOps configuration
        allowed_tools: Names of the tools to expose
        server_logging: Logging collaborator handing out component loggers
    """

    def __init__(
        self,
        mcp: FastMCP,
        config: AzureDevOpsConfig,
        allowed_tools: Iterable[str],
        server_logging: Optional[ServerLogging] = None,
    ) -> None:
        self.mcp = mcp
        self.config = config
        self.allowed_tools = set(allowed_tools)
        self.server_logging = server_logging or ServerLogging()
        self.log = self.server_logging.get_logger('AzureDevOpsTools')
        self.groups: Dict[str, ToolGroup] = {}
        self.registered: List[str] = []

        for group_name, (tools_class, service_class) in TOOL_GROUP_CLASSES.items():
            if not self.allowed_tools.intersection(TOOL_GROUPS[group_name]):
                continue
            service = service_class(
                config, log=self.server_logging.get_logger(service_class.__name__)
            )
            group = tools_class(mcp, service, self.allowed_tools)
            self.groups[group_name] = group
            self.registered.extend(group.register())

        unknown = sorted(self.allowed_tools.difference(self.registered))
        if unknown:
            self.log.bind(tools=unknown).warning('Ignoring unknown tools in ALLOWED_TOOLS')
        self.log.bind(count=len(self.registered)).info('Registered Azure DevOps tools')
