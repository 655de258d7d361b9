"""Shared registration and response handling for tool groups."""

from mcp.server.fastmcp import FastMCP
from tl.ado_mcp_adapter.models import ADOToolResponse
from typing import Any, Callable, Dict, Iterable, List


class ToolGroup:
    """A set of MCP tools backed by one Azure DevOps service.

    Subclasses set ``tools`` to a mapping of tool name to description and
    implement one method per tool name.

    Args:
        mcp: The MCP server instance
        service: Service the tools forward to
        allowed_tools: Names of the tools that may be registered
    """

    tools: Dict[str, str] = {}

    def __init__(self, mcp: FastMCP, service: Any, allowed_tools: Iterable[str]) -> None:
        self.mcp = mcp
        self.service = service
        self.allowed_tools = set(allowed_tools)

    def register(self) -> List[str]:
        """Register the allowed tools of this group and return their names."""
        registered = []
        for name, description in self.tools.items():
            if name not in self.allowed_tools:
                continue
            self.mcp.tool(name=name, description=description)(getattr(self, name))
            registered.append(name)
        return registered

    def _respond(self, message: str, call: Callable[..., Any], **kwargs: Any) -> ADOToolResponse:
        """Run a service call and wrap its outcome in an ADOToolResponse.

        Args:
            message: Message used on success, e.g. 'Retrieved repositories'
            call: Service method to invoke with ``kwargs``
        """
        try:
            result = call(**kwargs)
        except Exception as e:
            return ADOToolResponse.error(f'{type(e).__name__}: {e}')
        return ADOToolResponse.success(message, result)
