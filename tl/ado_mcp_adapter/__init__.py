"""Azure DevOps MCP Adapter Package.

This package exposes Azure DevOps work items, repositories, pull requests,
boards and projects as Model Context Protocol (MCP) tools, backed by the
Azure DevOps Python SDK.
"""

__version__ = '0.2.0'
__author__ = 'TechniumLabs'
__description__ = 'Azure DevOps MCP server for work items, repositories, pull requests and boards'
