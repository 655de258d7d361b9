"""Azure DevOps MCP Server.

Entry point: loads the .env file, sets up logging, resolves the Azure DevOps
configuration and serves the allowed tools over MCP.
"""

import os
import sys
from mcp.server.fastmcp import FastMCP
from tl.ado_mcp_adapter.ado_tools import AzureDevOpsTools
from tl.ado_mcp_adapter.config import (
    AzureDevOpsConfig,
    build_entra_auth_handler,
    get_allowed_tools,
    load_env_file,
    resolve_config,
)
from tl.ado_mcp_adapter.errors import AuthenticationSetupError, ConfigurationError
from tl.ado_mcp_adapter.logging_config import ServerLogging, sanitize_config
from typing import Mapping, Optional

SERVER_NAME = 'tl.ado-mcp-adapter'

# Server constants for Azure DevOps MCP Server
SERVER_INSTRUCTIONS = """
You are an Azure DevOps assistant with direct access to one Azure DevOps
project through these tools. You can:

1. Query, create and update work items and their comments
2. Browse repositories, branches, files and commit history
3. Review, comment on, approve, merge and complete pull requests
4. Inspect boards, board columns and sprints of a team
5. List projects and teams

Pull request status values are returned as readable names (active, abandoned,
completed). Repository-scoped pull request actions fail when the pull request
belongs to another repository, so pass the repository the pull request lives in.
"""

DEFAULT_TRANSPORT = 'stdio'


def create_server() -> FastMCP:
    """Create the MCP server instance."""
    return FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)


def load_configuration(
    server_logging: ServerLogging, environ: Optional[Mapping[str, str]] = None
) -> AzureDevOpsConfig:
    """Resolve the Azure DevOps configuration, logging a sanitized summary.

    Raises:
        ConfigurationError: If required settings are missing
        AuthenticationSetupError: If the authentication settings are inconsistent
    """
    if environ is None:
        environ = os.environ
    log = server_logging.get_logger('Config')
    try:
        config = resolve_config(environ, entra_auth_handler=build_entra_auth_handler(environ))
    except (ConfigurationError, AuthenticationSetupError) as e:
        log.bind(error_type=type(e).__name__).error(f'Invalid Azure DevOps configuration: {e}')
        raise
    log.bind(config=sanitize_config(config)).info('Loaded Azure DevOps configuration')
    return config


def main() -> None:
    """Main entry point to start the MCP server."""
    # The .env file may set MCP_MODE, so load it before logging starts
    env_file, checked = load_env_file()

    server_logging = ServerLogging.from_environ(os.environ).start()
    log = server_logging.get_logger('Server')
    if env_file:
        log.bind(checked=[str(path) for path in checked]).info(f'Loaded configuration from {env_file}')
    else:
        log.bind(checked=[str(path) for path in checked]).warning(
            'No .env file found. Using environment variables if available.'
        )

    try:
        config = load_configuration(server_logging)
    except (ConfigurationError, AuthenticationSetupError):
        server_logging.stop()
        sys.exit(1)

    mcp = create_server()
    try:
        AzureDevOpsTools(mcp, config, get_allowed_tools(os.environ), server_logging)
        transport = os.environ.get('MCP_TRANSPORT', DEFAULT_TRANSPORT)
        log.bind(transport=transport).info('Created MCP server with Azure DevOps functions')
        mcp.run(transport=transport)
    finally:
        server_logging.stop()


if __name__ == '__main__':
    main()
