from tl.ado_mcp_adapter.services.base import AzureDevOpsService, remote_operation
from tl.ado_mcp_adapter.services.boards import BoardsService
from tl.ado_mcp_adapter.services.git import GitService
from tl.ado_mcp_adapter.services.projects import ProjectService
from tl.ado_mcp_adapter.services.work_items import WorkItemService

__all__ = [
    'AzureDevOpsService',
    'BoardsService',
    'GitService',
    'ProjectService',
    'WorkItemService',
    'remote_operation',
]
