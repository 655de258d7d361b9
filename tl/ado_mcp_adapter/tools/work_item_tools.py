from tl.ado_mcp_adapter.catalog import WORK_ITEM_TOOLS
from tl.ado_mcp_adapter.models import ADOToolResponse
from tl.ado_mcp_adapter.tools.base import ToolGroup
from typing import Any, Dict, List, Optional


class WorkItemTools(ToolGroup):
    """Work item query and editing tools."""

    tools = WORK_ITEM_TOOLS

    def list_work_items(self, wiql_query: str, top: Optional[int] = None) -> ADOToolResponse:
        """List work items matching a WIQL query.

        Args:
            wiql_query: WIQL query, e.g. SELECT [System.Id] FROM WorkItems
            top: Maximum number of work items to return
        """
        return self._respond(
            'Retrieved work items', self.service.list_work_items, wiql_query=wiql_query, top=top
        )

    def get_work_item(self, id: int, expand: Optional[str] = None) -> ADOToolResponse:
        """Get a work item.

        Args:
            id: Work item ID
            expand: None, Relations, Fields, Links or All
        """
        return self._respond(
            f'Retrieved work item {id}', self.service.get_work_item, id=id, expand=expand
        )

    def get_work_items(
        self, ids: List[int], fields: Optional[List[str]] = None, expand: Optional[str] = None
    ) -> ADOToolResponse:
        """Get several work items at once.

        Args:
            ids: Work item IDs
            fields: Reference names of the fields to return
            expand: None, Relations, Fields, Links or All; ignores fields when set
        """
        return self._respond(
            f'Retrieved {len(ids)} work items',
            self.service.get_work_items,
            ids=ids,
            fields=fields,
            expand=expand,
        )

    def create_work_item(
        self,
        work_item_type: str,
        title: str,
        description: Optional[str] = None,
        assigned_to: Optional[str] = None,
        additional_fields: Optional[Dict[str, Any]] = None,
    ) -> ADOToolResponse:
        """Create a work item.

        Args:
            work_item_type: Type of the work item, e.g. Bug, Task or User Story
            title: Title of the work item
            description: HTML description
            assigned_to: Display name or e-mail of the assignee
            additional_fields: Further fields keyed by reference name
        """
        return self._respond(
            f'Created {work_item_type} "{title}"',
            self.service.create_work_item,
            work_item_type=work_item_type,
            title=title,
            description=description,
            assigned_to=assigned_to,
            additional_fields=additional_fields,
        )

    def update_work_item(self, id: int, fields: Dict[str, Any]) -> ADOToolResponse:
        """Update fields of a work item.

        Args:
            id: Work item ID
            fields: New field values keyed by reference name, e.g. System.State
        """
        return self._respond(
            f'Updated work item {id}', self.service.update_work_item, id=id, fields=fields
        )

    def add_work_item_comment(self, id: int, text: str) -> ADOToolResponse:
        """Add a comment to a work item.

        Args:
            id: Work item ID
            text: Comment text
        """
        return self._respond(
            f'Added comment to work item {id}', self.service.add_work_item_comment, id=id, text=text
        )
