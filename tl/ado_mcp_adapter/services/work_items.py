"""Work item tracking operations."""

from azure.devops.v7_1.work_item_tracking.models import (
    CommentCreate,
    JsonPatchOperation,
    TeamContext,
    Wiql,
)
from tl.ado_mcp_adapter.models import WorkItemQueryResult
from tl.ado_mcp_adapter.services.base import AzureDevOpsService, remote_operation
from typing import Any, Dict, List, Optional

TITLE_FIELD = 'System.Title'
DESCRIPTION_FIELD = 'System.Description'
ASSIGNED_TO_FIELD = 'System.AssignedTo'


def fields_to_patch(fields: Dict[str, Any], op: str = 'add') -> List[JsonPatchOperation]:
    """Build a JSON patch document setting each work item field."""
    return [
        JsonPatchOperation(op=op, path=f'/fields/{name}', value=value)
        for name, value in fields.items()
    ]


class WorkItemService(AzureDevOpsService):
    """Queries and edits work items in the configured project."""

    def _wit(self):
        return self._client('work_item_tracking')

    @remote_operation('listing work items')
    def list_work_items(self, wiql_query: str, top: Optional[int] = None) -> WorkItemQueryResult:
        query_result = self._wit().query_by_wiql(
            wiql=Wiql(query=wiql_query),
            team_context=TeamContext(project=self.config.project),
            top=top,
        )
        work_items = query_result.work_items or []
        return WorkItemQueryResult(work_items=work_items, count=len(work_items))

    @remote_operation('getting work item')
    def get_work_item(self, id: int, expand: Optional[str] = None):
        return self._wit().get_work_item(id=id, project=self.config.project, expand=expand)

    @remote_operation('getting work items')
    def get_work_items(
        self, ids: List[int], fields: Optional[List[str]] = None, expand: Optional[str] = None
    ):
        # The API rejects fields and expand together
        return self._wit().get_work_items(
            ids=ids,
            project=self.config.project,
            fields=fields if not expand else None,
            expand=expand,
        )

    @remote_operation('creating work item')
    def create_work_item(
        self,
        work_item_type: str,
        title: str,
        description: Optional[str] = None,
        assigned_to: Optional[str] = None,
        additional_fields: Optional[Dict[str, Any]] = None,
    ):
        fields: Dict[str, Any] = {TITLE_FIELD: title}
        if description:
            fields[DESCRIPTION_FIELD] = description
        if assigned_to:
            fields[ASSIGNED_TO_FIELD] = assigned_to
        if additional_fields:
            fields.update(additional_fields)
        return self._wit().create_work_item(
            document=fields_to_patch(fields), project=self.config.project, type=work_item_type
        )

    @remote_operation('updating work item')
    def update_work_item(self, id: int, fields: Dict[str, Any]):
        if not fields:
            raise ValueError('At least one field must be provided to update a work item')
        return self._wit().update_work_item(
            document=fields_to_patch(fields), id=id, project=self.config.project
        )

    @remote_operation('adding work item comment')
    def add_work_item_comment(self, id: int, text: str):
        return self._wit().add_comment(
            request=CommentCreate(text=text), project=self.config.project, work_item_id=id
        )
