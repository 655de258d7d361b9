from datetime import date, datetime
from msrest.serialization import Model
from typing import Any, Dict, List


def to_serializable(value: Any) -> Any:
    """Convert SDK models and containers into JSON-friendly values.

    msrest models are converted with ``as_dict``; lists, tuples and dicts are converted
    recursively and dates become ISO 8601 strings.
    """
    if isinstance(value, Model):
        return to_serializable(value.as_dict())
    if isinstance(value, dict):
        return {key: to_serializable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_serializable(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class WorkItemQueryResult(Dict[str, Any]):
    """Work item references returned by a WIQL query."""

    def __init__(self, work_items: List[Any], count: int):
        """Initialize a WIQL query result.

        Args:
            work_items: Work item references matched by the query
            count: Number of references returned
        """
        super().__init__({'work_items': work_items, 'count': count})
        self.work_items = work_items
        self.count = count


class ADOToolResponse(Dict[str, Any]):
    """Response model returned by every Azure DevOps tool."""

    def __init__(self, status: str, message: str, result: Any = None):
        """Initialize an Azure DevOps tool response.

        Args:
            status: Status of the operation (success/error)
            message: Message describing the result
            result: JSON-friendly result of the operation, None on error
        """
        super().__init__({'status': status, 'message': message, 'result': result})
        self.status = status
        self.message = message
        self.result = result

    @classmethod
    def success(cls, message: str, result: Any) -> 'ADOToolResponse':
        return cls(status='success', message=message, result=to_serializable(result))

    @classmethod
    def error(cls, message: str) -> 'ADOToolResponse':
        return cls(status='error', message=message, result=None)
