"""Base class shared by all Azure DevOps resource services."""

import functools
from loguru import logger
from tl.ado_mcp_adapter.config import AzureDevOpsConfig
from tl.ado_mcp_adapter.connection import ConnectionHandle, connect
from typing import Any, Callable, TypeVar

F = TypeVar('F', bound=Callable[..., Any])


def remote_operation(operation: str) -> Callable[[F], F]:
    """Log failures of a service method and re-raise them unchanged.

    Args:
        operation: Human readable name of the operation, used in log records
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            self.log.bind(arguments=kwargs or list(args)).debug(f'Starting {operation}')
            try:
                return func(self, *args, **kwargs)
            except Exception as e:
                self.log.bind(
                    arguments=kwargs or list(args), project=self.config.project
                ).opt(exception=e).error(f'Error {operation}')
                raise

        return wrapper  # type: ignore[return-value]

    return decorator


class AzureDevOpsService:
    """Connection owner for one resource service.

    The connection is created once, when the service is constructed. If that
    fails the constructor raises and no service instance exists.

    Args:
        config: Resolved Azure DevOps configuration
        log: Logger to use; defaults to one tagged with the class name
    """

    def __init__(self, config: AzureDevOpsConfig, log=None) -> None:
        self.config = config
        self.log = log if log is not None else logger.bind(component=type(self).__name__)
        self.handle: ConnectionHandle = connect(config, self.log)

    @property
    def connection(self):
        return self.handle.connection

    def _client(self, kind: str) -> Any:
        return self.handle.client(kind)

    def _project(self, project: Any = None) -> str:
        return project or self.config.project
