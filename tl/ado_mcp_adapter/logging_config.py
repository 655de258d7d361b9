"""Logging set-up for the Azure DevOps MCP server.

Log records go to a per-day file under a ``logs`` directory and, unless the
server runs in MCP mode (where stdout/stderr belong to the protocol), to
stderr. When a logfire write token is present, records are also shipped to
logfire.
"""

import json
import logfire
import os
import re
import sys
from datetime import datetime
from loguru import logger
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

LOG_FILE_PREFIX = 'mcp-azure-devops'
DEFAULT_COMPONENT = 'Server'

_URL_HOST = re.compile(r'//[^/]+')


def mask_url(url: Optional[str]) -> Optional[str]:
    """Replace the host part of a URL with ``***``."""
    if not url:
        return url
    return _URL_HOST.sub('//***', url, count=1)


def sanitize_config(config: Any) -> Dict[str, Any]:
    """Describe a configuration without exposing hosts or secrets."""
    auth = getattr(config, 'auth', None)
    auth_type = getattr(auth, 'type', None)
    return {
        'org_url': mask_url(getattr(config, 'org_url', None)) or 'not provided',
        'auth_type': getattr(auth_type, 'value', auth_type) or 'not specified',
        'is_on_premises': bool(getattr(config, 'is_on_premises', False)),
        'has_token': bool(getattr(config, 'personal_access_token', None)),
        'has_username': bool(getattr(auth, 'username', None)),
        'has_password': bool(getattr(auth, 'password', None)),
        'collection': getattr(config, 'collection', None) or 'not specified',
        'api_version': getattr(config, 'api_version', None) or 'not specified',
        'project': getattr(config, 'project', None) or 'not specified',
    }


def log_connection_failure(log, error: BaseException, config: Any) -> None:
    """Log a failed connection attempt with a sanitized configuration."""
    log.bind(
        config=sanitize_config(config),
        error_code=getattr(error, 'code', None),
        error_type=type(error).__name__,
    ).opt(exception=error).error('Connection failed')


def default_log_dir() -> Path:
    """Return the ``logs`` directory next to the running entry point."""
    entry_point = sys.argv[0] if sys.argv and sys.argv[0] else ''
    base_dir = Path(entry_point).resolve().parent if entry_point else Path.cwd()
    return base_dir / 'logs'


def _format_record(record: Dict[str, Any]) -> str:
    """Loguru format function: header line, optional context and traceback."""
    extra = record['extra']
    extra.setdefault('component', DEFAULT_COMPONENT)
    context = {
        key: value
        for key, value in extra.items()
        if not key.startswith('_') and key != 'component'
    }
    fmt = '{time:YYYY-MM-DDTHH:mm:ss.SSSZZ} [{level}] [{extra[component]}] {message}'
    if context:
        extra['_context'] = json.dumps(context, indent=2, default=str)
        fmt += '\nContext: {extra[_context]}'
    if record['exception'] is not None:
        fmt += '\n{exception}'
    return fmt + '\n'


class ServerLogging:
    """Owns the log sinks for the lifetime of the server process.

    Args:
        log_dir: Directory for the daily log files
        mcp_mode: When True nothing is written to stderr
        logfire_token: Optional logfire write token
        level: Minimum level for all sinks
    """

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        mcp_mode: bool = False,
        logfire_token: str = '',
        level: str = 'DEBUG',
    ) -> None:
        self.log_dir = Path(log_dir) if log_dir else default_log_dir()
        self.mcp_mode = mcp_mode
        self.logfire_token = logfire_token
        self.level = level
        self._handler_ids: List[int] = []

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> 'ServerLogging':
        if environ is None:
            environ = os.environ
        log_dir = environ.get('AZURE_DEVOPS_LOG_DIR')
        return cls(
            log_dir=Path(log_dir) if log_dir else None,
            mcp_mode=environ.get('MCP_MODE') == 'true',
            logfire_token=environ.get('LOGFIRE_WRITE_TOKEN', ''),
        )

    @property
    def started(self) -> bool:
        return bool(self._handler_ids)

    @property
    def log_file_path(self) -> Path:
        date = datetime.now().strftime('%Y-%m-%d')
        return self.log_dir / f'{LOG_FILE_PREFIX}-{date}.log'

    def start(self) -> 'ServerLogging':
        """Replace loguru's default handler with the server sinks."""
        if self.started:
            return self
        logger.remove()

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._handler_ids.append(
                logger.add(
                    str(self.log_dir / (LOG_FILE_PREFIX + '-{time:YYYY-MM-DD}.log')),
                    format=_format_record,
                    level=self.level,
                    rotation='00:00',
                    encoding='utf8',
                    diagnose=False,
                )
            )
        except OSError as e:
            # Without a log directory only the console sink remains
            if not self.mcp_mode:
                print(f'Failed to create log directory {self.log_dir}: {e}', file=sys.stderr)

        if not self.mcp_mode:
            self._handler_ids.append(
                logger.add(sys.stderr, format=_format_record, level=self.level, diagnose=False)
            )

        if self.logfire_token:
            logfire.configure(token=self.logfire_token, console=False)
            self._handler_ids.append(logger.add(**logfire.loguru_handler()))
            self.get_logger().info('LOGFIRE_WRITE_TOKEN successfully loaded.')
        else:
            self.get_logger().debug('LOGFIRE_WRITE_TOKEN not found in environment variables.')
        return self

    def stop(self) -> None:
        """Remove the sinks added by ``start``."""
        for handler_id in self._handler_ids:
            logger.remove(handler_id)
        self._handler_ids = []

    def get_logger(self, component: str = DEFAULT_COMPONENT):
        """Return a logger that tags every record with ``component``."""
        return logger.bind(component=component)
