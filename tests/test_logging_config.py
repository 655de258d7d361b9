"""
Tests for logging set-up and log sanitization

Run with:
    pytest tests/test_logging_config.py -v
"""

import json
import pytest
from pathlib import Path
from tl.ado_mcp_adapter.logging_config import (
    ServerLogging,
    mask_url,
    sanitize_config,
)
from unittest.mock import patch
from .conftest import PASSWORD, TOKEN


@pytest.mark.parametrize(
    'url,expected',
    [
        ('https://dev.azure.com/contoso', 'https://***/contoso'),
        ('https://ado.example.com', 'https://***'),
        ('http://tfs:8080/tfs/DefaultCollection', 'http://***/tfs/DefaultCollection'),
        (None, None),
        ('', ''),
    ],
)
def test_mask_url(url, expected):
    assert mask_url(url) == expected


class TestSanitizeConfig:
    def test_never_contains_secrets(self, basic_config, on_prem_config):
        for config in (basic_config, on_prem_config):
            text = json.dumps(sanitize_config(config))

            assert PASSWORD not in text
            assert TOKEN not in text
            assert 'ado.example.com' not in text

    def test_reports_presence_flags(self, basic_config):
        summary = sanitize_config(basic_config)

        assert summary['org_url'] == 'https://***'
        assert summary['auth_type'] == 'basic'
        assert summary['is_on_premises'] is True
        assert summary['has_token'] is False
        assert summary['has_username'] is True
        assert summary['has_password'] is True
        assert summary['collection'] == 'DefaultCollection'
        assert summary['api_version'] == 'not specified'

    def test_pat_config(self, pat_config):
        summary = sanitize_config(pat_config)

        assert summary['auth_type'] == 'pat'
        assert summary['has_token'] is True
        assert summary['has_username'] is False


class TestServerLogging:
    def test_from_environ(self, tmp_path):
        server_logging = ServerLogging.from_environ(
            {
                'AZURE_DEVOPS_LOG_DIR': str(tmp_path),
                'MCP_MODE': 'true',
                'LOGFIRE_WRITE_TOKEN': 'lf-token',
            }
        )

        assert server_logging.log_dir == tmp_path
        assert server_logging.mcp_mode is True
        assert server_logging.logfire_token == 'lf-token'

    def test_defaults(self):
        server_logging = ServerLogging.from_environ({})

        assert server_logging.mcp_mode is False
        assert server_logging.log_dir.name == 'logs'

    def test_daily_log_file(self, tmp_path):
        server_logging = ServerLogging(log_dir=tmp_path, mcp_mode=True).start()
        try:
            server_logging.get_logger('WorkItemService').bind(work_item_id=42).info(
                'Fetched work item'
            )
        finally:
            server_logging.stop()

        log_file = server_logging.log_file_path
        assert log_file.parent == tmp_path
        assert log_file.name.startswith('mcp-azure-devops-')
        content = log_file.read_text(encoding='utf8')
        assert '[INFO] [WorkItemService] Fetched work item' in content
        assert 'Context: {' in content
        assert '"work_item_id": 42' in content

    def test_mcp_mode_keeps_stderr_clean(self, tmp_path, capsys):
        server_logging = ServerLogging(log_dir=tmp_path, mcp_mode=True).start()
        try:
            server_logging.get_logger().warning('quiet please')
        finally:
            server_logging.stop()

        assert capsys.readouterr().err == ''

    def test_console_output_outside_mcp_mode(self, tmp_path, capsys):
        server_logging = ServerLogging(log_dir=tmp_path, mcp_mode=False).start()
        try:
            server_logging.get_logger('Server').info('hello console')
        finally:
            server_logging.stop()

        assert '[INFO] [Server] hello console' in capsys.readouterr().err

    def test_start_is_idempotent(self, tmp_path):
        server_logging = ServerLogging(log_dir=tmp_path, mcp_mode=True)
        try:
            server_logging.start()
            handler_count = len(server_logging._handler_ids)
            server_logging.start()

            assert len(server_logging._handler_ids) == handler_count
            assert server_logging.started
        finally:
            server_logging.stop()

        assert not server_logging.started

    def test_logfire_is_configured_with_token(self, tmp_path):
        shipped = []
        with patch('tl.ado_mcp_adapter.logging_config.logfire') as logfire_mock:
            logfire_mock.loguru_handler.return_value = {
                'sink': shipped.append,
                'format': '{message}',
            }
            server_logging = ServerLogging(
                log_dir=tmp_path, mcp_mode=True, logfire_token='lf-token'
            ).start()
            try:
                server_logging.get_logger().info('to logfire')
            finally:
                server_logging.stop()

        logfire_mock.configure.assert_called_once_with(token='lf-token', console=False)
        assert any('to logfire' in message for message in shipped)

    def test_logfire_is_skipped_without_token(self, tmp_path):
        with patch('tl.ado_mcp_adapter.logging_config.logfire') as logfire_mock:
            server_logging = ServerLogging(log_dir=tmp_path, mcp_mode=True).start()
            server_logging.stop()

        logfire_mock.configure.assert_not_called()

    def test_unwritable_log_dir_falls_back_to_console(self, tmp_path, capsys):
        blocker = tmp_path / 'not-a-dir'
        blocker.write_text('')
        server_logging = ServerLogging(log_dir=Path(blocker) / 'logs', mcp_mode=False).start()
        try:
            server_logging.get_logger().info('still logging')
        finally:
            server_logging.stop()

        err = capsys.readouterr().err
        assert 'Failed to create log directory' in err
        assert 'still logging' in err
