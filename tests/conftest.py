"""
Pytest configuration and shared fixtures

Provides environment mappings, resolved configurations and a mocked SDK
connection so services can be constructed without network access.
"""

import pytest
from loguru import logger
from tl.ado_mcp_adapter.config import AzureDevOpsConfig, BasicAuth, NtlmAuth, PatAuth
from tl.ado_mcp_adapter.logging_config import _format_record
from unittest.mock import MagicMock, patch

ORG_URL = 'https://dev.azure.com/contoso'
ON_PREM_URL = 'https://ado.example.com'
PROJECT = 'Fabrikam'
TOKEN = 'secret-pat-value'
PASSWORD = 'hunter2-password'


# ===== Environment Fixtures =====


@pytest.fixture
def cloud_env():
    """Minimal environment for Azure DevOps cloud with a PAT"""
    return {
        'AZURE_DEVOPS_ORG_URL': ORG_URL,
        'AZURE_DEVOPS_PROJECT': PROJECT,
        'AZURE_DEVOPS_PERSONAL_ACCESS_TOKEN': TOKEN,
    }


@pytest.fixture
def on_prem_env():
    """Environment for an on-premises server with a collection"""
    return {
        'AZURE_DEVOPS_ORG_URL': ON_PREM_URL,
        'AZURE_DEVOPS_PROJECT': PROJECT,
        'AZURE_DEVOPS_IS_ON_PREMISES': 'true',
        'AZURE_DEVOPS_COLLECTION': 'DefaultCollection',
        'AZURE_DEVOPS_PERSONAL_ACCESS_TOKEN': TOKEN,
    }


# ===== Configuration Fixtures =====


@pytest.fixture
def pat_config():
    return AzureDevOpsConfig(org_url=ORG_URL, project=PROJECT, personal_access_token=TOKEN)


@pytest.fixture
def on_prem_config():
    return AzureDevOpsConfig(
        org_url=ON_PREM_URL,
        project=PROJECT,
        personal_access_token=TOKEN,
        is_on_premises=True,
        collection='DefaultCollection',
        api_version='5.0',
        auth=PatAuth(),
    )


@pytest.fixture
def basic_config():
    return AzureDevOpsConfig(
        org_url=ON_PREM_URL,
        project=PROJECT,
        is_on_premises=True,
        collection='DefaultCollection',
        auth=BasicAuth(username='jdoe', password=PASSWORD),
    )


@pytest.fixture
def ntlm_config():
    return AzureDevOpsConfig(
        org_url=ON_PREM_URL,
        project=PROJECT,
        is_on_premises=True,
        auth=NtlmAuth(username='jdoe', password=PASSWORD, domain='CORP'),
    )


# ===== SDK Fixtures =====


@pytest.fixture
def mock_connection():
    """Patch the SDK Connection class; yields the mocked class"""
    with patch('tl.ado_mcp_adapter.connection.Connection') as connection_class:
        yield connection_class


@pytest.fixture
def sdk_clients(mock_connection):
    """Mocked v7.1 SDK clients returned by the patched connection"""
    clients = {
        'git': MagicMock(name='git_client'),
        'work_item_tracking': MagicMock(name='wit_client'),
        'work': MagicMock(name='work_client'),
        'core': MagicMock(name='core_client'),
        'identity': MagicMock(name='identity_client'),
    }
    factory = mock_connection.return_value.clients_v7_1
    for kind, client in clients.items():
        getattr(factory, f'get_{kind}_client').return_value = client
    return clients


# ===== Logging Fixtures =====


@pytest.fixture
def log_messages():
    """Collect formatted loguru messages emitted during a test"""
    messages = []
    handler_id = logger.add(
        messages.append, format=_format_record, level='DEBUG', diagnose=False
    )
    yield messages
    logger.remove(handler_id)
