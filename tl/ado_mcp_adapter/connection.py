"""Connection factory for the Azure DevOps SDK.

Turns an ``AzureDevOpsConfig`` into a live SDK connection: picks the
credential handler, computes the base URL (adding the collection for
on-premises servers) and the request headers.
"""

from azure.devops.connection import Connection
from dataclasses import dataclass, field
from msrest.authentication import Authentication
from tl.ado_mcp_adapter.auth import (
    NtlmAuthentication,
    get_basic_handler,
    get_personal_access_token_handler,
)
from tl.ado_mcp_adapter.config import AuthType, AzureDevOpsConfig
from tl.ado_mcp_adapter.errors import (
    AzureDevOpsConnectionError,
    MissingCredentialHandlerError,
    MissingCredentialsError,
    MissingTokenError,
    UnsupportedAuthForHostingError,
)
from tl.ado_mcp_adapter.logging_config import log_connection_failure, mask_url
from typing import Any, Dict


def create_credentials(config: AzureDevOpsConfig, log=None) -> Authentication:
    """Return the credential handler matching the configured authentication.

    Raises:
        AuthenticationSetupError: If the configuration is inconsistent
    """
    auth = config.auth
    auth_type = auth.type

    if auth_type is AuthType.ENTRA:
        if config.is_on_premises:
            raise UnsupportedAuthForHostingError(auth_type.value, True)
        if auth.handler is None:
            raise MissingCredentialHandlerError()
        if log is not None:
            log.info('Using Entra authentication')
        return auth.handler

    if auth_type in (AuthType.NTLM, AuthType.BASIC):
        if not config.is_on_premises:
            raise UnsupportedAuthForHostingError(auth_type.value, False)
        if not auth.username or not auth.password:
            raise MissingCredentialsError(auth_type.value)
        if auth_type is AuthType.NTLM:
            if log is not None:
                log.bind(username=auth.username, domain=auth.domain or 'default').info(
                    'Using NTLM authentication'
                )
            return NtlmAuthentication(auth.username, auth.password, auth.domain)
        if log is not None:
            log.bind(username=auth.username).info('Using Basic authentication')
        return get_basic_handler(auth.username, auth.password)

    if not config.personal_access_token:
        raise MissingTokenError(config.is_on_premises)
    if log is not None:
        log.info('Using PAT authentication')
    return get_personal_access_token_handler(config.personal_access_token)


def build_base_url(config: AzureDevOpsConfig) -> str:
    """Organization URL, plus the collection segment for on-premises servers."""
    if config.is_on_premises and config.collection:
        return f'{config.org_url}/{config.collection}'
    return config.org_url


def build_request_headers(config: AzureDevOpsConfig) -> Dict[str, str]:
    """Headers pinning the API version of on-premises servers."""
    if config.is_on_premises and config.api_version:
        return {'Accept': f'application/json;api-version={config.api_version}'}
    return {}


@dataclass
class ConnectionHandle:
    """A live SDK connection bound to one base URL and credential handler."""

    connection: Connection
    base_url: str
    request_headers: Dict[str, str] = field(default_factory=dict)

    def client(self, kind: str) -> Any:
        """Return a v7.1 SDK client, e.g. ``client('git')``."""
        factory = getattr(self.connection.clients_v7_1, f'get_{kind}_client')
        sdk_client = factory()
        if self.request_headers:
            sdk_client.config.additional_headers.update(self.request_headers)
        return sdk_client


def connect(config: AzureDevOpsConfig, log) -> ConnectionHandle:
    """Create the SDK connection described by ``config``.

    Raises:
        AuthenticationSetupError: If no credential handler fits the configuration
        AzureDevOpsConnectionError: If the SDK connection cannot be constructed
    """
    log.bind(
        auth_type=config.auth.type.value,
        is_on_premises=config.is_on_premises,
        org_url=mask_url(config.org_url),
    ).info('Initializing service')

    try:
        credentials = create_credentials(config, log)
    except Exception as e:
        log.opt(exception=e).error('Invalid authentication configuration')
        raise

    base_url = build_base_url(config)
    log.bind(
        base_url=mask_url(base_url),
        is_on_premises=config.is_on_premises,
        collection=config.collection,
    ).info('Connecting to Azure DevOps')

    try:
        connection = Connection(base_url=base_url, creds=credentials)
    except Exception as e:
        log_connection_failure(log, e, config)
        raise AzureDevOpsConnectionError(f'Failed to connect to Azure DevOps: {e}') from e

    log.info('Successfully created Azure DevOps connection')
    return ConnectionHandle(
        connection=connection, base_url=base_url, request_headers=build_request_headers(config)
    )
