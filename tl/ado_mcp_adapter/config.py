"""Configuration for the Azure DevOps MCP adapter.

Resolves the process environment into an immutable ``AzureDevOpsConfig``,
including the authentication method, and decides which tools are exposed.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv
from enum import Enum
from pathlib import Path
from tl.ado_mcp_adapter.auth import EntraAuthentication
from tl.ado_mcp_adapter.catalog import ALL_TOOL_NAMES
from tl.ado_mcp_adapter.errors import (
    MissingCredentialHandlerError,
    MissingCredentialsError,
    MissingRequiredFieldError,
    MissingTokenError,
    UnsupportedAuthForHostingError,
)
from typing import Any, List, Mapping, Optional, Set, Tuple, Union

ORG_URL_VAR = 'AZURE_DEVOPS_ORG_URL'
PROJECT_VAR = 'AZURE_DEVOPS_PROJECT'
TOKEN_VAR = 'AZURE_DEVOPS_PERSONAL_ACCESS_TOKEN'
ON_PREMISES_VAR = 'AZURE_DEVOPS_IS_ON_PREMISES'
COLLECTION_VAR = 'AZURE_DEVOPS_COLLECTION'
API_VERSION_VAR = 'AZURE_DEVOPS_API_VERSION'
AUTH_TYPE_VAR = 'AZURE_DEVOPS_AUTH_TYPE'
USERNAME_VAR = 'AZURE_DEVOPS_USERNAME'
PASSWORD_VAR = 'AZURE_DEVOPS_PASSWORD'
DOMAIN_VAR = 'AZURE_DEVOPS_DOMAIN'
ALLOWED_TOOLS_VAR = 'ALLOWED_TOOLS'


class AuthType(str, Enum):
    PAT = 'pat'
    BASIC = 'basic'
    NTLM = 'ntlm'
    ENTRA = 'entra'


@dataclass(frozen=True)
class PatAuth:
    type: AuthType = field(default=AuthType.PAT, init=False)


@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str = field(repr=False)
    type: AuthType = field(default=AuthType.BASIC, init=False)


@dataclass(frozen=True)
class NtlmAuth:
    username: str
    password: str = field(repr=False)
    domain: Optional[str] = None
    type: AuthType = field(default=AuthType.NTLM, init=False)


@dataclass(frozen=True)
class EntraAuth:
    handler: Any = field(repr=False)
    type: AuthType = field(default=AuthType.ENTRA, init=False)


AuthDescriptor = Union[PatAuth, BasicAuth, NtlmAuth, EntraAuth]


@dataclass(frozen=True)
class AzureDevOpsConfig:
    """Resolved Azure DevOps connection settings."""

    org_url: str
    project: str
    personal_access_token: str = field(default='', repr=False)
    is_on_premises: bool = False
    collection: Optional[str] = None
    api_version: Optional[str] = None
    auth: AuthDescriptor = field(default_factory=PatAuth)


def normalize_auth_type(value: Optional[str]) -> AuthType:
    """Map the free-text auth type to an ``AuthType``.

    Unrecognized values fall back to PAT to stay compatible with setups that
    never set ``AZURE_DEVOPS_AUTH_TYPE`` or set it to something else.
    """
    try:
        return AuthType(value or AuthType.PAT.value)
    except ValueError:
        return AuthType.PAT


def is_on_premises(environ: Mapping[str, str]) -> bool:
    return environ.get(ON_PREMISES_VAR) == 'true'


def resolve_config(
    environ: Optional[Mapping[str, str]] = None, entra_auth_handler: Any = None
) -> AzureDevOpsConfig:
    """Build the Azure DevOps configuration from environment variables.

    Args:
        environ: Environment mapping, ``os.environ`` when omitted
        entra_auth_handler: Credential handler used when the auth type is entra

    Returns:
        The resolved AzureDevOpsConfig

    Raises:
        MissingRequiredFieldError: If the organization URL or project is missing
        AuthenticationSetupError: If the auth type, hosting mode and credentials
            do not fit together
    """
    if environ is None:
        environ = os.environ

    org_url = environ.get(ORG_URL_VAR)
    project = environ.get(PROJECT_VAR)
    missing = [name for name, value in ((ORG_URL_VAR, org_url), (PROJECT_VAR, project)) if not value]
    if missing:
        raise MissingRequiredFieldError(missing)

    token = environ.get(TOKEN_VAR) or ''
    on_premises = is_on_premises(environ)
    auth_type = normalize_auth_type(environ.get(AUTH_TYPE_VAR))
    username = environ.get(USERNAME_VAR)
    password = environ.get(PASSWORD_VAR)

    auth: AuthDescriptor
    if auth_type is AuthType.ENTRA:
        if on_premises:
            raise UnsupportedAuthForHostingError(auth_type.value, on_premises)
        if entra_auth_handler is None:
            raise MissingCredentialHandlerError()
        auth = EntraAuth(handler=entra_auth_handler)
    elif on_premises:
        if auth_type in (AuthType.NTLM, AuthType.BASIC):
            if not username or not password:
                raise MissingCredentialsError(auth_type.value)
            if auth_type is AuthType.NTLM:
                auth = NtlmAuth(
                    username=username, password=password, domain=environ.get(DOMAIN_VAR) or None
                )
            else:
                auth = BasicAuth(username=username, password=password)
        else:
            if not token:
                raise MissingTokenError(on_premises)
            auth = PatAuth()
    else:
        if auth_type is not AuthType.PAT:
            raise UnsupportedAuthForHostingError(auth_type.value, on_premises)
        if not token:
            raise MissingTokenError(on_premises)
        auth = PatAuth()

    return AzureDevOpsConfig(
        org_url=org_url,
        project=project,
        personal_access_token=token,
        is_on_premises=on_premises,
        collection=environ.get(COLLECTION_VAR) or None,
        api_version=environ.get(API_VERSION_VAR) or None,
        auth=auth,
    )


def build_entra_auth_handler(environ: Optional[Mapping[str, str]] = None):
    """Create the Entra credential handler when the environment asks for it."""
    if environ is None:
        environ = os.environ
    if normalize_auth_type(environ.get(AUTH_TYPE_VAR)) is AuthType.ENTRA and not is_on_premises(
        environ
    ):
        return EntraAuthentication()
    return None


def get_allowed_tools(environ: Optional[Mapping[str, str]] = None) -> Set[str]:
    """Return the tool names listed in ``ALLOWED_TOOLS``.

    When the variable is unset or empty every known tool is allowed.
    """
    if environ is None:
        environ = os.environ
    allowed_tools = environ.get(ALLOWED_TOOLS_VAR)
    if not allowed_tools:
        return set(ALL_TOOL_NAMES)
    return {name.strip() for name in allowed_tools.split(',') if name.strip()}


def env_file_candidates(start_dir: Optional[Path] = None) -> List[Path]:
    """List the .env locations checked by ``load_env_file``, in order."""
    current_dir = start_dir or Path(os.path.dirname(os.path.abspath(__file__)))
    candidates = []
    # The package directory and up to 3 levels up
    for _ in range(4):
        candidates.append(current_dir / '.env')
        current_dir = current_dir.parent
    candidates.append(Path.cwd() / '.env')
    candidates.append(Path.home() / '.azuredevops.env')
    return candidates


def load_env_file(start_dir: Optional[Path] = None) -> Tuple[Optional[Path], List[Path]]:
    """Load the first .env file found into the process environment.

    Variables that are already set are left untouched.

    Returns:
        The loaded file (or None) and the list of locations that were checked
    """
    checked = []
    for env_file in env_file_candidates(start_dir):
        checked.append(env_file)
        if env_file.is_file():
            load_dotenv(dotenv_path=env_file, override=False)
            return env_file, checked
    return None, checked
