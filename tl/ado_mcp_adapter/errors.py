"""Exceptions raised by the Azure DevOps MCP adapter."""

from typing import Iterable, Optional


class AzureDevOpsMcpError(Exception):
    """Base class for all adapter errors."""


class ConfigurationError(AzureDevOpsMcpError):
    """Missing or invalid environment configuration."""


class MissingRequiredFieldError(ConfigurationError):
    """One or more required environment variables are not set."""

    def __init__(self, missing_fields: Iterable[str]) -> None:
        self.missing_fields = tuple(missing_fields)
        super().__init__(
            f'Missing required Azure DevOps configuration: {", ".join(self.missing_fields)}. '
            'Please check .env file or environment variables.'
        )


class AuthenticationSetupError(AzureDevOpsMcpError):
    """Authentication type, hosting mode and credentials do not fit together."""


class UnsupportedAuthForHostingError(AuthenticationSetupError):
    """The authentication type cannot be used with the selected hosting mode."""

    def __init__(self, auth_type: str, is_on_premises: bool) -> None:
        self.auth_type = auth_type
        self.is_on_premises = is_on_premises
        hosting = 'on-premises Azure DevOps Server' if is_on_premises else 'Azure DevOps cloud'
        super().__init__(f'Authentication type "{auth_type}" is not supported for {hosting}.')


class MissingCredentialHandlerError(AuthenticationSetupError):
    """Entra authentication was requested without a credential handler."""

    def __init__(self) -> None:
        super().__init__('Entra authentication requires a credential handler instance.')


class MissingCredentialsError(AuthenticationSetupError):
    """Username or password missing for NTLM or Basic authentication."""

    def __init__(self, auth_type: str) -> None:
        self.auth_type = auth_type
        super().__init__(f'{auth_type.upper()} authentication requires username and password.')


class MissingTokenError(AuthenticationSetupError):
    """PAT authentication was selected but no token is configured."""

    def __init__(self, is_on_premises: bool) -> None:
        self.is_on_premises = is_on_premises
        message = 'PAT authentication requires a personal access token'
        if not is_on_premises:
            message += ' for Azure DevOps cloud unless AZURE_DEVOPS_AUTH_TYPE is set to entra'
        super().__init__(message + '.')


class AzureDevOpsConnectionError(AzureDevOpsMcpError):
    """The SDK connection object could not be constructed."""


class RemoteOperationError(AzureDevOpsMcpError):
    """A remote Azure DevOps call failed or returned an unexpected shape."""


class PullRequestNotFoundError(RemoteOperationError):
    """The requested pull request does not exist."""

    def __init__(self, pull_request_id: int, repository_id: str) -> None:
        self.pull_request_id = pull_request_id
        self.repository_id = repository_id
        super().__init__(f'Pull request {pull_request_id} not found in repository {repository_id}')


class RepositoryMismatchError(RemoteOperationError):
    """The pull request belongs to a different repository than the one requested."""

    def __init__(
        self, pull_request_id: int, repository_id: str, actual_repository_id: Optional[str]
    ) -> None:
        self.pull_request_id = pull_request_id
        self.repository_id = repository_id
        self.actual_repository_id = actual_repository_id
        super().__init__(
            f'Pull request {pull_request_id} belongs to repository {actual_repository_id}, '
            f'not {repository_id}'
        )
