"""Credential handlers passed to the Azure DevOps SDK connection.

PAT and Basic authentication reuse msrest's ``BasicAuthentication``. NTLM and
Entra ID need their own ``Authentication`` subclasses: msrest calls
``signed_session`` before every request, which is where the session is
prepared.
"""

import requests
import time
from azure.identity import DefaultAzureCredential
from msrest.authentication import Authentication, BasicAuthentication
from requests_ntlm import HttpNtlmAuth
from typing import Optional

# Resource ID of Azure DevOps in Microsoft Entra ID.
AZURE_DEVOPS_SCOPE = '499b84ac-1321-427f-aa17-267ca6975798/.default'

# Refresh Entra tokens this many seconds before they expire.
TOKEN_REFRESH_MARGIN = 300


def get_personal_access_token_handler(token: str) -> BasicAuthentication:
    """Return a handler sending the PAT as the Basic auth password."""
    return BasicAuthentication('', token)


def get_basic_handler(username: str, password: str) -> BasicAuthentication:
    """Return a handler for Basic authentication against Azure DevOps Server."""
    return BasicAuthentication(username, password)


class NtlmAuthentication(Authentication):
    """NTLM authentication for on-premises Azure DevOps Server.

    Args:
        username: Account name
        password: Account password
        domain: Optional Windows domain, prepended as ``DOMAIN\\username``
    """

    def __init__(self, username: str, password: str, domain: Optional[str] = None) -> None:
        self.username = username
        self.password = password
        self.domain = domain

    @property
    def account(self) -> str:
        if self.domain:
            return f'{self.domain}\\{self.username}'
        return self.username

    def signed_session(self, session: Optional[requests.Session] = None) -> requests.Session:
        session = super().signed_session(session)
        session.auth = HttpNtlmAuth(self.account, self.password)
        return session


class EntraAuthentication(Authentication):
    """Bearer-token authentication backed by an azure-identity credential.

    Tokens are cached and only requested again shortly before they expire.

    Args:
        credential: Any azure-identity token credential; defaults to
            ``DefaultAzureCredential``
        scope: Token scope to request
    """

    def __init__(self, credential=None, scope: str = AZURE_DEVOPS_SCOPE) -> None:
        self.credential = credential if credential is not None else DefaultAzureCredential()
        self.scope = scope
        self._token = None

    def get_token(self) -> str:
        if self._token is None or self._token.expires_on - TOKEN_REFRESH_MARGIN <= time.time():
            self._token = self.credential.get_token(self.scope)
        return self._token.token

    def signed_session(self, session: Optional[requests.Session] = None) -> requests.Session:
        session = super().signed_session(session)
        session.headers['Authorization'] = f'Bearer {self.get_token()}'
        return session
