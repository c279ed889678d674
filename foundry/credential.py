from azure.core.credentials_async import AsyncTokenCredential
from azure.identity.aio import DefaultAzureCredential


class CredentialHolder:
    """Holds the one credential shared by every client in the process.

    Nothing is validated here. A bad or missing login only shows up once a
    client makes its first remote call with the credential.
    """

    def __init__(self, credential: AsyncTokenCredential):
        self._credential = credential

    @property
    def credential(self) -> AsyncTokenCredential:
        return self._credential


def default_credential_holder() -> CredentialHolder:
    """Wrap DefaultAzureCredential (picks up env vars, managed identity or an az login session)"""
    return CredentialHolder(DefaultAzureCredential())
