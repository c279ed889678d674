"""List the model deployments in an Azure AI Foundry project.

Usage:
    python -m foundry

Prints "Client created" once the project client exists, then one
"Deployment: <name>" line per deployment in the order the service returns
them. Errors (auth, network, access, unknown endpoint) are not caught; they
end the process with a non-zero exit code.
"""
import asyncio
import sys
from typing import AsyncIterator, Callable, Optional, TextIO

from azure.ai.projects.aio import AIProjectClient
from azure.identity.aio import DefaultAzureCredential

from foundry import config
from foundry.credential import CredentialHolder


async def iter_deployments(project_client: AIProjectClient) -> AsyncIterator:
    """Yield each deployment, fetching the next page only when the current one runs out"""
    async for deployment in project_client.deployments.list():
        yield deployment


async def list_deployments(
    endpoint: str,
    holder: CredentialHolder,
    out: Optional[TextIO] = None,
    client_factory: Callable[..., AIProjectClient] = AIProjectClient,
) -> int:
    """
    Print every deployment visible to the held credential.

    Args:
        endpoint: Project endpoint, e.g. https://<resource>.services.ai.azure.com/api/projects/<project>
        holder: Credential shared with the project client
        out: Stream to write to (defaults to stdout)
        client_factory: Builds the project client from endpoint and credential

    Returns:
        Number of deployments printed
    """
    out = out or sys.stdout
    count = 0

    async with client_factory(endpoint=endpoint, credential=holder.credential) as client:
        print("Client created", file=out)

        async for deployment in iter_deployments(client):
            print(f"Deployment: {deployment.name}", file=out)
            count += 1

    return count


async def run(
    endpoint: Optional[str] = None,
    credential_factory: Callable = DefaultAzureCredential,
    client_factory: Callable[..., AIProjectClient] = AIProjectClient,
    out: Optional[TextIO] = None,
) -> int:
    """Create the process credential, list deployments, close the credential."""
    endpoint = endpoint or config.PROJECT_ENDPOINT
    holder = CredentialHolder(credential_factory())

    async with holder.credential:
        return await list_deployments(endpoint, holder, out=out, client_factory=client_factory)


def describe_deployment(deployment) -> dict:
    """Flatten a deployment record into plain JSON-friendly values."""
    # SKU is a dict like {'name': 'GlobalStandard', 'capacity': 251}
    sku = getattr(deployment, "sku", None) or {}

    return {
        "name": getattr(deployment, "name", None),
        "type": getattr(deployment, "type", None),
        "model": getattr(deployment, "model_name", None),
        "version": getattr(deployment, "model_version", None),
        "publisher": getattr(deployment, "model_publisher", None),
        "sku": sku.get("name"),
        "capacity": sku.get("capacity"),
    }


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
