"""Azure AI Foundry deployment listing demo."""
from foundry.credential import CredentialHolder, default_credential_holder
from foundry.deployments import describe_deployment, iter_deployments, list_deployments, run

__all__ = [
    "CredentialHolder",
    "default_credential_holder",
    "describe_deployment",
    "iter_deployments",
    "list_deployments",
    "run",
]
