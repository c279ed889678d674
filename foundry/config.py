"""Project configuration, read from the environment or a local .env file."""
import os
from dotenv import load_dotenv

# Load .env file before reading environment variables
load_dotenv()

# Edit this before running, or set AZURE_AI_PROJECT_ENDPOINT
DEFAULT_PROJECT_ENDPOINT = "https://resource.services.ai.azure.com/api/projects/yourproject"

PROJECT_ENDPOINT = os.getenv("AZURE_AI_PROJECT_ENDPOINT") or DEFAULT_PROJECT_ENDPOINT

# Default agent for chat requests that don't name one
AGENT_ID = os.getenv("AZURE_AI_AGENT_ID")
