from contextlib import asynccontextmanager
from typing import List, Optional
from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel
from azure.ai.projects.aio import AIProjectClient
from agents.chat_agent import ChatAgent, ChatRunError
from foundry import config
from foundry.credential import default_credential_holder
from foundry.deployments import describe_deployment, iter_deployments


@asynccontextmanager
async def lifespan(app: FastAPI):
    """One credential and one project client for the lifetime of the app"""
    holder = default_credential_holder()
    app.state.credentials = holder
    app.state.project = AIProjectClient(
        endpoint=config.PROJECT_ENDPOINT,
        credential=holder.credential
    )
    print(f"✅ Project client created for {config.PROJECT_ENDPOINT}")

    try:
        yield  # App is running
    finally:
        try:
            await app.state.project.close()
        finally:
            await holder.credential.close()
            print("🛑 Project client closed")


app = FastAPI(
    title="Foundry Deployments API",
    description="Thin API over an Azure AI Foundry project: list deployments and chat with an agent",
    version="1.0.0",
    lifespan=lifespan
)


class DeploymentInfo(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    model: Optional[str] = None
    version: Optional[str] = None
    publisher: Optional[str] = None
    sku: Optional[str] = None
    capacity: Optional[int] = None


class DeploymentList(BaseModel):
    total: int
    endpoint: str
    deployments: List[DeploymentInfo]


class ChatRequest(BaseModel):
    message: str
    agent_id: Optional[str] = None


class ChatResponse(BaseModel):
    agent_id: str
    content: str
    citations: List[dict] = []


def get_project_client(request: Request) -> AIProjectClient:
    """Project client created in lifespan"""
    return request.app.state.project


@app.get("/health")
async def health_check():
    """Returns 200 OK if the service is running."""
    return {
        "status": "ok",
        "endpoint": config.PROJECT_ENDPOINT
    }


@app.get("/api/deployments", response_model=DeploymentList)
async def list_deployments(project: AIProjectClient = Depends(get_project_client)):
    """
    List all model deployments in the Foundry project.

    Returns:
        Deployments in the order the service returns them
    """
    try:
        deployments = [describe_deployment(d) async for d in iter_deployments(project)]
    except Exception as e:
        print(f"⚠️ Could not list deployments: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to list deployments: {str(e)}"
        )

    return {
        "total": len(deployments),
        "endpoint": config.PROJECT_ENDPOINT,
        "deployments": deployments
    }


@app.post("/api/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, project: AIProjectClient = Depends(get_project_client)):
    """
    Send a message to an agent and return its reply.

    Example:
        POST /api/chat
        Body: {"message": "What models are deployed?", "agent_id": "asst_xxx"}
    """
    if not request.message.strip():
        raise HTTPException(status_code=400, detail="Message must not be empty")

    agent_id = request.agent_id or config.AGENT_ID
    if not agent_id:
        raise HTTPException(
            status_code=400,
            detail="No agent_id given and AZURE_AI_AGENT_ID not set"
        )

    try:
        reply = await ChatAgent(project, agent_id).chat(request.message)
    except ChatRunError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to chat with agent: {str(e)}"
        )

    return {"agent_id": agent_id, **reply}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
