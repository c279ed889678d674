import re
from azure.ai.agents.models import ListSortOrder
from azure.ai.projects.aio import AIProjectClient

# Inline citation markers like 【3:0†source】
CITATION_MARKER = re.compile(r'【\d+:\d+†[^】]+】')


class ChatRunError(Exception):
    """The agent run finished without completing"""

    def __init__(self, run_id: str, last_error=None, status: str = "failed"):
        self.run_id = run_id
        self.last_error = last_error
        self.status = status
        super().__init__(f"Agent run {run_id} {status}: {last_error or 'Unknown error'}")


def extract_citations(text_message) -> list:
    """Turn the annotations on a text message into citation dicts"""
    citations = []
    annotations = getattr(text_message.text, 'annotations', None) or []

    for idx, annotation in enumerate(annotations, 1):
        citation = {}

        # Try different annotation types
        if getattr(annotation, 'file_citation', None):
            citation = {
                "id": idx,
                "type": "file",
                "quote": getattr(annotation.file_citation, 'quote', None)
            }
        elif getattr(annotation, 'url_citation', None):
            citation = {
                "id": idx,
                "type": "url",
                "url": annotation.url_citation.url,
                "title": getattr(annotation.url_citation, 'title', None) or annotation.url_citation.url
            }
        elif getattr(annotation, 'url', None):
            citation = {
                "id": idx,
                "type": "url",
                "url": annotation.url
            }

        if citation:
            citations.append(citation)

    return citations


class ChatAgent:
    """Sends one message to a Foundry agent and returns its reply"""

    def __init__(self, project: AIProjectClient, agent_id: str):
        self.project = project
        self.agent_id = agent_id

    async def chat(self, message: str) -> dict:
        """
        Run the agent on a single message in a throwaway thread.

        Returns:
            Dict with "content" (reply text, citation markers removed) and "citations"

        Raises:
            ChatRunError if the run ends in any state other than completed
        """
        thread = None

        try:
            # Create a new thread for this conversation
            thread = await self.project.agents.threads.create()

            # Add the user message
            await self.project.agents.messages.create(
                thread_id=thread.id,
                role="user",
                content=message
            )

            run = await self.project.agents.runs.create_and_process(
                thread_id=thread.id,
                agent_id=self.agent_id
            )

            # failed, cancelled and expired runs have no usable reply
            if run.status != "completed":
                raise ChatRunError(run.id, run.last_error, run.status)

            messages = self.project.agents.messages.list(
                thread_id=thread.id,
                order=ListSortOrder.ASCENDING
            )
            messages_list = [msg async for msg in messages]

            # Last assistant message wins
            for msg in reversed(messages_list):
                if msg.role == "assistant" and msg.text_messages:
                    text_message = msg.text_messages[-1]
                    content = CITATION_MARKER.sub('', text_message.text.value)
                    return {
                        "content": content.strip(),
                        "citations": extract_citations(text_message)
                    }

            return {"content": "", "citations": []}

        finally:
            # Clean up the thread after processing
            if thread:
                try:
                    await self.project.agents.threads.delete(thread.id)
                except Exception as cleanup_error:
                    # Log but don't fail the request if cleanup fails
                    print(f"⚠️ Failed to delete thread {thread.id}: {cleanup_error}")
