from types import SimpleNamespace

import pytest


class FakeCredential:
    """Async credential stand-in that records whether it was closed."""

    def __init__(self):
        self.closed = False

    async def get_token(self, *scopes, **kwargs):
        return SimpleNamespace(token="fake-token", expires_on=0)

    async def close(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()


class FakePager:
    """Async iterator over pages, failing with `error` when it reaches `fail_at`."""

    def __init__(self, pages, error=None, fail_at=0):
        self.pages = pages
        self.error = error
        self.fail_at = fail_at
        self.pages_fetched = 0

    def __aiter__(self):
        return self._items()

    async def _items(self):
        for index, page in enumerate(self.pages + [None]):
            if self.error is not None and index == self.fail_at:
                raise self.error
            if page is None:
                return
            self.pages_fetched += 1
            for item in page:
                yield item


class FakeDeploymentsOperations:
    def __init__(self, pager):
        self.pager = pager
        self.list_calls = 0

    def list(self, **kwargs):
        self.list_calls += 1
        return self.pager


class FakeProjectClient:
    """Async project client stand-in exposing `deployments` and `agents`."""

    instances = []

    def __init__(self, endpoint=None, credential=None, pager=None, agents=None):
        self.endpoint = endpoint
        self.credential = credential
        self.deployments = FakeDeploymentsOperations(pager or FakePager([]))
        self.agents = agents
        self.closed = False
        FakeProjectClient.instances.append(self)

    async def close(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()


def make_deployment(name, model_name="gpt-4o", sku=None, **extra):
    return SimpleNamespace(
        name=name,
        type="ModelDeployment",
        model_name=model_name,
        model_version="2024-11-20",
        model_publisher="OpenAI",
        sku=sku if sku is not None else {"name": "GlobalStandard", "capacity": 50},
        **extra,
    )


@pytest.fixture
def deployments():
    return [make_deployment("gpt-4o"), make_deployment("gpt-4.1-mini", model_name="gpt-4.1-mini")]


@pytest.fixture
def client_factory():
    """Returns a factory building FakeProjectClients around a given pager."""
    FakeProjectClient.instances = []

    def _factory(pager):
        def build(endpoint, credential):
            return FakeProjectClient(endpoint=endpoint, credential=credential, pager=pager)

        return build

    return _factory


@pytest.fixture
def credential():
    return FakeCredential()


class FakeAsyncList:
    def __init__(self, items):
        self.items = items

    def __aiter__(self):
        return self._items()

    async def _items(self):
        for item in self.items:
            yield item


def make_message(role, text=None, annotations=None):
    text_messages = []
    if text is not None:
        text_messages.append(SimpleNamespace(text=SimpleNamespace(value=text, annotations=annotations or [])))
    return SimpleNamespace(role=role, text_messages=text_messages)


class FakeAgentsOperations:
    """Records thread/message/run calls the way the agents client exposes them."""

    def __init__(self, messages=None, run_status="completed", last_error=None, delete_error=None, run_error=None):
        self.run_error = run_error
        self.messages_out = messages or []
        self.run_status = run_status
        self.last_error = last_error
        self.delete_error = delete_error
        self.created_messages = []
        self.run_calls = []
        self.deleted_threads = []
        self.threads = SimpleNamespace(create=self._create_thread, delete=self._delete_thread)
        self.messages = SimpleNamespace(create=self._create_message, list=self._list_messages)
        self.runs = SimpleNamespace(create_and_process=self._create_and_process)

    async def _create_thread(self):
        return SimpleNamespace(id="thread_1")

    async def _delete_thread(self, thread_id):
        if self.delete_error is not None:
            raise self.delete_error
        self.deleted_threads.append(thread_id)

    async def _create_message(self, thread_id, role, content):
        self.created_messages.append({"thread_id": thread_id, "role": role, "content": content})

    async def _create_and_process(self, thread_id, agent_id):
        self.run_calls.append({"thread_id": thread_id, "agent_id": agent_id})
        if self.run_error is not None:
            raise self.run_error
        return SimpleNamespace(id="run_1", status=self.run_status, last_error=self.last_error)

    def _list_messages(self, thread_id, order=None):
        return FakeAsyncList(self.messages_out)
