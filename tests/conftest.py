import asyncio
import json
import os

from langchain_core.messages import AIMessage
import pytest

# Settings fail fast without a key; set one before builddost.config is used.
os.environ.setdefault("LLM_API_KEY", "test-key")

# Queue this to make the fake model hang until the call times out
STALL = object()


class FakeLLM:
    """Chat model stand-in that replays scripted responses.

    A queued dict is returned as JSON text, a string as-is, and an exception
    instance is raised. ``bound`` records the options passed to ``bind`` and
    ``calls`` the message lists passed to ``ainvoke``. ``cancelled`` is set
    when a stalled call is cancelled.
    """

    def __init__(self):
        self.responses: list = []
        self.bound: list[dict] = []
        self.calls: list[list] = []
        self.cancelled = asyncio.Event()

    def push(self, *responses) -> "FakeLLM":
        self.responses.extend(responses)
        return self

    def bind(self, **kwargs) -> "FakeLLM":
        self.bound.append(kwargs)
        return self

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if not self.responses:
            raise AssertionError("unexpected LLM call")
        item = self.responses.pop(0)
        if item is STALL:
            try:
                await asyncio.sleep(3600)
            except asyncio.CancelledError:
                self.cancelled.set()
                raise
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, dict):
            item = json.dumps(item)
        return AIMessage(content=item)

    @property
    def prompts(self) -> list[str]:
        """Human message text of every call, in order."""
        return [messages[-1].content for messages in self.calls]


@pytest.fixture
def llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def stall():
    return STALL


@pytest.fixture
def project_payload() -> dict:
    """A well-formed full-stack project as the model would return it."""
    return {
        "id": "proj_gen_1",
        "name": "Food Delivery",
        "description": "Food delivery app with login and cart",
        "files": {
            "package.json": '{"name": "food-delivery"}',
            "src/App.tsx": "export default function App() { return null; }",
            "server/index.ts": "import express from 'express';",
        },
        "structure": {
            "frontend": ["src/", "src/components/"],
            "backend": ["server/"],
            "database": ["shared/"],
        },
        "dependencies": {
            "frontend": ["react", "tailwindcss"],
            "backend": ["express", "zod"],
        },
    }
