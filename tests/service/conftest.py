from collections.abc import AsyncGenerator, Awaitable, Callable
import json

from httpx import ASGITransport, AsyncClient
import pytest
from starlette.types import Message

from builddost.api.dependencies import get_generation_client, get_github_exporter, get_storage
from builddost.api.main import app
from builddost.export import GitHubExporter
from builddost.generation import GenerationClient
from builddost.storage import MemStorage, seed_defaults


@pytest.fixture
async def storage() -> MemStorage:
    storage = MemStorage()
    await seed_defaults(storage)
    return storage


@pytest.fixture
def exporter() -> GitHubExporter:
    """Token-less exporter: GitHub export runs as a stub."""
    return GitHubExporter(owner="builddost")


@pytest.fixture
async def async_client(storage, llm, exporter) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_generation_client] = lambda: GenerationClient(
        llm, timeout=5.0, max_retries=0
    )
    app.dependency_overrides[get_github_exporter] = lambda: exporter

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def post_then_disconnect(async_client) -> Callable[[str, dict], Awaitable[list[Message]]]:
    """POST straight into the ASGI app for a client that hangs up once the body is sent.

    httpx's ASGITransport never reports ``http.disconnect`` while a request is
    in flight, so the app is driven the way a server would drive it. Returns
    the messages the app sent back.
    """

    async def post(path: str, payload: dict) -> list[Message]:
        body = json.dumps(payload).encode()
        scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": "POST",
            "scheme": "http",
            "path": path,
            "raw_path": path.encode(),
            "root_path": "",
            "query_string": b"",
            "headers": [
                (b"host", b"test"),
                (b"content-type", b"application/json"),
                (b"content-length", str(len(body)).encode()),
            ],
            "client": ("127.0.0.1", 50000),
            "server": ("test", 80),
        }
        body_sent = False
        sent: list[Message] = []

        async def receive() -> Message:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": body, "more_body": False}
            return {"type": "http.disconnect"}

        async def send(message: Message) -> None:
            sent.append(message)

        await app(scope, receive, send)
        return sent

    return post
