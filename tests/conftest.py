import json
import pytest
from contextlib import ExitStack
from fastapi.testclient import TestClient
from pytest_asyncio import is_async_test

from app.api.summarize import UrlSummarizer
from app.config import Config
from app.main import init_app
from app.schemas.summarize import ContentResult


def pytest_collection_modifyitems(items):
    pytest_asyncio_tests = (item for item in items if is_async_test(item))
    session_scope_marker = pytest.mark.asyncio(loop_scope="session")
    for async_test in pytest_asyncio_tests:
        async_test.add_marker(session_scope_marker, append=False)


class FakeContentClient:
    """Stands in for the content service; records every requested url."""

    def __init__(self, results=None, error=None):
        self.results = results if results is not None else []
        self.error = error
        self.calls = []
        self.closed = False

    async def get_contents(self, url, summary=True):
        self.calls.append((url, summary))
        if self.error is not None:
            raise self.error
        return self.results

    async def aclose(self):
        self.closed = True


class FakeLLMClient:
    """Returns the queued replies in order; a queued exception is raised instead."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []
        self.closed = False

    async def complete(self, system_message, user_message, temperature, json_response=False):
        self.calls.append({
            "system_message": system_message,
            "user_message": user_message,
            "temperature": temperature,
            "json_response": json_response,
        })
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def aclose(self):
        self.closed = True


@pytest.fixture(scope="function")
def test_config():
    return Config(EXA_API_KEY="test-exa-key", GROQ_API_KEY="test-groq-key")


@pytest.fixture(scope="function")
def example_result():
    return ContentResult(title="Example", summary="A benign test page.", url="https://example.com")


@pytest.fixture(scope="function")
def content_client(example_result):
    return FakeContentClient(results=[example_result])


@pytest.fixture(scope="function")
def llm_client():
    return FakeLLMClient(
        json.dumps({"isLegit": True, "reason": "no harmful content"}),
        "testing, example, benign",
    )


@pytest.fixture(scope="function")
def summarizer(test_config, content_client, llm_client):
    return UrlSummarizer(test_config, content_client, llm_client)


@pytest.fixture(scope="function")
def app(test_config, summarizer):
    with ExitStack():
        yield init_app(config=test_config, summarizer=summarizer)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
