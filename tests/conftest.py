"""
Pytest fixtures: fake collaborators injected through create_app.
"""

import pytest
from fastapi.testclient import TestClient

from ecorater.app import create_app
from ecorater.errors import UpstreamError
from ecorater.models import SearchItem


class FakeLLM:
    model = "fake-model"

    def __init__(self, reply="Rating: 4/5\nCategory: Footwear\nMade from recycled materials."):
        self.reply = reply
        self.calls = []

    def generate_text(self, prompt, image_url=None):
        self.calls.append((prompt, image_url))
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


class FakeSearch:
    def __init__(self, items=None, enabled=True, error=None):
        self.items = items if items is not None else [
            SearchItem(title="Nike Air Zoom", link="https://example.com/air-zoom", thumbnail="https://example.com/t.jpg"),
        ]
        self.enabled = enabled
        self.error = error
        self.queries = []

    def search_products(self, query, num=10):
        self.queries.append((query, num))
        if self.error:
            raise self.error
        return self.items[:num]


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def searcher():
    return FakeSearch()


@pytest.fixture
def client(llm, searcher):
    app = create_app(llm=llm, searcher=searcher, required_fields=["title", "brand", "features", "material"])
    return TestClient(app)


@pytest.fixture
def upstream_error():
    return UpstreamError("gemini", "boom")
