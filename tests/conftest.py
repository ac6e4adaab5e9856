from __future__ import annotations

import pytest

from rag.rag_engine import RAGEngine
from vector_store.json_store import JsonRecordStore


class FakeEmbedder:
    """Embeds text as [count of 'x', count of 'y'] and records every call."""

    def __init__(self):
        self.calls = []

    def embed(self, text):
        self.calls.append(text)
        if not text:
            return []
        return [float(text.count("x")), float(text.count("y"))]


class FakeResponse:
    def __init__(self, payload=None, status_error=None):
        self._payload = payload
        self._status_error = status_error

    def raise_for_status(self):
        if self._status_error is not None:
            raise self._status_error

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture
def store(tmp_path):
    return JsonRecordStore(str(tmp_path / "db"))


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def engine(store, embedder):
    return RAGEngine(store, embedder, chunk_size=4, chunk_overlap=0, threshold=0.5)


class FakePost:
    """Stands in for requests.post: records calls and replays queued responses."""

    def __init__(self):
        self.calls = []
        self.responses = []

    def queue(self, payload=None, status_error=None, exc=None):
        self.responses.append((payload, status_error, exc))

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        payload, status_error, exc = self.responses.pop(0)
        if exc is not None:
            raise exc
        return FakeResponse(payload, status_error)


@pytest.fixture
def fake_post(monkeypatch):
    import requests

    post = FakePost()
    monkeypatch.setattr(requests, "post", post)
    return post
