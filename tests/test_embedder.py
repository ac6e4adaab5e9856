from __future__ import annotations

import pytest
import requests

from embeddings.embedder import OllamaEmbedder, OpenAIEmbedder, build_embedder
from utils.config import Settings
from utils.errors import ConfigurationError, EmbeddingError


class TestOllamaEmbedder:
    """Test the Ollama embeddings endpoint adapter."""

    def test_embed(self, fake_post):
        fake_post.queue({"embedding": [0.1, 0.2, 3]})
        vector = OllamaEmbedder(base_url="http://ollama:11434/", timeout=5).embed("hello")

        assert vector == [0.1, 0.2, 3.0]
        url, kwargs = fake_post.calls[0]
        assert url == "http://ollama:11434/api/embeddings"
        assert kwargs["json"] == {"model": "nomic-embed-text:latest", "prompt": "hello"}
        assert kwargs["timeout"] == 5

    def test_empty_text_skips_request(self, fake_post):
        assert OllamaEmbedder().embed("") == []
        assert fake_post.calls == []

    def test_http_error(self, fake_post):
        fake_post.queue({}, status_error=requests.HTTPError("500 Server Error"))
        with pytest.raises(EmbeddingError, match="500"):
            OllamaEmbedder().embed("hello")

    def test_connection_error(self, fake_post):
        fake_post.queue(exc=requests.ConnectionError("refused"))
        with pytest.raises(EmbeddingError, match="refused"):
            OllamaEmbedder().embed("hello")

    def test_unexpected_payload(self, fake_post):
        fake_post.queue({"error": "model not found"})
        with pytest.raises(EmbeddingError):
            OllamaEmbedder().embed("hello")

    @pytest.mark.parametrize("vector", [None, ["a", 0.5], [None], 3])
    def test_non_numeric_vector(self, fake_post, vector):
        fake_post.queue({"embedding": vector})
        with pytest.raises(EmbeddingError, match="Unexpected embedding response"):
            OllamaEmbedder().embed("hello")

    def test_embed_many(self, fake_post):
        fake_post.queue({"embedding": [1.0]})
        fake_post.queue({"embedding": [2.0]})
        assert OllamaEmbedder().embed_many(["a", "b"]) == [[1.0], [2.0]]


class TestOpenAIEmbedder:
    """Test the OpenAI embeddings endpoint adapter."""

    def test_embed(self, fake_post):
        fake_post.queue({"data": [{"embedding": [0.5, 0.5]}]})
        vector = OpenAIEmbedder(api_key="sk-test").embed("hello")

        assert vector == [0.5, 0.5]
        url, kwargs = fake_post.calls[0]
        assert url == "https://api.openai.com/v1/embeddings"
        assert kwargs["headers"] == {"Authorization": "Bearer sk-test"}
        assert kwargs["json"] == {"model": "text-embedding-3-small", "input": "hello"}

    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError):
            OpenAIEmbedder(api_key=None)

    def test_empty_data(self, fake_post):
        fake_post.queue({"data": []})
        with pytest.raises(EmbeddingError):
            OpenAIEmbedder(api_key="sk-test").embed("hello")


class TestBuildEmbedder:
    def test_ollama(self):
        emb = build_embedder(Settings(embedding_model="custom", ollama_base_url="http://h:1"))
        assert isinstance(emb, OllamaEmbedder)
        assert emb.model == "custom"
        assert emb.base_url == "http://h:1"

    def test_openai(self):
        settings = Settings(
            embedding_provider="openai",
            embedding_model="text-embedding-3-large",
            openai_api_key="sk-test",
        )
        emb = build_embedder(settings)
        assert isinstance(emb, OpenAIEmbedder)
        assert emb.model == "text-embedding-3-large"

    def test_unknown_provider(self):
        with pytest.raises(ConfigurationError):
            build_embedder(Settings(embedding_provider="nope"))
