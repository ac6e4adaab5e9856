import logging

import requests

from utils.errors import ConfigurationError, EmbeddingError

logger = logging.getLogger(__name__)


class Embedder:
    """Turns text into a vector through a remote embedding API."""

    def __init__(self, model, base_url, timeout=60.0):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def embed(self, text: str) -> list:
        if not text:
            return []
        try:
            res = self._post(text)
            res.raise_for_status()
            return [float(x) for x in self._parse(res.json())]
        except requests.RequestException as e:
            raise EmbeddingError(f"Failed to generate embedding: {e}") from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise EmbeddingError(f"Unexpected embedding response: {e}") from e

    def embed_many(self, texts) -> list:
        return [self.embed(t) for t in texts]

    def _post(self, text):
        raise NotImplementedError

    def _parse(self, payload):
        raise NotImplementedError


class OllamaEmbedder(Embedder):
    def __init__(self, model="nomic-embed-text:latest", base_url="http://localhost:11434", timeout=60.0):
        super().__init__(model, base_url, timeout)

    def _post(self, text):
        return requests.post(
            f"{self.base_url}/api/embeddings",
            json={"model": self.model, "prompt": text},
            timeout=self.timeout,
        )

    def _parse(self, payload):
        return payload["embedding"]


class OpenAIEmbedder(Embedder):
    def __init__(self, api_key, model="text-embedding-3-small",
                 base_url="https://api.openai.com/v1", timeout=60.0):
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set in environment variables")
        super().__init__(model, base_url, timeout)
        self.api_key = api_key

    def _post(self, text):
        return requests.post(
            f"{self.base_url}/embeddings",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={"model": self.model, "input": text},
            timeout=self.timeout,
        )

    def _parse(self, payload):
        return payload["data"][0]["embedding"]


def build_embedder(settings) -> Embedder:
    provider = settings.embedding_provider
    logger.info("Using %s embedding model %s", provider, settings.embedding_model)
    if provider == "ollama":
        return OllamaEmbedder(
            model=settings.embedding_model,
            base_url=settings.ollama_base_url,
            timeout=settings.request_timeout,
        )
    if provider == "openai":
        return OpenAIEmbedder(
            api_key=settings.openai_api_key,
            model=settings.embedding_model,
            base_url=settings.openai_base_url,
            timeout=settings.request_timeout,
        )
    raise ConfigurationError(f"Unknown embedding provider: {provider!r}")
