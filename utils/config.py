"""
Environment-driven settings.

Values come from the process environment, after loading a `.env` file from
the working directory if one exists.
"""
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from utils.errors import ConfigurationError

DEFAULT_EMBEDDING_MODELS = {
    "ollama": "nomic-embed-text:latest",
    "openai": "text-embedding-3-small",
}
DEFAULT_LLM_MODELS = {
    "ollama": "deepseek-r1:7b",
    "openai": "gpt-4o-mini",
}


@dataclass(frozen=True)
class Settings:
    db_dir: str = "dataBase"
    documents_dir: str = "documents"
    embedding_provider: str = "ollama"
    embedding_model: str = DEFAULT_EMBEDDING_MODELS["ollama"]
    llm_provider: str = "ollama"
    llm_model: str = DEFAULT_LLM_MODELS["ollama"]
    ollama_base_url: str = "http://localhost:11434"
    openai_base_url: str = "https://api.openai.com/v1"
    openai_api_key: Optional[str] = field(default=None, repr=False)
    chunk_size: int = 500
    chunk_overlap: int = 50
    similarity_threshold: float = 0.5
    top_n: Optional[int] = None
    request_timeout: float = 60.0

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read from. Defaults to os.environ after loading .env.

        Raises:
            ConfigurationError: if a numeric variable cannot be parsed or is out of range.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        embedding_provider = env.get("EMBEDDING_PROVIDER", "ollama").strip().lower()
        llm_provider = env.get("LLM_PROVIDER", "ollama").strip().lower()

        chunk_size = _parse(env, "CHUNK_SIZE", int, 500)
        chunk_overlap = _parse(env, "CHUNK_OVERLAP", int, 50)
        if chunk_size <= 0:
            raise ConfigurationError(f"CHUNK_SIZE must be positive, got {chunk_size}")
        if not 0 <= chunk_overlap < chunk_size:
            raise ConfigurationError(
                f"CHUNK_OVERLAP must be in [0, CHUNK_SIZE={chunk_size}), got {chunk_overlap}"
            )
        top_n = _parse(env, "TOP_N", int, None)
        if top_n is not None and top_n <= 0:
            raise ConfigurationError(f"TOP_N must be positive, got {top_n}")

        return cls(
            db_dir=env.get("DB_DIR", "dataBase"),
            documents_dir=env.get("DOCUMENTS_DIR", "documents"),
            embedding_provider=embedding_provider,
            embedding_model=env.get("EMBEDDING_MODEL")
            or DEFAULT_EMBEDDING_MODELS.get(embedding_provider, ""),
            llm_provider=llm_provider,
            llm_model=env.get("LLM_MODEL") or DEFAULT_LLM_MODELS.get(llm_provider, ""),
            ollama_base_url=env.get("OLLAMA_BASE_URL", "http://localhost:11434").rstrip("/"),
            openai_base_url=env.get("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            similarity_threshold=_parse(env, "SIMILARITY_THRESHOLD", float, 0.5),
            top_n=top_n,
            request_timeout=_parse(env, "REQUEST_TIMEOUT", float, 60.0),
        )


def _parse(env, name, kind, default):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return kind(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be a {kind.__name__}, got {raw!r}") from None
