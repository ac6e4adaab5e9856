import logging

import requests

from utils.errors import ConfigurationError, LLMError

logger = logging.getLogger(__name__)


class LLMClient:
    """
    Non-streaming text generation against Ollama or an OpenAI-compatible API.
    """

    def __init__(self, provider="ollama", model="deepseek-r1:7b",
                 base_url="http://localhost:11434", api_key=None, timeout=60.0):
        if provider not in ("ollama", "openai"):
            raise ConfigurationError(f"Unknown LLM provider: {provider!r}")
        if provider == "openai" and not api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set in environment variables")
        self.provider = provider
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings):
        base_url = settings.openai_base_url if settings.llm_provider == "openai" else settings.ollama_base_url
        return cls(
            provider=settings.llm_provider,
            model=settings.llm_model,
            base_url=base_url,
            api_key=settings.openai_api_key,
            timeout=settings.request_timeout,
        )

    def ask(self, prompt):
        try:
            if self.provider == "openai":
                res = requests.post(
                    f"{self.base_url}/chat/completions",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={"model": self.model, "messages": [{"role": "user", "content": prompt}]},
                    timeout=self.timeout,
                )
            else:
                res = requests.post(
                    f"{self.base_url}/api/generate",
                    json={"model": self.model, "prompt": prompt, "stream": False},
                    timeout=self.timeout,
                )
            res.raise_for_status()
            data = res.json()
        except requests.RequestException as e:
            raise LLMError(f"LLM request failed: {e}") from e
        except ValueError as e:
            raise LLMError(f"LLM returned invalid JSON: {e}") from e

        try:
            if 'response' in data:
                return data['response']
            if 'result' in data:
                return data['result']
            return data.get('choices', [{}])[0].get('message', {}).get('content', '')
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            raise LLMError(f"Unexpected LLM response: {data!r:.200}") from e
