from __future__ import annotations
import requests
from newsbot.config.settings import get_settings


class OpenAIClient:
    """
    Minimal chat-completions client over requests.
    """

    def __init__(self, api_key: str | None = None) -> None:
        s = get_settings()
        self.api_key = s.openai_key if api_key is None else api_key
        self.url = s.openai_url
        self.model = s.openai_model
        self.max_tokens = s.openai_max_tokens
        self.temperature = s.openai_temperature
        self.timeout = s.http_timeout_seconds

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _extract_content(self, data: dict) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ValueError(f"Unexpected chat completion payload: {str(data)[:500]}") from e
        if not content:
            raise ValueError("Chat completion returned empty content")
        return content

    def chat(self, prompt: str) -> str:
        """
        Send one user message and return the first choice's text.
        """
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        r = requests.post(
            self.url,
            json=payload,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}",
            },
            timeout=self.timeout,
        )
        r.raise_for_status()
        return self._extract_content(r.json())
