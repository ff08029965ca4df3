from __future__ import annotations

"""
Assistant Text Generation Client.

Talks to an OpenAI-compatible completion endpoint (llama.cpp server,
Ollama, vLLM, ...) to turn a user prompt into code. The workspace treats
this client as an opaque `(prompt) -> text` function: one call per user
request, no retry and no streaming.
"""

import logging
from typing import Any, Dict, Optional

import requests

from workspace_vfs.domain import constants as const
from workspace_vfs.infra.network.common import USER_AGENT

logger = logging.getLogger(__name__)


class AssistantError(RuntimeError):
    """The backend could not produce a completion."""


def build_code_prompt(prompt: str, context: str = "") -> str:
    """Wrap a user request in the code-comment framing the model expects."""
    return f"// Generate {prompt}\n{context}"


class AssistantClient:
    """
    HTTP client for single-shot code generation.

    Attributes:
        endpoint: Completion URL.
        model: Model identifier sent with each request.
        temperature: Default sampling temperature.
        max_tokens: Default generation budget.
        timeout: Request timeout in seconds.
    """

    def __init__(
            self,
            endpoint: str = const.DEFAULT_ASSISTANT_ENDPOINT,
            model: str = const.DEFAULT_ASSISTANT_MODEL,
            temperature: float = const.DEFAULT_TEMPERATURE,
            max_tokens: int = const.DEFAULT_MAX_TOKENS,
            timeout: int = const.DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self.endpoint = endpoint
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "AssistantClient":
        """Build a client from a validated configuration dictionary."""
        return cls(
            endpoint=cfg.get("assistant_endpoint", const.DEFAULT_ASSISTANT_ENDPOINT),
            model=cfg.get("assistant_model", const.DEFAULT_ASSISTANT_MODEL),
            temperature=cfg.get("temperature", const.DEFAULT_TEMPERATURE),
            max_tokens=cfg.get("max_tokens", const.DEFAULT_MAX_TOKENS),
            timeout=cfg.get("request_timeout", const.DEFAULT_REQUEST_TIMEOUT),
        )

    def __call__(self, prompt: str, **options: Any) -> str:
        return self.generate(prompt, **options)

    def generate(
            self,
            prompt: str,
            *,
            temperature: Optional[float] = None,
            max_tokens: Optional[int] = None,
            context: str = "",
    ) -> str:
        """
        Request a completion for the given prompt.

        Args:
            prompt: User request in natural language.
            temperature: Overrides the default sampling temperature.
            max_tokens: Overrides the default generation budget.
            context: Extra text appended below the framed request.

        Returns:
            str: Generated text with the echoed prompt removed.

        Raises:
            AssistantError: On transport failure or malformed response.
        """
        code_prompt = build_code_prompt(prompt, context)
        payload = {
            "model": self.model,
            "prompt": code_prompt,
            "temperature": self.temperature if temperature is None else temperature,
            "max_tokens": self.max_tokens if max_tokens is None else max_tokens,
        }
        headers = {"User-Agent": USER_AGENT}
        logger.debug(f"Requesting completion from {self.endpoint} (model={self.model})")

        try:
            response = requests.post(
                self.endpoint, json=payload, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            logger.warning(f"Assistant: request timed out after {self.timeout}s.")
            raise AssistantError(f"Request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Assistant: communication error: {e}")
            raise AssistantError(f"Backend unavailable: {e}") from e
        except ValueError as e:
            logger.error(f"Assistant: response is not valid JSON: {e}")
            raise AssistantError("Malformed response from backend") from e

        text = _extract_text(data)
        if text is None:
            logger.warning("Assistant: received a response without generated text.")
            raise AssistantError("Malformed response from backend")

        generated = text.replace(code_prompt, "").strip()
        logger.info(f"Assistant: generated {len(generated)} chars.")
        return generated


def _extract_text(data: Any) -> Optional[str]:
    """Pull generated text out of completion or text-generation responses."""
    if isinstance(data, list) and data:
        data = data[0]
    if not isinstance(data, dict):
        return None

    choices = data.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        text = choices[0].get("text")
        if text is None and isinstance(choices[0].get("message"), dict):
            text = choices[0]["message"].get("content")
        return text if isinstance(text, str) else None

    text = data.get("generated_text")
    return text if isinstance(text, str) else None
