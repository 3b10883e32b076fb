import logging

import requests

from spendtalk.core.config import settings
from spendtalk.core.errors import GenerationError

logger = logging.getLogger(__name__)


def _ollama_chat(messages: list[dict], temperature: float = 0.0, model: str | None = None) -> str:
    OLLAMA_MODEL = model or settings.OLLAMA_MODEL
    payload = {
            "model": OLLAMA_MODEL,
            "messages": messages,
            "stream": False,
            "options": {
                "temperature": temperature
            },
    }
    try:
        response = requests.post(
            settings.OLLAMA_URL,
            json=payload,
            timeout=settings.OLLAMA_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise GenerationError(f"Ollama request failed: {exc}") from exc
    if response.status_code != 200:
        raise GenerationError(f"Ollama error {response.status_code}: {response.text}")

    try:
        data = response.json()
    except ValueError as exc:
        raise GenerationError(f"Ollama returned a non-JSON body: {response.text[:200]!r}") from exc
    if not isinstance(data, dict):
        raise GenerationError("Ollama returned an unexpected payload.")
    content = (data.get("message") or {}).get("content") or ""
    logger.debug("Ollama (%s) replied with %d chars", OLLAMA_MODEL, len(content))
    return content
