"""Prompt relay to the Gemini ``generateContent`` REST endpoint."""

import logging

import httpx

from educonnect.core import config

logger = logging.getLogger(__name__)


class PromptProviderError(Exception):
    """Raised when the generative-text provider fails or returns no text."""


def _extract_text(data: dict) -> str:
    candidates = data.get("candidates") or [{}]
    parts = candidates[0].get("content", {}).get("parts", [])
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def generate_text(prompt: str, client: httpx.Client | None = None) -> str:
    if not config.GEMINI_API_KEY:
        raise PromptProviderError("Gemini API key not configured (GEMINI_API_KEY)")

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=config.GEMINI_TIMEOUT_SECONDS)

    try:
        response = client.post(
            f"{config.GEMINI_API_URL}/{config.GEMINI_MODEL}:generateContent",
            params={"key": config.GEMINI_API_KEY},
            headers={"Content-Type": "application/json"},
            json={"contents": [{"role": "user", "parts": [{"text": prompt}]}]},
        )
        response.raise_for_status()
        text = _extract_text(response.json())
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("Gemini request failed: %s", exc)
        raise PromptProviderError(str(exc)) from exc
    finally:
        if owns_client:
            client.close()

    if not text.strip():
        raise PromptProviderError("Empty response from Gemini")
    return text
