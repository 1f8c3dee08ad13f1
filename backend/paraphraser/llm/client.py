import logging
from pathlib import Path

import requests

from paraphraser.config import GEMINI_BASE_URL, GEMINI_MODEL, GEMINI_TIMEOUT
from paraphraser.llm.errors import (
    LLMAPIError,
    LLMAuthError,
    LLMEmptyResponseError,
    LLMInvalidResponseError,
    LLMNetworkError,
    LLMRateLimitError,
)

logger = logging.getLogger(__name__)


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_MODEL,
        base_url: str = GEMINI_BASE_URL,
        timeout: float = GEMINI_TIMEOUT,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, prompt: str, stage: str = "unknown") -> str:
        """
        Send a single prompt and return the first candidate's text.

        Raises an LLMError subclass on transport failure, a non-JSON body,
        a non-2xx status or an empty answer. Never retries.
        """
        payload = {
            "contents": [
                {
                    "parts": [{"text": prompt}],
                }
            ],
        }

        try:
            response = requests.post(
                self.url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("[Gemini %s] Network error: %s", stage, e)
            raise LLMNetworkError(
                "Failed to reach Gemini API (network error)", stage=stage
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error("[Gemini %s] Invalid JSON response", stage)
            raise LLMInvalidResponseError(
                "Gemini returned invalid JSON",
                stage=stage,
                status_code=response.status_code,
            ) from e

        if not response.ok:
            status = response.status_code
            logger.error("[Gemini %s] API error status=%s body=%s", stage, status, data)

            if status in (401, 403):
                raise LLMAuthError(
                    "Gemini API key is invalid or unauthorized",
                    stage=stage,
                    status_code=status,
                )
            if status == 429:
                raise LLMRateLimitError(
                    "Gemini rate limit exceeded", stage=stage, status_code=status
                )
            raise LLMAPIError(
                f"Gemini API error ({status})", stage=stage, status_code=status
            )

        output = extract_text(data)
        if not output:
            logger.error("[Gemini %s] Empty response: %s", stage, data)
            raise LLMEmptyResponseError(
                "Gemini returned empty content",
                stage=stage,
                status_code=response.status_code,
            )

        return output


def extract_text(data) -> str:
    """candidates[0].content.parts[0].text, trimmed; "" when any hop is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""

    if not isinstance(text, str):
        return ""
    return text.strip()


def load_prompt(filename: str) -> str:
    """
    Load LLM prompt files safely in Docker and local environments.
    """
    prompt_dir = Path(__file__).resolve().parent / "prompts"
    return (prompt_dir / filename).read_text(encoding="utf-8")


def render_prompt(filename: str, **values: str) -> str:
    return load_prompt(filename).format(**values)
