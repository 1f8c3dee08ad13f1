from .client import GeminiClient, load_prompt, render_prompt
from .errors import (
    LLMError,
    LLMNetworkError,
    LLMInvalidResponseError,
    LLMAuthError,
    LLMRateLimitError,
    LLMAPIError,
    LLMEmptyResponseError,
)
