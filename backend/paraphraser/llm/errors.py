class LLMError(Exception):
    """Base class for every failure talking to the hosted model."""

    def __init__(self, message: str, stage: str = "unknown", status_code: int | None = None):
        super().__init__(message)
        self.stage = stage
        self.status_code = status_code


class LLMNetworkError(LLMError):
    pass


class LLMInvalidResponseError(LLMError):
    pass


class LLMAuthError(LLMError):
    pass


class LLMRateLimitError(LLMError):
    pass


class LLMAPIError(LLMError):
    pass


class LLMEmptyResponseError(LLMError):
    pass
