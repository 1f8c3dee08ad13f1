from typing import Any, Optional

from paraphraser.config import (
    ALLOWED_TONES,
    DEFAULT_TONE,
    MAX_TEXT_LENGTH,
    MIN_QUICK_TEXT_LENGTH,
)

INVALID_TEXT = "Invalid input text"
INVALID_TONE = "Invalid tone"
QUICK_TEXT_NOT_STRING = "Text must be a non-empty string."
QUICK_TEXT_TOO_SHORT = (
    f"Text must be at least {MIN_QUICK_TEXT_LENGTH} characters long."
)


def normalize_tone(tone: Any) -> Any:
    # any falsy value (missing, null, "", false, 0) means the default
    return tone or DEFAULT_TONE


def text_length(text: str) -> int:
    """Length in UTF-16 code units, the way browsers count characters."""
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


def validate_humanize_text(text: Any) -> Optional[str]:
    if not text or not isinstance(text, str) or text_length(text) > MAX_TEXT_LENGTH:
        return INVALID_TEXT
    if not text.strip():
        return INVALID_TEXT
    return None


def validate_tone(tone: Any) -> Optional[str]:
    if tone not in ALLOWED_TONES:
        return INVALID_TONE
    return None


def validate_quick_text(text: Any) -> Optional[str]:
    if not text or not isinstance(text, str):
        return QUICK_TEXT_NOT_STRING
    if len(text.strip()) < MIN_QUICK_TEXT_LENGTH:
        return QUICK_TEXT_TOO_SHORT
    return None
