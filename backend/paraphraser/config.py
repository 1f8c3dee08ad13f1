import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL",
    "https://generativelanguage.googleapis.com/v1beta",
)
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_QUICK_MODEL = os.getenv("GEMINI_QUICK_MODEL", "gemini-2.5-flash-lite")
GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "120"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "8080"))

MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(1024 * 1024)))

MAX_TEXT_LENGTH = 2000
MIN_QUICK_TEXT_LENGTH = 10

ALLOWED_TONES = ("standard", "simple", "professional", "academic")
DEFAULT_TONE = "standard"


def get_api_key() -> str | None:
    """
    Read the Gemini key per request so a missing key surfaces
    as an error response instead of a startup crash.
    """
    return os.getenv("GEMINI_API_KEY") or None
