"""Runtime settings for the content analyzer."""
import logging
import os

from dotenv import load_dotenv

from errors import ConfigurationError

load_dotenv()

USER_AGENT = "Mozilla/5.0 (compatible; AI-Tool-Bot/1.0)"
HEADERS = {"User-Agent": USER_AGENT}

DEFAULT_MODEL = "llama3.2"
DEFAULT_HOST = "https://ollama.com"
API_KEY_SETTING = "OLLAMA_API_KEY"

TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 2000

# Extraction limits
MAX_COMMENTS = 20
MAX_REVIEW_CANDIDATES = 15
REVIEW_MIN_CHARS = 20   # exclusive
REVIEW_MAX_CHARS = 2000  # exclusive
MAX_BODY_CHARS = 10000

MODERATOR_ACCOUNT = "AutoModerator"


def api_key():
    return os.environ.get(API_KEY_SETTING) or None


def model_name():
    return os.environ.get("OLLAMA_MODEL") or DEFAULT_MODEL


def ollama_host():
    return os.environ.get("OLLAMA_HOST") or DEFAULT_HOST


def request_timeout() -> float:
    value = os.environ.get("REQUEST_TIMEOUT") or "10"
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be a number of seconds, got {value!r}")
    if timeout <= 0:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be positive, got {value!r}")
    return timeout


def configure_logging():
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
