"""Run one analysis: resolve the content, prompt the model, return its answer."""
import html
import logging
from dataclasses import dataclass
from enum import Enum

import markdown
import ollama

import config
from errors import AnalysisError, ConfigurationError, ValidationError
from extractors import extract_url

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an analysis expert in the field of "AI-Powered Video Creation Tool".

Task context:
- The user's main pain point: existing AI video generators often fall short on quality and functionality and do not produce content that matches what users expect.
- Target audience: creators who want to turn a script into a video.
- What the user expects to get: high-quality AI-generated videos that closely match their expectations.
- Example output: a video produced from the submitted script and preferences.

Additional aspects to analyze:
1. Quality and functionality problems of existing AI video generators.

Response format:
- Use Markdown with short sections and bullet points.
- Highlight the key insights.
- Answer in the language of the content unless asked otherwise."""

USER_PROMPT_PREFIX = "Analyze the following content:\n\n"

EMPTY_INPUT_MESSAGE = "Please provide input to analyze"
INVALID_URL_MESSAGE = "Invalid URL format"
ANALYSIS_FAILED_MESSAGE = "Analysis failed. Please try again later."
RESULT_UNAVAILABLE = "Result unavailable"


class InputType(Enum):
    TEXT = "text"
    URL = "url"


@dataclass(frozen=True)
class ExtractionRequest:
    raw_input: str
    input_type: InputType = InputType.TEXT

    @classmethod
    def from_payload(cls, raw_input, input_type=None):
        """Build a request from the inbound ``input`` / ``inputType`` fields."""
        if not isinstance(raw_input, str) or not raw_input.strip():
            raise ValidationError(EMPTY_INPUT_MESSAGE)
        try:
            kind = InputType(input_type or InputType.TEXT.value)
        except ValueError:
            raise ValidationError(f"Unsupported inputType: {input_type}")
        return cls(raw_input=raw_input, input_type=kind)


@dataclass
class AnalysisPrompt:
    user_content: str
    system_instruction: str = SYSTEM_PROMPT

    def messages(self):
        return [
            {"role": "system", "content": self.system_instruction},
            {"role": "user", "content": USER_PROMPT_PREFIX + self.user_content},
        ]


@dataclass
class AnalysisResult:
    text: str

    @property
    def html(self) -> str:
        # Model output may echo page content; raw HTML is shown as text.
        return markdown.markdown(html.escape(self.text, quote=False))

    def to_dict(self):
        return {"result": self.text, "html": self.html}


def _validate(request: ExtractionRequest):
    if not request.raw_input.strip():
        raise ValidationError(EMPTY_INPUT_MESSAGE)
    if request.input_type is InputType.URL and not request.raw_input.strip().startswith(("http://", "https://")):
        raise ValidationError(INVALID_URL_MESSAGE)
    if not config.api_key():
        raise ConfigurationError(
            f"API key is not configured. Add {config.API_KEY_SETTING} to the environment."
        )
    config.request_timeout()


def resolve_content(request: ExtractionRequest) -> str:
    if request.input_type is InputType.URL:
        return extract_url(request.raw_input.strip()).to_markdown()
    return request.raw_input


def make_client():
    return ollama.Client(
        host=config.ollama_host(),
        headers={"Authorization": f"Bearer {config.api_key()}"},
    )


def complete(prompt: AnalysisPrompt) -> str:
    """Send one chat completion and return the answer text (may be empty)."""
    resp = make_client().chat(
        model=config.model_name(),
        messages=prompt.messages(),
        options={
            "temperature": config.TEMPERATURE,
            "num_predict": config.MAX_OUTPUT_TOKENS,
        },
    )
    message = resp["message"] if resp else None
    return (message["content"] if message else None) or ""


def analyze(request: ExtractionRequest) -> AnalysisResult:
    """Analyze text or the content behind a URL.

    Raises ValidationError, ConfigurationError, ExtractionError or
    AnalysisError; each carries the HTTP status the web layer should use.
    Nothing is retried.
    """
    _validate(request)

    # ExtractionError propagates unchanged, before any model call.
    content = resolve_content(request)
    prompt = AnalysisPrompt(user_content=content)

    try:
        text = complete(prompt)
    except Exception:
        logger.exception("Analysis error")
        raise AnalysisError(ANALYSIS_FAILED_MESSAGE)

    return AnalysisResult(text=text or RESULT_UNAVAILABLE)
