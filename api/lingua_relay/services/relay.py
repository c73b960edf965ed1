import logging
import time

from lingua_relay.errors import UpstreamError

logger = logging.getLogger("lingua_relay")

SINGLE_WORD_TEMPLATE = (
    'Translate the word "{text}" from {source} to {target}. '
    "Provide only the single translated word."
)
MULTI_WORD_TEMPLATE = (
    "Translate the following {source} text to {target}. "
    'Provide ONLY the translated text. Text: "{text}"'
)
SUGGEST_TEMPLATE = (
    'I received a message in {language} that says: "{text}". '
    "Suggest three short, common, and natural-sounding replies in {language}. "
    "Provide ONLY the three replies, each on a new line. "
    "Do not add numbers, bullets, or any extra text."
)

NO_CANDIDATE = "No translation candidate found in the API response."


def build_translate_prompt(text: str, source: str, target: str) -> str:
    """Pick the single-word template unless the text contains a space."""
    template = MULTI_WORD_TEMPLATE if " " in text else SINGLE_WORD_TEMPLATE
    return template.format(text=text, source=source, target=target)


def build_suggest_prompt(text: str, language: str) -> str:
    return SUGGEST_TEMPLATE.format(text=text, language=language)


def first_candidate_text(data: dict) -> str:
    """Return the text of the first candidate of a generateContent response."""
    candidates = data.get("candidates")
    if not candidates:
        raise UpstreamError("Upstream request failed", details=NO_CANDIDATE)
    try:
        text = candidates[0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise UpstreamError(
            "Upstream request failed",
            details=f"Malformed candidate in the API response: {e!r}",
        ) from e
    if not isinstance(text, str):
        raise UpstreamError(
            "Upstream request failed",
            details="Candidate text is not a string.",
        )
    return text


def split_suggestions(text: str) -> list[str]:
    """One suggestion per non-blank line, order kept."""
    lines = (line.rstrip("\r") for line in text.strip().split("\n"))
    return [line for line in lines if line.strip()]


async def run_translate(upstream, text: str, source: str, target: str) -> tuple[str, float]:
    """Translate text. Returns (translation, processing_ms)."""
    prompt = build_translate_prompt(text, source, target)
    start = time.perf_counter()
    data = await upstream.generate_text(prompt)
    translation = first_candidate_text(data).strip()
    elapsed = (time.perf_counter() - start) * 1000
    return translation, elapsed


async def run_suggest_reply(upstream, text: str, language: str) -> tuple[list[str], float]:
    """Suggest replies. Returns (suggestions, processing_ms)."""
    prompt = build_suggest_prompt(text, language)
    start = time.perf_counter()
    data = await upstream.generate_text(prompt)
    suggestions = split_suggestions(first_candidate_text(data))
    elapsed = (time.perf_counter() - start) * 1000
    return suggestions, elapsed


async def run_synthesize_speech(upstream, text: str, lang_code: str) -> tuple[dict, float]:
    """Synthesize speech. Returns (upstream payload, processing_ms)."""
    start = time.perf_counter()
    data = await upstream.synthesize_speech(text, lang_code)
    elapsed = (time.perf_counter() - start) * 1000
    return data, elapsed
