from dataclasses import dataclass

from app.core.config import _get_env, _get_env_bool, _get_env_float, _get_env_int

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1500
DEFAULT_TIMEOUT_S = 30.0


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    temperature: float
    max_output_tokens: int
    timeout_s: float


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def load_ai_config() -> AIConfig:
    # Unparseable or non-positive tuning values fall back to the defaults.
    temperature = _get_env_float("ENRICHMENT_TEMPERATURE", DEFAULT_TEMPERATURE)
    max_tokens = _get_env_int("ENRICHMENT_MAX_TOKENS", DEFAULT_MAX_TOKENS)
    timeout_s = _get_env_float("ENRICHMENT_TIMEOUT_S", DEFAULT_TIMEOUT_S)
    return AIConfig(
        provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
        model=(_get_env("AI_MODEL") or _get_env("OPENAI_MODEL") or DEFAULT_MODEL).strip(),
        temperature=temperature if 0.0 <= temperature <= 2.0 else DEFAULT_TEMPERATURE,
        max_output_tokens=max_tokens if max_tokens > 0 else DEFAULT_MAX_TOKENS,
        timeout_s=timeout_s if timeout_s > 0 else DEFAULT_TIMEOUT_S,
    )


def ai_enabled() -> bool:
    if not _get_env_bool("ENRICHMENT_ENABLED", True):
        return False
    provider = (_get_env("AI_PROVIDER", "openai") or "openai").strip().lower()
    if provider != "openai":
        return False
    api_key = (_get_env("OPENAI_API_KEY") or "").strip()
    if not api_key or _looks_like_placeholder(api_key):
        return False
    return True
