"""Known LLMs with their token limits, costs and features."""

from __future__ import annotations

from typing import Optional

from .protocols import ModelInfo

_STANDARD = ("vision", "function_calling", "json_mode", "streaming")
_CLAUDE = ("vision", "function_calling", "streaming")
_GEMINI = ("vision", "function_calling", "streaming", "json_mode")
_TOOLS_JSON = ("function_calling", "streaming", "json_mode")
_TOOLS = ("function_calling", "streaming")
_STREAM_ONLY = ("streaming",)


def _info(
    name: str,
    provider: str,
    max_tokens: int,
    context_size: int,
    cost_in: float,
    cost_out: float,
    capabilities: tuple[str, ...],
    release_date: str,
) -> ModelInfo:
    return ModelInfo(
        name=name,
        provider=provider,
        max_tokens=max_tokens,
        context_size=context_size,
        cost_per_1k_input=cost_in,
        cost_per_1k_output=cost_out,
        capabilities=capabilities,
        release_date=release_date,
    )


MODELS: dict[str, ModelInfo] = {
    info.name: info
    for info in (
        # OpenAI
        _info("gpt-4o", "openai", 128000, 128000, 0.005, 0.015, _STANDARD, "2024-11-20"),
        _info("gpt-4o-mini", "openai", 128000, 128000, 0.00015, 0.0006, _STANDARD, "2024-07-18"),
        _info("gpt-4-turbo", "openai", 4096, 128000, 0.01, 0.03, _STANDARD, "2023-11-06"),
        _info("gpt-3.5-turbo", "openai", 4096, 16384, 0.0005, 0.0015, _TOOLS, "2023-03-15"),
        # Anthropic
        _info("claude-opus-4-6", "anthropic", 4096, 200000, 0.015, 0.075, _CLAUDE, "2025-02-27"),
        _info("claude-sonnet-4-6", "anthropic", 4096, 200000, 0.003, 0.015, _CLAUDE, "2025-02-27"),
        _info(
            "claude-haiku-4-5-20251001", "anthropic", 4096, 200000,
            0.00025, 0.00125, _CLAUDE, "2025-10-01",
        ),
        # Google Gemini
        _info("gemini-2.0-flash", "gemini", 8000, 1000000, 0.000075, 0.0003, _GEMINI, "2024-12-19"),
        _info("gemini-1.5-pro", "gemini", 8000, 2000000, 0.00125, 0.005, _GEMINI, "2024-05-14"),
        _info("gemini-1.5-flash", "gemini", 8000, 1000000, 0.000075, 0.0003, _GEMINI, "2024-09-24"),
        # Mistral
        _info(
            "mistral-large-latest", "mistral", 8192, 32000,
            0.0009, 0.0027, _TOOLS_JSON, "2024-09-17",
        ),
        _info(
            "mistral-medium-latest", "mistral", 8192, 32000,
            0.00027, 0.00081, _TOOLS, "2024-05-08",
        ),
        _info(
            "mistral-small-latest", "mistral", 8192, 32000,
            0.000027, 0.000081, _TOOLS, "2024-11-22",
        ),
        # Groq
        _info("llama-3.3-70b-versatile", "groq", 8192, 8192, 0.0, 0.0, _STREAM_ONLY, "2024-11-07"),
        _info("mixtral-8x7b-32768", "groq", 32768, 32768, 0.0, 0.0, _STREAM_ONLY, "2024-01-09"),
        _info("gemma2-9b-it", "groq", 8192, 8192, 0.0, 0.0, _STREAM_ONLY, "2024-06-27"),
        # Cohere
        _info("command-r-plus", "cohere", 4096, 128000, 0.003, 0.015, _TOOLS_JSON, "2024-03-22"),
        _info("command-r", "cohere", 4096, 128000, 0.0005, 0.0015, _TOOLS_JSON, "2024-03-15"),
        # Ollama (local)
        _info("llama2", "ollama", 4096, 4096, 0.0, 0.0, _STREAM_ONLY, "2023-07-18"),
        _info("llama3.2", "ollama", 4096, 8000, 0.0, 0.0, _STREAM_ONLY, "2024-09-12"),
        _info("codellama", "ollama", 16000, 16000, 0.0, 0.0, _STREAM_ONLY, "2023-08-24"),
        _info("mistral", "ollama", 8192, 8192, 0.0, 0.0, _STREAM_ONLY, "2023-12-26"),
        _info("neural-chat", "ollama", 4096, 4096, 0.0, 0.0, _STREAM_ONLY, "2023-06-15"),
    )
}


def get_model(name: str) -> Optional[ModelInfo]:
    """Return the model with this name, or None if it is not registered."""
    return MODELS.get(name)


def list_by_provider(provider: str) -> list[ModelInfo]:
    """All models offered by ``provider``."""
    return [info for info in MODELS.values() if info.provider == provider]


def list_capable(capability: str) -> list[ModelInfo]:
    """All models that have ``capability``."""
    return [info for info in MODELS.values() if capability in info.capabilities]


def list_all() -> list[ModelInfo]:
    """Every registered model."""
    return list(MODELS.values())


def providers() -> list[str]:
    """Distinct provider names, in first-registered order."""
    return list(dict.fromkeys(info.provider for info in MODELS.values()))


def available_capabilities() -> list[str]:
    """Distinct capabilities across all models, in first-seen order."""
    return list(
        dict.fromkeys(cap for info in MODELS.values() for cap in info.capabilities)
    )


def register_model(info: ModelInfo) -> None:
    """Add a model, or replace the one with the same name."""
    if not info.name:
        raise ValueError("model name cannot be empty")
    if not info.provider:
        raise ValueError("model provider cannot be empty")
    MODELS[info.name] = info