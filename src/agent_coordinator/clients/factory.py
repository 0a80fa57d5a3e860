"""Factory for creating the LLM client behind the inference oracle.

Providers live in a registry keyed by name. Client classes are imported
lazily, so only the SDK of the selected provider has to be installed.
Additional providers (self-hosted gateways, test doubles) can be added at
runtime with ``register_provider``.
"""

import importlib
import os
from dataclasses import dataclass

from .base import BaseLLMClient


@dataclass(frozen=True)
class ProviderEntry:
    """How to build the client for one provider.

    Attributes:
        class_path: Dotted path of the BaseLLMClient subclass.
        api_key_envs: Environment variables checked for the key, in order.
        default_model: Model used when the caller does not pick one.
    """

    class_path: str
    api_key_envs: tuple[str, ...]
    default_model: str


_PROVIDER_REGISTRY: dict[str, ProviderEntry] = {
    "anthropic": ProviderEntry(
        "agent_coordinator.clients.anthropic.AnthropicClient",
        ("ANTHROPIC_API_KEY",),
        "claude-sonnet-4-5-20250929",
    ),
    "openai": ProviderEntry(
        "agent_coordinator.clients.openai.OpenAIClient",
        ("OPENAI_API_KEY",),
        "gpt-4o",
    ),
    "together": ProviderEntry(
        "agent_coordinator.clients.together.TogetherClient",
        ("TOGETHER_API_KEY",),
        "meta-llama/Meta-Llama-3.1-70B-Instruct-Turbo",
    ),
    "google": ProviderEntry(
        "agent_coordinator.clients.google.GoogleClient",
        ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
        "gemini-2.0-flash",
    ),
}


def get_available_providers() -> list[str]:
    """Get list of available provider names."""
    return list(_PROVIDER_REGISTRY)


def register_provider(
    name: str,
    class_path: str,
    api_key_envs: tuple[str, ...],
    default_model: str,
) -> None:
    """Make an extra provider available to ``create_client``.

    Registering an existing name replaces its entry.
    """
    _PROVIDER_REGISTRY[name] = ProviderEntry(class_path, tuple(api_key_envs), default_model)


def _lookup(provider: str) -> ProviderEntry:
    try:
        return _PROVIDER_REGISTRY[provider]
    except KeyError:
        raise ValueError(
            f"Unknown provider: {provider}. Available: {get_available_providers()}"
        ) from None


def get_default_model(provider: str) -> str:
    """Get the default model for a provider.

    Raises:
        ValueError: If provider is unknown.
    """
    return _lookup(provider).default_model


def create_client(
    provider: str,
    model: str | None = None,
    client_config: dict | None = None,
    api_key: str | None = None,
) -> BaseLLMClient:
    """Create an LLM client for the specified provider.

    Args:
        provider: A registered provider name (anthropic, openai, together, google).
        model: Optional model override. If not provided, uses provider default.
        client_config: Optional configuration dict for the client.
        api_key: Optional API key. If not provided, reads from environment.

    Returns:
        An initialized LLM client instance.

    Raises:
        ValueError: If provider is unknown or API key is not available.
    """
    entry = _lookup(provider)

    resolved_key = api_key or next(
        (os.environ[env] for env in entry.api_key_envs if os.environ.get(env)), None
    )
    if not resolved_key:
        raise ValueError(f"{' or '.join(entry.api_key_envs)} not set in environment")

    client_class = _import_client_class(entry.class_path)
    return client_class(
        api_key=resolved_key,
        model=model or entry.default_model,
        client_config=client_config,
    )


def _import_client_class(class_path: str) -> type[BaseLLMClient]:
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
