"""LLM client implementations.

All clients implement the BaseLLMClient interface and normalize
provider-specific responses to unified types. Concrete clients are
imported lazily by ``create_client`` so that only the SDK of the
selected provider has to be importable.
"""

from .base import BaseLLMClient
from .factory import (
    create_client,
    get_available_providers,
    get_default_model,
    register_provider,
)

__all__ = [
    "BaseLLMClient",
    "create_client",
    "get_available_providers",
    "get_default_model",
    "register_provider",
]
