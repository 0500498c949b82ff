from typing import Any, Dict

from models.base_provider import HintProvider
from models.local_provider.provider import LocalHintProvider
from models.random_provider.provider import RandomHintProvider

PROVIDER_REGISTRY = {
    "local": LocalHintProvider,
    "random": RandomHintProvider,
}


class UnknownProvider(KeyError):
    """No hint provider registered under the requested name."""


def get_provider(name: str = "local", config: Dict[str, Any] = None) -> HintProvider:
    """Instantiate a registered provider by name."""
    key = name.lower() if isinstance(name, str) else None
    if key not in PROVIDER_REGISTRY:
        raise UnknownProvider(
            f"Unknown hint provider '{name}'. Available: {sorted(PROVIDER_REGISTRY)}"
        )
    return PROVIDER_REGISTRY[key](config=config)


__all__ = [
    "HintProvider", "LocalHintProvider", "RandomHintProvider",
    "PROVIDER_REGISTRY", "UnknownProvider", "get_provider",
]
