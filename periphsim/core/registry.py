"""Model registry and factory.

Provides discovery and instantiation of model implementations that are
registered globally during module initialization.

Model packages call register_model() in their __init__.py, so importing
periphsim makes the built-in "gpio" and "dual_port_ram" models available.
"""

from __future__ import annotations

from typing import Any, Callable

ModelFactory = Callable[..., Any]


class ModelRegistry:
    """Registry of available model factories.

    THREAD SAFETY: Not thread-safe. All registration should happen
    during module initialization before any threads are spawned.
    """

    def __init__(self):
        self._models: dict[str, ModelFactory] = {}

    def register(self, name: str, factory: ModelFactory) -> None:
        """Register a model factory."""
        if name in self._models:
            raise ValueError(f"Model '{name}' already registered")
        self._models[name] = factory

    def get(self, name: str) -> ModelFactory:
        """Get a model factory by name."""
        if name not in self._models:
            raise ValueError(
                f"Unknown model '{name}'. Available: {list(self._models.keys())}"
            )
        return self._models[name]

    def list_models(self) -> list[str]:
        """List all registered model names."""
        return list(self._models.keys())

    def create(self, name: str, **kwargs) -> Any:
        """Instantiate a model by name."""
        factory = self.get(name)
        return factory(**kwargs)


# Global registry
_REGISTRY = ModelRegistry()


def register_model(name: str, factory: ModelFactory) -> None:
    """Register a model globally."""
    _REGISTRY.register(name, factory)


def create_model(name: str, **kwargs) -> Any:
    """Create a model instance by name."""
    return _REGISTRY.create(name, **kwargs)


def list_available_models() -> list[str]:
    """List all registered models."""
    return _REGISTRY.list_models()
