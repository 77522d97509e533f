"""
Model Registry
==============
Maps model names to the classes that build them.

Why is this file needed?
------------------------
1. Extensibility: new models are added by registering a class, without
   touching the existing ones.
2. Ownership: the registry is an explicit object owned by the application
   context (created at start-up, cleared at teardown) instead of hidden
   module-level state.
3. Discovery: installed distributions can advertise extra models through an
   entry point group, which replaces loading native plugin libraries.
"""
from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import Callable, Dict, Iterator, List

from dynamicstoolset.config import ENTRY_POINT_GROUP
from dynamicstoolset.errors import ModelNotFoundError
from dynamicstoolset.model.dynamical_model import DynamicalModel

logger = logging.getLogger(__name__)

ModelFactory = Callable[[], DynamicalModel]


class ModelRegistry:
    """Registry of model factories keyed by model name."""

    def __init__(self) -> None:
        self._factories: Dict[str, ModelFactory] = {}

    def register(self, cls: type[DynamicalModel]) -> type[DynamicalModel]:
        """
        Register a model class by its NAME. Usable as a class decorator.

        Raises:
            ValueError: If the class has no NAME or the name is already taken.
        """
        name = getattr(cls, "NAME", None)
        if not name:
            raise ValueError(f"{cls.__name__} must define NAME")
        self.register_factory(name, cls)
        return cls

    def register_factory(self, name: str, factory: ModelFactory) -> None:
        if name in self._factories:
            raise ValueError(f"A model named '{name}' is already registered.")
        self._factories[name] = factory
        logger.debug(f"Registered model '{name}'.")

    def create(self, name: str) -> DynamicalModel:
        """
        Build a fresh model instance.

        Raises:
            ModelNotFoundError: If no model is registered under `name`.
        """
        factory = self._factories.get(name)
        if factory is None:
            raise ModelNotFoundError(name, self.names())
        model = factory()
        model.validate()
        return model

    def names(self) -> List[str]:
        """Registered model names, sorted for display."""
        return sorted(self._factories)

    def load_entry_points(self, group: str = ENTRY_POINT_GROUP) -> List[str]:
        """
        Register models advertised by installed distributions.

        Each entry point must resolve to a DynamicalModel subclass. Broken
        entries are logged and skipped so one bad package cannot prevent the
        rest from loading.

        Returns:
            Names of the models registered by this call.
        """
        loaded: List[str] = []
        for ep in entry_points(group=group):
            logger.info(f"Loading model plugin '{ep.name}' from {ep.value}")
            try:
                cls = ep.load()
                if not (isinstance(cls, type) and issubclass(cls, DynamicalModel)):
                    raise TypeError(f"{ep.value} is not a DynamicalModel subclass")
                self.register(cls)
            except Exception as e:
                logger.error(f"Could not load model plugin '{ep.name}': {e}")
                continue
            loaded.append(cls.NAME)
        return loaded

    def clear(self) -> None:
        self._factories.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


def create_default_registry(load_plugins: bool = False) -> ModelRegistry:
    """
    Registry pre-populated with the built-in models.

    Args:
        load_plugins: Also scan the entry point group for third-party models.
    """
    from dynamicstoolset.model.plugins import BUILTIN_MODELS

    registry = ModelRegistry()
    for cls in BUILTIN_MODELS:
        registry.register(cls)

    if load_plugins:
        registry.load_entry_points()

    logger.info(f"Model registry ready with {len(registry)} models: {', '.join(registry.names())}")
    return registry
