"""Generic registry with decorator pattern for pluggable components."""

from typing import TypeVar, Generic, Callable, Any

from voiceforge.core.exceptions import RegistryError

T = TypeVar("T")


class Registry(Generic[T]):
    """
    Registry mapping config keys to component classes.

    Usage:
        EngineRegistry = Registry[BaseEngine]("engine")

        @EngineRegistry.register("http")
        class HttpEngine(BaseEngine):
            ...

        # Later: instantiate from config
        engine = EngineRegistry.create(config.engine.backend, config=config.engine)
    """

    def __init__(self, name: str):
        self.name = name
        self._components: dict[str, type[T]] = {}

    def register(self, key: str) -> Callable[[type[T]], type[T]]:
        """Decorator to register a component class under key."""
        def decorator(cls: type[T]) -> type[T]:
            if key in self._components:
                raise RegistryError(f"{self.name}: '{key}' already registered")
            self._components[key] = cls
            return cls
        return decorator

    def get(self, key: str) -> type[T]:
        """Get the class (not instance) by key."""
        try:
            return self._components[key]
        except KeyError:
            available = ", ".join(self._components) or "none"
            raise RegistryError(
                f"{self.name}: '{key}' not found. Available: {available}"
            ) from None

    def create(self, key: str, **kwargs: Any) -> T:
        """Instantiate a registered component by key."""
        return self.get(key)(**kwargs)

    def keys(self) -> list[str]:
        return list(self._components)

    def __contains__(self, key: str) -> bool:
        return key in self._components

    def __repr__(self) -> str:
        return f"Registry({self.name}, components={self.keys()})"
