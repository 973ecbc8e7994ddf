"""
Process-wide service registry backed by dependency-injector providers.

Services are keyed by their interface class (ILogger, IPresenter,
IProcessRunner) and are always singletons: either a ready instance or a
factory called on first resolve.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from dependency_injector import providers

T = TypeVar("T")


class ServiceContainer:
    _instance: ServiceContainer | None = None

    def __init__(self) -> None:
        self._providers: dict[type, providers.Provider] = {}

    @classmethod
    def get_instance(cls) -> ServiceContainer:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    def register_singleton(
        self,
        interface: type[T],
        instance: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """Bind interface to an existing instance or to a lazily called factory."""
        if instance is not None:
            self._providers[interface] = providers.Object(instance)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError(f"register_singleton({interface.__name__}) needs instance or factory")

    def is_registered(self, interface: type) -> bool:
        return interface in self._providers

    def try_resolve(self, interface: type[T]) -> T | None:
        provider = self._providers.get(interface)
        return provider() if provider is not None else None


def get_container() -> ServiceContainer:
    return ServiceContainer.get_instance()
