"""Dependency injection wiring.

Providers without subclasses are concrete. A provider base with subclasses
is a swappable component: one subclass serves production and one, flagged
``__is_mock__``, serves tests.
"""

from typing import Type

from points.util.di.application import ProdApplicationProvider
from points.util.di.base import Component, ProviderBase
from points.util.di.core import ProdConfigProvider
from points.util.di.domain import ProdDomainProvider
from points.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)
from points.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for ``base``.

    Args:
        base: Entry of ``PROVIDERS``
        use_mock: Whether to pick the test implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        DependencyInjectionError: If the component lacks the requested
            implementation
    """
    implementations = {
        bool(getattr(sub, "__is_mock__", False)): sub for sub in base.__subclasses__()
    }
    if not implementations:
        return base
    if use_mock not in implementations:
        component = getattr(base, "__mock_component__", None) or base.__name__
        kind = "mock" if use_mock else "production"
        raise DependencyInjectionError(f"{component} has no {kind} provider")
    return implementations[use_mock]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
