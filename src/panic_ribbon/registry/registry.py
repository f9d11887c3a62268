"""Service registry: the fixed, ordered list of monitored services."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from panic_ribbon.config.models import RibbonConfig, ServiceSpec


class ServiceRegistry:
    """Immutable ordered registry of services.

    Index order is the top-to-bottom order of segments on the ribbon and is
    shared with the StatusStore. It never changes after construction.
    """

    def __init__(self, services: Sequence[ServiceSpec]) -> None:
        if not services:
            raise ValueError("ServiceRegistry requires at least one service")
        self._services: tuple[ServiceSpec, ...] = tuple(services)

    @classmethod
    def from_config(cls, config: RibbonConfig) -> ServiceRegistry:
        return cls(config.services)

    def __len__(self) -> int:
        return len(self._services)

    def __getitem__(self, index: int) -> ServiceSpec:
        return self._services[index]

    def __iter__(self) -> Iterator[ServiceSpec]:
        return iter(self._services)

    @property
    def names(self) -> list[str]:
        return [s.name for s in self._services]
