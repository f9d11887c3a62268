"""Shared monitoring state, owned by the top-level app and passed explicitly."""

from __future__ import annotations

from dataclasses import dataclass, field

from panic_ribbon.config.models import RibbonConfig
from panic_ribbon.events.channel import RenderChannel
from panic_ribbon.monitor.store import StatusStore
from panic_ribbon.registry.registry import ServiceRegistry


@dataclass
class MonitorContext:
    """Registry, status store and render channel for one running ribbon.

    Registry and store are built together and share index order.
    """

    registry: ServiceRegistry
    store: StatusStore
    channel: RenderChannel = field(default_factory=RenderChannel)

    @classmethod
    def from_config(cls, config: RibbonConfig) -> MonitorContext:
        registry = ServiceRegistry.from_config(config)
        return cls(registry=registry, store=StatusStore(registry))

    @property
    def service_count(self) -> int:
        return len(self.registry)
