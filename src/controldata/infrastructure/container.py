"""Dependency injection container and the controldata object graph."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from controldata.infrastructure.config import Config
from controldata.infrastructure.metrics import MetricsRegistry, get_metrics

T = TypeVar("T")


class Container:
    """
    Simple dependency injection container.

    Supports singleton and factory registrations with lazy initialization.
    """

    def __init__(self) -> None:
        self._factories: dict[type, Callable[[Container], Any]] = {}
        self._instances: dict[type, Any] = {}

    def register_singleton(self, interface: type[T], instance: T) -> None:
        """
        Register a singleton instance.

        Args:
            interface: The interface/type to register
            instance: The singleton instance
        """
        self._instances[interface] = instance

    def register_factory(
        self,
        interface: type[T],
        factory: Callable[[Container], T],
    ) -> None:
        """
        Register a factory function for lazy instantiation.

        The factory runs on first resolve; its result is reused afterwards.

        Args:
            interface: The interface/type to register
            factory: Factory function that takes the container and returns an instance
        """
        self._instances.pop(interface, None)
        self._factories[interface] = factory

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a dependency.

        Raises:
            KeyError: If no registration exists for the interface
        """
        if interface in self._instances:
            return self._instances[interface]

        if interface in self._factories:
            instance = self._factories[interface](self)
            self._instances[interface] = instance
            return instance

        raise KeyError(f"No registration found for {interface}")

    def has(self, interface: type) -> bool:
        """Check if an interface is registered."""
        return interface in self._factories or interface in self._instances

    def clear(self) -> None:
        """Clear all registrations and instances."""
        self._factories.clear()
        self._instances.clear()


def build_container(config: Config, metrics: MetricsRegistry | None = None) -> Container:
    """
    Wire the decoder, formatter and view for a configuration.

    Args:
        config: Loaded configuration
        metrics: Metrics registry (default: the global registry)

    Returns:
        A container resolving Config, MetricsRegistry, ControlFileSource,
        ControlFileDecoder, FieldFormatter and ControlDataView
    """
    from controldata.adapters.outbound import FileControlFileSource
    from controldata.application import ControlDataView
    from controldata.domain.services import ControlFileDecoder, FieldFormatter
    from controldata.ports.outbound import ControlFileSource

    container = Container()
    container.register_singleton(Config, config)
    container.register_singleton(MetricsRegistry, metrics or get_metrics())

    container.register_factory(ControlFileSource, lambda c: FileControlFileSource())
    container.register_factory(
        ControlFileDecoder,
        lambda c: ControlFileDecoder(
            c.resolve(ControlFileSource),
            byte_order=c.resolve(Config).control_file.byte_order,
        ),
    )
    container.register_factory(
        FieldFormatter,
        lambda c: FieldFormatter(time_format=c.resolve(Config).formatting.time_format),
    )
    container.register_factory(
        ControlDataView,
        lambda c: ControlDataView(
            decoder=c.resolve(ControlFileDecoder),
            formatter=c.resolve(FieldFormatter),
            metrics=c.resolve(MetricsRegistry),
        ),
    )
    return container
