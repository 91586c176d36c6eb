from dataclasses import asdict
from logging import getLogger
from typing import Any, Callable, Hashable

from dependency_injector import containers, providers

from map2d.base import Map2D
from map2d.config import Map2DSettings
from map2d.hash_map import HashMap2D

_logger = getLogger(__name__)


class Map2DContainer(containers.DeclarativeContainer):
    """Provides the ``Map2D`` implementation handed out by :func:`create_instance`."""

    config = providers.Configuration(default=asdict(Map2DSettings()))

    map2d = providers.Factory(HashMap2D, prune_empty_rows=config.prune_empty_rows)


_CONTAINER = Map2DContainer()


def create_instance[R: Hashable, C: Hashable, V]() -> Map2D[R, C, V]:
    """Create an empty map using the current implementation and settings."""
    return _CONTAINER.map2d()


def configure(settings: Map2DSettings) -> None:
    """Apply ``settings`` to every map created from now on.

    Maps created before the call keep their settings.
    """
    _logger.debug('Configuring map2d with %s', settings)
    _CONTAINER.config.from_dict(asdict(settings))


def use_implementation(factory: Callable[[], Map2D[Any, Any, Any]]) -> None:
    """Make :func:`create_instance` return maps built by ``factory``.

    ``factory`` takes no arguments, so settings applied through
    :func:`configure` only reach it if it reads them itself.
    """
    _logger.debug('Overriding map2d implementation with %r', factory)
    _CONTAINER.map2d.override(providers.Factory(factory))


def reset_implementation() -> None:
    """Restore :class:`HashMap2D` as the implementation of :func:`create_instance`."""
    _CONTAINER.map2d.reset_override()
