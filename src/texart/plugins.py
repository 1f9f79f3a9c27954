"""Plugin registry: maps resource locators to generator and renderer factories.

Usage:
    @plugin(locator="file://Texart.SomePlugin.dll/Generators/Edges", kind=PluginKind.GENERATOR)
    def edges(pixel_sampling_ratio: int = 1) -> Generator:
        return EdgeGenerator(pixel_sampling_ratio)

    generator = get_registry().create("file://Texart.SomePlugin.dll/Generators/Edges", pixel_sampling_ratio=4)

Loading the module a locator's host names is left to the caller; the registry
only knows about factories that have already been registered.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable

from texart.generators import BrightnessGenerator, Generator, ShapeGenerator
from texart.locator import ResourceLocator
from texart.renderers import FontRenderer, Renderer

logger = logging.getLogger(__name__)

BUILTIN = ResourceLocator("file", "texart.builtin")


class PluginKind(enum.Enum):
    GENERATOR = "generator"
    RENDERER = "renderer"

    @property
    def protocol(self) -> type:
        return Generator if self is PluginKind.GENERATOR else Renderer


@dataclass(frozen=True)
class PluginSpec:
    locator: ResourceLocator
    kind: PluginKind
    factory: Callable[..., Any]
    description: str = ""


def _as_locator(locator: ResourceLocator | str) -> ResourceLocator:
    return locator if isinstance(locator, ResourceLocator) else ResourceLocator.parse(locator)


class PluginRegistry:
    def __init__(self) -> None:
        self._plugins: dict[ResourceLocator, PluginSpec] = {}

    def register(
        self,
        locator: ResourceLocator | str,
        kind: PluginKind,
        factory: Callable[..., Any],
        description: str = "",
    ) -> PluginSpec:
        spec = PluginSpec(_as_locator(locator), kind, factory, description)
        if spec.locator in self._plugins:
            raise ValueError(f"Duplicate plugin locator: {spec.locator}")
        self._plugins[spec.locator] = spec
        logger.debug("Registered %s %s", kind.value, spec.locator)
        return spec

    def get(self, locator: ResourceLocator | str) -> PluginSpec:
        locator = _as_locator(locator)
        try:
            return self._plugins[locator]
        except KeyError:
            raise KeyError(f"No plugin registered for {locator}") from None

    def create(self, locator: ResourceLocator | str, **options: Any) -> Any:
        """Build a fresh instance of the plugin at ``locator``."""
        spec = self.get(locator)
        instance = spec.factory(**options)
        if not isinstance(instance, spec.kind.protocol):
            raise TypeError(f"Plugin {spec.locator} produced {type(instance).__name__}, not a {spec.kind.value}")
        return instance

    def of_kind(self, kind: PluginKind) -> list[PluginSpec]:
        specs = [s for s in self._plugins.values() if s.kind is kind]
        return sorted(specs, key=lambda s: str(s.locator))

    def __contains__(self, locator: object) -> bool:
        if isinstance(locator, str):
            locator = ResourceLocator.parse(locator)
        return locator in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)


def _register_builtins(registry: PluginRegistry) -> None:
    registry.register(
        BUILTIN.child("generators", "brightness"),
        PluginKind.GENERATOR,
        BrightnessGenerator,
        "Mean block brightness mapped onto a character ramp",
    )
    registry.register(
        BUILTIN.child("generators", "shape"),
        PluginKind.GENERATOR,
        ShapeGenerator,
        "Block ink pattern matched against glyph shapes",
    )
    registry.register(
        BUILTIN.child("renderers", "font"),
        PluginKind.RENDERER,
        FontRenderer,
        "Draws characters with a TrueType font face",
    )


# Module-level default registry
_registry = PluginRegistry()
_register_builtins(_registry)


def get_registry() -> PluginRegistry:
    return _registry


def plugin(*, locator: ResourceLocator | str, kind: PluginKind, description: str = ""):
    """Decorator to register a factory in the default registry."""

    def decorator(factory: Callable[..., Any]):
        _registry.register(locator, kind, factory, description)
        return factory

    return decorator
