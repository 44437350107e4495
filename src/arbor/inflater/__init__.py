# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib import import_module

from arbor.exceptions import LayoutInflaterError
from arbor.ui.components import Component, ComponentContainer

from .description import AttributeEntry, ElementDescription, TypeToken, element, parse_description, read_description
from .filter import AttributeContext, AttributeFilter, FilterChain
from .handler import DEFAULT_NAMESPACE, PARENT_NAMESPACE, AttributeHandler, DefaultAttributeHandler, LayoutAttributeHandler, Phase
from .parser import AttributeConverter, AttributeParser, ParserRegistry, PrimitiveParser

__all__ = (  # noqa: RUF022
    'LayoutInflater',
    'InflaterSettings',
    'component_type',
    'find_component_by_id',

    # descriptions
    'ElementDescription',
    'AttributeEntry',
    'TypeToken',
    'element',
    'parse_description',
    'read_description',

    # filters
    'AttributeContext',
    'AttributeFilter',
    'FilterChain',

    # handlers
    'AttributeHandler',
    'DefaultAttributeHandler',
    'LayoutAttributeHandler',
    'Phase',
    'DEFAULT_NAMESPACE',
    'PARENT_NAMESPACE',

    # parsers
    'AttributeConverter',
    'AttributeParser',
    'ParserRegistry',
    'PrimitiveParser',
)


log = logging.getLogger(__name__)


def _default_handlers() -> tuple[AttributeHandler, ...]:
    return DefaultAttributeHandler(), LayoutAttributeHandler()


@dataclass(frozen=True, slots=True, kw_only=True)
class InflaterSettings:
    """
    The configuration used to build a component tree.

    The built-in handlers should come first, followed by the application
    provided ones. If multiple handlers claim the same namespace and phase,
    the first one wins.
    """

    parsers: ParserRegistry = field(default_factory=ParserRegistry)
    filters: FilterChain = field(default_factory=FilterChain)
    handlers: tuple[AttributeHandler, ...] = field(default_factory=_default_handlers)


def component_type(token: TypeToken) -> type[Component]:
    """Resolve a type token (a class or the dotted path to a class) to a component class"""
    if isinstance(token, str):
        module_name, _, class_name = token.rpartition('.')
        if not module_name or not class_name:
            raise LayoutInflaterError(f'Invalid component type {token!r}: expected module.ClassName')
        try:
            module = import_module(module_name)
        except ImportError as exc:
            raise LayoutInflaterError(f'Cannot import the module for component type {token!r}: {exc!s}') from exc
        try:
            resolved = getattr(module, class_name)
        except AttributeError:
            raise LayoutInflaterError(f'Unknown component type {token!r}') from None
    else:
        resolved = token
    if not isinstance(resolved, type) or not issubclass(resolved, Component):
        raise LayoutInflaterError(f'{token!r} is not a Component class')
    if inspect.isabstract(resolved):
        raise LayoutInflaterError(f'Cannot instantiate abstract component class {resolved.__qualname__!r}')
    return resolved


def find_component_by_id(root: Component, component_id: str) -> Component | None:
    """
    Search a component tree for the component with the given id.

    The tree is searched depth first and the first component with a matching
    id is returned, or None if there is no such component.
    """
    if not component_id:
        raise ValueError('Component id must not be empty')
    if root is None:
        raise ValueError('Root component must not be None')
    pending = [root]
    while pending:
        component = pending.pop()
        if component.id == component_id:
            return component
        if isinstance(component, ComponentContainer):
            pending.extend(reversed(list(component)))
    return None


class LayoutInflater:
    """
    Builds component trees from element descriptions.

    For every element the component is created and the BEFORE_ATTACH
    attributes are applied, then its children are built, then it is added
    to its parent and the AFTER_ATTACH attributes are applied. This means
    that a component is fully configured (including its own children) by
    the time it is added to its parent.
    """

    def __init__(self, settings: InflaterSettings | None = None) -> None:
        self.settings = settings if settings is not None else InflaterSettings()
        self._handlers: dict[Phase, dict[str, AttributeHandler]] = {phase: {} for phase in Phase}
        for handler in self.settings.handlers:
            registered = self._handlers[handler.phase].setdefault(handler.namespace, handler)
            if registered is not handler:
                log.warning('Ignoring %r: namespace %r is already handled by %r during %s', handler, handler.namespace, registered, handler.phase.name)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.settings!r})'

    def inflate(self, description: ElementDescription, overrides: Mapping[str, Component] | None = None) -> Component:
        """
        Build the component tree for the description.

        The overrides map component ids to already existing components,
        which are used instead of creating new components for those ids.
        """
        return self._inflate(description, None, overrides or {}, set())

    def _inflate(self, description: ElementDescription, parent: ComponentContainer | None, overrides: Mapping[str, Component], identifiers: set[str]) -> Component:
        component = self._create_component(description, overrides)
        component_id = description.id
        if component_id is not None:
            if component_id in identifiers:
                log.debug('Duplicate component id %r, lookups will return the first component with it', component_id)
            identifiers.add(component_id)

        attributes = description.namespaces()
        self._assign_attributes(component, attributes, Phase.BEFORE_ATTACH)

        if description.children and not isinstance(component, ComponentContainer):
            raise LayoutInflaterError(f'{description.type_name} is not a ComponentContainer and cannot have children')
        for child_description in description.children:
            self._inflate(child_description, component, overrides, identifiers)  # type: ignore[arg-type]

        if parent is not None:
            parent.add_component(component)
            self._assign_attributes(component, attributes, Phase.AFTER_ATTACH)
        return component

    def _create_component(self, description: ElementDescription, overrides: Mapping[str, Component]) -> Component:
        component_id = description.id
        if component_id is not None and component_id in overrides:
            component = overrides[component_id]
            if not isinstance(component, Component):
                raise LayoutInflaterError(f'The component provided for id {component_id!r} is not a Component: {component!r}')
            log.debug('Using the provided %r for id %r', component, component_id)
            return component
        cls = component_type(description.type)
        try:
            return cls()
        except Exception as exc:
            raise LayoutInflaterError(f'Cannot instantiate {cls.__qualname__}: {exc!s}') from exc

    def _assign_attributes(self, component: Component, attributes: Mapping[str, Mapping[str, str]], phase: Phase) -> None:
        for namespace, handler in self._handlers[phase].items():
            namespace_attributes = attributes.get(namespace)
            if namespace_attributes:
                handler.assign_attributes(component, namespace_attributes, self.settings.parsers, self.settings.filters)
        if phase is Phase.BEFORE_ATTACH:
            for namespace in attributes.keys() - {namespace for handlers in self._handlers.values() for namespace in handlers}:
                log.debug('Ignoring the %s attribute(s) of %r: no handler for namespace %r', ', '.join(attributes[namespace]), component, namespace)
