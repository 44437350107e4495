# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import ClassVar, Final

from arbor.exceptions import AttributeHandlerError, InvalidParentError
from arbor.reflection import MethodCandidate, find_methods, select_method
from arbor.ui.components import Component, ComponentContainer

from .filter import FilterChain
from .parser import ParserRegistry

__all__ = 'Phase', 'AttributeHandler', 'DefaultAttributeHandler', 'LayoutAttributeHandler', 'DEFAULT_NAMESPACE', 'PARENT_NAMESPACE'  # noqa: RUF022


log = logging.getLogger(__name__)


DEFAULT_NAMESPACE: Final = ''
PARENT_NAMESPACE: Final = 'urn:arbor:parent'


class Phase(Enum):
    BEFORE_ATTACH = 'before-attach'
    AFTER_ATTACH = 'after-attach'

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}.{self.name}'


class AttributeHandler(ABC):
    """
    Applies the attributes from one namespace to a component.

    Handlers run either before the component is attached to its parent
    (BEFORE_ATTACH) or after (AFTER_ATTACH). Subclasses declare both using
    class parameters:

    class MyHandler(AttributeHandler, namespace='urn:example', phase=Phase.BEFORE_ATTACH):
        ...
    """

    namespace: ClassVar[str]
    phase: ClassVar[Phase]

    def __init_subclass__(cls, namespace: str | None = None, phase: Phase | None = None, **kw: object) -> None:
        super().__init_subclass__(**kw)
        if namespace is not None:
            cls.namespace = namespace
        if phase is not None:
            cls.phase = phase

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(namespace={self.namespace!r}, phase={self.phase!r})'

    @abstractmethod
    def assign_attributes(self, component: Component, attributes: Mapping[str, str], parsers: ParserRegistry, filters: FilterChain) -> None:
        """Apply the attributes to the component"""
        raise NotImplementedError


class DefaultAttributeHandler(AttributeHandler, namespace=DEFAULT_NAMESPACE, phase=Phase.BEFORE_ATTACH):
    """Applies the attributes without a namespace, which describe properties of the component itself"""

    def assign_attributes(self, component: Component, attributes: Mapping[str, str], parsers: ParserRegistry, filters: FilterChain) -> None:
        for name, value in attributes.items():
            method = self.get_write_method(type(component), name, parsers)
            if method is None:
                log.debug('Ignoring attribute %r: %s has no setter for it', name, component.__class__.__qualname__)
                continue
            self.apply_attribute(method, component, component, name, value, parsers, filters)

    def get_write_method(self, component_type: type[Component], name: str, parsers: ParserRegistry) -> MethodCandidate | None:
        return select_method(find_methods(component_type, name, arity=range(2)), specialized=parsers.is_specialized)

    def apply_attribute(self, method: MethodCandidate, target: object, component: Component, name: str, value: str, parsers: ParserRegistry, filters: FilterChain, *leading: object) -> None:  # noqa: PLR0913, PLR0917
        """Convert the value and call method(target, *leading, value) through the filters"""
        try:
            if method.arity == len(leading):
                method.function(target, *leading)  # a mode setter that takes no value (like set_size_full)
                return
            data_type = method.property_type
            parser = parsers.resolve(data_type)
            if parser is None:
                log.debug('Ignoring attribute %r: there is no parser for %s', name, method)
                return
            # an empty string is only passed through unconverted to str setters, other types must parse it (or fail)
            converted = value if not value and data_type is str else parser.parse(value, data_type, component)  # type: ignore[arg-type]
            filters.invoke(method.function, target, converted, *leading)
        except Exception as exc:
            raise AttributeHandlerError(f'Cannot apply attribute {name!r} with value {value!r} to {component!r} using {method.qualname}: {exc!s}', component=component, attribute=name) from exc


class LayoutAttributeHandler(DefaultAttributeHandler, namespace=PARENT_NAMESPACE, phase=Phase.AFTER_ATTACH):
    """
    Applies the attributes that describe the component's placement in its parent.

    These are applied to the parent container using setters that take the
    component as their first argument, for example:

    <Button p:expand-ratio="1"/> calls parent.set_expand_ratio(button, 1.0)
    """

    def assign_attributes(self, component: Component, attributes: Mapping[str, str], parsers: ParserRegistry, filters: FilterChain) -> None:
        if not attributes:
            return
        container = component.parent
        if not isinstance(container, ComponentContainer):
            raise InvalidParentError(f'{component!r} must be attached to a ComponentContainer to apply the {", ".join(map(repr, attributes))} attribute(s)')
        for name, value in attributes.items():
            method = self.get_layout_method(type(container), type(component), name, parsers)
            if method is None:
                log.debug('Ignoring parent attribute %r: %s has no setter for it', name, container.__class__.__qualname__)
                continue
            self.apply_attribute(method, container, component, name, value, parsers, filters, component)

    def get_layout_method(self, container_type: type[ComponentContainer], component_type: type[Component], name: str, parsers: ParserRegistry) -> MethodCandidate | None:
        return select_method(find_methods(container_type, name, arity=2, leading=[component_type]), specialized=parsers.is_specialized)
