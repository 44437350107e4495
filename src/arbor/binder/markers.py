# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Self, overload

from arbor.ui.components import Component

__all__ = 'MarkerKind', 'Marker', 'UiField', 'ui_data_source', 'ui_handler', 'markers'


MARKERS_ATTRIBUTE: Final = '__arbor_markers__'


class MarkerKind(Enum):
    FIELD = 'field'
    DATA_SOURCE = 'data-source'
    HANDLER = 'handler'

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}.{self.name}'


@dataclass(frozen=True, slots=True)
class Marker:
    kind: MarkerKind
    component_id: str


def _mark[F: Callable[..., Any]](function: F, marker: Marker) -> F:
    if not callable(function):
        raise TypeError(f'Can only mark callables, not {function!r}')
    existing: tuple[Marker, ...] = getattr(function, MARKERS_ATTRIBUTE, ())
    setattr(function, MARKERS_ATTRIBUTE, (*existing, marker))
    return function


def markers(function: object) -> tuple[Marker, ...]:
    return getattr(function, MARKERS_ATTRIBUTE, ())


def ui_data_source[F: Callable[..., Any]](component_id: str) -> Callable[[F], F]:
    """
    Use the return value of the decorated method as the data source of a component.

    The method is called once while binding and must return a Property, an
    Item or a Container, which is installed as the data source of the
    component with the given id.
    """
    if not component_id:
        raise ValueError('the component id must not be empty')

    def decorate(function: F) -> F:
        return _mark(function, Marker(MarkerKind.DATA_SOURCE, component_id))

    return decorate


def ui_handler[F: Callable[..., Any]](component_id: str) -> Callable[[F], F]:
    """
    Register the decorated method as an event listener on a component.

    The method must take a single argument, whose annotation specifies
    the type of events it listens to:

    @ui_handler('save')
    def save_clicked(self, event: ClickEvent) -> None:
        ...
    """
    if not component_id:
        raise ValueError('the component id must not be empty')

    def decorate(function: F) -> F:
        return _mark(function, Marker(MarkerKind.HANDLER, component_id))

    return decorate


class UiField[C: Component]:
    """
    A controller attribute that holds a component from the bound tree.

    If the attribute already has a value when the tree is created, that
    component is used in the tree for the corresponding id. Otherwise the
    attribute receives the component with that id after the tree is built.
    The id defaults to the attribute name.

    class Controller:
        title = UiField(Label)
        save_button = UiField(Button, id='save')
    """

    name: str | None
    component_id: str | None

    def __init__(self, component_type: type[C] = Component, /, *, id: str | None = None) -> None:  # noqa: A002
        self.name = None
        self.type = component_type
        self.component_id = id

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.type.__qualname__}, id={self.component_id!r})'

    def __set_name__(self, owner: type, name: str) -> None:
        if self.name is None:
            self.name = name
            self.component_id = self.component_id or name
        elif name != self.name:
            raise TypeError(f'cannot assign the same {self.__class__.__name__} descriptor to two different names: {self.name} and {name}')

    @property
    def marker(self) -> Marker:
        assert self.component_id is not None  # noqa: S101 (used by type checkers)
        return Marker(MarkerKind.FIELD, self.component_id)

    @overload
    def __get__(self, instance: None, owner: type) -> Self: ...

    @overload
    def __get__(self, instance: object, owner: type | None = None) -> C | None: ...

    def __get__(self, instance: object | None, owner: type | None = None) -> Self | C | None:
        if instance is None:
            return self
        return instance.__dict__.get(self.name)

    def __set__(self, instance: object, value: C | None) -> None:
        if value is not None and not isinstance(value, self.type):
            raise TypeError(f'the {self.name!r} field must be of type {self.type.__qualname__}')
        instance.__dict__[self.name] = value

    def __delete__(self, instance: object) -> None:
        instance.__dict__.pop(self.name, None)
