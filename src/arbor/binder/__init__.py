# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import inspect
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from types import FunctionType
from typing import get_origin, get_type_hints

from arbor.exceptions import BinderError
from arbor.inflater import find_component_by_id
from arbor.ui.components import Component
from arbor.ui.data import Container, ContainerViewer, Item, ItemViewer, Property, PropertyViewer
from arbor.ui.events import Event

from .markers import Marker, MarkerKind, UiField, markers, ui_data_source, ui_handler

__all__ = 'Binder', 'Binding', 'Marker', 'MarkerKind', 'UiField', 'ui_data_source', 'ui_handler'


log = logging.getLogger(__name__)


data_source_types = (Property, Item, Container)

bind_order = {MarkerKind.FIELD: 0, MarkerKind.DATA_SOURCE: 1, MarkerKind.HANDLER: 2}


@dataclass(frozen=True, slots=True)
class Binding:
    """
    A marker found on a controller, together with the controller member that carries it.

    Handler bindings carry the event type the handler subscribes to and data
    source bindings carry the declared return type of the data source (None
    if the data source is not annotated).
    """

    kind: MarkerKind
    component_id: str
    member: str
    event_type: type[Event] | None = None
    return_type: type | None = None

    def describe(self, controller: object) -> str:
        return f'{controller.__class__.__qualname__}.{self.member}'


def _qualify(controller_type: type, name: str, function: FunctionType) -> str:
    return f'{controller_type.__qualname__}.{name}' if function.__name__ == name else function.__qualname__


def _event_type(controller_type: type, name: str, function: FunctionType) -> type[Event]:
    parameters = list(inspect.signature(function).parameters.values())[1:]  # skip self
    if len(parameters) != 1:
        raise BinderError(f'Handler {_qualify(controller_type, name, function)} must take exactly one event argument')
    try:
        annotation = get_type_hints(function).get(parameters[0].name)
    except NameError as exc:
        raise BinderError(f'Cannot resolve the event type of handler {_qualify(controller_type, name, function)}: {exc!s}') from exc
    event_type = get_origin(annotation) or annotation
    if not isinstance(event_type, type) or not issubclass(event_type, Event):
        raise BinderError(f'The argument of handler {_qualify(controller_type, name, function)} must be annotated with an Event type')
    return event_type


def _return_type(controller_type: type, name: str, function: FunctionType) -> type | None:
    try:
        annotation = get_type_hints(function).get('return')
    except NameError:
        return None  # checked when the data source is called
    return_type = get_origin(annotation) or annotation
    if not isinstance(return_type, type):
        return None
    if not issubclass(return_type, data_source_types):
        raise BinderError(f'Data source {_qualify(controller_type, name, function)} must return a Property, an Item or a Container, not {return_type.__qualname__}')
    return return_type


class Binder:
    """
    Binds a component tree to a controller.

    The controller members are marked with ui_data_source, ui_handler or
    UiField. The markers are discovered every time a controller is used,
    nothing is cached between calls.
    """

    def bindings(self, controller: object) -> list[Binding]:
        """Return the bindings declared by the controller's class, in binding order"""
        controller_type = type(controller)
        bindings: list[Binding] = []
        seen: set[str] = set()
        for cls in controller_type.__mro__:
            for name, member in vars(cls).items():
                if name in seen:
                    continue
                seen.add(name)
                match member:
                    case UiField():
                        bindings.append(Binding(MarkerKind.FIELD, member.marker.component_id, name))
                    case FunctionType():
                        for marker in markers(member):
                            match marker.kind:
                                case MarkerKind.DATA_SOURCE:
                                    bindings.append(Binding(marker.kind, marker.component_id, name, return_type=_return_type(controller_type, name, member)))
                                case MarkerKind.HANDLER:
                                    bindings.append(Binding(marker.kind, marker.component_id, name, _event_type(controller_type, name, member)))
        return sorted(bindings, key=lambda binding: bind_order[binding.kind])

    def assigned_components(self, controller: object | None, bindings: Sequence[Binding] | None = None) -> dict[str, Component]:
        """
        Return the components already assigned to the controller's fields, by component id.

        The bindings are derived from the controller if they are not given.
        """
        if controller is None:
            return {}
        if bindings is None:
            bindings = self.bindings(controller)
        assigned = {}
        for binding in bindings:
            if binding.kind is MarkerKind.FIELD:
                component = getattr(controller, binding.member)
                if component is not None:
                    assigned[binding.component_id] = component
        return assigned

    def bind(self, root: Component, controller: object | None, bindings: Sequence[Binding] | None = None) -> None:
        if controller is None:
            return
        if bindings is None:
            bindings = self.bindings(controller)
        for binding in bindings:
            component = find_component_by_id(root, binding.component_id)
            if component is None:
                raise BinderError(f'No component with id {binding.component_id!r} was found for {binding.describe(controller)}')
            match binding.kind:
                case MarkerKind.FIELD:
                    self._bind_field(controller, binding, component)
                case MarkerKind.DATA_SOURCE:
                    self._bind_data_source(controller, binding, component)
                case MarkerKind.HANDLER:
                    self._bind_handler(controller, binding, component)
        log.info('Bound %d member(s) of %s', len(bindings), controller.__class__.__qualname__)

    def _bind_field(self, controller: object, binding: Binding, component: Component) -> None:
        current = getattr(controller, binding.member)
        if current is component:
            return
        if current is not None:
            raise BinderError(f'{binding.describe(controller)} holds {current!r}, which is not the component with id {binding.component_id!r}')
        try:
            setattr(controller, binding.member, component)
        except TypeError as exc:
            raise BinderError(f'Cannot assign {component!r} to {binding.describe(controller)}: {exc!s}') from exc

    def _bind_data_source(self, controller: object, binding: Binding, component: Component) -> None:
        try:
            data_source = getattr(controller, binding.member)()
        except Exception as exc:
            raise BinderError(f'Data source {binding.describe(controller)} failed: {exc!s}') from exc
        match data_source:
            case Property() if isinstance(component, PropertyViewer):
                component.set_property_data_source(data_source)
            case Item() if isinstance(component, ItemViewer):
                component.set_item_data_source(data_source)
            case Container() if isinstance(component, ContainerViewer):
                component.set_container_data_source(data_source)
            case Property() | Item() | Container():
                raise BinderError(f'{component!r} cannot use the {data_source.__class__.__qualname__} returned by {binding.describe(controller)} as its data source')
            case _:
                raise BinderError(f'Data source {binding.describe(controller)} must return a Property, an Item or a Container, not {data_source!r}')

    def _bind_handler(self, controller: object, binding: Binding, component: Component) -> None:
        assert binding.event_type is not None  # noqa: S101 (used by type checkers)
        try:
            component.add_listener(binding.event_type, getattr(controller, binding.member))
        except TypeError as exc:
            raise BinderError(f'Cannot bind {binding.describe(controller)} to {component!r}: {exc!s}') from exc
