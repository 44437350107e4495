# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from collections.abc import Iterable, Iterator
from datetime import datetime
from functools import singledispatchmethod
from typing import ClassVar
from warnings import deprecated
from weakref import ReferenceType
from weakref import ref as wref

from .data import Container, Item, Property
from .events import ClickEvent, Event, Listener, ValueChangeEvent
from .values import ContentMode, Orientation, Resolution, Resource, ThemeResource

__all__ = (  # noqa: RUF022
    'Component',
    'ComponentContainer',
    'Label',
    'Button',
    'AbstractField',
    'TextField',
    'CheckBox',
    'DateField',
    'Slider',
    'Table',
    'Form',
)


class Component:
    """
    Base class for all the components.

    Components only keep a weak reference to their parent. The parent owns
    its children, while a child never owns its parent.

    Subclasses declare the events they fire using the events class parameter:

    class Button(Component, events=[ClickEvent]):
        ...
    """

    _events_: ClassVar[frozenset[type[Event]]] = frozenset()

    def __init_subclass__(cls, events: Iterable[type[Event]] = (), **kw: object) -> None:
        super().__init_subclass__(**kw)
        cls._events_ = cls._events_ | frozenset(events)

    def __init__(self) -> None:
        self._id: str | None = None
        self._parent: ReferenceType[ComponentContainer] | None = None
        self._caption: str | None = None
        self._description: str | None = None
        self._enabled = True
        self._visible = True
        self._style_name: str | None = None
        self._width: str | None = None
        self._height: str | None = None
        self._icon: Resource | None = None
        self._listeners: dict[type[Event], list[Listener]] = {}

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}: id={self._id!r}>'

    @property
    def id(self) -> str | None:
        return self._id

    @id.setter
    def id(self, value: str | None) -> None:
        self._id = value

    @property
    def parent(self) -> 'ComponentContainer | None':
        return self._parent() if self._parent is not None else None

    @property
    def caption(self) -> str | None:
        return self._caption

    @caption.setter
    def caption(self, value: str | None) -> None:
        self._caption = value

    @property
    def description(self) -> str | None:
        return self._description

    @description.setter
    def description(self, value: str | None) -> None:
        self._description = value

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        self._visible = value

    @property
    def style_name(self) -> str | None:
        return self._style_name

    @style_name.setter
    def style_name(self, value: str | None) -> None:
        self._style_name = value

    @property
    def width(self) -> str | None:
        return self._width

    @width.setter
    def width(self, value: str | None) -> None:
        self._width = value or None

    @property
    def height(self) -> str | None:
        return self._height

    @height.setter
    def height(self, value: str | None) -> None:
        self._height = value or None

    @property
    def icon(self) -> Resource | None:
        return self._icon

    @singledispatchmethod
    def set_icon(self, icon: object) -> None:
        raise TypeError(f'unsupported icon type: {icon.__class__.__qualname__}')

    @set_icon.register
    def _(self, icon: Resource) -> None:
        self._icon = icon

    @set_icon.register
    @deprecated('Use a Resource to specify the icon')
    def _(self, icon: str) -> None:
        self._icon = ThemeResource(icon)

    def set_size_full(self) -> None:
        self._width = self._height = '100%'

    def set_size_undefined(self) -> None:
        self._width = self._height = None

    def add_listener[E: Event](self, event_type: type[E], listener: Listener[E]) -> None:
        if not any(issubclass(event_type, supported) or issubclass(supported, event_type) for supported in self._events_):
            raise TypeError(f'{self.__class__.__qualname__} does not fire {event_type.__qualname__} events')
        self._listeners.setdefault(event_type, []).append(listener)

    def remove_listener[E: Event](self, event_type: type[E], listener: Listener[E]) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def fire_event(self, event: Event) -> None:
        for event_type, listeners in list(self._listeners.items()):
            if isinstance(event, event_type):
                for listener in list(listeners):
                    listener(event)


class ComponentContainer(Component):
    def __init__(self) -> None:
        super().__init__()
        self._components: list[Component] = []

    def __iter__(self) -> Iterator[Component]:
        return iter(list(self._components))

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, component: object) -> bool:
        return any(item is component for item in self._components)

    def add_component(self, component: Component) -> None:
        if component is self:
            raise ValueError('a component cannot be added to itself')
        current_parent = component.parent
        if current_parent is self:
            return
        if current_parent is not None:
            current_parent.remove_component(component)
        self._components.append(component)
        component._parent = wref(self)  # noqa: SLF001

    def remove_component(self, component: Component) -> None:
        if component not in self:
            raise ValueError(f'{component!r} is not in {self!r}')
        self._components = [item for item in self._components if item is not component]
        component._parent = None  # noqa: SLF001

    def remove_all_components(self) -> None:
        for component in list(self._components):
            self.remove_component(component)


class Label(Component):
    def __init__(self, value: str = '') -> None:
        super().__init__()
        self._value = value
        self._content_mode = ContentMode.TEXT
        self._data_source: Property | None = None

    @property
    def value(self) -> str:
        if self._data_source is not None:
            value = self._data_source.get_value()
            return '' if value is None else str(value)
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        if self._data_source is not None:
            self._data_source.set_value(value)
        else:
            self._value = value

    @property
    def content_mode(self) -> ContentMode:
        return self._content_mode

    @content_mode.setter
    def content_mode(self, value: ContentMode) -> None:
        self._content_mode = value

    @property
    def data_source(self) -> Property | None:
        return self._data_source

    def set_property_data_source(self, data_source: Property) -> None:
        self._data_source = data_source


class Button(Component, events=[ClickEvent]):
    def __init__(self, caption: str | None = None) -> None:
        super().__init__()
        self._caption = caption
        self._disable_on_click = False

    @property
    def disable_on_click(self) -> bool:
        return self._disable_on_click

    @disable_on_click.setter
    def disable_on_click(self, value: bool) -> None:
        self._disable_on_click = value

    def click(self) -> None:
        if not self.enabled:
            return
        if self._disable_on_click:
            self.enabled = False
        self.fire_event(ClickEvent(self))


class AbstractField[T](Component, events=[ValueChangeEvent]):
    """
    Base class for the components that edit a value.

    The value is kept locally, unless a property data source is set, in which
    case the value is read from and written to the data source. Changing the
    value fires a ValueChangeEvent.

    Subclasses define the typed value property using _get_value/_set_value,
    so that the value type is visible in the setter signature.
    """

    def __init__(self) -> None:
        super().__init__()
        self._value: T | None = None
        self._data_source: Property[T] | None = None
        self._read_only = False
        self._required = False

    def _get_value(self) -> T | None:
        if self._data_source is not None:
            return self._data_source.get_value()
        return self._value

    def _set_value(self, value: T | None) -> None:
        if self._read_only:
            raise PermissionError(f'{self!r} is read-only')
        old_value = self._get_value()
        if self._data_source is not None:
            self._data_source.set_value(value)  # type: ignore[arg-type]
        else:
            self._value = value
        if value != old_value:
            self.fire_event(ValueChangeEvent(self, value))

    @property
    def read_only(self) -> bool:
        return self._read_only

    @read_only.setter
    def read_only(self, value: bool) -> None:
        self._read_only = value

    @property
    def required(self) -> bool:
        return self._required

    @required.setter
    def required(self, value: bool) -> None:
        self._required = value

    @property
    def data_source(self) -> Property[T] | None:
        return self._data_source

    def set_property_data_source(self, data_source: Property[T]) -> None:
        self._data_source = data_source


class TextField(AbstractField[str]):
    def __init__(self, caption: str | None = None) -> None:
        super().__init__()
        self._caption = caption
        self._max_length = -1
        self._input_prompt: str | None = None

    @property
    def value(self) -> str | None:
        return self._get_value()

    @value.setter
    def value(self, value: str | None) -> None:
        self._set_value(value)

    @property
    def max_length(self) -> int:
        return self._max_length

    @max_length.setter
    def max_length(self, value: int) -> None:
        self._max_length = value

    @property
    def input_prompt(self) -> str | None:
        return self._input_prompt

    @input_prompt.setter
    def input_prompt(self, value: str | None) -> None:
        self._input_prompt = value


class CheckBox(AbstractField[bool]):
    @property
    def value(self) -> bool | None:
        return self._get_value()

    @value.setter
    def value(self, value: bool | None) -> None:
        self._set_value(value)


class DateField(AbstractField[datetime]):
    def __init__(self) -> None:
        super().__init__()
        self._resolution = Resolution.DAY
        self._date_format: str | None = None

    @property
    def value(self) -> datetime | None:
        return self._get_value()

    @value.setter
    def value(self, value: datetime | None) -> None:
        self._set_value(value)

    @property
    def resolution(self) -> Resolution:
        return self._resolution

    @resolution.setter
    def resolution(self, value: Resolution) -> None:
        self._resolution = value

    @property
    def date_format(self) -> str | None:
        return self._date_format

    @date_format.setter
    def date_format(self, value: str | None) -> None:
        self._date_format = value


class Slider(AbstractField[float]):
    def __init__(self) -> None:
        super().__init__()
        self._value = 0.0
        self._min = 0.0
        self._max = 100.0
        self._orientation = Orientation.HORIZONTAL

    @property
    def value(self) -> float | None:
        return self._get_value()

    @value.setter
    def value(self, value: float | None) -> None:
        if value is not None and not self._min <= value <= self._max:
            raise ValueError(f'value {value!r} is outside the [{self._min!r}, {self._max!r}] range')
        self._set_value(value)

    @property
    def min(self) -> float:
        return self._min

    @min.setter
    def min(self, value: float) -> None:
        self._min = value

    @property
    def max(self) -> float:
        return self._max

    @max.setter
    def max(self, value: float) -> None:
        self._max = value

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @orientation.setter
    def orientation(self, value: Orientation) -> None:
        self._orientation = value


class Table(Component, events=[ValueChangeEvent]):
    def __init__(self, caption: str | None = None) -> None:
        super().__init__()
        self._caption = caption
        self._data_source: Container | None = None
        self._page_length = 15
        self._selectable = False
        self._selection: object = None

    @property
    def data_source(self) -> Container | None:
        return self._data_source

    def set_container_data_source(self, data_source: Container) -> None:
        self._data_source = data_source

    @property
    def page_length(self) -> int:
        return self._page_length

    @page_length.setter
    def page_length(self, value: int) -> None:
        if value < 0:
            raise ValueError('page length cannot be negative')
        self._page_length = value

    @property
    def selectable(self) -> bool:
        return self._selectable

    @selectable.setter
    def selectable(self, value: bool) -> None:
        self._selectable = value

    def select(self, item_id: object) -> None:
        if not self._selectable:
            raise PermissionError(f'{self!r} is not selectable')
        if self._data_source is None or self._data_source.get_item(item_id) is None:
            raise KeyError(item_id)
        if item_id != self._selection:
            self._selection = item_id
            self.fire_event(ValueChangeEvent(self, item_id))


class Form(Component):
    def __init__(self) -> None:
        super().__init__()
        self._data_source: Item | None = None

    @property
    def data_source(self) -> Item | None:
        return self._data_source

    def set_item_data_source(self, data_source: Item) -> None:
        self._data_source = data_source
