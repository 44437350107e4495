# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# The data model consists of the three shapes that can be bound
# to components: a single value (Property), a record of named properties (Item)
# and a collection of records (Container). Components that can display one of
# them implement the matching viewer protocol.

from collections.abc import Hashable, Iterator
from itertools import count
from typing import Protocol, runtime_checkable

__all__ = (  # noqa: RUF022
    'Property',
    'Item',
    'Container',
    'PropertyViewer',
    'ItemViewer',
    'ContainerViewer',
    'ObjectProperty',
    'PropertysetItem',
    'IndexedContainer',
)


@runtime_checkable
class Property[T](Protocol):
    def get_value(self) -> T: ...

    def set_value(self, value: T) -> None: ...


@runtime_checkable
class Item(Protocol):
    def get_item_property(self, property_id: Hashable) -> Property | None: ...

    def item_property_ids(self) -> list[Hashable]: ...


@runtime_checkable
class Container(Protocol):
    def get_item(self, item_id: Hashable) -> Item | None: ...

    def item_ids(self) -> list[Hashable]: ...


@runtime_checkable
class PropertyViewer(Protocol):
    def set_property_data_source(self, data_source: Property) -> None: ...


@runtime_checkable
class ItemViewer(Protocol):
    def set_item_data_source(self, data_source: Item) -> None: ...


@runtime_checkable
class ContainerViewer(Protocol):
    def set_container_data_source(self, data_source: Container) -> None: ...


class ObjectProperty[T]:
    def __init__(self, value: T, data_type: type[T] | None = None, /, *, read_only: bool = False) -> None:
        self.type = data_type if data_type is not None else type(value)
        self.read_only = read_only
        self._value = value

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self._value!r}, {self.type.__qualname__})'

    def get_value(self) -> T:
        return self._value

    def set_value(self, value: T) -> None:
        if self.read_only:
            raise PermissionError('cannot modify a read-only property')
        if value is not None and not isinstance(value, self.type):
            raise TypeError(f'value must be of type {self.type.__qualname__}')
        self._value = value


class PropertysetItem:
    def __init__(self, **properties: Property) -> None:
        self._properties: dict[Hashable, Property] = dict(properties)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({", ".join(f"{key!s}={value.get_value()!r}" for key, value in self._properties.items())})'

    def add_item_property(self, property_id: Hashable, item_property: Property) -> None:
        if property_id in self._properties:
            raise ValueError(f'property {property_id!r} already exists')
        self._properties[property_id] = item_property

    def get_item_property(self, property_id: Hashable) -> Property | None:
        return self._properties.get(property_id)

    def item_property_ids(self) -> list[Hashable]:
        return list(self._properties)


class IndexedContainer:
    def __init__(self) -> None:
        self._property_types: dict[Hashable, tuple[type, object]] = {}
        self._items: dict[Hashable, PropertysetItem] = {}
        self._item_ids = count(1)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add_container_property(self, property_id: Hashable, data_type: type, default: object = None) -> None:
        if property_id in self._property_types:
            raise ValueError(f'container property {property_id!r} already exists')
        self._property_types[property_id] = data_type, default
        for item in self._items.values():
            item.add_item_property(property_id, ObjectProperty(default, data_type))

    def container_property_ids(self) -> list[Hashable]:
        return list(self._property_types)

    def add_item(self, item_id: Hashable | None = None) -> Hashable:
        if item_id is None:
            item_id = next(self._item_ids)
        if item_id in self._items:
            raise ValueError(f'item {item_id!r} already exists')
        item = PropertysetItem()
        for property_id, (data_type, default) in self._property_types.items():
            item.add_item_property(property_id, ObjectProperty(default, data_type))
        self._items[item_id] = item
        return item_id

    def get_item(self, item_id: Hashable) -> PropertysetItem | None:
        return self._items.get(item_id)

    def item_ids(self) -> list[Hashable]:
        return list(self._items)
