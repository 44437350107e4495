# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import re
from collections.abc import Iterable, Iterator
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Protocol, Self, runtime_checkable

from arbor.ui.components import Component
from arbor.ui.values import (
    Alignment,
    ComponentPosition,
    ExternalResource,
    FileResource,
    HorizontalAlignment,
    Measure,
    Resource,
    ThemeResource,
    Unit,
    VerticalAlignment,
)

__all__ = (  # noqa: RUF022
    'AttributeParser',
    'AttributeConverter',
    'ParserRegistry',

    'ConverterParser',
    'EnumParser',
    'AlignmentParser',
    'ResourceParser',
    'PositionParser',
    'DateParser',
    'PrimitiveParser',
)


@runtime_checkable
class AttributeParser(Protocol):
    """A protocol that describes how attribute values are converted to a given type"""

    def supports(self, data_type: type, /) -> bool:
        """Return True if values of the given type can be parsed"""
        ...

    def parse(self, value: str, data_type: type, component: Component, /) -> object:
        """Convert the attribute value to the given type for the given component"""
        ...


@runtime_checkable
class AttributeConverter(Protocol):
    """A protocol for types that know how to create themselves from an attribute value"""

    @classmethod
    def parse_attribute(cls, value: str, /) -> Self:
        ...


class ConverterParser:
    def supports(self, data_type: type) -> bool:
        return issubclass(data_type, AttributeConverter)

    def parse(self, value: str, data_type: type[AttributeConverter], component: Component) -> object:  # noqa: ARG002
        return data_type.parse_attribute(value)


class EnumParser:
    def supports(self, data_type: type) -> bool:
        return issubclass(data_type, Enum)

    def parse(self, value: str, data_type: type[Enum], component: Component) -> Enum:  # noqa: ARG002
        members = data_type.__members__
        for name in (value, re.sub(r'[\s-]+', '_', value.strip()).upper()):
            if name in members:
                return members[name]
        try:
            return data_type(value)
        except ValueError:
            raise ValueError(f'{value!r} is not a valid {data_type.__qualname__}') from None


class AlignmentParser:
    def supports(self, data_type: type) -> bool:
        return issubclass(data_type, Alignment)

    def parse(self, value: str, data_type: type[Alignment], component: Component) -> Alignment:  # noqa: ARG002
        vertical: VerticalAlignment | None = None
        horizontal: HorizontalAlignment | None = None
        for token in re.split(r'[\s_|,]+', value.strip().lower()):
            if token in VerticalAlignment and vertical is None:
                vertical = VerticalAlignment(token)
            elif token in HorizontalAlignment and horizontal is None:
                horizontal = HorizontalAlignment(token)
            else:
                raise ValueError(f'invalid alignment: {value!r}')
        return data_type(vertical or VerticalAlignment.TOP, horizontal or HorizontalAlignment.LEFT)


class ResourceParser:
    def supports(self, data_type: type) -> bool:
        return issubclass(data_type, Resource)

    def parse(self, value: str, data_type: type[Resource], component: Component) -> Resource:  # noqa: ARG002
        resource: Resource
        match value.partition('://'):
            case ('theme', '://', path):
                resource = ThemeResource(path)
            case ('http' | 'https', '://', _):
                resource = ExternalResource(value)
            case ('file', '://', path):
                resource = FileResource(Path(path))
            case (path, '', ''):
                resource = ThemeResource(path)
            case (scheme, _, _):
                raise ValueError(f'unsupported resource scheme: {scheme!r}')
        if not isinstance(resource, data_type):
            raise ValueError(f'{value!r} does not describe a {data_type.__qualname__}')
        return resource


class PositionParser:
    """Parse CSS like positions, for example: top: 10px; left: 25%; z-index: 3"""

    measure_re = re.compile(r'^(?P<value>[+-]?\d+(?:\.\d*)?|[+-]?\.\d+)\s*(?P<unit>px|pt|pc|em|ex|mm|cm|in|%)?$')

    def supports(self, data_type: type) -> bool:
        return issubclass(data_type, ComponentPosition)

    def parse(self, value: str, data_type: type[ComponentPosition], component: Component) -> ComponentPosition:  # noqa: ARG002
        settings: dict[str, Measure | int] = {}
        for declaration in filter(None, (item.strip() for item in value.split(';'))):
            name, separator, setting = (part.strip() for part in declaration.partition(':'))
            if not separator or not setting:
                raise ValueError(f'invalid position declaration: {declaration!r}')
            match name.lower():
                case 'top' | 'right' | 'bottom' | 'left' as side:
                    settings[side] = self.parse_measure(setting)
                case 'z-index':
                    settings['z_index'] = int(setting)
                case _:
                    raise ValueError(f'unknown position property: {name!r}')
        return data_type(**settings)  # type: ignore[arg-type]

    @classmethod
    def parse_measure(cls, value: str) -> Measure:
        result = cls.measure_re.match(value.strip().lower())
        if result is None:
            raise ValueError(f'invalid measure: {value!r}')
        return Measure(float(result['value']), Unit(result['unit'] or 'px'))


class DateParser:
    def supports(self, data_type: type) -> bool:
        return issubclass(data_type, date)

    def parse(self, value: str, data_type: type[date], component: Component) -> date:  # noqa: ARG002
        return data_type.fromisoformat(value.strip())


class PrimitiveParser:
    """The generic parser for strings, numbers and booleans"""

    types = frozenset({str, int, float, bool, Decimal})

    def supports(self, data_type: type) -> bool:
        return data_type in self.types

    def parse(self, value: str, data_type: type, component: Component) -> object:  # noqa: ARG002
        if data_type is str:
            return value
        if data_type is bool:
            match value.strip().lower():
                case 'true' | '1':
                    return True
                case 'false' | '0':
                    return False
                case _:
                    raise ValueError(f'Invalid boolean value: {value!r}')
        if data_type is Decimal:
            try:
                return Decimal(value.strip())
            except InvalidOperation:
                raise ValueError(f'Invalid decimal value: {value!r}') from None
        return data_type(value.strip())


class ParserRegistry:
    """
    An ordered collection of attribute parsers.

    The parser for a type is the first registered parser that supports it.
    The built-in parsers are registered first, with the generic primitive
    parser last among them. Parsers registered later are only consulted for
    types the built-in parsers do not handle, unless they are registered
    with first=True, which places them ahead of the built-in parsers.

    The registry is not thread-safe and must not be modified while it is
    used to build a component tree.
    """

    def __init__(self, parsers: Iterable[AttributeParser] | None = None) -> None:
        if parsers is None:
            parsers = [ConverterParser(), EnumParser(), AlignmentParser(), ResourceParser(), PositionParser(), DateParser(), PrimitiveParser()]
        self._parsers: list[AttributeParser] = list(parsers)
        self._prepended = 0

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}([{", ".join(parser.__class__.__name__ for parser in self._parsers)}])'

    def __iter__(self) -> Iterator[AttributeParser]:
        return iter(self._parsers)

    def __len__(self) -> int:
        return len(self._parsers)

    def copy(self) -> Self:
        instance = self.__class__(self._parsers)
        instance._prepended = self._prepended
        return instance

    def register(self, parser: AttributeParser, *, first: bool = False) -> None:
        if not isinstance(parser, AttributeParser):
            raise TypeError(f'{parser!r} does not implement the AttributeParser protocol')
        if first:
            self._parsers.insert(self._prepended, parser)
            self._prepended += 1
        else:
            self._parsers.append(parser)

    def resolve(self, data_type: type | None) -> AttributeParser | None:
        if data_type is None:
            return None
        return next((parser for parser in self._parsers if parser.supports(data_type)), None)

    def is_specialized(self, data_type: type | None) -> bool:
        """Return True if the type is handled by a parser other than the generic primitive parser"""
        parser = self.resolve(data_type)
        return parser is not None and not isinstance(parser, PrimitiveParser)
