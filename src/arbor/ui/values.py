# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from abc import ABC
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import ClassVar

__all__ = (  # noqa: RUF022
    'StringEnum',
    'Unit',
    'ContentMode',
    'Resolution',
    'Orientation',
    'VerticalAlignment',
    'HorizontalAlignment',
    'Alignment',
    'Measure',
    'ComponentPosition',
    'Resource',
    'ThemeResource',
    'ExternalResource',
    'FileResource',
)


class StringEnum(StrEnum):
    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}.{self.name}'


class Unit(StringEnum):
    PIXELS = 'px'
    POINTS = 'pt'
    PICAS = 'pc'
    EM = 'em'
    EX = 'ex'
    MM = 'mm'
    CM = 'cm'
    INCH = 'in'
    PERCENTAGE = '%'


class ContentMode(StringEnum):
    TEXT = 'text'
    PREFORMATTED = 'preformatted'
    HTML = 'html'


class Resolution(StringEnum):
    YEAR = 'year'
    MONTH = 'month'
    DAY = 'day'
    HOUR = 'hour'
    MINUTE = 'minute'
    SECOND = 'second'


class Orientation(StringEnum):
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'


class VerticalAlignment(StringEnum):
    TOP = 'top'
    MIDDLE = 'middle'
    BOTTOM = 'bottom'


class HorizontalAlignment(StringEnum):
    LEFT = 'left'
    CENTER = 'center'
    RIGHT = 'right'


@dataclass(frozen=True, slots=True)
class Alignment:
    vertical: VerticalAlignment = VerticalAlignment.TOP
    horizontal: HorizontalAlignment = HorizontalAlignment.LEFT

    TOP_LEFT: ClassVar['Alignment']
    TOP_CENTER: ClassVar['Alignment']
    TOP_RIGHT: ClassVar['Alignment']
    MIDDLE_LEFT: ClassVar['Alignment']
    MIDDLE_CENTER: ClassVar['Alignment']
    MIDDLE_RIGHT: ClassVar['Alignment']
    BOTTOM_LEFT: ClassVar['Alignment']
    BOTTOM_CENTER: ClassVar['Alignment']
    BOTTOM_RIGHT: ClassVar['Alignment']

    def __str__(self) -> str:
        return f'{self.vertical.name}_{self.horizontal.name}'


for _vertical in VerticalAlignment:
    for _horizontal in HorizontalAlignment:
        setattr(Alignment, f'{_vertical.name}_{_horizontal.name}', Alignment(_vertical, _horizontal))

del _vertical, _horizontal


@dataclass(frozen=True, slots=True)
class Measure:
    value: float
    unit: Unit = Unit.PIXELS

    def __str__(self) -> str:
        return f'{self.value:g}{self.unit}'


@dataclass(frozen=True, slots=True, kw_only=True)
class ComponentPosition:
    """The placement of a component inside an absolute layout"""

    top: Measure | None = None
    right: Measure | None = None
    bottom: Measure | None = None
    left: Measure | None = None
    z_index: int = -1

    def __str__(self) -> str:
        entries = [f'{name}: {measure}' for name in ('top', 'right', 'bottom', 'left') if (measure := getattr(self, name)) is not None]
        if self.z_index >= 0:
            entries.append(f'z-index: {self.z_index}')
        return '; '.join(entries)


class Resource(ABC):  # noqa: B024
    """Base class for the resources that can be used as icons or images"""


@dataclass(frozen=True, slots=True)
class ThemeResource(Resource):
    path: str


@dataclass(frozen=True, slots=True)
class ExternalResource(Resource):
    url: str


@dataclass(frozen=True, slots=True)
class FileResource(Resource):
    path: Path
