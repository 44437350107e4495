# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .components import Component

__all__ = 'Event', 'ClickEvent', 'ValueChangeEvent', 'Listener'


@dataclass(frozen=True, slots=True)
class Event:
    source: 'Component'


@dataclass(frozen=True, slots=True)
class ClickEvent(Event):
    pass


@dataclass(frozen=True, slots=True)
class ValueChangeEvent[T](Event):
    value: T


type Listener[E: Event] = Callable[[E], object]
