# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from collections.abc import Callable, Iterable, Iterator
from functools import partial

__all__ = 'AttributeContext', 'AttributeFilter', 'FilterChain'


class AttributeContext:
    """
    The context passed to attribute filters.

    A filter can inspect the setter that is about to be invoked and the
    object it is invoked on, replace the value, and call proceed() to pass
    the value further down the chain. Not calling proceed() vetoes the
    assignment.
    """

    __slots__ = '_proceed', 'method', 'target', 'value'

    def __init__(self, method: Callable[..., object], target: object, value: object, proceed: Callable[['AttributeContext'], None]) -> None:
        self.method = method
        self.target = target
        self.value = value
        self._proceed = proceed

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(method={getattr(self.method, "__qualname__", self.method)!s}, target={self.target!r}, value={self.value!r})'

    def proceed(self) -> None:
        self._proceed(self)


type AttributeFilter = Callable[[AttributeContext], object]


def _filter_step(attribute_filter: AttributeFilter, proceed: Callable[[AttributeContext], None], context: AttributeContext) -> None:
    attribute_filter(AttributeContext(context.method, context.target, context.value, proceed))


class FilterChain:
    """An immutable, ordered sequence of attribute filters"""

    __slots__ = ('_filters',)

    def __init__(self, filters: Iterable[AttributeFilter] = ()) -> None:
        self._filters: tuple[AttributeFilter, ...] = tuple(filters)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({list(self._filters)!r})'

    def __iter__(self) -> Iterator[AttributeFilter]:
        return iter(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    def __add__(self, other: Iterable[AttributeFilter]) -> 'FilterChain':
        return FilterChain((*self._filters, *other))

    def invoke(self, method: Callable[..., object], target: object, value: object, *leading: object) -> None:
        """
        Run the value through the filters and call method(target, *leading, value).

        The filters are called in order, each one continuing to the next when
        it calls proceed() on its context, with the last one continuing to the
        actual method call using the value from its context.
        """

        def apply(context: AttributeContext) -> None:
            method(target, *leading, context.value)

        chain: Callable[[AttributeContext], None] = apply
        for attribute_filter in reversed(self._filters):
            chain = partial(_filter_step, attribute_filter, chain)
        chain(AttributeContext(method, target, value, apply))
