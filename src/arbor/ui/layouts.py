# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from .components import Component, ComponentContainer
from .values import Alignment, ComponentPosition

__all__ = 'AbstractOrderedLayout', 'VerticalLayout', 'HorizontalLayout', 'AbsoluteLayout', 'Panel'


class AbstractOrderedLayout(ComponentContainer):
    def __init__(self, *components: Component) -> None:
        super().__init__()
        self._spacing = False
        self._margin = False
        self._expand_ratios: dict[int, float] = {}
        self._alignments: dict[int, Alignment] = {}
        for component in components:
            self.add_component(component)

    def remove_component(self, component: Component) -> None:
        super().remove_component(component)
        self._expand_ratios.pop(id(component), None)
        self._alignments.pop(id(component), None)

    @property
    def spacing(self) -> bool:
        return self._spacing

    @spacing.setter
    def spacing(self, value: bool) -> None:
        self._spacing = value

    @property
    def margin(self) -> bool:
        return self._margin

    @margin.setter
    def margin(self, value: bool) -> None:
        self._margin = value

    def set_expand_ratio(self, component: Component, ratio: float) -> None:
        if component not in self:
            raise ValueError(f'{component!r} is not in {self!r}')
        if ratio < 0:
            raise ValueError('expand ratio cannot be negative')
        self._expand_ratios[id(component)] = ratio

    def get_expand_ratio(self, component: Component) -> float:
        return self._expand_ratios.get(id(component), 0.0)

    def set_component_alignment(self, component: Component, alignment: Alignment) -> None:
        if component not in self:
            raise ValueError(f'{component!r} is not in {self!r}')
        self._alignments[id(component)] = alignment

    def get_component_alignment(self, component: Component) -> Alignment:
        return self._alignments.get(id(component), Alignment.TOP_LEFT)


class VerticalLayout(AbstractOrderedLayout):
    def __init__(self, *components: Component) -> None:
        super().__init__(*components)
        self._width = '100%'


class HorizontalLayout(AbstractOrderedLayout):
    pass


class AbsoluteLayout(ComponentContainer):
    def __init__(self) -> None:
        super().__init__()
        self._positions: dict[int, ComponentPosition] = {}

    def remove_component(self, component: Component) -> None:
        super().remove_component(component)
        self._positions.pop(id(component), None)

    def set_position(self, component: Component, position: ComponentPosition) -> None:
        if component not in self:
            raise ValueError(f'{component!r} is not in {self!r}')
        self._positions[id(component)] = position

    def get_position(self, component: Component) -> ComponentPosition:
        return self._positions.get(id(component), ComponentPosition())


class Panel(ComponentContainer):
    def __init__(self, caption: str | None = None) -> None:
        super().__init__()
        self._caption = caption
        self._scrollable = False

    @property
    def scrollable(self) -> bool:
        return self._scrollable

    @scrollable.setter
    def scrollable(self, value: bool) -> None:
        self._scrollable = value
