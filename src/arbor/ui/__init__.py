# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from .components import AbstractField, Button, CheckBox, Component, ComponentContainer, DateField, Form, Label, Slider, Table, TextField
from .data import Container, ContainerViewer, IndexedContainer, Item, ItemViewer, ObjectProperty, Property, PropertysetItem, PropertyViewer
from .events import ClickEvent, Event, Listener, ValueChangeEvent
from .layouts import AbsoluteLayout, AbstractOrderedLayout, HorizontalLayout, Panel, VerticalLayout
from .values import (
    Alignment,
    ComponentPosition,
    ContentMode,
    ExternalResource,
    FileResource,
    HorizontalAlignment,
    Measure,
    Orientation,
    Resolution,
    Resource,
    ThemeResource,
    Unit,
    VerticalAlignment,
)

__all__ = (  # noqa: RUF022
    # components
    'Component',
    'ComponentContainer',
    'AbstractField',
    'Button',
    'CheckBox',
    'DateField',
    'Form',
    'Label',
    'Slider',
    'Table',
    'TextField',

    # layouts
    'AbstractOrderedLayout',
    'AbsoluteLayout',
    'HorizontalLayout',
    'Panel',
    'VerticalLayout',

    # events
    'Event',
    'ClickEvent',
    'ValueChangeEvent',
    'Listener',

    # data model
    'Property',
    'Item',
    'Container',
    'PropertyViewer',
    'ItemViewer',
    'ContainerViewer',
    'ObjectProperty',
    'PropertysetItem',
    'IndexedContainer',

    # values
    'Alignment',
    'ComponentPosition',
    'ContentMode',
    'ExternalResource',
    'FileResource',
    'HorizontalAlignment',
    'Measure',
    'Orientation',
    'Resolution',
    'Resource',
    'ThemeResource',
    'Unit',
    'VerticalAlignment',
)
