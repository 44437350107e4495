# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import gc

import pytest

from arbor.ui import (
    Alignment,
    Button,
    ClickEvent,
    Component,
    ComponentPosition,
    Event,
    IndexedContainer,
    Label,
    Measure,
    ObjectProperty,
    Panel,
    PropertysetItem,
    Slider,
    Table,
    TextField,
    ThemeResource,
    Unit,
    ValueChangeEvent,
    VerticalAlignment,
    VerticalLayout,
)


class TestComponents:

    def test_events_class_parameter(self) -> None:
        assert Component._events_ == frozenset()
        assert Button._events_ == {ClickEvent}
        assert TextField._events_ == {ValueChangeEvent}

        class ToggleButton(Button, events=[ValueChangeEvent]):
            pass

        assert ToggleButton._events_ == {ClickEvent, ValueChangeEvent}

    def test_listeners(self) -> None:
        button = Button('OK')
        clicks: list[Event] = []
        button.add_listener(ClickEvent, clicks.append)
        button.add_listener(Event, clicks.append)
        button.click()
        assert len(clicks) == 2
        button.remove_listener(Event, clicks.append)
        button.click()
        assert len(clicks) == 3

        button.enabled = False
        button.click()
        assert len(clicks) == 3

        with pytest.raises(TypeError, match=r'Button does not fire ValueChangeEvent events'):
            button.add_listener(ValueChangeEvent, clicks.append)

    def test_icon(self) -> None:
        button = Button()
        button.set_icon(ThemeResource('icons/ok.png'))
        assert button.icon == ThemeResource('icons/ok.png')
        with pytest.deprecated_call():
            button.set_icon('icons/cancel.png')
        assert button.icon == ThemeResource('icons/cancel.png')
        with pytest.raises(TypeError, match=r'unsupported icon type: int'):
            button.set_icon(1)

    def test_size(self) -> None:
        label = Label()
        label.set_size_full()
        assert (label.width, label.height) == ('100%', '100%')
        label.set_size_undefined()
        assert (label.width, label.height) == (None, None)
        assert VerticalLayout().width == '100%'


class TestContainers:

    def test_parent(self) -> None:
        first = VerticalLayout()
        second = Panel()
        label = Label()
        first.add_component(label)
        assert label.parent is first
        assert label in first
        second.add_component(label)
        assert label.parent is second
        assert label not in first
        assert len(first) == 0
        second.remove_component(label)
        assert label.parent is None

        with pytest.raises(ValueError, match=r'is not in'):
            second.remove_component(label)
        with pytest.raises(ValueError, match=r'cannot be added to itself'):
            second.add_component(second)

    def test_parent_is_a_weak_reference(self) -> None:
        layout = VerticalLayout()
        label = Label()
        layout.add_component(label)
        del layout
        gc.collect()
        assert label.parent is None

    def test_layout_settings(self) -> None:
        label = Label()
        layout = VerticalLayout(label)
        assert layout.get_expand_ratio(label) == 0.0
        assert layout.get_component_alignment(label) == Alignment.TOP_LEFT
        layout.set_expand_ratio(label, 1.0)
        layout.set_component_alignment(label, Alignment.MIDDLE_CENTER)
        assert layout.get_component_alignment(label).vertical is VerticalAlignment.MIDDLE
        assert str(layout.get_component_alignment(label)) == 'MIDDLE_CENTER'
        layout.remove_all_components()
        assert layout.get_expand_ratio(label) == 0.0

        with pytest.raises(ValueError, match=r'is not in'):
            layout.set_expand_ratio(label, 1.0)
        layout.add_component(label)
        with pytest.raises(ValueError, match=r'expand ratio cannot be negative'):
            layout.set_expand_ratio(label, -1.0)

    def test_position(self) -> None:
        position = ComponentPosition(top=Measure(5, Unit.EM), z_index=2)
        assert str(position) == 'top: 5em; z-index: 2'
        assert str(ComponentPosition()) == ''


class TestFields:

    def test_value_change_events(self) -> None:
        field = TextField('Name')
        changes: list[ValueChangeEvent[str]] = []
        field.add_listener(ValueChangeEvent, changes.append)
        field.value = 'John'
        field.value = 'John'
        field.value = 'Jane'
        assert [event.value for event in changes] == ['John', 'Jane']
        assert all(event.source is field for event in changes)

    def test_read_only(self) -> None:
        field = TextField()
        field.read_only = True
        with pytest.raises(PermissionError, match=r'is read-only'):
            field.value = 'text'

    def test_data_source(self) -> None:
        data_source = ObjectProperty('initial')
        field = TextField()
        field.set_property_data_source(data_source)
        assert field.value == 'initial'
        field.value = 'changed'
        assert data_source.get_value() == 'changed'

        label = Label()
        label.set_property_data_source(ObjectProperty(42))
        assert label.value == '42'
        with pytest.raises(TypeError, match=r'value must be of type int'):
            label.value = 'text'

    def test_slider_range(self) -> None:
        slider = Slider()
        slider.value = 100.0
        with pytest.raises(ValueError, match=r'outside the \[0.0, 100.0\] range'):
            slider.value = 101.0


class TestDataModel:

    def test_object_property(self) -> None:
        value = ObjectProperty(None, str)
        value.set_value('text')
        assert value.get_value() == 'text'
        constant = ObjectProperty(1, read_only=True)
        with pytest.raises(PermissionError, match=r'read-only'):
            constant.set_value(2)

    def test_item(self) -> None:
        item = PropertysetItem(name=ObjectProperty('John'))
        item.add_item_property('age', ObjectProperty(30))
        assert item.item_property_ids() == ['name', 'age']
        age = item.get_item_property('age')
        assert age is not None
        assert age.get_value() == 30
        assert item.get_item_property('missing') is None
        with pytest.raises(ValueError, match=r'already exists'):
            item.add_item_property('age', ObjectProperty(31))

    def test_container(self) -> None:
        container = IndexedContainer()
        container.add_container_property('name', str, '')
        first = container.add_item()
        second = container.add_item('second')
        container.add_container_property('age', int, 0)
        assert container.item_ids() == [first, 'second']
        assert len(container) == 2
        item = container.get_item(second)
        assert item is not None
        assert item.item_property_ids() == ['name', 'age']
        with pytest.raises(ValueError, match=r'already exists'):
            container.add_item('second')

    def test_table_selection(self) -> None:
        container = IndexedContainer()
        item_id = container.add_item()
        table = Table()
        table.set_container_data_source(container)
        selections: list[ValueChangeEvent[object]] = []
        table.add_listener(ValueChangeEvent, selections.append)
        with pytest.raises(PermissionError, match=r'is not selectable'):
            table.select(item_id)
        table.selectable = True
        table.select(item_id)
        table.select(item_id)
        assert [event.value for event in selections] == [item_id]
        with pytest.raises(KeyError):
            table.select('missing')
