# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from datetime import datetime

import pytest

from arbor import BinderError, Builder, ElementDescription, UiField, create, element, find_component_by_id, ui_data_source, ui_handler
from arbor.binder import Binder, Binding, MarkerKind
from arbor.binder.markers import markers
from arbor.ui import (
    Button,
    ClickEvent,
    DateField,
    Form,
    IndexedContainer,
    Label,
    ObjectProperty,
    PropertysetItem,
    Table,
    TextField,
    ValueChangeEvent,
    VerticalLayout,
)

APPOINTMENT = datetime(2020, 2, 29, 10, 30)


def appointment_layout() -> ElementDescription:
    return element(VerticalLayout, element(DateField, id='date', resolution='minute'), element(Button, id='button', caption='Save'))


class AppointmentController:
    def __init__(self) -> None:
        self.appointment = ObjectProperty(APPOINTMENT)
        self.data_source_calls = 0
        self.clicks: list[ClickEvent] = []

    @ui_data_source('date')
    def appointment_date(self) -> ObjectProperty[datetime]:
        self.data_source_calls += 1
        return self.appointment

    @ui_handler('button')
    def save_clicked(self, event: ClickEvent) -> None:
        self.clicks.append(event)


class TestMarkers:

    def test_decorators(self) -> None:
        assert [(marker.kind, marker.component_id) for marker in markers(AppointmentController.appointment_date)] == [(MarkerKind.DATA_SOURCE, 'date')]
        assert [(marker.kind, marker.component_id) for marker in markers(AppointmentController.save_clicked)] == [(MarkerKind.HANDLER, 'button')]
        assert markers(AppointmentController.__init__) == ()

    def test_empty_id(self) -> None:
        with pytest.raises(ValueError, match=r'the component id must not be empty'):
            ui_handler('')
        with pytest.raises(ValueError, match=r'the component id must not be empty'):
            ui_data_source('')

    def test_ui_field(self) -> None:
        class Controller:
            title = UiField(Label)
            save_button = UiField(Button, id='save')

        assert Controller.title.component_id == 'title'
        assert Controller.save_button.component_id == 'save'

        controller = Controller()
        assert controller.title is None
        label = Label()
        controller.title = label
        assert controller.title is label
        with pytest.raises(TypeError, match=r"the 'title' field must be of type Label"):
            controller.title = Button()  # type: ignore[assignment]
        del controller.title
        assert controller.title is None

    def test_bindings(self) -> None:
        class Controller(AppointmentController):
            title = UiField(Label)

            @ui_handler('date')
            def date_changed(self, event: ValueChangeEvent[datetime]) -> None:
                pass

        bindings = Binder().bindings(Controller())
        assert [(binding.kind, binding.component_id, binding.member) for binding in bindings] == [
            (MarkerKind.FIELD, 'title', 'title'),
            (MarkerKind.DATA_SOURCE, 'date', 'appointment_date'),
            (MarkerKind.HANDLER, 'date', 'date_changed'),
            (MarkerKind.HANDLER, 'button', 'save_clicked'),
        ]
        assert bindings[2].event_type is ValueChangeEvent
        assert bindings[3].event_type is ClickEvent
        assert bindings[1].return_type is ObjectProperty
        assert bindings[1].event_type is None
        assert bindings[0].return_type is None


class TestBinder:

    def test_end_to_end(self) -> None:
        controller = AppointmentController()
        root = create(appointment_layout(), controller)

        date_field = find_component_by_id(root, 'date')
        assert isinstance(date_field, DateField)
        assert date_field.data_source is controller.appointment
        assert date_field.value == APPOINTMENT
        assert controller.data_source_calls == 1

        button = find_component_by_id(root, 'button')
        assert isinstance(button, Button)
        button.click()
        assert len(controller.clicks) == 1
        assert controller.clicks[0].source is button

    def test_without_controller(self) -> None:
        root = create(appointment_layout())
        button = find_component_by_id(root, 'button')
        assert isinstance(button, Button)
        button.click()

        Binder().bind(root, None)
        assert Binder().assigned_components(None) == {}

    def test_private_members(self) -> None:
        class Controller:
            def __init__(self) -> None:
                self.changes: list[object] = []

            @ui_handler('name')
            def __name_changed(self, event: ValueChangeEvent[str]) -> None:
                self.changes.append(event.value)

        controller = Controller()
        root = create(element(VerticalLayout, element(TextField, id='name')), controller)
        field = find_component_by_id(root, 'name')
        assert isinstance(field, TextField)
        field.value = 'John'
        field.value = 'John'
        assert controller.changes == ['John']

    def test_fields(self) -> None:
        class Controller:
            title = UiField(Label)
            save_button = UiField(Button, id='button')

        controller = Controller()
        root = create(element(VerticalLayout, element(Label, id='title'), element(Button, id='button')), controller)
        assert controller.title is find_component_by_id(root, 'title')
        assert controller.save_button is find_component_by_id(root, 'button')

    def test_preassigned_fields(self) -> None:
        class Controller:
            title = UiField(Label)

        controller = Controller()
        title = Label('preset')
        controller.title = title
        root = create(element(VerticalLayout, element(Label, id='title', caption='Title')), controller)
        assert find_component_by_id(root, 'title') is title
        assert controller.title is title
        assert title.caption == 'Title'
        assert title.value == 'preset'

    def test_field_type_mismatch(self) -> None:
        class Controller:
            title = UiField(Button)

        with pytest.raises(BinderError, match=r'Cannot assign'):
            create(element(VerticalLayout, element(Label, id='title')), Controller())

    def test_missing_component(self) -> None:
        class Controller:
            @ui_handler('missing')
            def clicked(self, event: ClickEvent) -> None:
                pass

        with pytest.raises(BinderError, match=r"No component with id 'missing' was found for .*Controller.clicked"):
            create(appointment_layout(), Controller())

    def test_data_source_kinds(self) -> None:
        class Controller:
            @ui_data_source('people')
            def people(self) -> IndexedContainer:
                container = IndexedContainer()
                container.add_container_property('name', str, '')
                container.add_item()
                return container

            @ui_data_source('person')
            def person(self) -> PropertysetItem:
                return PropertysetItem(name=ObjectProperty('John'))

            @ui_data_source('title')
            def title(self) -> ObjectProperty[str]:
                return ObjectProperty('Contacts')

        root = create(element(VerticalLayout, element(Label, id='title'), element(Table, id='people'), element(Form, id='person')), Controller())
        title = find_component_by_id(root, 'title')
        table = find_component_by_id(root, 'people')
        form = find_component_by_id(root, 'person')
        assert isinstance(title, Label)
        assert isinstance(table, Table)
        assert isinstance(form, Form)
        assert title.value == 'Contacts'
        assert table.data_source is not None
        assert table.data_source.item_ids() == [1]
        assert form.data_source is not None
        assert form.data_source.item_property_ids() == ['name']

    def test_invalid_data_sources(self) -> None:
        class DeclaredController:
            @ui_data_source('date')
            def date(self) -> int:
                return 42

        class ReturnedController:
            @ui_data_source('date')
            def date(self):  # noqa: ANN202
                return 'not a data source'

        class MismatchedController:
            @ui_data_source('button')
            def caption(self) -> ObjectProperty[str]:
                return ObjectProperty('Save')

        class FailingController:
            @ui_data_source('date')
            def date(self) -> ObjectProperty[datetime]:
                raise RuntimeError('no date')

        with pytest.raises(BinderError, match=r'must return a Property, an Item or a Container, not int'):
            create(appointment_layout(), DeclaredController())
        with pytest.raises(BinderError, match=r"must return a Property, an Item or a Container, not 'not a data source'"):
            create(appointment_layout(), ReturnedController())
        with pytest.raises(BinderError, match=r'cannot use the ObjectProperty'):
            create(appointment_layout(), MismatchedController())
        with pytest.raises(BinderError, match=r'failed: no date') as exc_info:
            create(appointment_layout(), FailingController())
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_invalid_handlers(self) -> None:
        class UnannotatedController:
            @ui_handler('button')
            def clicked(self, event) -> None:  # noqa: ANN001
                pass

        class ArgumentsController:
            @ui_handler('button')
            def clicked(self, event: ClickEvent, extra: int) -> None:
                pass

        class UnsupportedEventController:
            @ui_handler('date')
            def clicked(self, event: ClickEvent) -> None:
                pass

        with pytest.raises(BinderError, match=r'must be annotated with an Event type'):
            create(appointment_layout(), UnannotatedController())
        with pytest.raises(BinderError, match=r'must take exactly one event argument'):
            create(appointment_layout(), ArgumentsController())
        with pytest.raises(BinderError, match=r'DateField does not fire ClickEvent events'):
            create(appointment_layout(), UnsupportedEventController())

    def test_bindings_are_derived_once(self) -> None:
        class CountingBinder(Binder):
            calls = 0

            def bindings(self, controller: object) -> list[Binding]:
                self.calls += 1
                return super().bindings(controller)

        class Controller(AppointmentController):
            title = UiField(Label)

        controller = Controller()
        builder = Builder().read_from_description(element(VerticalLayout, element(Label, id='title'), *appointment_layout().children)).bind_to_controller(controller)
        builder.binder = binder = CountingBinder()
        builder.build()
        assert binder.calls == 1
        assert controller.title is not None
        assert controller.data_source_calls == 1
