# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import inspect
import logging
from pathlib import Path
from typing import BinaryIO, Self

from .__info__ import __version__
from .binder import Binder, UiField, ui_data_source, ui_handler
from .exceptions import ArborError, AttributeHandlerError, BinderError, InvalidParentError, LayoutInflaterError
from .inflater import (
    PARENT_NAMESPACE,
    AttributeContext,
    AttributeFilter,
    AttributeHandler,
    AttributeParser,
    DefaultAttributeHandler,
    ElementDescription,
    FilterChain,
    InflaterSettings,
    LayoutAttributeHandler,
    LayoutInflater,
    ParserRegistry,
    element,
    find_component_by_id,
    parse_description,
    read_description,
)
from .ui.components import Component

__all__ = (  # noqa: RUF022
    '__version__',

    'Builder',
    'create',
    'create_from_file',
    'find_component_by_id',

    'UiField',
    'ui_data_source',
    'ui_handler',

    'AttributeContext',
    'AttributeFilter',
    'AttributeHandler',
    'AttributeParser',
    'ElementDescription',
    'PARENT_NAMESPACE',
    'element',

    'ArborError',
    'AttributeHandlerError',
    'BinderError',
    'InvalidParentError',
    'LayoutInflaterError',
)


log = logging.getLogger(__name__)


type Source = str | bytes | BinaryIO | ElementDescription


class Builder:
    """
    Creates a component tree and binds it to a controller.

    builder = Builder().read_from_file('main.xml').bind_to_controller(controller)
    builder.add_attribute_filter(translate)
    root = builder.build()

    A relative file name is resolved against the directory of the module
    that defines the controller's class, or against the current directory
    if there is no controller.
    """

    def __init__(self) -> None:
        self._description: ElementDescription | None = None
        self._stream: BinaryIO | None = None
        self._file_name: str | Path | None = None
        self._controller: object = None
        self._filters: list[AttributeFilter] = []
        self._handlers: list[AttributeHandler] = []
        self.parsers = ParserRegistry()
        self.binder = Binder()

    def read_from_file(self, file_name: str | Path) -> Self:
        self._reset_source()
        self._file_name = file_name
        return self

    def read_from_stream(self, stream: BinaryIO) -> Self:
        self._reset_source()
        self._stream = stream
        return self

    def read_from_string(self, markup: str | bytes) -> Self:
        self._reset_source()
        self._description = parse_description(markup)
        return self

    def read_from_description(self, description: ElementDescription) -> Self:
        self._reset_source()
        self._description = description
        return self

    def bind_to_controller(self, controller: object) -> Self:
        self._controller = controller
        return self

    def add_attribute_filter(self, *attribute_filters: AttributeFilter) -> Self:
        self._filters.extend(attribute_filters)
        return self

    def add_attribute_handler(self, *attribute_handlers: AttributeHandler) -> Self:
        self._handlers.extend(attribute_handlers)
        return self

    def add_attribute_parser(self, parser: AttributeParser, *, first: bool = False) -> Self:
        self.parsers.register(parser, first=first)
        return self

    def build(self) -> Component:
        """
        Build the component tree and bind it to the controller.

        Raises LayoutInflaterError if the tree cannot be built and BinderError
        if it cannot be bound to the controller.
        """
        description = self._load_description()
        settings = InflaterSettings(
            parsers=self.parsers.copy(),
            filters=FilterChain(self._filters),
            handlers=(DefaultAttributeHandler(), LayoutAttributeHandler(), *self._handlers),
        )
        bindings = self.binder.bindings(self._controller) if self._controller is not None else []
        inflater = LayoutInflater(settings)
        root = inflater.inflate(description, self.binder.assigned_components(self._controller, bindings))
        self.binder.bind(root, self._controller, bindings)
        return root

    def _reset_source(self) -> None:
        self._description = self._stream = self._file_name = None

    def _load_description(self) -> ElementDescription:
        if self._description is not None:
            return self._description
        if self._stream is not None:
            return read_description(self._stream)
        if self._file_name is not None:
            return read_description(self._resolve_file(self._file_name))
        raise LayoutInflaterError('No layout description was provided')

    def _resolve_file(self, file_name: str | Path) -> Path:
        path = Path(file_name)
        if path.is_absolute() or self._controller is None:
            return path
        try:
            module_file = inspect.getfile(type(self._controller))
        except TypeError:
            return path
        resolved = Path(module_file).parent / path
        log.debug('Resolved layout file %s to %s', file_name, resolved)
        return resolved


def _source_builder(source: Source) -> Builder:
    builder = Builder()
    match source:
        case ElementDescription():
            return builder.read_from_description(source)
        case str() | bytes():
            return builder.read_from_string(source)
        case _:
            return builder.read_from_stream(source)


def create(source: Source, controller: object = None, *attribute_filters: AttributeFilter) -> Component:
    """
    Create a component tree from an XML document or an element description.

    If a controller is given, the tree is bound to it. The optional attribute
    filters can modify or veto attribute values before they are applied, for
    example to translate captions.
    """
    return _source_builder(source).bind_to_controller(controller).add_attribute_filter(*attribute_filters).build()


def create_from_file(file_name: str | Path, controller: object = None, *attribute_filters: AttributeFilter) -> Component:
    """Create a component tree from an XML file, resolved relative to the controller's module"""
    return Builder().read_from_file(file_name).bind_to_controller(controller).add_attribute_filter(*attribute_filters).build()
