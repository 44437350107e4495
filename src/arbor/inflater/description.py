# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# The XML format maps elements to component classes using the namespace of
# the element, which has the form urn:import:<module>, while the element name
# is the class name. Elements without a namespace are looked up in arbor.ui.
#
# <VerticalLayout xmlns="urn:import:arbor.ui" xmlns:p="urn:arbor:parent" spacing="true">
#     <Label id="title" value="Hello"/>
#     <Button id="button" caption="Click me" p:component-alignment="middle center"/>
# </VerticalLayout>

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from os import PathLike, fspath
from typing import BinaryIO, Final

from lxml import etree

from arbor.exceptions import LayoutInflaterError
from arbor.ui.components import Component

from .handler import DEFAULT_NAMESPACE, PARENT_NAMESPACE

__all__ = 'ElementDescription', 'AttributeEntry', 'TypeToken', 'element', 'parse_description', 'read_description', 'IMPORT_NAMESPACE_PREFIX'  # noqa: RUF022


# noinspection PyProtectedMember
type ETreeElement = etree._Element  # noqa: SLF001
type TypeToken = str | type[Component]
type AttributeEntry = tuple[str, str, str]  # (namespace, name, value)


IMPORT_NAMESPACE_PREFIX: Final = 'urn:import:'
DEFAULT_MODULE: Final = 'arbor.ui'


@dataclass(frozen=True, slots=True)
class ElementDescription:
    """
    The description of a component and its children.

    The type is either a component class or the dotted path to one. The
    attributes are (namespace, name, value) entries, where the same name
    can appear multiple times in a namespace, in which case the last value
    is the one that applies.
    """

    type: TypeToken
    attributes: Sequence[AttributeEntry] = ()
    children: Sequence['ElementDescription'] = ()

    @property
    def id(self) -> str | None:
        identifiers = [value for namespace, name, value in self.attributes if namespace == DEFAULT_NAMESPACE and name == 'id']
        return identifiers[-1] if identifiers else None

    @property
    def type_name(self) -> str:
        return self.type if isinstance(self.type, str) else f'{self.type.__module__}.{self.type.__qualname__}'

    def namespaces(self) -> dict[str, dict[str, str]]:
        """Group the attributes by namespace"""
        grouped: dict[str, dict[str, str]] = {}
        for namespace, name, value in self.attributes:
            grouped.setdefault(namespace, {})[name] = value
        return grouped


def element(component_type: TypeToken, /, *children: ElementDescription, parent: Mapping[str, str] | None = None, **attributes: str) -> ElementDescription:
    """
    Create an element description.

    The keyword arguments are the attributes in the default namespace, while
    parent holds the attributes in the parent namespace.

    element(VerticalLayout, element(Button, id='ok', parent={'expand-ratio': '1'}), spacing='true')
    """
    entries = [(DEFAULT_NAMESPACE, name, value) for name, value in attributes.items()]
    entries.extend((PARENT_NAMESPACE, name, value) for name, value in (parent or {}).items())
    return ElementDescription(component_type, entries, children)


def _new_parser() -> etree.XMLParser:
    return etree.XMLParser(remove_comments=True, remove_pis=True, resolve_entities=False, no_network=True)


def _describe(node: ETreeElement) -> ElementDescription:
    qname = etree.QName(node)
    namespace = qname.namespace
    if namespace is None:
        module = DEFAULT_MODULE
    elif namespace.startswith(IMPORT_NAMESPACE_PREFIX) and namespace != IMPORT_NAMESPACE_PREFIX:
        module = namespace.removeprefix(IMPORT_NAMESPACE_PREFIX)
    else:
        raise LayoutInflaterError(f'Unsupported namespace for element {qname.localname!r}: {namespace!r}')
    attributes: list[AttributeEntry] = []
    for key, value in node.attrib.items():
        name = etree.QName(key)
        attributes.append((name.namespace or DEFAULT_NAMESPACE, name.localname, str(value)))
    children = [_describe(child) for child in node if isinstance(child.tag, str)]
    return ElementDescription(f'{module}.{qname.localname}', attributes, children)


def parse_description(markup: str | bytes) -> ElementDescription:
    """Parse an XML document given as a string into an element description"""
    if isinstance(markup, str):
        markup = markup.encode('utf-8')
    try:
        root = etree.fromstring(markup, _new_parser())
    except etree.XMLSyntaxError as exc:
        raise LayoutInflaterError(f'Invalid layout description: {exc!s}') from exc
    return _describe(root)


def read_description(source: str | PathLike[str] | BinaryIO) -> ElementDescription:
    """Read an XML document from a file name or a binary file object into an element description"""
    if isinstance(source, PathLike):
        source = fspath(source)
    try:
        document = etree.parse(source, _new_parser())  # noqa: S320
    except etree.XMLSyntaxError as exc:
        raise LayoutInflaterError(f'Invalid layout description: {exc!s}') from exc
    except OSError as exc:
        raise LayoutInflaterError(f'Cannot read layout description: {exc!s}') from exc
    return _describe(document.getroot())
