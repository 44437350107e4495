# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later


__all__ = 'ArborError', 'LayoutInflaterError', 'AttributeHandlerError', 'InvalidParentError', 'BinderError'


class ArborError(Exception):
    """Base class for the errors raised while creating a component tree."""


class LayoutInflaterError(ArborError):
    """
    Raised when the component tree cannot be constructed.

    This covers unknown or non-component element types, components that
    cannot be instantiated and malformed descriptions, as well as the
    attribute handling failures below.

    """


class AttributeHandlerError(LayoutInflaterError):
    """
    Raised when applying an attribute to a component fails.

    The original error (a conversion failure, an error raised by a filter
    or by the setter itself) is available as ``__cause__``.

    """

    def __init__(self, message: str, *, component: object = None, attribute: str | None = None) -> None:
        super().__init__(message)
        self.component = component
        self.attribute = attribute


class InvalidParentError(LayoutInflaterError):
    """Raised when parent attributes are applied to a component that is not inside a container."""


class BinderError(ArborError):
    """
    Raised when binding a component tree to its controller fails.

    For example when a marker references a component id that is not present
    in the tree, or a data source method returns something that cannot be
    used as a data source.

    """
