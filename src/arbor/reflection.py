# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Python has no method overloading, so the equivalent of overloaded setters
# is a functools.singledispatchmethod, where every registered implementation
# is a separate candidate. Writable properties are candidates as well, which
# allows components to expose their state using plain properties.

import inspect
import re
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from functools import partial, singledispatchmethod
from types import FunctionType, NoneType, UnionType
from typing import Any, Union, get_args, get_origin, get_type_hints

__all__ = 'MethodCandidate', 'find_methods', 'select_method', 'property_name', 'write_method_name'


_word_boundary = re.compile(r'(?<=[a-z0-9])(?=[A-Z])')

_positional_kinds = frozenset({inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD})


def property_name(name: str) -> str:
    """Normalize an attribute name to a python identifier ('sizeFull' and 'size-full' become 'size_full')"""
    return _word_boundary.sub('_', name).replace('-', '_').lower()


def write_method_name(name: str) -> str:
    return f'set_{property_name(name)}' if name else ''


def concrete_type(annotation: object) -> type | None:
    """Return the class described by an annotation, ignoring None in optional unions"""
    if isinstance(annotation, type):
        return annotation
    origin = get_origin(annotation)
    if origin is Union or origin is UnionType:
        arguments = [argument for argument in get_args(annotation) if argument is not NoneType]
        return concrete_type(arguments[0]) if len(arguments) == 1 else None
    if isinstance(origin, type):
        return origin
    return None


@dataclass(frozen=True, slots=True)
class MethodCandidate:
    name: str
    function: Callable[..., object]
    parameters: tuple[Any, ...]
    deprecated: bool = False

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}: {self.qualname}({", ".join(getattr(p, "__qualname__", repr(p)) for p in self.parameters)}){" deprecated" if self.deprecated else ""}>'

    @property
    def qualname(self) -> str:
        return getattr(self.function, '__qualname__', self.name)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def property_type(self) -> type | None:
        """The type of the value parameter (the last one)"""
        return concrete_type(self.parameters[-1]) if self.parameters else None

    def bind(self, target: object) -> Callable[..., object]:
        return partial(self.function, target)


def _make_candidate(name: str, function: Callable[..., object], dispatch_type: type | None = None) -> MethodCandidate | None:
    try:
        signature = inspect.signature(function)
        hints = get_type_hints(function)
    except (TypeError, ValueError, NameError):
        return None
    parameters = list(signature.parameters.values())[1:]  # skip self
    for parameter in parameters:
        match parameter.kind:
            case inspect.Parameter.VAR_POSITIONAL:
                return None
            case inspect.Parameter.KEYWORD_ONLY if parameter.default is parameter.empty:
                return None
    positional = [parameter for parameter in parameters if parameter.kind in _positional_kinds]
    annotations = [hints.get(parameter.name, Any) for parameter in positional]
    # implementations registered with register(type) dispatch on their first argument, which may be unannotated
    if dispatch_type is not None and positional and positional[0].name not in hints:
        annotations[0] = dispatch_type
    return MethodCandidate(name, function, tuple(annotations), deprecated=getattr(function, '__deprecated__', None) is not None)


def _member_candidates(cls: type, name: str) -> Iterator[MethodCandidate]:
    member = inspect.getattr_static(cls, name, None)
    functions: list[tuple[Callable[..., object], type | None]]
    match member:
        case singledispatchmethod():
            functions = []
            for data_type, function in member.dispatcher.registry.items():
                if data_type is not object and all(function is not known for known, _ in functions):
                    functions.append((function, data_type))
        case property(fset=setter) if setter is not None:
            functions = [(setter, None)]
        case FunctionType():
            functions = [(member, None)]
        case _:
            functions = []
    for function, dispatch_type in functions:
        candidate = _make_candidate(name, function, dispatch_type)
        if candidate is not None:
            yield candidate


def _accepts(annotation: object, data_type: type) -> bool:
    if annotation is Any:
        return True
    parameter_type = concrete_type(annotation)
    return parameter_type is not None and issubclass(data_type, parameter_type)


def find_methods(cls: type, name: str, *, arity: int | range, leading: Sequence[type] = ()) -> list[MethodCandidate]:
    """
    Find the setters for the given attribute name on a class.

    The candidates are the set_<name> method (all its implementations if it
    is a singledispatchmethod) followed by the <name> property if writable.
    Only candidates whose number of value parameters is within arity and
    whose first parameters accept the types in leading are returned, in the
    order they were declared.
    """
    allowed = range(arity, arity + 1) if isinstance(arity, int) else arity
    candidates = [*_member_candidates(cls, write_method_name(name)), *_member_candidates(cls, property_name(name))]
    return [
        candidate for candidate in candidates
        if candidate.arity in allowed and len(leading) <= candidate.arity and all(_accepts(annotation, data_type) for annotation, data_type in zip(candidate.parameters, leading, strict=False))
    ]


def select_method(candidates: Sequence[MethodCandidate], *, specialized: Callable[[type | None], bool]) -> MethodCandidate | None:
    """
    Return the preferred candidate.

    Non-deprecated candidates come before deprecated ones, then candidates
    whose value type is handled by a specialized parser come before the ones
    that are only handled by the generic parser. Otherwise the declaration
    order is kept.
    """
    if not candidates:
        return None
    return sorted(candidates, key=lambda candidate: (candidate.deprecated, not (candidate.arity and specialized(candidate.property_type))))[0]
