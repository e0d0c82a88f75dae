"""
Type nodes of the parsed program and the type-printer extension point.

Backends render types through the delegate passed in their
``GenerationContext``. ``str(type)`` goes through ``TYPE_PRINTERS``, the
process-wide registry where the most recently subscribed delegate wins and
the C spelling is used when no delegate is subscribed.
"""

import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class PrimitiveType(Enum):
    """Builtin C/C++ types."""

    VOID = "void"
    BOOL = "bool"
    CHAR = "char"
    SCHAR = "signed char"
    UCHAR = "unsigned char"
    SHORT = "short"
    USHORT = "unsigned short"
    INT = "int"
    UINT = "unsigned int"
    LONG = "long"
    ULONG = "unsigned long"
    LONGLONG = "long long"
    ULONGLONG = "unsigned long long"
    FLOAT = "float"
    DOUBLE = "double"
    WCHAR = "wchar_t"


class Type:
    """Base class for type nodes."""

    def spelling(self) -> str:
        """Language-neutral C spelling of the type."""
        raise NotImplementedError

    def __str__(self) -> str:
        return TYPE_PRINTERS.print_type(self)


@dataclass(frozen=True)
class BuiltinType(Type):
    primitive: PrimitiveType

    def spelling(self) -> str:
        return self.primitive.value


@dataclass(frozen=True)
class TagType(Type):
    """A reference to a named class or enum declaration."""

    name: str

    def spelling(self) -> str:
        return self.name


@dataclass(frozen=True)
class PointerType(Type):
    pointee: Type
    is_reference: bool = False
    is_const: bool = False

    def spelling(self) -> str:
        prefix = "const " if self.is_const else ""
        return f"{prefix}{self.pointee.spelling()}{'&' if self.is_reference else '*'}"


@dataclass(frozen=True)
class ArrayType(Type):
    element: Type
    size: Optional[int] = None

    def spelling(self) -> str:
        size = "" if self.size is None else str(self.size)
        return f"{self.element.spelling()}[{size}]"


TypePrinter = Callable[[Type], str]


class TypePrinterRegistry:
    """
    Ordered subscriptions of type-printer delegates.

    The most recent subscription is used by ``print_type``. Unsubscribing a
    delegate that is not subscribed is a no-op, so release paths can run
    unconditionally.
    """

    def __init__(self) -> None:
        self._delegates: List[TypePrinter] = []

    @property
    def delegates(self) -> Tuple[TypePrinter, ...]:
        return tuple(self._delegates)

    @property
    def current(self) -> Optional[TypePrinter]:
        return self._delegates[-1] if self._delegates else None

    def subscribe(self, delegate: TypePrinter) -> None:
        self._delegates.append(delegate)
        logger.debug(f"Subscribed type printer {delegate!r} ({len(self._delegates)} active)")

    def unsubscribe(self, delegate: TypePrinter) -> bool:
        """Remove the most recent subscription of ``delegate``; return whether one was removed."""
        for index in range(len(self._delegates) - 1, -1, -1):
            if self._delegates[index] == delegate:
                del self._delegates[index]
                logger.debug(f"Unsubscribed type printer {delegate!r} ({len(self._delegates)} active)")
                return True
        return False

    @contextmanager
    def installed(self, delegate: TypePrinter) -> Iterator[TypePrinter]:
        """Subscribe ``delegate`` for the duration of the block, releasing it on every exit path."""
        self.subscribe(delegate)
        try:
            yield delegate
        finally:
            self.unsubscribe(delegate)

    def print_type(self, type_: Type) -> str:
        delegate = self.current
        if delegate is None:
            return type_.spelling()
        return delegate(type_)


TYPE_PRINTERS = TypePrinterRegistry()


# --- Parsing of textual type spellings ---

_PRIMITIVES_BY_SPELLING = {primitive.value: primitive for primitive in PrimitiveType}
_ARRAY_RE = re.compile(r"^(?P<element>.+?)\s*\[\s*(?P<size>\d*)\s*\]$")


def parse_type(text: str) -> Type:
    """
    Parse a C-style spelling such as ``const char*``, ``Foo&`` or ``float[4]``.

    Unknown names become ``TagType`` references.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError(f"Type spelling must be a non-empty string, got {text!r}")

    spelling = " ".join(text.split())

    array_match = _ARRAY_RE.match(spelling)
    if array_match:
        size = array_match.group("size")
        return ArrayType(parse_type(array_match.group("element")), int(size) if size else None)

    if spelling.endswith(("*", "&")):
        inner = spelling[:-1].rstrip()
        is_const = inner.startswith("const ")
        if is_const:
            inner = inner[len("const "):]
        return PointerType(parse_type(inner), is_reference=spelling.endswith("&"), is_const=is_const)

    if spelling.startswith("const "):
        spelling = spelling[len("const "):]

    primitive = _PRIMITIVES_BY_SPELLING.get(spelling)
    if primitive is not None:
        return BuiltinType(primitive)
    return TagType(spelling)
