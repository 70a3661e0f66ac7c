"""Value model for jsobjects: the seven JSON variants and their ownership rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Iterable, Iterator, TypeVar, Union

from .errors import OwnershipError


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# ---------------------------------------------------------------------------
# JSType — discriminant tag
# ---------------------------------------------------------------------------

class JSType(Enum):
    INTEGER = auto()
    REAL = auto()
    STRING = auto()
    BOOLEAN = auto()
    NULL = auto()
    ARRAY = auto()
    DICTIONARY = auto()


# ---------------------------------------------------------------------------
# JSObject — abstract node
# ---------------------------------------------------------------------------

class JSObject:
    """Abstract node of a value tree.

    Every node carries a ``tag`` readable without narrowing and belongs to
    at most one container at a time (its ``owner``).
    """

    __slots__ = ("_owner",)

    tag: ClassVar[JSType]

    def type_tag(self) -> JSType:
        return self.tag

    @property
    def owner(self) -> JSContainer | None:
        # Scalars leave the slot unset until their first attach.
        return getattr(self, "_owner", None)

    def traverse(self, path: str) -> JSObject | None:
        from .traversal import traverse
        return traverse(self, path)

    def dumps(self, indent: int = 0) -> str:
        from .dump import dumps
        return dumps(self, indent)

    def __str__(self) -> str:
        return self.dumps()[:-1]


def _set_owner(node: JSObject, owner: JSContainer | None) -> None:
    # Frozen scalars refuse normal attribute assignment.
    object.__setattr__(node, "_owner", owner)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class JSInteger(JSObject):
    value: int

    tag: ClassVar[JSType] = JSType.INTEGER

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"JSInteger needs an int, got {type(self.value).__name__}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise OverflowError(f"integer out of 64-bit range: {self.value}")


@dataclass(frozen=True, slots=True)
class JSReal(JSObject):
    value: float

    tag: ClassVar[JSType] = JSType.REAL

    def __post_init__(self) -> None:
        if isinstance(self.value, bool):
            raise TypeError("JSReal needs a number, got bool")
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True, slots=True)
class JSString(JSObject):
    value: str

    tag: ClassVar[JSType] = JSType.STRING

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"JSString needs a str, got {type(self.value).__name__}")


@dataclass(frozen=True, slots=True)
class JSBoolean(JSObject):
    value: bool

    tag: ClassVar[JSType] = JSType.BOOLEAN

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"JSBoolean needs a bool, got {type(self.value).__name__}")


@dataclass(frozen=True, slots=True)
class JSNull(JSObject):
    """A null node. Instances are distinct nodes but all compare equal."""

    tag: ClassVar[JSType] = JSType.NULL

    @property
    def value(self) -> None:
        return None


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

class JSContainer(JSObject):
    """Shared ownership bookkeeping for JSArray and JSDictionary."""

    __slots__ = ()

    def _adopt(self, node: JSObject) -> None:
        if not isinstance(node, JSObject):
            raise TypeError(f"expected a JSObject, got {type(node).__name__}")
        if node.owner is not None:
            raise OwnershipError(
                f"{type(node).__name__} is already owned by a "
                f"{type(node.owner).__name__}; remove it first"
            )
        # Only a non-empty container (or self) can be one of our ancestors.
        if node is self or (isinstance(node, JSContainer) and not node.empty()):
            ancestor: JSObject | None = self
            while ancestor is not None:
                if ancestor is node:
                    raise OwnershipError(f"cannot attach a {type(node).__name__} inside itself")
                ancestor = ancestor.owner
        _set_owner(node, self)

    def count(self) -> int:
        return len(self)

    def empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        raise NotImplementedError


class JSArray(JSContainer):
    """Ordered sequence of exclusively owned nodes."""

    __slots__ = ("_items",)

    tag = JSType.ARRAY

    def __init__(self, items: Iterable[JSObject] = ()) -> None:
        self._owner = None
        self._items: list[JSObject] = []
        for item in items:
            self.append(item)

    def get(self, index: int) -> JSObject | None:
        """Return the element at *index*, or ``None`` when there is none."""
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def append(self, node: JSObject) -> None:
        self._adopt(node)
        self._items.append(node)

    def remove(self, index: int) -> JSObject:
        """Detach and return the element at *index* (``IndexError`` if absent)."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"array index out of range: {index}")
        node = self._items.pop(index)
        _set_owner(node, None)
        return node

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[JSObject]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSArray):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JSArray({self._items!r})"


class JSDictionary(JSContainer):
    """String-keyed mapping of exclusively owned nodes, in insertion order.

    Re-setting an existing key replaces its value but keeps its position.
    """

    __slots__ = ("_entries",)

    tag = JSType.DICTIONARY

    def __init__(self, entries: Iterable[tuple[str, JSObject]] = ()) -> None:
        self._owner = None
        self._entries: dict[str, JSObject] = {}
        for key, node in entries:
            self.set(key, node)

    def get(self, key: str) -> JSObject | None:
        return self._entries.get(key) if isinstance(key, str) else None

    def set(self, key: str, node: JSObject) -> None:
        if not isinstance(key, str):
            raise TypeError(f"dictionary keys must be str, got {type(key).__name__}")
        self._adopt(node)
        previous = self._entries.get(key)
        self._entries[key] = node
        if previous is not None:
            _set_owner(previous, None)

    def remove(self, key: str) -> JSObject | None:
        """Detach and return the value under *key*, or ``None``."""
        node = self._entries.pop(key, None)
        if node is not None:
            _set_owner(node, None)
        return node

    def keys(self):
        return self._entries.keys()

    def values(self):
        return self._entries.values()

    def items(self):
        return self._entries.items()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSDictionary):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JSDictionary({self._entries!r})"


Value = Union[JSInteger, JSReal, JSString, JSBoolean, JSNull, JSArray, JSDictionary]


# ---------------------------------------------------------------------------
# Narrowing and named constructors
# ---------------------------------------------------------------------------

T = TypeVar("T", bound=JSObject)


def cast_to(node: JSObject | None, cls: type[T]) -> T | None:
    """Return *node* if it is a *cls*, otherwise ``None``."""
    if isinstance(node, cls):
        return node
    return None


def new_integer(value: int) -> JSInteger:
    return JSInteger(value)


def new_real(value: float) -> JSReal:
    return JSReal(value)


def new_string(value: str) -> JSString:
    return JSString(value)


def new_boolean(value: bool) -> JSBoolean:
    return JSBoolean(value)


def new_null() -> JSNull:
    return JSNull()


def new_array() -> JSArray:
    return JSArray()


def new_dictionary() -> JSDictionary:
    return JSDictionary()
