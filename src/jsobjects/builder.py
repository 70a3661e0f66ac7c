"""TreeBuilder — assembles a value tree from push-style parse events.

One builder serves exactly one parse. It owns every container it creates
until ``finish()`` hands the root over, and drops all of them if an error
is not tolerated by the error predicate.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable

from .errors import BuilderContractError
from .values import (
    JSArray,
    JSBoolean,
    JSContainer,
    JSDictionary,
    JSInteger,
    JSNull,
    JSObject,
    JSReal,
    JSString,
)

logger = logging.getLogger(__name__)


ErrorPredicate = Callable[[int, int, str], bool]
"""``(line, column, message) -> bool``; ``True`` continues, ``False`` aborts."""


def stop_on_error(line: int, column: int, message: str) -> bool:
    """Default error policy: abort on the first error."""
    return False


def continue_on_error(line: int, column: int, message: str) -> bool:
    return True


class BuildState(Enum):
    IDLE = auto()
    BUILDING = auto()
    DONE = auto()
    ABORTED = auto()


class TreeBuilder:
    """Event sink turning parser callbacks into a JSDictionary tree.

    Usage::

        builder = TreeBuilder()
        builder.enter_object(None)
        builder.on_integer("a", 1)
        builder.enter_array("b")
        builder.on_string(None, "x")
        builder.leave()
        builder.leave()
        root = builder.finish()   # {"a": 1, "b": ["x"]}

    Each value event carries the key it is stored under; the key is ignored
    inside arrays and required inside objects.
    """

    def __init__(self, on_error: ErrorPredicate | None = None) -> None:
        self.on_error: ErrorPredicate = on_error if on_error is not None else stop_on_error
        self.state = BuildState.IDLE
        self._root: JSDictionary | None = None
        self._stack: list[JSContainer] = []

    # -- State ----------------------------------------------------------

    @property
    def root(self) -> JSDictionary | None:
        return self._root

    @property
    def depth(self) -> int:
        """Number of containers currently open."""
        return len(self._stack)

    @property
    def aborted(self) -> bool:
        return self.state is BuildState.ABORTED

    # -- Scalar events --------------------------------------------------

    def on_string(self, key: str | None, value: str) -> None:
        if not self.aborted:
            self._attach(key, JSString(value))

    def on_integer(self, key: str | None, value: int) -> None:
        if not self.aborted:
            self._attach(key, JSInteger(value))

    def on_real(self, key: str | None, value: float) -> None:
        if not self.aborted:
            self._attach(key, JSReal(value))

    def on_boolean(self, key: str | None, value: bool) -> None:
        if not self.aborted:
            self._attach(key, JSBoolean(value))

    def on_null(self, key: str | None) -> None:
        if not self.aborted:
            self._attach(key, JSNull())

    # -- Container events -----------------------------------------------

    def enter_object(self, key: str | None = None) -> None:
        if self.aborted:
            return
        node = JSDictionary()
        if self.state is BuildState.IDLE:
            self._root = node
            self.state = BuildState.BUILDING
        else:
            self._attach(key, node)
        self._stack.append(node)

    def enter_array(self, key: str | None = None) -> None:
        if self.aborted:
            return
        node = JSArray()
        self._attach(key, node)
        self._stack.append(node)

    def leave(self) -> None:
        """Close the active container and make its parent active again."""
        if self.aborted:
            return
        if not self._stack:
            raise BuilderContractError("leave() without an open container")
        self._stack.pop()
        if not self._stack:
            self.state = BuildState.DONE

    # -- Errors ---------------------------------------------------------

    def error(self, line: int, column: int, message: str) -> bool:
        """Report a parse error; returns whether parsing should go on."""
        if self.aborted:
            return False
        if self.on_error(line, column, message):
            logger.debug("tolerated parse error at %d:%d: %s", line, column, message)
            return True
        logger.debug("parse aborted at %d:%d: %s", line, column, message)
        self.abort()
        return False

    def abort(self) -> None:
        """Discard everything built so far; later events are ignored."""
        self._stack.clear()
        self._root = None
        self.state = BuildState.ABORTED

    # -- Result ---------------------------------------------------------

    def finish(self) -> JSDictionary | None:
        """Hand over the root, or ``None`` if nothing (valid) was built.

        Containers still open after a tolerated error are closed as-is.
        """
        if self.state is BuildState.BUILDING:
            self._stack.clear()
            self.state = BuildState.DONE
        if self.state is BuildState.DONE:
            return self._root
        return None

    # -- Dispatch -------------------------------------------------------

    def _attach(self, key: str | None, node: JSObject) -> None:
        if self.state is BuildState.DONE:
            raise BuilderContractError("event received after the root object was closed")
        if not self._stack:
            raise BuilderContractError(
                f"{type(node).__name__} outside of any object; the root must be an object"
            )
        parent = self._stack[-1]
        if isinstance(parent, JSArray):
            parent.append(node)
        else:
            if key is None:
                raise BuilderContractError("missing key for a value inside an object")
            parent.set(key, node)
